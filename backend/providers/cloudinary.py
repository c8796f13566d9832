"""Cloudinary image/document hosting.

Talks to the Cloudinary REST upload API directly with signed requests.
Signatures are the SHA-1 of the alphabetically sorted signed parameters
followed by the API secret.
"""

import hashlib
import logging
import time
from typing import Any, Optional
from urllib.parse import urlparse

import httpx

from shared.exceptions import ExternalServiceError

from .base import ImageStorage, StoredFile

logger = logging.getLogger(__name__)

API_BASE = "https://api.cloudinary.com/v1_1"

# Resize large ingredient photos and let Cloudinary pick the quality
DEFAULT_IMAGE_TRANSFORMATION = "c_limit,h_800,w_800/q_auto"


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Compute a Cloudinary request signature."""
    to_sign = "&".join(
        f"{key}={params[key]}"
        for key in sorted(params)
        if params[key] not in (None, "")
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


def public_id_from_url(url: str, keep_extension: bool = False) -> Optional[str]:
    """
    Extract the public_id from a Cloudinary delivery URL.

    https://res.cloudinary.com/<cloud>/image/upload/v1712/ingredients/abc.jpg
    -> ingredients/abc

    Raw resources (PDFs) keep their extension as part of the public_id.
    """
    path = urlparse(url).path
    marker = "/upload/"
    if marker not in path:
        return None
    segments = path.split(marker, 1)[1].split("/")
    # Drop transformation and version segments preceding the public id
    while segments and (segments[0].startswith("v") and segments[0][1:].isdigit() or "," in segments[0]):
        segments = segments[1:]
    if not segments:
        return None
    if not keep_extension:
        segments[-1] = segments[-1].rsplit(".", 1)[0]
    return "/".join(segments)


def resource_type_for(content_type_or_url: str) -> str:
    """PDFs are stored as raw resources, everything else as images."""
    value = content_type_or_url.lower()
    if value == "application/pdf" or value.endswith(".pdf"):
        return "raw"
    return "image"


class CloudinaryStorage(ImageStorage):
    """Stores files on Cloudinary."""

    name = "cloudinary"

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._timeout = timeout
        self._transport = transport

    def _endpoint(self, resource_type: str, action: str) -> str:
        return f"{API_BASE}/{self._cloud_name}/{resource_type}/{action}"

    def _signed(self, params: dict[str, Any]) -> dict[str, Any]:
        params = {k: v for k, v in params.items() if v not in (None, "")}
        params["timestamp"] = int(time.time())
        params["signature"] = sign_params(params, self._api_secret)
        params["api_key"] = self._api_key
        return params

    async def _post(self, url: str, data: dict[str, Any], files: Optional[dict] = None) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(url, data=data, files=files)
        except httpx.HTTPError as e:
            raise ExternalServiceError(
                f"Could not reach Cloudinary: {e}",
                service=self.name,
                code="UPLOAD_FAILED",
            ) from e

        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        if response.is_error:
            error = body.get("error")
            message = error.get("message") if isinstance(error, dict) else None
            raise ExternalServiceError(
                message or "Cloudinary request failed",
                service=self.name,
                code="UPLOAD_FAILED",
                details={"status_code": response.status_code},
            )
        return body

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        folder: str,
        transformation: Optional[str] = None,
    ) -> StoredFile:
        resource_type = resource_type_for(content_type)
        if transformation is None and resource_type == "image" and folder == "ingredients":
            transformation = DEFAULT_IMAGE_TRANSFORMATION

        data = self._signed({"folder": folder, "transformation": transformation})
        body = await self._post(
            self._endpoint(resource_type, "upload"),
            data=data,
            files={"file": (filename, content, content_type)},
        )
        if "secure_url" not in body:
            raise ExternalServiceError(
                "Cloudinary returned no URL for the upload",
                service=self.name,
                code="UPLOAD_FAILED",
            )
        logger.info(f"Uploaded {filename} to Cloudinary as {body.get('public_id')}")
        return StoredFile(
            url=body["secure_url"],
            public_id=body.get("public_id"),
            provider=self.name,
        )

    async def delete(self, url: str) -> bool:
        resource_type = resource_type_for(url)
        public_id = public_id_from_url(url, keep_extension=resource_type == "raw")
        if public_id is None:
            logger.warning(f"Not a Cloudinary delivery URL: {url}")
            return False

        body = await self._post(
            self._endpoint(resource_type, "destroy"),
            data=self._signed({"public_id": public_id}),
        )
        return body.get("result") == "ok"

    def owns(self, url: str) -> bool:
        return "cloudinary.com" in url
