"""Base classes and models for outbound service providers.

Two provider families live here:
- EmailProvider: transactional email over an HTTP API (Resend, Brevo)
- ImageStorage: file hosting for ingredient images and KYC documents
  (Cloudinary, local filesystem)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from shared.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class EmailMessage(BaseModel):
    """A single outbound email."""

    model_config = {"frozen": True}

    to: str
    subject: str
    html: str


class EmailResult(BaseModel):
    """Provider acknowledgement for a sent email."""

    provider: str
    message_id: Optional[str] = None


class StoredFile(BaseModel):
    """Location of an uploaded file.

    Attributes:
        url: Public URL (hosted) or /uploads/... path (local)
        public_id: Provider-side identifier, when the provider has one
        provider: Name of the storage that holds the file
    """

    url: str
    public_id: Optional[str] = None
    provider: str


class EmailProvider(ABC):
    """Abstract base class for email providers."""

    name: str = ""

    @abstractmethod
    async def send(self, message: EmailMessage) -> EmailResult:
        """Send an email.

        Raises:
            ExternalServiceError: If the provider rejects the message or
                cannot be reached
        """
        pass


class HTTPEmailProvider(EmailProvider):
    """Shared plumbing for providers that accept a JSON POST."""

    url: str = ""

    def __init__(
        self,
        api_key: str,
        sender_email: str,
        sender_name: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._sender_email = sender_email
        self._sender_name = sender_name
        self._timeout = timeout
        self._transport = transport

    @abstractmethod
    def _headers(self) -> dict[str, str]:
        pass

    @abstractmethod
    def _payload(self, message: EmailMessage) -> dict[str, Any]:
        pass

    @abstractmethod
    def _message_id(self, data: dict[str, Any]) -> Optional[str]:
        pass

    async def send(self, message: EmailMessage) -> EmailResult:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    headers=self._headers(),
                    json=self._payload(message),
                )
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request failed: {e}")
            raise ExternalServiceError(
                f"Could not reach {self.name}: {e}",
                service=self.name,
                code="EMAIL_DELIVERY_FAILED",
            ) from e

        data = _json_or_empty(response)
        if response.is_error:
            logger.error(f"{self.name} rejected email to {message.to}: {response.status_code}")
            raise ExternalServiceError(
                data.get("message") or "Failed to send email",
                service=self.name,
                code="EMAIL_DELIVERY_FAILED",
                details={"status_code": response.status_code},
            )

        message_id = self._message_id(data)
        logger.info(f"Email sent via {self.name}: {message_id}")
        return EmailResult(provider=self.name, message_id=message_id)


class ImageStorage(ABC):
    """Abstract base class for file storage backends."""

    name: str = ""

    @abstractmethod
    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        folder: str,
    ) -> StoredFile:
        """Store a file and return where it lives."""
        pass

    @abstractmethod
    async def delete(self, url: str) -> bool:
        """Delete a previously stored file.

        Returns:
            True if something was deleted, False if the file was already gone
        """
        pass

    @abstractmethod
    def owns(self, url: str) -> bool:
        """Whether the URL points at a file held by this storage."""
        pass


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
