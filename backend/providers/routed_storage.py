"""Storage that writes to one backend and deletes from whichever owns a URL."""

import logging
from typing import Sequence

from .base import ImageStorage, StoredFile

logger = logging.getLogger(__name__)


class RoutedStorage(ImageStorage):
    """
    Combine several storage backends.

    Uploads go to the first backend. Deletes are routed by URL, so hosted
    URLs reach Cloudinary and `/uploads/...` paths reach the local disk
    regardless of which backend is currently primary.
    """

    name = "routed"

    def __init__(self, storages: Sequence[ImageStorage]):
        if not storages:
            raise ValueError("RoutedStorage needs at least one backend")
        self._storages = list(storages)

    @property
    def primary(self) -> ImageStorage:
        return self._storages[0]

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        folder: str,
    ) -> StoredFile:
        return await self.primary.upload(content, filename, content_type, folder)

    async def delete(self, url: str) -> bool:
        for storage in self._storages:
            if storage.owns(url):
                return await storage.delete(url)
        logger.warning(f"No storage backend owns {url}")
        return False

    def owns(self, url: str) -> bool:
        return any(storage.owns(url) for storage in self._storages)
