"""Local filesystem storage, served by the API under /uploads."""

import logging
import uuid
from pathlib import Path, PurePosixPath

from .base import ImageStorage, StoredFile

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads"


class LocalImageStorage(ImageStorage):
    """Stores files under a directory on the API host."""

    name = "local"

    def __init__(self, root: str | Path):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _path_for(self, url: str) -> Path | None:
        """Map an /uploads/... URL back to a path inside the root."""
        relative = PurePosixPath(url).relative_to(URL_PREFIX)
        path = (self._root / relative).resolve()
        if not path.is_relative_to(self._root.resolve()):
            return None
        return path

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        folder: str,
    ) -> StoredFile:
        suffix = Path(filename).suffix.lower()
        stored_name = f"{uuid.uuid4().hex}{suffix}"

        target_dir = self._root / folder
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / stored_name).write_bytes(content)

        url = f"{URL_PREFIX}/{folder}/{stored_name}"
        logger.info(f"Stored {filename} at {url}")
        return StoredFile(url=url, public_id=f"{folder}/{stored_name}", provider=self.name)

    async def delete(self, url: str) -> bool:
        if not self.owns(url):
            return False
        path = self._path_for(url)
        if path is None or not path.exists():
            return False
        path.unlink()
        return True

    def owns(self, url: str) -> bool:
        return url.startswith(f"{URL_PREFIX}/")
