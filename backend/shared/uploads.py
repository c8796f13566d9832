"""
Validation of files received through multipart forms.

Routes read each UploadFile into an UploadedFile; services check it against
the allowed types and size before handing it to an ImageStorage.
"""

import os
from typing import Iterable, Optional
from pydantic import BaseModel

IMAGE_TYPES = {
    "image/jpeg": (".jpg", ".jpeg"),
    "image/png": (".png",),
    "image/gif": (".gif",),
    "image/webp": (".webp",),
}

DOCUMENT_TYPES = {
    "image/jpeg": (".jpg", ".jpeg"),
    "image/png": (".png",),
    "application/pdf": (".pdf",),
}


class UploadedFile(BaseModel):
    """A file read from a multipart form field."""

    field: str
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.filename)[1].lower()


def format_file_size(size_bytes: float) -> str:
    """Format file size in human readable format."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.0f} {unit}" if unit == "B" else f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def upload_errors(
    upload: Optional[UploadedFile],
    allowed: dict[str, Iterable[str]],
    max_bytes: int,
    label: Optional[str] = None,
) -> list[str]:
    """
    Problems with an uploaded file, or an empty list.

    Both the declared content type and the filename extension must be
    in `allowed`.
    """
    if upload is None:
        return []

    label = label or upload.field
    errors = []
    extensions = allowed.get(upload.content_type)
    if extensions is None or upload.extension not in extensions:
        names = sorted({ext.lstrip(".") for exts in allowed.values() for ext in exts})
        errors.append(f"{label}: file type not allowed. Allowed: {', '.join(names)}")
    if upload.size == 0:
        errors.append(f"{label}: file is empty")
    elif upload.size > max_bytes:
        errors.append(f"{label}: file exceeds the maximum size of {format_file_size(max_bytes)}")
    return errors
