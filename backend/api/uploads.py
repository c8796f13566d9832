"""
Conversion of FastAPI UploadFile objects into UploadedFile models.
"""

from typing import Optional

from fastapi import UploadFile

from shared.uploads import UploadedFile


async def read_upload(field: str, file: Optional[UploadFile], max_bytes: int) -> Optional[UploadedFile]:
    """
    Read a multipart file field; None when the field was not sent.

    At most max_bytes + 1 bytes are read, so an oversized file still fails
    the size check without being held in memory whole.
    """
    if file is None or not file.filename:
        return None
    content = await file.read(max_bytes + 1)
    return UploadedFile(
        field=field,
        filename=file.filename,
        content_type=file.content_type or "application/octet-stream",
        content=content,
    )
