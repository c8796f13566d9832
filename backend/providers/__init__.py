"""Outbound providers: transactional email and file storage."""

from .base import (
    EmailMessage,
    EmailProvider,
    EmailResult,
    HTTPEmailProvider,
    ImageStorage,
    StoredFile,
)
from .brevo import BrevoProvider
from .cloudinary import CloudinaryStorage
from .factory import get_email_provider, get_image_storage, get_image_storages
from .local_storage import LocalImageStorage
from .resend import ResendProvider
from .routed_storage import RoutedStorage

__all__ = [
    "EmailMessage",
    "EmailProvider",
    "EmailResult",
    "HTTPEmailProvider",
    "ImageStorage",
    "StoredFile",
    "BrevoProvider",
    "CloudinaryStorage",
    "LocalImageStorage",
    "ResendProvider",
    "RoutedStorage",
    "get_email_provider",
    "get_image_storage",
    "get_image_storages",
]
