"""Factory functions for creating outbound providers from settings."""

from typing import Optional

from shared.config import Settings

from .base import EmailProvider, ImageStorage
from .brevo import BrevoProvider
from .cloudinary import CloudinaryStorage
from .local_storage import LocalImageStorage
from .resend import ResendProvider
from .routed_storage import RoutedStorage


def get_email_provider(settings: Settings) -> Optional[EmailProvider]:
    """Pick the email provider whose API key is configured.

    Resend wins when both keys are present.

    Returns:
        The provider, or None when no key is configured
    """
    if settings.resend_api_key:
        return ResendProvider(
            api_key=settings.resend_api_key,
            sender_email=settings.email_from,
            sender_name=settings.email_sender_name,
            timeout=settings.email_timeout_seconds,
        )
    if settings.brevo_api_key:
        return BrevoProvider(
            api_key=settings.brevo_api_key,
            sender_email=settings.email_from,
            sender_name=settings.email_sender_name,
            timeout=settings.email_timeout_seconds,
        )
    return None


def get_image_storages(settings: Settings) -> list[ImageStorage]:
    """Get the configured storage backends, upload target first.

    Cloudinary is the upload target when its credentials are set. Local
    storage is always included so files uploaded before Cloudinary was
    configured can still be deleted.
    """
    storages: list[ImageStorage] = []
    if settings.cloudinary_configured:
        storages.append(
            CloudinaryStorage(
                cloud_name=settings.cloudinary_cloud_name,
                api_key=settings.cloudinary_api_key,
                api_secret=settings.cloudinary_api_secret,
            )
        )
    storages.append(LocalImageStorage(settings.upload_dir))
    return storages


def get_image_storage(settings: Settings) -> RoutedStorage:
    """Single storage facade over get_image_storages()."""
    return RoutedStorage(get_image_storages(settings))
