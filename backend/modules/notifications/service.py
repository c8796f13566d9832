"""
Notification service implementation.

Renders the HTML templates and hands them to the configured email provider.
"""

import logging
from typing import Optional

from providers.base import EmailMessage, EmailProvider
from shared.config import Settings, get_settings
from shared.exceptions import ExternalServiceError

from .exceptions import EmailDeliveryError, EmailNotConfiguredError
from .interfaces import INotificationService
from .templates import render_email

logger = logging.getLogger(__name__)


class NotificationService(INotificationService):
    """Sends platform emails through a single EmailProvider."""

    def __init__(
        self,
        provider: Optional[EmailProvider],
        settings: Optional[Settings] = None,
    ):
        self._provider = provider
        self._settings = settings or get_settings()

    async def _send(self, to: str, subject: str, template: str, **context) -> None:
        if self._provider is None:
            logger.error("No email provider configured (RESEND_API_KEY or BREVO_API_KEY required)")
            raise EmailNotConfiguredError()

        html = render_email(template, app_name=self._settings.email_sender_name, **context)
        try:
            await self._provider.send(EmailMessage(to=to, subject=subject, html=html))
        except ExternalServiceError as e:
            raise EmailDeliveryError(e.message, provider=self._provider.name) from e

    async def send_verification_code(self, email: str, name: str, code: str) -> None:
        await self._send(
            email,
            f"Your {self._settings.email_sender_name} Verification Code",
            "verification.html",
            name=name,
            code=code,
            expires_in=self._settings.verification_code_ttl_minutes,
        )

    async def send_password_reset_code(self, email: str, name: str, code: str) -> None:
        await self._send(
            email,
            f"{self._settings.email_sender_name} - Password Reset Code",
            "password_reset.html",
            name=name,
            code=code,
            expires_in=self._settings.reset_code_ttl_minutes,
        )

    async def send_invitation(
        self,
        email: str,
        name: str,
        restaurant_name: str,
        inviter_name: str,
        token: str,
    ) -> None:
        invite_link = f"{self._settings.client_url.rstrip('/')}/accept-invite/{token}"
        await self._send(
            email,
            f"You're invited to join {restaurant_name} on {self._settings.email_sender_name}",
            "invitation.html",
            name=name,
            restaurant_name=restaurant_name,
            inviter_name=inviter_name,
            invite_link=invite_link,
            expires_in_days=self._settings.invitation_ttl_days,
        )

    async def send_kyc_received(self, email: str, name: str, restaurant_name: str) -> None:
        await self._send(
            email,
            f"KYC Submission Received - {self._settings.email_sender_name}",
            "kyc_received.html",
            name=name,
            restaurant_name=restaurant_name,
        )

    async def send_kyc_approved(self, email: str, name: str, restaurant_name: str) -> None:
        await self._send(
            email,
            f"Welcome to {self._settings.email_sender_name} - KYC Approved!",
            "kyc_approved.html",
            name=name,
            restaurant_name=restaurant_name,
            dashboard_link=f"{self._settings.client_url.rstrip('/')}/dashboard",
        )

    async def send_kyc_rejected(self, email: str, name: str, reason: str) -> None:
        await self._send(
            email,
            f"KYC Review Update - {self._settings.email_sender_name}",
            "kyc_rejected.html",
            name=name,
            reason=reason,
            resubmit_link=f"{self._settings.client_url.rstrip('/')}/kyc",
        )
