"""
Notifications module interface.

Other modules depend on INotificationService, never on an email provider
directly.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class INotificationService(Protocol):
    """Transactional emails sent by the platform."""

    async def send_verification_code(self, email: str, name: str, code: str) -> None:
        """
        Email a 6-digit email verification code.

        Raises:
            EmailDeliveryError: If the email could not be sent
        """
        ...

    async def send_password_reset_code(self, email: str, name: str, code: str) -> None:
        """Email a 6-digit password reset code."""
        ...

    async def send_invitation(
        self,
        email: str,
        name: str,
        restaurant_name: str,
        inviter_name: str,
        token: str,
    ) -> None:
        """Email a link for accepting a restaurant invitation."""
        ...

    async def send_kyc_received(self, email: str, name: str, restaurant_name: str) -> None:
        """Acknowledge a KYC submission."""
        ...

    async def send_kyc_approved(self, email: str, name: str, restaurant_name: str) -> None:
        """Announce KYC approval."""
        ...

    async def send_kyc_rejected(self, email: str, name: str, reason: str) -> None:
        """Announce KYC rejection with the reviewer's reason."""
        ...
