"""
Notifications module exceptions.
"""

from shared.exceptions import ExternalServiceError


class EmailDeliveryError(ExternalServiceError):
    """Raised when a transactional email could not be sent."""

    def __init__(self, message: str, provider: str = "email"):
        super().__init__(
            message,
            service=provider,
            code="EMAIL_DELIVERY_FAILED",
        )


class EmailNotConfiguredError(EmailDeliveryError):
    """Raised when neither RESEND_API_KEY nor BREVO_API_KEY is set."""

    def __init__(self):
        super().__init__("No email provider configured")
        self.code = "EMAIL_NOT_CONFIGURED"
