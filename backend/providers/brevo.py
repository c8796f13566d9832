"""Brevo (formerly Sendinblue) transactional email provider."""

from typing import Any, Optional

from .base import HTTPEmailProvider, EmailMessage


class BrevoProvider(HTTPEmailProvider):
    """Sends email through the Brevo v3 SMTP API."""

    name = "brevo"
    url = "https://api.brevo.com/v3/smtp/email"

    def _headers(self) -> dict[str, str]:
        return {
            "api-key": self._api_key,
            "Content-Type": "application/json",
        }

    def _payload(self, message: EmailMessage) -> dict[str, Any]:
        return {
            "sender": {"name": self._sender_name, "email": self._sender_email},
            "to": [{"email": message.to}],
            "subject": message.subject,
            "htmlContent": message.html,
        }

    def _message_id(self, data: dict[str, Any]) -> Optional[str]:
        return data.get("messageId")
