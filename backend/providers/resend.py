"""Resend transactional email provider."""

from typing import Any, Optional

from .base import HTTPEmailProvider, EmailMessage


class ResendProvider(HTTPEmailProvider):
    """Sends email through https://api.resend.com."""

    name = "resend"
    url = "https://api.resend.com/emails"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _payload(self, message: EmailMessage) -> dict[str, Any]:
        return {
            "from": f"{self._sender_name} <{self._sender_email}>",
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }

    def _message_id(self, data: dict[str, Any]) -> Optional[str]:
        return data.get("id")
