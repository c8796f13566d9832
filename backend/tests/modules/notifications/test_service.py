"""Tests for NotificationService."""

import pytest

from modules.notifications.exceptions import EmailDeliveryError, EmailNotConfiguredError
from modules.notifications.service import NotificationService
from modules.notifications.templates import render_email

from tests.conftest import make_settings
from tests.fakes import FakeEmailProvider


@pytest.fixture
def provider() -> FakeEmailProvider:
    return FakeEmailProvider()


@pytest.fixture
def notifications(provider) -> NotificationService:
    return NotificationService(provider, make_settings())


class TestTemplates:
    def test_escapes_user_input(self):
        """Names coming from sign-up forms must not inject markup."""
        html = render_email("verification.html", app_name="Klarity", name="<b>x</b>", code="123456", expires_in=10)
        assert "&lt;b&gt;x&lt;/b&gt;" in html
        assert "123456" in html

    def test_missing_name_falls_back(self):
        html = render_email("kyc_received.html", app_name="Klarity", name="", restaurant_name="Chez Test")
        assert "Hello there" in html


class TestNotificationService:
    @pytest.mark.asyncio
    async def test_verification_code(self, notifications, provider):
        """Should send the code with its lifetime."""
        await notifications.send_verification_code("a@example.com", "Ana", "482913")

        message = provider.last_to("a@example.com")
        assert message.subject == "Your Klarity Verification Code"
        assert "482913" in message.html
        assert "10 minutes" in message.html

    @pytest.mark.asyncio
    async def test_invitation_link(self, notifications, provider):
        """Should point the invite link at the client app."""
        await notifications.send_invitation("b@example.com", "Bob", "Chez Test", "Ana", "ab" * 32)

        message = provider.last_to("b@example.com")
        assert "Chez Test" in message.subject
        assert f"https://app.klarity.test/accept-invite/{'ab' * 32}" in message.html
        assert "7 days" in message.html

    @pytest.mark.asyncio
    async def test_kyc_rejected_includes_reason(self, notifications, provider):
        await notifications.send_kyc_rejected("a@example.com", "Ana", "Blurry license scan")

        message = provider.last_to("a@example.com")
        assert "Blurry license scan" in message.html
        assert "https://app.klarity.test/kyc" in message.html

    @pytest.mark.asyncio
    async def test_kyc_approved_links_dashboard(self, notifications, provider):
        await notifications.send_kyc_approved("a@example.com", "Ana", "Chez Test")
        assert "https://app.klarity.test/dashboard" in provider.last_to("a@example.com").html

    @pytest.mark.asyncio
    async def test_not_configured(self):
        """Should raise EmailNotConfiguredError without a provider."""
        service = NotificationService(None, make_settings())

        with pytest.raises(EmailNotConfiguredError) as exc_info:
            await service.send_password_reset_code("a@example.com", "Ana", "111111")
        assert exc_info.value.code == "EMAIL_NOT_CONFIGURED"

    @pytest.mark.asyncio
    async def test_provider_failure_is_wrapped(self, notifications, provider):
        """Should surface provider outages as EmailDeliveryError."""
        provider.fail = True

        with pytest.raises(EmailDeliveryError) as exc_info:
            await notifications.send_kyc_received("a@example.com", "Ana", "Chez Test")
        assert exc_info.value.code == "EMAIL_DELIVERY_FAILED"
        assert exc_info.value.service == "fake"
