"""Tests for email templates and service dispatch."""
from unittest.mock import AsyncMock

import pytest

from app.core.config import get_settings
from app.email.service import (
    ConsoleProvider,
    EmailService,
    SMTPProvider,
    get_email_service,
    reset_email_service,
)
from app.email.templates import password_changed, password_reset


class TestEmailTemplates:
    def test_password_reset_contains_link(self):
        subject, html, text = password_reset("https://example.com/reset?token=abc", "ada")
        assert "reset" in subject.lower()
        assert "token=abc" in html
        assert "token=abc" in text
        assert "1 hour" in text

    def test_password_reset_custom_expiry(self):
        _, _, text = password_reset("https://example.com/r", expires_minutes=30)
        assert "30 minutes" in text

    def test_password_changed_mentions_user(self):
        subject, html, text = password_changed("ada")
        assert "password" in subject.lower()
        assert "ada" in html
        assert "ada" in text


class TestEmailService:
    async def test_send_template_uses_provider(self):
        provider = ConsoleProvider()
        provider.send = AsyncMock(return_value=True)
        service = EmailService(provider=provider)

        sent = await service.send_template(
            to="ada@example.com",
            template_name="password_reset",
            context={"reset_url": "https://example.com/r?token=t", "username": "ada"},
        )

        assert sent is True
        to, subject, html, text = provider.send.await_args.args
        assert to == "ada@example.com"
        assert "token=t" in text

    async def test_unknown_template_raises(self):
        service = EmailService(provider=ConsoleProvider())
        with pytest.raises(ValueError):
            await service.send_template(to="a@b.co", template_name="nope", context={})

    async def test_console_provider_reports_success(self):
        assert await ConsoleProvider().send("a@b.co", "s", "<p>h</p>", "t") is True


class TestEmailServiceSingleton:
    @pytest.fixture(autouse=True)
    def fresh_service(self):
        get_settings.cache_clear()
        reset_email_service()
        yield
        reset_email_service()
        get_settings.cache_clear()

    def test_default_provider_is_console(self, monkeypatch):
        monkeypatch.delenv("TRIVIA_EMAIL_PROVIDER", raising=False)
        service = get_email_service()
        assert isinstance(service.provider, ConsoleProvider)
        assert get_email_service() is service

    def test_smtp_provider_from_settings(self, monkeypatch):
        monkeypatch.setenv("TRIVIA_EMAIL_PROVIDER", "smtp")
        monkeypatch.setenv("TRIVIA_SMTP_HOST", "mail.example.com")
        get_settings.cache_clear()
        provider = get_email_service().provider
        assert isinstance(provider, SMTPProvider)
        assert provider.host == "mail.example.com"

    def test_reset_drops_cached_service(self):
        first = get_email_service()
        reset_email_service()
        assert get_email_service() is not first

    def test_unknown_provider_raises(self, monkeypatch):
        monkeypatch.setenv("TRIVIA_EMAIL_PROVIDER", "pigeon")
        get_settings.cache_clear()
        with pytest.raises(ValueError):
            get_email_service()
