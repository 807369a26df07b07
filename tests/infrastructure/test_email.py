"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types

import pytest

from fleetops.config import Settings
from fleetops.domain.entities import Notification, NotificationPriority, NotificationType
from fleetops.infrastructure import email as email_module


def _settings(**overrides) -> Settings:
    return Settings(database_url="sqlite://", secret_key="test-secret", **overrides)


class _RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that records the sent message."""

    messages: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        self.messages.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


def test_send_email_without_configuration() -> None:
    """When SendGrid settings are missing the helper should exit early."""

    assert email_module.send_email(
        "Subject", "<p>Body</p>", "user@example.com", settings=_settings()
    ) is False


def test_send_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """A successful SendGrid response should return ``True``."""

    monkeypatch.setattr(email_module, "SendGridAPIClient", _RecordingClient)
    settings = _settings(sendgrid_api_key="SG.fake", sendgrid_sender="fleet@example.com")

    assert email_module.send_email(
        "Subject", "<p>Body</p>", "user@example.com", settings=settings
    ) is True


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {
                "errors": [
                    {
                        "message": "The provided authorization grant is invalid.",
                        "help": "https://sendgrid.com/docs/for-developers/sending-email/authentication/",
                    }
                ]
            }
        ).encode()

    class FailingClient(_RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)
    settings = _settings(sendgrid_api_key="SG.fake", sendgrid_sender="fleet@example.com")

    with caplog.at_level("ERROR"):
        result = email_module.send_email(
            "Subject", "<p>Body</p>", "user@example.com", settings=settings
        )

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_notification_email_escapes_content(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def fake_send_email(subject, html_content, recipient, *, settings):
        captured.update(subject=subject, html=html_content, recipient=recipient)
        return True

    monkeypatch.setattr(email_module, "send_email", fake_send_email)
    notification = Notification(
        id=1,
        recipient_id=2,
        type=NotificationType.COMPLIANCE,
        priority=NotificationPriority.CRITICAL,
        title="insurance has expired",
        message="Insurance for <KDD-001T> has expired.",
        truck_registration="KDD-001T",
        action_url="/compliance?truck=1",
    )

    assert email_module.send_notification_email(
        notification, "manager@example.com", settings=_settings()
    )
    assert captured["subject"] == "[CRITICAL] insurance has expired"
    assert "&lt;KDD-001T&gt;" in captured["html"]
    assert captured["recipient"] == "manager@example.com"


def test_settings_require_sendgrid_pair() -> None:
    with pytest.raises(ValueError):
        _settings(sendgrid_api_key="SG.fake")
