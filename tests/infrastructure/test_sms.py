"""Unit tests for the Twilio SMS helpers."""

import types

import pytest
from twilio.base.exceptions import TwilioException

from fleetops.config import Settings
from fleetops.domain.entities import Notification, NotificationPriority, NotificationType
from fleetops.infrastructure import sms as sms_module


def _settings(**overrides) -> Settings:
    return Settings(database_url="sqlite://", secret_key="test-secret", **overrides)


def _twilio_settings() -> Settings:
    return _settings(
        twilio_account_sid="AC123",
        twilio_auth_token="token",
        twilio_sms_number="+15550001111",
    )


class _FakeClient:
    sent: list[dict] = []

    def __init__(self, account_sid, auth_token):
        self.messages = types.SimpleNamespace(create=self._create)

    def _create(self, **kwargs):
        self.sent.append(kwargs)
        return types.SimpleNamespace(sid="SM1")


def test_send_sms_without_configuration() -> None:
    assert sms_module.send_sms("+254700000000", "Hello", settings=_settings()) is False


def test_send_sms_success(monkeypatch: pytest.MonkeyPatch) -> None:
    _FakeClient.sent = []
    monkeypatch.setattr(sms_module, "Client", _FakeClient)

    assert sms_module.send_sms("+254700000000", "Hello", settings=_twilio_settings()) is True
    assert _FakeClient.sent == [
        {"body": "Hello", "from_": "+15550001111", "to": "+254700000000"}
    ]


def test_send_sms_failure_is_logged(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class FailingClient(_FakeClient):
        def _create(self, **kwargs):
            raise TwilioException("invalid number")

    monkeypatch.setattr(sms_module, "Client", FailingClient)

    with caplog.at_level("ERROR"):
        assert sms_module.send_sms("bad", "Hello", settings=_twilio_settings()) is False
    assert "invalid number" in caplog.text


def test_long_messages_are_truncated() -> None:
    notification = Notification(
        id=1,
        recipient_id=1,
        type=NotificationType.SYSTEM,
        priority=NotificationPriority.LOW,
        title="Notice",
        message="x" * 500,
    )

    text = sms_module.format_sms(notification)

    assert len(text) == 320
    assert text.endswith("...")
