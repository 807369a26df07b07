"""Tests for preference-aware notification delivery."""

from datetime import datetime

import pytest

from fleetops.application.use_cases.notifications import delivery as delivery_module
from fleetops.application.use_cases.notifications import deliver_notification
from fleetops.config import Settings
from fleetops.domain.entities import (
    DeliveryChannel,
    Notification,
    NotificationPreferences,
    NotificationPriority,
    NotificationType,
    User,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite://", secret_key="test-secret")


@pytest.fixture
def recipient() -> User:
    return User(
        id=5,
        name="Grace",
        email="grace@example.com",
        password="hash",
        role="manager",
        phone="+254700000000",
        is_active=True,
    )


@pytest.fixture
def sent(monkeypatch):
    calls: list[tuple[str, object]] = []

    def fake_email(notification, email, *, settings):
        calls.append(("email", email))
        return True

    def fake_sms(notification, phone, *, settings):
        calls.append(("sms", phone))
        return True

    def fake_push(notification):
        calls.append(("push", notification.recipient_id))
        return True

    monkeypatch.setattr(delivery_module, "send_notification_email", fake_email)
    monkeypatch.setattr(delivery_module, "send_notification_sms", fake_sms)
    monkeypatch.setattr(delivery_module, "dispatch_notification", fake_push)
    return calls


def _notification(notification_type=NotificationType.MAINTENANCE) -> Notification:
    return Notification(
        id=11,
        recipient_id=5,
        type=notification_type,
        priority=NotificationPriority.HIGH,
        title="Maintenance Due",
        message="KDD-003T is due for maintenance.",
        truck_id=3,
        created_at=datetime(2026, 3, 1, 9, 0),
    )


def test_default_preferences_use_email_and_push(sent, recipient, settings) -> None:
    channels = deliver_notification(
        _notification(), recipient, NotificationPreferences(user_id=5), settings=settings
    )

    assert channels == [DeliveryChannel.EMAIL, DeliveryChannel.PUSH]
    assert sent == [("email", "grace@example.com"), ("push", 5)]


def test_disabled_category_is_not_delivered(sent, recipient, settings) -> None:
    channels = deliver_notification(
        _notification(NotificationType.FUEL),
        recipient,
        NotificationPreferences(user_id=5),
        settings=settings,
    )

    assert channels == []
    assert sent == []


def test_sms_requires_a_phone_number(sent, recipient, settings) -> None:
    preferences = NotificationPreferences(user_id=5, email=False, sms=True, push=False)
    recipient.phone = None

    assert deliver_notification(_notification(), recipient, preferences, settings=settings) == []
    assert sent == []


def test_failing_channel_does_not_block_the_others(monkeypatch, sent, recipient, settings, caplog) -> None:
    def broken_email(notification, email, *, settings):
        raise ConnectionError("smtp down")

    monkeypatch.setattr(delivery_module, "send_notification_email", broken_email)
    preferences = NotificationPreferences(user_id=5, sms=True)

    with caplog.at_level("WARNING"):
        channels = deliver_notification(_notification(), recipient, preferences, settings=settings)

    assert channels == [DeliveryChannel.SMS, DeliveryChannel.PUSH]
    assert "through email failed" in caplog.text
