"""Tests for the notification and preference domain entities."""

from datetime import datetime, timedelta, timezone

import pytest

from fleetops.domain.entities import (
    DeliveryChannel,
    Notification,
    NotificationPreferences,
    NotificationPriority,
    NotificationType,
    build_active_key,
)


def _notification(**overrides) -> Notification:
    values = dict(
        id=1,
        recipient_id=7,
        type=NotificationType.COMPLIANCE,
        priority=NotificationPriority.HIGH,
        title="Insurance expires in 2 days",
        message="Insurance for KDD-001T expires soon.",
        truck_id=3,
    )
    values.update(overrides)
    return Notification(**values)


def test_priorities_are_totally_ordered() -> None:
    ordered = sorted(
        [
            NotificationPriority.HIGH,
            NotificationPriority.LOW,
            NotificationPriority.CRITICAL,
            NotificationPriority.MEDIUM,
        ]
    )

    assert ordered == [
        NotificationPriority.LOW,
        NotificationPriority.MEDIUM,
        NotificationPriority.HIGH,
        NotificationPriority.CRITICAL,
    ]
    assert NotificationPriority.CRITICAL > NotificationPriority.HIGH
    assert NotificationPriority.MEDIUM >= NotificationPriority.MEDIUM


def test_dedupe_key_only_for_truck_bound_fleet_notifications() -> None:
    assert _notification().dedupe_key == build_active_key(7, 3, NotificationType.COMPLIANCE)
    assert _notification().dedupe_key == "7:3:compliance"
    assert _notification(truck_id=None).dedupe_key is None
    assert _notification(type=NotificationType.SYSTEM).dedupe_key is None


def test_notification_activity_window() -> None:
    now = datetime(2026, 3, 1, 12, tzinfo=timezone.utc)
    notification = _notification(expires_at=now + timedelta(days=1))

    assert notification.is_active(now)
    assert not notification.is_active(now + timedelta(days=1))
    assert not _notification(retired_at=now).is_active(now)
    assert not _notification(superseded_at=now).is_active(now)


def test_preference_defaults() -> None:
    preferences = NotificationPreferences(user_id=1)

    assert preferences.enabled_channels(NotificationType.COMPLIANCE) == [
        DeliveryChannel.EMAIL,
        DeliveryChannel.PUSH,
    ]
    assert preferences.enabled_channels(NotificationType.FUEL) == []


@pytest.mark.parametrize("channel", list(DeliveryChannel))
@pytest.mark.parametrize("category", list(NotificationType))
@pytest.mark.parametrize("channel_flag", [True, False])
@pytest.mark.parametrize("category_flag", [True, False])
def test_allows_requires_both_flags(channel, category, channel_flag, category_flag) -> None:
    preferences = NotificationPreferences(
        user_id=1,
        **{channel.value: channel_flag, category.value: category_flag},
    )

    assert preferences.allows(channel, category) is (channel_flag and category_flag)
