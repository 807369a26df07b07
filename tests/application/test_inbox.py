"""Tests for inbox operations and manual notifications."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import SQLAlchemyError

from conftest import ROLE_ADMIN, make_user

from fleetops.application.use_cases.notifications import (
    create_manual_notification,
    get_preferences,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    update_preferences,
)
from fleetops.domain.entities import NotificationPriority, NotificationType
from fleetops.domain.errors import PersistenceFailure
from fleetops.infrastructure.repositories import NotificationRepository
from fleetops.utils import now_in_app_timezone


def test_manual_notification_reaches_every_active_user(session, settings) -> None:
    admin = make_user(session, email="admin@example.com", role=ROLE_ADMIN)
    manager = make_user(session, email="manager@example.com")
    make_user(session, email="former@example.com", is_active=False)

    stored = create_manual_notification(
        session,
        settings=settings,
        title="Depot closed",
        message="The Mombasa depot is closed on Friday.",
        deliver=False,
    )

    assert sorted(n.recipient_id for n in stored) == sorted([admin.id, manager.id])
    assert all(n.type is NotificationType.SYSTEM for n in stored)
    assert all(n.priority is NotificationPriority.LOW for n in stored)


def test_repeated_manual_notifications_are_kept(session, settings) -> None:
    manager = make_user(session, email="manager@example.com")

    for _ in range(2):
        create_manual_notification(
            session,
            settings=settings,
            title="Reminder",
            message="Submit fuel receipts.",
            recipient_ids=[manager.id],
            deliver=False,
        )

    assert len(list_notifications(session, manager.id)) == 2


def test_manual_notification_rejects_past_expiry(session, settings) -> None:
    make_user(session, email="manager@example.com")

    with pytest.raises(ValueError):
        create_manual_notification(
            session,
            settings=settings,
            title="Late",
            message="Too late.",
            expires_at=now_in_app_timezone() - timedelta(minutes=1),
            deliver=False,
        )


def test_manual_notification_requires_recipients(session, settings) -> None:
    with pytest.raises(ValueError):
        create_manual_notification(
            session,
            settings=settings,
            title="Nobody",
            message="No one to tell.",
            recipient_ids=[404],
            deliver=False,
        )


def test_mark_read_only_affects_own_notifications(session, settings) -> None:
    owner = make_user(session, email="owner@example.com")
    other = make_user(session, email="other@example.com")
    [notification] = create_manual_notification(
        session,
        settings=settings,
        title="Hello",
        message="Welcome aboard.",
        recipient_ids=[owner.id],
        deliver=False,
    )

    with pytest.raises(ValueError):
        mark_notification_read(session, notification.id, user_id=other.id)

    mark_notification_read(session, notification.id, user_id=owner.id)
    assert list_notifications(session, owner.id) == []
    assert len(list_notifications(session, owner.id, include_read=True)) == 1


def test_mark_all_read_wraps_database_errors(session, monkeypatch) -> None:
    def broken(self, user_id, *, reference=None):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(NotificationRepository, "mark_all_as_read", broken)

    with pytest.raises(PersistenceFailure):
        mark_all_notifications_read(session, 1)


def test_preferences_default_and_update(session) -> None:
    user = make_user(session, email="prefs@example.com")

    assert get_preferences(session, user.id).fuel is False

    updated = update_preferences(session, user.id, sms=True, fuel=True, email=None)

    assert updated.sms is True
    assert updated.fuel is True
    assert updated.email is True
    assert get_preferences(session, user.id) == updated


def test_preferences_reject_unknown_flags(session) -> None:
    with pytest.raises(ValueError):
        update_preferences(session, 1, whatsapp=True)
