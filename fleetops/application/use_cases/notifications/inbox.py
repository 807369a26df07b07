"""Use cases for reading and acknowledging a user's notifications."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fleetops.config import Settings
from fleetops.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from fleetops.domain.errors import PersistenceFailure
from fleetops.infrastructure.repositories import (
    NotificationPreferenceRepository,
    NotificationRepository,
    UserRepository,
)
from fleetops.utils import ensure_app_timezone, now_in_app_timezone

from .delivery import deliver_notification

logger = logging.getLogger(__name__)


def list_notifications(
    session: Session,
    user_id: int,
    *,
    include_read: bool = False,
    reference: datetime | None = None,
    limit: int | None = 50,
) -> Sequence[Notification]:
    """Return active notifications ordered by priority then newest first.

    Unread notifications only unless ``include_read`` is set. Expired ones are
    never returned, whatever their read state.
    """

    repository = NotificationRepository(session)
    return repository.list_for_user(
        user_id, reference=reference, include_read=include_read, limit=limit
    )


def mark_notification_read(session: Session, notification_id: int, *, user_id: int) -> None:
    """Mark one of ``user_id``'s notifications as read or raise if it is not theirs."""

    repository = NotificationRepository(session)
    if not repository.mark_as_read(notification_id, user_id=user_id):
        raise ValueError("Notification not found")


def mark_all_notifications_read(
    session: Session, user_id: int, *, reference: datetime | None = None
) -> int:
    """Mark every active unread notification of ``user_id`` as read."""

    try:
        return NotificationRepository(session).mark_all_as_read(user_id, reference=reference)
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceFailure("Could not update notifications") from exc


def create_manual_notification(
    session: Session,
    *,
    settings: Settings,
    title: str,
    message: str,
    notification_type: NotificationType = NotificationType.SYSTEM,
    priority: NotificationPriority = NotificationPriority.LOW,
    recipient_ids: Iterable[int] | None = None,
    action_url: str | None = None,
    expires_at: datetime | None = None,
    deliver: bool = True,
) -> list[Notification]:
    """Store an announcement for the given users (every active user by default).

    Manual notifications are not bound to a truck, so they never take part in
    the deduplication applied to automated checks.
    """

    now = now_in_app_timezone()
    expires_at = ensure_app_timezone(expires_at)
    if expires_at is not None and expires_at <= now:
        raise ValueError("expires_at must be in the future")

    users = UserRepository(session)
    if recipient_ids is None:
        recipients = list(users.list_active())
    else:
        recipients_by_id = users.get_map_by_ids(recipient_ids)
        recipients = [user for user in recipients_by_id.values() if user.is_active]
    if not recipients:
        raise ValueError("No active recipients found")

    drafts = [
        Notification(
            id=None,
            recipient_id=recipient.id,
            type=notification_type,
            priority=priority,
            title=title,
            message=message,
            action_url=action_url,
            created_at=now,
            expires_at=expires_at,
        )
        for recipient in recipients
    ]
    try:
        saved = NotificationRepository(session).create_many(drafts)
    except SQLAlchemyError as exc:
        session.rollback()
        raise PersistenceFailure("Could not store notification") from exc

    if deliver:
        preferences = NotificationPreferenceRepository(session).get_map(
            recipient.id for recipient in recipients
        )
        recipients_by_id = {recipient.id: recipient for recipient in recipients}
        for notification in saved:
            recipient = recipients_by_id[notification.recipient_id]
            deliver_notification(
                notification,
                recipient,
                preferences[recipient.id],
                settings=settings,
            )
    logger.info("Stored %s manual %s notifications", len(saved), notification_type.value)
    return saved


__all__ = [
    "create_manual_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
