"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Iterable

from sqlalchemy import case, or_
from sqlalchemy.orm import Query, Session

from fleetops.domain.entities import (
    FLEET_NOTIFICATION_TYPES,
    PRIORITY_RANKS,
    Notification,
    NotificationPriority,
    NotificationType,
    build_active_key,
)
from fleetops.infrastructure.models import NotificationModel
from fleetops.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

_priority_rank = case(PRIORITY_RANKS, value=NotificationModel.priority, else_=0)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        reference: datetime | None = None,
        include_read: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        """Return the active notifications of ``user_id``, most urgent first."""

        query = self._active_query(reference).filter(NotificationModel.user_id == user_id)
        if not include_read:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(
            _priority_rank.desc(),
            NotificationModel.created_at.desc(),
            NotificationModel.id.desc(),
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: int, *, reference: datetime | None = None, limit: int | None = 50
    ) -> Sequence[Notification]:
        return self.list_for_user(user_id, reference=reference, limit=limit)

    def get_active(
        self,
        *,
        recipient_id: int,
        truck_id: int,
        notification_type: NotificationType,
        reference: datetime | None = None,
    ) -> Notification | None:
        key = build_active_key(recipient_id, truck_id, notification_type)
        model = (
            self._active_query(reference)
            .filter(NotificationModel.active_key == key)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_active_fleet_notifications(
        self, *, reference: datetime | None = None
    ) -> Sequence[Notification]:
        """Return active notifications raised by automated checks for a truck.

        Manual notifications carry no ``active_key`` and are left out, whatever
        their type.
        """

        types = [notification_type.value for notification_type in FLEET_NOTIFICATION_TYPES]
        query = self._active_query(reference).filter(
            NotificationModel.type.in_(types),
            NotificationModel.active_key.isnot(None),
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def create_many(self, notifications: Iterable[Notification]) -> list[Notification]:
        models = []
        for notification in notifications:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            self.session.add(model)
            models.append(model)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def replace_active(
        self, superseded_id: int, notification: Notification, *, reference: datetime
    ) -> Notification:
        """Supersede ``superseded_id`` and insert ``notification`` in one commit."""

        # The old row releases its key before the new one claims it.
        self._deactivate(
            NotificationModel.id == superseded_id,
            extra={NotificationModel.superseded_at: ensure_app_naive_datetime(reference)},
        )
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def expire_elapsed(self, *, reference: datetime) -> int:
        """Deactivate every notification whose ``expires_at`` has passed."""

        updated = self._deactivate(
            NotificationModel.expires_at.isnot(None),
            NotificationModel.expires_at <= ensure_app_naive_datetime(reference),
        )
        self.session.commit()
        return updated

    def retire(self, notification_ids: Iterable[int], *, reference: datetime) -> int:
        """Deactivate notifications whose triggering condition has cleared."""

        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = self._deactivate(
            NotificationModel.id.in_(ids),
            extra={NotificationModel.retired_at: ensure_app_naive_datetime(reference)},
        )
        self.session.commit()
        return updated

    def mark_as_read(self, notification_id: int, *, user_id: int) -> bool:
        return bool(self.mark_many_as_read([notification_id], user_id=user_id))

    def mark_many_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.user_id == user_id,
            )
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, user_id: int, *, reference: datetime | None = None) -> int:
        """Mark every active unread notification of ``user_id`` as read."""

        rows = (
            self._active_query(reference)
            .with_entities(NotificationModel.id)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .all()
        )
        return self.mark_many_as_read([row.id for row in rows], user_id=user_id)

    def _deactivate(self, *criteria, extra: dict | None = None) -> int:
        values = {NotificationModel.active: False, NotificationModel.active_key: None}
        values.update(extra or {})
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.active.is_(True), *criteria)
            .update(values, synchronize_session=False)
        )

    def _active_query(self, reference: datetime | None) -> Query:
        stamp = ensure_app_naive_datetime(reference or now_in_app_timezone())
        return self.session.query(NotificationModel).filter(
            NotificationModel.active.is_(True),
            or_(
                NotificationModel.expires_at.is_(None),
                NotificationModel.expires_at > stamp,
            ),
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        model.user_id = notification.recipient_id
        model.type = NotificationType(notification.type).value
        model.priority = NotificationPriority(notification.priority).value
        model.title = notification.title
        model.message = notification.message
        model.truck_id = notification.truck_id
        model.truck_registration = notification.truck_registration
        model.action_url = notification.action_url
        model.is_read = notification.is_read
        model.expires_at = ensure_app_naive_datetime(notification.expires_at)
        model.retired_at = ensure_app_naive_datetime(notification.retired_at)
        model.superseded_at = ensure_app_naive_datetime(notification.superseded_at)
        model.active = notification.retired_at is None and notification.superseded_at is None
        model.active_key = notification.dedupe_key if model.active else None

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.user_id,
            type=NotificationType(model.type),
            priority=NotificationPriority(model.priority),
            title=model.title,
            message=model.message,
            truck_id=model.truck_id,
            truck_registration=model.truck_registration,
            action_url=model.action_url,
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
            expires_at=ensure_app_timezone(model.expires_at),
            retired_at=ensure_app_timezone(model.retired_at),
            superseded_at=ensure_app_timezone(model.superseded_at),
        )


__all__ = ["NotificationRepository"]
