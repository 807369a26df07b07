"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from fleetops.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task] = set()

    def dispatch(self, notification: Notification) -> bool:
        """Schedule ``notification`` for its recipient's open websockets.

        Returns ``False`` when the recipient has no open connection or when
        called outside both an event loop and an AnyIO worker thread (for
        example from a cron script).
        """

        user_id = notification.recipient_id
        if not self._manager.is_connected(user_id):
            return False

        message = {"type": "notification", "data": serialize_notification(notification)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.push, user_id, message)
            except RuntimeError:
                logger.debug("No event loop available to push notification %s", notification.id)
                return False
        else:
            task = loop.create_task(self._manager.push(user_id, message))
            self._pending.add(task)
            task.add_done_callback(self._finish)
        return True

    def _finish(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Websocket push failed: %s", exc)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON payload representation for ``notification``."""

    return {
        "id": notification.id,
        "type": notification.type.value,
        "priority": notification.priority.value,
        "title": notification.title,
        "message": notification.message,
        "truck_id": notification.truck_id,
        "truck_registration": notification.truck_registration,
        "action_url": notification.action_url,
        "is_read": notification.is_read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
        "expires_at": notification.expires_at.isoformat() if notification.expires_at else None,
    }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> bool:
    """Public helper that delegates to the shared publisher instance."""

    return notification_publisher.dispatch(notification)


__all__ = [
    "NotificationPublisher",
    "dispatch_notification",
    "notification_publisher",
    "serialize_notification",
]
