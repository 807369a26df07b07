"""Registry of the notification websockets opened by each user."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Keep the open notification sockets of each user and push to them.

    A user may hold several sockets (one per browser tab). Sockets are kept
    in registration order so pushes reach them in the order they connected.
    """

    def __init__(self) -> None:
        self._sockets: dict[int, list[WebSocket]] = {}

    async def register(self, user_id: int, websocket: WebSocket) -> None:
        """Accept ``websocket`` and start pushing ``user_id``'s notifications to it."""

        await websocket.accept()
        self._sockets.setdefault(user_id, []).append(websocket)
        logger.debug("User %s opened a notification stream", user_id)

    def unregister(self, user_id: int, websocket: WebSocket) -> None:
        sockets = self._sockets.get(user_id)
        if not sockets or websocket not in sockets:
            return
        sockets.remove(websocket)
        if not sockets:
            del self._sockets[user_id]

    def is_connected(self, user_id: int) -> bool:
        return user_id in self._sockets

    async def push(self, user_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to each socket of ``user_id``.

        Returns the number of sockets that accepted the message. A socket
        that fails is unregistered once the round is over.
        """

        delivered = 0
        failed: list[WebSocket] = []
        for websocket in list(self._sockets.get(user_id, ())):
            try:
                await websocket.send_json(message)
            except Exception as exc:
                logger.debug("Notification stream of user %s is gone: %s", user_id, exc)
                failed.append(websocket)
            else:
                delivered += 1

        for websocket in failed:
            self.unregister(user_id, websocket)
        return delivered


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
