"""Tests for the websocket connection registry and notification publisher."""

import asyncio
import logging

from fleetops.domain.entities import Notification, NotificationPriority, NotificationType
from fleetops.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationPublisher,
    serialize_notification,
)


class _Socket:
    def __init__(self, *, closed: bool = False) -> None:
        self.accepted = False
        self.closed = closed
        self.sent: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.closed:
            raise RuntimeError("Cannot call send once a close message has been sent.")
        self.sent.append(message)


def _notification() -> Notification:
    return Notification(
        id=9,
        recipient_id=4,
        type=NotificationType.FUEL,
        priority=NotificationPriority.MEDIUM,
        title="Poor Fuel Efficiency Alert",
        message="KDD-002T recorded poor fuel efficiency.",
        truck_id=2,
        truck_registration="KDD-002T",
    )


def test_dispatch_skips_disconnected_users() -> None:
    publisher = NotificationPublisher(NotificationConnectionManager())

    assert publisher.dispatch(_notification()) is False


def test_serialize_notification_uses_plain_values() -> None:
    payload = serialize_notification(_notification())

    assert payload["type"] == "fuel"
    assert payload["priority"] == "medium"
    assert payload["truck_registration"] == "KDD-002T"
    assert payload["created_at"] is None


def test_push_reaches_every_socket_and_drops_closed_ones() -> None:
    manager = NotificationConnectionManager()
    first, gone, second = _Socket(), _Socket(closed=True), _Socket()

    async def scenario() -> int:
        for socket in (first, gone, second):
            await manager.register(4, socket)
        return await manager.push(4, {"type": "pong"})

    delivered = asyncio.run(scenario())

    assert delivered == 2
    assert first.accepted and second.accepted
    assert first.sent == second.sent == [{"type": "pong"}]
    manager.unregister(4, first)
    manager.unregister(4, second)
    assert manager.is_connected(4) is False


def test_unregister_ignores_unknown_sockets() -> None:
    manager = NotificationConnectionManager()

    manager.unregister(4, _Socket())

    assert manager.is_connected(4) is False


def test_dispatch_inside_event_loop_tracks_the_push_until_done() -> None:
    manager = NotificationConnectionManager()
    publisher = NotificationPublisher(manager)
    socket = _Socket()

    async def scenario() -> bool:
        await manager.register(4, socket)
        scheduled = publisher.dispatch(_notification())
        assert len(publisher._pending) == 1
        await asyncio.gather(*publisher._pending)
        await asyncio.sleep(0)
        return scheduled

    assert asyncio.run(scenario()) is True
    assert socket.sent == [{"type": "notification", "data": serialize_notification(_notification())}]
    assert publisher._pending == set()


def test_failed_push_is_logged(caplog) -> None:
    class _BrokenManager(NotificationConnectionManager):
        def is_connected(self, user_id: int) -> bool:
            return True

        async def push(self, user_id, message) -> int:
            raise ConnectionError("stream reset")

    publisher = NotificationPublisher(_BrokenManager())

    async def scenario() -> None:
        publisher.dispatch(_notification())
        await asyncio.gather(*publisher._pending, return_exceptions=True)
        await asyncio.sleep(0)

    with caplog.at_level(logging.WARNING):
        asyncio.run(scenario())

    assert "Websocket push failed: stream reset" in caplog.text
    assert publisher._pending == set()
