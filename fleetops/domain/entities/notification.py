"""Domain entity representing a fleet notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Closed set of notification categories."""

    COMPLIANCE = "compliance"
    MAINTENANCE = "maintenance"
    FUEL = "fuel"
    SYSTEM = "system"


class NotificationPriority(str, Enum):
    """Ordered severity of a notification."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return PRIORITY_RANKS[self.value]

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, NotificationPriority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, NotificationPriority):
            return NotImplemented
        return self.rank >= other.rank

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NotificationPriority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, NotificationPriority):
            return NotImplemented
        return self.rank <= other.rank


PRIORITY_RANKS: dict[str, int] = {
    "low": 1,
    "medium": 2,
    "high": 3,
    "critical": 4,
}

FLEET_NOTIFICATION_TYPES: tuple[NotificationType, ...] = (
    NotificationType.COMPLIANCE,
    NotificationType.MAINTENANCE,
    NotificationType.FUEL,
)


def build_active_key(
    recipient_id: int, truck_id: int | None, notification_type: NotificationType
) -> str:
    """Return the key that identifies the single active slot of a notification."""

    truck_part = truck_id if truck_id is not None else "-"
    return f"{recipient_id}:{truck_part}:{notification_type.value}"


@dataclass
class Notification:
    """Message delivered to a single fleet user.

    A notification is *active* until it expires, its condition clears
    (``retired_at``) or a more severe notification for the same truck and
    category replaces it (``superseded_at``). Read state never affects
    whether it is active.
    """

    id: int | None
    recipient_id: int
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    truck_id: int | None = None
    truck_registration: str | None = None
    action_url: str | None = None
    is_read: bool = False
    created_at: datetime | None = None
    expires_at: datetime | None = None
    retired_at: datetime | None = None
    superseded_at: datetime | None = None

    def is_expired(self, reference: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= reference

    def is_active(self, reference: datetime) -> bool:
        if self.retired_at is not None or self.superseded_at is not None:
            return False
        return not self.is_expired(reference)

    @property
    def dedupe_key(self) -> str | None:
        """Key of the single active slot, for truck-bound fleet notifications only."""

        if self.truck_id is None or self.type not in FLEET_NOTIFICATION_TYPES:
            return None
        return build_active_key(self.recipient_id, self.truck_id, self.type)


__all__ = [
    "FLEET_NOTIFICATION_TYPES",
    "PRIORITY_RANKS",
    "Notification",
    "NotificationPriority",
    "NotificationType",
    "build_active_key",
]
