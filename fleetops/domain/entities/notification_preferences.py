"""Domain entity describing how a user wants to be notified."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .notification import NotificationType


class DeliveryChannel(str, Enum):
    """Dispatch mechanisms available for notifications."""

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"


@dataclass
class NotificationPreferences:
    """Per-user channel and category flags.

    A notification is delivered through a channel only when both the channel
    flag and the flag of the notification's category are enabled.
    """

    user_id: int
    email: bool = True
    sms: bool = False
    push: bool = True
    compliance: bool = True
    maintenance: bool = True
    fuel: bool = False
    system: bool = True

    def channel_enabled(self, channel: DeliveryChannel) -> bool:
        return bool(getattr(self, DeliveryChannel(channel).value))

    def category_enabled(self, category: NotificationType) -> bool:
        return bool(getattr(self, NotificationType(category).value))

    def allows(self, channel: DeliveryChannel, category: NotificationType) -> bool:
        """Return ``True`` when ``category`` notifications may use ``channel``."""

        return self.channel_enabled(channel) and self.category_enabled(category)

    def enabled_channels(self, category: NotificationType) -> list[DeliveryChannel]:
        return [channel for channel in DeliveryChannel if self.allows(channel, category)]


__all__ = ["DeliveryChannel", "NotificationPreferences"]
