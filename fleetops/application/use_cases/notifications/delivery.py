"""Dispatch notifications through the channels a user opted into."""

from __future__ import annotations

import logging

from fleetops.config import Settings
from fleetops.domain.entities import (
    DeliveryChannel,
    Notification,
    NotificationPreferences,
    User,
)
from fleetops.infrastructure.email import send_notification_email
from fleetops.infrastructure.notifications import dispatch_notification
from fleetops.infrastructure.sms import send_notification_sms

logger = logging.getLogger(__name__)


def _send(
    channel: DeliveryChannel,
    notification: Notification,
    recipient: User,
    settings: Settings,
) -> bool:
    if channel is DeliveryChannel.EMAIL:
        return send_notification_email(notification, recipient.email, settings=settings)
    if channel is DeliveryChannel.SMS:
        if not recipient.phone:
            return False
        return send_notification_sms(notification, recipient.phone, settings=settings)
    return dispatch_notification(notification)


def deliver_notification(
    notification: Notification,
    recipient: User,
    preferences: NotificationPreferences,
    *,
    settings: Settings,
) -> list[DeliveryChannel]:
    """Send ``notification`` through every channel ``preferences`` allow.

    Returns the channels that accepted the message. A failing channel is
    logged and skipped; it never prevents the others from being tried.
    """

    delivered: list[DeliveryChannel] = []
    for channel in preferences.enabled_channels(notification.type):
        try:
            sent = _send(channel, notification, recipient, settings)
        except Exception as exc:
            logger.warning(
                "Delivery of notification %s to user %s through %s failed: %s",
                notification.id,
                recipient.id,
                channel.value,
                exc,
            )
            continue
        if sent:
            delivered.append(channel)
    return delivered


__all__ = ["deliver_notification"]
