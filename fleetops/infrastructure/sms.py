"""Helpers for sending SMS notifications through Twilio."""

from __future__ import annotations

import logging

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from fleetops.config import Settings
from fleetops.domain.entities import Notification

logger = logging.getLogger(__name__)

_SMS_MAX_LENGTH = 320


def send_sms(phone: str, body: str, *, settings: Settings) -> bool:
    """Send ``body`` to ``phone``; return ``False`` when not configured or on failure."""

    if not settings.sms_enabled:
        logger.info("Twilio configuration incomplete; skipping SMS delivery")
        return False

    try:
        client = Client(settings.twilio_account_sid, settings.twilio_auth_token)
        client.messages.create(body=body, from_=settings.twilio_sms_number, to=phone)
    except TwilioException as exc:
        logger.error("Twilio SMS to %s failed: %s", phone, exc)
        return False
    return True


def format_sms(notification: Notification) -> str:
    text = f"{notification.title}: {notification.message}"
    if len(text) > _SMS_MAX_LENGTH:
        text = text[: _SMS_MAX_LENGTH - 3].rstrip() + "..."
    return text


def send_notification_sms(notification: Notification, phone: str, *, settings: Settings) -> bool:
    return send_sms(phone, format_sms(notification), settings=settings)
