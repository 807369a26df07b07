"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_DEFAULT_TIMEZONE: Final[str] = "Africa/Nairobi"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)
_SECONDS_PER_DAY: Final[int] = 24 * 60 * 60

_configured_timezone: str | None = None


def configure_app_timezone(tz_name: str | None) -> None:
    """Set the timezone used by every helper in this module.

    Called once by the process entry point with ``Settings.app_timezone``.
    Passing ``None`` restores the default ``Africa/Nairobi`` timezone.
    """

    global _configured_timezone
    _configured_timezone = (tz_name or "").strip() or None
    get_app_timezone.cache_clear()


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone."""

    return _resolve_timezone(_configured_timezone or _DEFAULT_TIMEZONE)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current localized time without attaching ``tzinfo``."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` localized to the app timezone but without ``tzinfo``.

    Columns are declared as plain ``DateTime`` so the same schema works on
    SQLite and server databases. Aware datetimes stay in the domain layer and
    only their localized naive form is stored.
    """

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def days_until(target: datetime, reference: datetime) -> int:
    """Return the whole days from ``reference`` to ``target``, rounded up.

    A target three hours ahead counts as one day; a target in the past yields
    zero or a negative number.
    """

    delta = ensure_app_timezone(target) - ensure_app_timezone(reference)
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def days_since(start: datetime, reference: datetime) -> int:
    """Return the whole days elapsed since ``start``, rounded down."""

    delta = ensure_app_timezone(reference) - ensure_app_timezone(start)
    return math.floor(delta.total_seconds() / _SECONDS_PER_DAY)


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return ZoneInfo(_DEFAULT_TIMEZONE)
