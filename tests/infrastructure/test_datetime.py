"""Tests for the timezone helpers."""

from datetime import datetime, timedelta, timezone

from fleetops.utils import (
    configure_app_timezone,
    days_since,
    days_until,
    ensure_app_naive_datetime,
    get_app_timezone,
)


def test_offset_timezones_are_supported() -> None:
    configure_app_timezone("UTC+03:00")

    assert get_app_timezone().utcoffset(None) == timedelta(hours=3)


def test_naive_storage_is_localized() -> None:
    configure_app_timezone("Africa/Nairobi")
    value = datetime(2026, 3, 1, 6, 0, tzinfo=timezone.utc)

    assert ensure_app_naive_datetime(value) == datetime(2026, 3, 1, 9, 0)


def test_day_counting_rounds_towards_caution() -> None:
    reference = datetime(2026, 3, 1, 9, 0)

    assert days_until(reference + timedelta(hours=3), reference) == 1
    assert days_until(reference - timedelta(hours=3), reference) == 0
    assert days_since(reference - timedelta(days=89, hours=23), reference) == 89
