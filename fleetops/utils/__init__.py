"""Utility helpers for reusable functionality."""

from .datetime import (
    configure_app_timezone,
    days_since,
    days_until,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
)

__all__ = [
    "configure_app_timezone",
    "days_since",
    "days_until",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
]
