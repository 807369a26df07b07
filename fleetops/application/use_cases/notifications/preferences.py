"""Use cases for reading and updating notification preferences."""

from dataclasses import fields, replace

from sqlalchemy.orm import Session

from fleetops.domain.entities import NotificationPreferences
from fleetops.infrastructure.repositories import NotificationPreferenceRepository

_FLAG_NAMES = frozenset(
    field.name for field in fields(NotificationPreferences) if field.name != "user_id"
)


def get_preferences(session: Session, user_id: int) -> NotificationPreferences:
    """Return stored preferences for ``user_id`` or the defaults."""

    return NotificationPreferenceRepository(session).get(user_id)


def update_preferences(
    session: Session, user_id: int, **flags: bool | None
) -> NotificationPreferences:
    """Store ``flags`` for ``user_id``; omitted or ``None`` flags take their default."""

    unknown = set(flags) - _FLAG_NAMES
    if unknown:
        raise ValueError(f"Unknown preference flags: {', '.join(sorted(unknown))}")

    values = {name: bool(value) for name, value in flags.items() if value is not None}
    preferences = replace(NotificationPreferences(user_id=user_id), **values)
    return NotificationPreferenceRepository(session).save(preferences)


__all__ = ["get_preferences", "update_preferences"]
