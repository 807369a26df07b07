"""Persistence helpers for per-user notification preferences."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from fleetops.domain.entities import NotificationPreferences
from fleetops.infrastructure.models import NotificationPreferenceModel

_FLAGS = ("email", "sms", "push", "compliance", "maintenance", "fuel", "system")


class NotificationPreferenceRepository:
    """Load and store :class:`NotificationPreferences` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> NotificationPreferences:
        """Return the stored preferences or the defaults when none exist."""

        model = self._get_model(user_id)
        return self._to_entity(model) if model else NotificationPreferences(user_id=user_id)

    def get_map(self, user_ids: Iterable[int]) -> dict[int, NotificationPreferences]:
        ids = {user_id for user_id in user_ids if user_id}
        if not ids:
            return {}
        models = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id.in_(ids))
            .all()
        )
        stored = {model.user_id: self._to_entity(model) for model in models}
        return {
            user_id: stored.get(user_id) or NotificationPreferences(user_id=user_id)
            for user_id in ids
        }

    def save(self, preferences: NotificationPreferences) -> NotificationPreferences:
        model = self._get_model(preferences.user_id)
        if model is None:
            model = NotificationPreferenceModel(user_id=preferences.user_id)
        for flag in _FLAGS:
            setattr(model, flag, bool(getattr(preferences, flag)))
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, user_id: int) -> NotificationPreferenceModel | None:
        return (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: NotificationPreferenceModel) -> NotificationPreferences:
        return NotificationPreferences(
            user_id=model.user_id,
            **{flag: bool(getattr(model, flag)) for flag in _FLAGS},
        )


__all__ = ["NotificationPreferenceRepository"]
