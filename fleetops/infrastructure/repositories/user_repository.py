"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from fleetops.domain.entities import ROLE_ADMIN, ROLE_MANAGER, User
from fleetops.infrastructure.models import UserModel
from fleetops.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active(self) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_alert_recipients(self) -> Sequence[User]:
        """Return active administrators and managers."""

        query = (
            self.session.query(UserModel)
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.role.in_((ROLE_ADMIN, ROLE_MANAGER)))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        ids = {user_id for user_id in user_ids if user_id}
        if not ids:
            return {}
        models = self.session.query(UserModel).filter(UserModel.id.in_(ids)).all()
        return {model.id: self._to_entity(model) for model in models}

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email.strip().lower()
        model.phone = user.phone
        model.password = user.password
        model.role = user.role
        model.is_active = user.is_active
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=model.role,
            phone=model.phone,
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
