"""Use case for creating users or resetting an existing user's password."""

from __future__ import annotations

import re
from dataclasses import replace

from sqlalchemy.orm import Session

from fleetops.domain.entities import ROLES, User
from fleetops.infrastructure.repositories import UserRepository
from fleetops.infrastructure.security import get_password_hash

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_MIN_PASSWORD_LENGTH = 8


def _validate(*, name: str, email: str, password: str, role: str) -> None:
    if not name.strip():
        raise ValueError("Name is required")
    if not _EMAIL_PATTERN.match(email.strip()):
        raise ValueError("Email address is not valid")
    if len(password) < _MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must have at least {_MIN_PASSWORD_LENGTH} characters")
    if role not in ROLES:
        raise ValueError(f"Role must be one of: {', '.join(ROLES)}")


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
    phone: str | None = None,
) -> User:
    """Create a new active user with a hashed password."""

    _validate(name=name, email=email, password=password, role=role)
    repository = UserRepository(session)
    if repository.get_by_email(email) is not None:
        raise ValueError("A user with this email already exists")

    user = User(
        id=None,
        name=name.strip(),
        email=email,
        password=get_password_hash(password),
        role=role,
        phone=phone,
        is_active=True,
    )
    return repository.create(user)


def create_or_reset_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
    phone: str | None = None,
) -> tuple[User, bool]:
    """Create the user, or reset the password and role of an existing one.

    Returns the user and ``True`` when it was created.
    """

    _validate(name=name, email=email, password=password, role=role)
    repository = UserRepository(session)
    existing = repository.get_by_email(email)
    if existing is None:
        return create_user(
            session, name=name, email=email, password=password, role=role, phone=phone
        ), True

    updated = replace(
        existing,
        password=get_password_hash(password),
        role=role,
        phone=phone or existing.phone,
        is_active=True,
    )
    return repository.update(updated), False
