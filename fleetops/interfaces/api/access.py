"""Role based access checks for API and websocket callers.

``authorize`` turns a bearer token into a typed result instead of raising,
so each caller decides how a denial is rendered (an HTTP error, a JSON
failure body or a websocket close code).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from sqlalchemy.orm import Session

from fleetops.config import Settings
from fleetops.domain.entities import User
from fleetops.domain.errors import Unauthorized
from fleetops.infrastructure.repositories import UserRepository
from fleetops.infrastructure.security import decode_access_token, password_signature


class DenialReason(str, Enum):
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    UNKNOWN_USER = "unknown_user"
    INACTIVE_USER = "inactive_user"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Authorized:
    """The caller is the active ``user``."""

    user: User


@dataclass(frozen=True)
class Denied:
    """The caller may not proceed."""

    reason: DenialReason

    @property
    def status_code(self) -> int:
        return 403 if self.reason is DenialReason.FORBIDDEN else 401


AuthorizationResult = Union[Authorized, Denied]


def authorize(token: str | None, session: Session, settings: Settings) -> AuthorizationResult:
    """Resolve ``token`` to an active user."""

    if not token:
        return Denied(DenialReason.MISSING_TOKEN)

    try:
        payload = decode_access_token(token, settings)
    except ValueError:
        return Denied(DenialReason.INVALID_TOKEN)

    email = payload.get("sub")
    signature = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature, str):
        return Denied(DenialReason.INVALID_TOKEN)

    user = UserRepository(session).get_by_email(email)
    if user is None:
        return Denied(DenialReason.UNKNOWN_USER)
    if not user.is_active:
        return Denied(DenialReason.INACTIVE_USER)
    if signature != password_signature(user.password, user.is_active):
        return Denied(DenialReason.INVALID_TOKEN)
    return Authorized(user)


def require_identity(result: AuthorizationResult) -> User:
    """Return the authorized user or raise :class:`Unauthorized`."""

    if isinstance(result, Denied):
        raise Unauthorized(result.reason.value)
    return result.user


def require_role(result: AuthorizationResult, *roles: str) -> AuthorizationResult:
    """Narrow an authorized result to users holding one of ``roles``."""

    if isinstance(result, Denied):
        return result
    if any(result.user.has_role(role) for role in roles):
        return result
    return Denied(DenialReason.FORBIDDEN)


__all__ = [
    "AuthorizationResult",
    "Authorized",
    "Denied",
    "DenialReason",
    "authorize",
    "require_identity",
    "require_role",
]
