"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from fleetops.config import Settings
from fleetops.domain.entities import ROLE_ADMIN, User
from fleetops.infrastructure.database import get_db
from fleetops.interfaces.api.access import (
    AuthorizationResult,
    Denied,
    DenialReason,
    authorize,
    require_role,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)

_DENIAL_DETAILS = {
    DenialReason.MISSING_TOKEN: "Not authenticated",
    DenialReason.INVALID_TOKEN: "Invalid credentials",
    DenialReason.UNKNOWN_USER: "Invalid credentials",
    DenialReason.INACTIVE_USER: "Inactive user",
    DenialReason.FORBIDDEN: "Not authorized",
}


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""

    return request.app.state.settings


def get_authorization(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthorizationResult:
    """Resolve the bearer token without raising on failure."""

    return authorize(token, db, settings)


def _raise_for(denied: Denied) -> None:
    headers = {"WWW-Authenticate": "Bearer"} if denied.status_code == 401 else None
    raise HTTPException(
        status_code=denied.status_code,
        detail=_DENIAL_DETAILS[denied.reason],
        headers=headers,
    )


def get_current_user(
    authorization: AuthorizationResult = Depends(get_authorization),
) -> User:
    """Return the authenticated active user or answer 401."""

    if isinstance(authorization, Denied):
        _raise_for(authorization)
    return authorization.user


def require_admin(
    authorization: AuthorizationResult = Depends(get_authorization),
) -> User:
    """Ensure the authenticated user has administrator privileges."""

    result = require_role(authorization, ROLE_ADMIN)
    if isinstance(result, Denied):
        _raise_for(result)
    return result.user
