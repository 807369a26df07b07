"""Endpoints for per-user notification settings."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fleetops.application.use_cases.notifications import get_preferences, update_preferences
from fleetops.domain.entities import User
from fleetops.infrastructure.database import get_db
from fleetops.interfaces.api.dependencies import get_current_user
from fleetops.interfaces.api.schemas import (
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/notifications", response_model=NotificationPreferencesRead)
def read_notification_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationPreferencesRead:
    """Return the caller's channel and category flags."""

    preferences = get_preferences(db, current_user.id)
    return NotificationPreferencesRead.model_validate(preferences)


@router.put("/notifications", response_model=NotificationPreferencesRead)
def update_notification_settings(
    payload: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationPreferencesRead:
    """Replace the caller's preferences."""

    preferences = update_preferences(db, current_user.id, **payload.model_dump())
    return NotificationPreferencesRead.model_validate(preferences)
