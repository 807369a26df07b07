"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fleetops.domain.entities import NotificationPriority, NotificationType


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    truck_id: int | None = None
    truck_registration: str | None = None
    action_url: str | None = None
    is_read: bool
    created_at: datetime
    expires_at: datetime | None = None


class NotificationCreate(BaseModel):
    """Payload used by administrators to broadcast a notification."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=160)
    message: str = Field(..., min_length=1)
    type: NotificationType = NotificationType.SYSTEM
    priority: NotificationPriority = NotificationPriority.LOW
    recipient_ids: list[int] | None = Field(
        default=None,
        min_length=1,
        description="Users that receive the notification; every active user when omitted",
    )
    action_url: str | None = Field(default=None, max_length=255)
    expires_at: datetime | None = None


class OperationResult(BaseModel):
    success: bool
    message: str


class MarkAllReadResult(OperationResult):
    updated: int


__all__ = [
    "MarkAllReadResult",
    "NotificationCreate",
    "NotificationRead",
    "OperationResult",
]
