"""Pydantic models for notification preferences."""

from pydantic import BaseModel, ConfigDict


class NotificationPreferencesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: bool
    sms: bool
    push: bool
    compliance: bool
    maintenance: bool
    fuel: bool
    system: bool


class NotificationPreferencesUpdate(BaseModel):
    """Flags left out of the payload are reset to their defaults."""

    model_config = ConfigDict(extra="forbid")

    email: bool | None = None
    sms: bool | None = None
    push: bool | None = None
    compliance: bool | None = None
    maintenance: bool | None = None
    fuel: bool | None = None
    system: bool | None = None


__all__ = ["NotificationPreferencesRead", "NotificationPreferencesUpdate"]
