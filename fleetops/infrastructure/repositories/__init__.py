"""Repository implementations for infrastructure layer."""

from .fleet_repository import FleetRepository
from .notification_preference_repository import NotificationPreferenceRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "FleetRepository",
    "NotificationPreferenceRepository",
    "NotificationRepository",
    "UserRepository",
]
