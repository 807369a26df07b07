"""ORM models used by the application infrastructure."""

from .notification import NotificationModel, NotificationPreferenceModel
from .truck import (
    ComplianceDocumentModel,
    FuelRecordModel,
    MaintenanceRecordModel,
    TruckModel,
)
from .user import UserModel

__all__ = [
    "ComplianceDocumentModel",
    "FuelRecordModel",
    "MaintenanceRecordModel",
    "NotificationModel",
    "NotificationPreferenceModel",
    "TruckModel",
    "UserModel",
]
