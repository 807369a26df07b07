"""Domain entities exposed by the application."""

from .compliance_document import (
    DOCUMENT_STATUS_EXPIRED,
    DOCUMENT_STATUS_EXPIRING,
    DOCUMENT_STATUS_RENEWED,
    DOCUMENT_STATUS_VALID,
    ComplianceDocument,
)
from .fuel_record import FuelRecord
from .maintenance_record import MaintenanceRecord
from .notification import (
    FLEET_NOTIFICATION_TYPES,
    PRIORITY_RANKS,
    Notification,
    NotificationPriority,
    NotificationType,
    build_active_key,
)
from .notification_preferences import DeliveryChannel, NotificationPreferences
from .truck import (
    TRUCK_STATUS_ACTIVE,
    TRUCK_STATUS_INACTIVE,
    TRUCK_STATUS_MAINTENANCE,
    Truck,
)
from .user import ROLES, ROLE_ADMIN, ROLE_MANAGER, ROLE_VIEWER, User

__all__ = [
    "ComplianceDocument",
    "DOCUMENT_STATUS_EXPIRED",
    "DOCUMENT_STATUS_EXPIRING",
    "DOCUMENT_STATUS_RENEWED",
    "DOCUMENT_STATUS_VALID",
    "DeliveryChannel",
    "FLEET_NOTIFICATION_TYPES",
    "FuelRecord",
    "MaintenanceRecord",
    "Notification",
    "NotificationPreferences",
    "NotificationPriority",
    "NotificationType",
    "PRIORITY_RANKS",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_MANAGER",
    "ROLE_VIEWER",
    "TRUCK_STATUS_ACTIVE",
    "TRUCK_STATUS_INACTIVE",
    "TRUCK_STATUS_MAINTENANCE",
    "Truck",
    "User",
    "build_active_key",
]
