from .auth import Token
from .notification import (
    MarkAllReadResult,
    NotificationCreate,
    NotificationRead,
    OperationResult,
)
from .preferences import NotificationPreferencesRead, NotificationPreferencesUpdate

__all__ = [
    "MarkAllReadResult",
    "NotificationCreate",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "OperationResult",
    "Token",
]
