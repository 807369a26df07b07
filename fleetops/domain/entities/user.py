"""Domain entity representing a fleet user."""

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_VIEWER = "viewer"

ROLES = (ROLE_ADMIN, ROLE_MANAGER, ROLE_VIEWER)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    role: str
    phone: str | None
    is_active: bool
    created_at: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role matches ``alias``."""

        return self.role.lower() == alias.lower()


__all__ = ["ROLES", "ROLE_ADMIN", "ROLE_MANAGER", "ROLE_VIEWER", "User"]
