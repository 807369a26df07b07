"""Domain entity representing a completed service."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class MaintenanceRecord:
    id: int | None
    truck_id: int
    service_date: datetime
    service_type: str
    mileage_at_service: int | None = None
    next_service_due: datetime | None = None


__all__ = ["MaintenanceRecord"]
