"""Domain entity representing a fleet vehicle."""

from dataclasses import dataclass

TRUCK_STATUS_ACTIVE = "active"
TRUCK_STATUS_MAINTENANCE = "maintenance"
TRUCK_STATUS_INACTIVE = "inactive"


@dataclass
class Truck:
    """Vehicle monitored by the automated checks."""

    id: int | None
    registration: str
    make: str
    model: str
    year: int | None
    current_mileage: int
    status: str = TRUCK_STATUS_ACTIVE

    @property
    def display_name(self) -> str:
        return f"{self.registration} ({self.make} {self.model})"


__all__ = [
    "TRUCK_STATUS_ACTIVE",
    "TRUCK_STATUS_INACTIVE",
    "TRUCK_STATUS_MAINTENANCE",
    "Truck",
]
