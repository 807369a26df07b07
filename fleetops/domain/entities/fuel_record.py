"""Domain entity representing a refuelling entry."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class FuelRecord:
    id: int | None
    truck_id: int
    date: datetime
    liters: float
    efficiency_kmpl: float
    route: str | None = None


__all__ = ["FuelRecord"]
