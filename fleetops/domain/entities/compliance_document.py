"""Domain entity representing a truck compliance document."""

from dataclasses import dataclass
from datetime import datetime

DOCUMENT_STATUS_VALID = "valid"
DOCUMENT_STATUS_EXPIRING = "expiring"
DOCUMENT_STATUS_EXPIRED = "expired"
DOCUMENT_STATUS_RENEWED = "renewed"


@dataclass
class ComplianceDocument:
    """Insurance, inspection or licence record attached to a truck."""

    id: int | None
    truck_id: int
    document_type: str
    expiry_date: datetime
    status: str = DOCUMENT_STATUS_VALID

    @property
    def label(self) -> str:
        return self.document_type.replace("_", " ")


__all__ = [
    "ComplianceDocument",
    "DOCUMENT_STATUS_EXPIRED",
    "DOCUMENT_STATUS_EXPIRING",
    "DOCUMENT_STATUS_RENEWED",
    "DOCUMENT_STATUS_VALID",
]
