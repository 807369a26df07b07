"""Rules that turn fleet state into qualifying notification conditions.

Every function here is pure: it receives entities that were already loaded,
the active :class:`Settings` thresholds and the reference instant, and
returns at most one :class:`Condition` per truck and category. When several
findings exist for the same truck (two expiring documents, a mileage and a
calendar interval both overdue, ...) the most severe one is kept.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta

from fleetops.config import Settings
from fleetops.domain.entities import (
    ComplianceDocument,
    FuelRecord,
    MaintenanceRecord,
    Notification,
    NotificationPriority,
    NotificationType,
    Truck,
)
from fleetops.utils import days_since, days_until


@dataclass(frozen=True)
class Condition:
    """A monitored condition that currently holds for one truck."""

    truck: Truck
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    action_url: str

    @property
    def key(self) -> tuple[int, NotificationType]:
        return (self.truck.id, self.type)

    def to_notification(
        self, recipient_id: int, *, created_at: datetime, expires_at: datetime | None
    ) -> Notification:
        return Notification(
            id=None,
            recipient_id=recipient_id,
            type=self.type,
            priority=self.priority,
            title=self.title,
            message=self.message,
            truck_id=self.truck.id,
            truck_registration=self.truck.registration,
            action_url=self.action_url,
            is_read=False,
            created_at=created_at,
            expires_at=expires_at,
        )


@dataclass(frozen=True)
class _Finding:
    priority: NotificationPriority
    title: str
    message: str


def _worst(findings: Iterable[_Finding]) -> _Finding | None:
    worst: _Finding | None = None
    for finding in findings:
        if worst is None or finding.priority > worst.priority:
            worst = finding
    return worst


def _format_date(value: datetime) -> str:
    return value.strftime("%a %b %d %Y")


def compliance_priority(days_to_expiry: int, *, high_days: int) -> NotificationPriority:
    """Bucket the days left before a document expires."""

    if days_to_expiry <= 0:
        return NotificationPriority.CRITICAL
    if days_to_expiry <= high_days:
        return NotificationPriority.HIGH
    return NotificationPriority.MEDIUM


def evaluate_compliance(
    documents: Iterable[ComplianceDocument],
    trucks: Mapping[int, Truck],
    *,
    settings: Settings,
    reference: datetime,
) -> list[Condition]:
    """Return one condition per truck holding an expired or soon-to-expire document."""

    horizon = reference + timedelta(days=settings.compliance_warning_days)
    grouped: dict[int, list[_Finding]] = {}
    for document in documents:
        truck = trucks.get(document.truck_id)
        if truck is None or document.expiry_date > horizon:
            continue
        days = days_until(document.expiry_date, reference)
        priority = compliance_priority(days, high_days=settings.compliance_high_days)
        if days <= 0:
            title = f"{document.label} has expired"
            detail = "has expired"
        else:
            title = f"{document.label} expires in {days} days"
            detail = f"expires on {_format_date(document.expiry_date)}"
        message = f"{document.label} for {truck.display_name} {detail}. Please renew immediately."
        grouped.setdefault(truck.id, []).append(_Finding(priority, title, message))

    conditions = []
    for truck_id, findings in grouped.items():
        finding = _worst(findings)
        message = finding.message
        if len(findings) > 1:
            message = f"{message} {len(findings)} documents need attention."
        conditions.append(
            Condition(
                truck=trucks[truck_id],
                type=NotificationType.COMPLIANCE,
                priority=finding.priority,
                title=finding.title,
                message=message,
                action_url=f"/compliance?truck={truck_id}",
            )
        )
    return conditions


def _maintenance_findings(
    truck: Truck, record: MaintenanceRecord, *, settings: Settings, reference: datetime
) -> list[_Finding]:
    findings: list[_Finding] = []
    registration = truck.registration

    if record.next_service_due is not None:
        due_in = days_until(record.next_service_due, reference)
        if due_in <= 0:
            findings.append(
                _Finding(
                    NotificationPriority.CRITICAL,
                    "Maintenance Overdue",
                    f"{registration} missed its scheduled service on "
                    f"{_format_date(record.next_service_due)}",
                )
            )
        elif due_in <= settings.maintenance_due_high_days:
            findings.append(
                _Finding(
                    NotificationPriority.HIGH,
                    "Service Due Soon",
                    f"{registration} needs service in {due_in} days",
                )
            )
        elif due_in <= settings.maintenance_due_window_days:
            findings.append(
                _Finding(
                    NotificationPriority.MEDIUM,
                    "Service Due Soon",
                    f"{registration} needs service in {due_in} days",
                )
            )

    if record.mileage_at_service is not None:
        mileage_since = truck.current_mileage - record.mileage_at_service
        if mileage_since >= settings.maintenance_mileage_interval_km:
            findings.append(
                _Finding(
                    NotificationPriority.HIGH,
                    "Maintenance Due",
                    f"{registration} is due for maintenance. Current mileage: "
                    f"{truck.current_mileage:,} km, last service: {record.mileage_at_service:,} km",
                )
            )
        elif mileage_since >= settings.maintenance_mileage_warning_km:
            findings.append(
                _Finding(
                    NotificationPriority.MEDIUM,
                    "Maintenance Due",
                    f"{registration} approaching maintenance milestone. "
                    f"{mileage_since:,} km since last service",
                )
            )

    elapsed = days_since(record.service_date, reference)
    if elapsed >= settings.maintenance_interval_days:
        findings.append(
            _Finding(
                NotificationPriority.HIGH,
                "Maintenance Due",
                f"{registration} is overdue for maintenance. Last service was {elapsed} days ago",
            )
        )
    elif elapsed >= settings.maintenance_warning_days:
        findings.append(
            _Finding(
                NotificationPriority.MEDIUM,
                "Maintenance Due",
                f"{registration} due for maintenance in "
                f"{settings.maintenance_interval_days - elapsed} days",
            )
        )
    return findings


def evaluate_maintenance(
    latest_records: Mapping[int, MaintenanceRecord],
    trucks: Mapping[int, Truck],
    *,
    settings: Settings,
    reference: datetime,
) -> list[Condition]:
    """Return one condition per truck whose last service calls for a new one.

    Trucks without any service history are skipped.
    """

    conditions = []
    for truck_id, record in latest_records.items():
        truck = trucks.get(truck_id)
        if truck is None:
            continue
        finding = _worst(
            _maintenance_findings(truck, record, settings=settings, reference=reference)
        )
        if finding is None:
            continue
        conditions.append(
            Condition(
                truck=truck,
                type=NotificationType.MAINTENANCE,
                priority=finding.priority,
                title=finding.title,
                message=finding.message,
                action_url=f"/maintenance?truck={truck_id}",
            )
        )
    return conditions


def evaluate_fuel(
    records: Iterable[FuelRecord],
    trucks: Mapping[int, Truck],
    *,
    settings: Settings,
) -> list[Condition]:
    """Return one condition per truck with a poor refuelling in the lookback window.

    ``records`` are expected to be limited to the lookback window already.
    Efficiency under the absolute floor is a medium alert; efficiency under
    ``fuel_relative_threshold`` times the fleet average is a low one.
    """

    window = [record for record in records if record.truck_id in trucks]
    if not window:
        return []
    average = sum(record.efficiency_kmpl for record in window) / len(window)

    grouped: dict[int, list[_Finding]] = {}
    for record in window:
        truck = trucks[record.truck_id]
        efficiency = record.efficiency_kmpl
        if efficiency < settings.fuel_efficiency_floor_kmpl:
            route = f" Route: {record.route}" if record.route else ""
            finding = _Finding(
                NotificationPriority.MEDIUM,
                "Poor Fuel Efficiency Alert",
                f"{truck.registration} recorded poor fuel efficiency: {efficiency:.1f} km/L "
                f"on {_format_date(record.date)}.{route}",
            )
        elif efficiency < average * settings.fuel_relative_threshold:
            finding = _Finding(
                NotificationPriority.LOW,
                "Low Fuel Efficiency Alert",
                f"{truck.registration} showing reduced efficiency: {efficiency:.1f} km/L "
                f"against a fleet average of {average:.1f} km/L",
            )
        else:
            continue
        grouped.setdefault(truck.id, []).append(finding)

    conditions = []
    for truck_id, findings in grouped.items():
        finding = _worst(findings)
        conditions.append(
            Condition(
                truck=trucks[truck_id],
                type=NotificationType.FUEL,
                priority=finding.priority,
                title=finding.title,
                message=finding.message,
                action_url=f"/fuel?truck={truck_id}",
            )
        )
    return conditions


__all__ = [
    "Condition",
    "compliance_priority",
    "evaluate_compliance",
    "evaluate_fuel",
    "evaluate_maintenance",
]
