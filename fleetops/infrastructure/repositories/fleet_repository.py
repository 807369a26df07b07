"""Read access to the fleet state inspected by the automated checks."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from fleetops.domain.entities import (
    DOCUMENT_STATUS_RENEWED,
    TRUCK_STATUS_INACTIVE,
    ComplianceDocument,
    FuelRecord,
    MaintenanceRecord,
    Truck,
)
from fleetops.infrastructure.models import (
    ComplianceDocumentModel,
    FuelRecordModel,
    MaintenanceRecordModel,
    TruckModel,
)
from fleetops.utils import ensure_app_naive_datetime, ensure_app_timezone


class FleetRepository:
    """Query trucks and their compliance, maintenance and fuel records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_monitored_trucks(self) -> Sequence[Truck]:
        query = (
            self.session.query(TruckModel)
            .filter(TruckModel.status != TRUCK_STATUS_INACTIVE)
            .order_by(TruckModel.id)
        )
        return [self._truck_to_entity(model) for model in query.all()]

    def list_compliance_due(self, *, until: datetime) -> Sequence[ComplianceDocument]:
        """Return non-renewed documents whose expiry date is on or before ``until``."""

        query = (
            self.session.query(ComplianceDocumentModel)
            .filter(ComplianceDocumentModel.status != DOCUMENT_STATUS_RENEWED)
            .filter(ComplianceDocumentModel.expiry_date <= ensure_app_naive_datetime(until))
            .order_by(ComplianceDocumentModel.expiry_date, ComplianceDocumentModel.id)
        )
        return [
            ComplianceDocument(
                id=model.id,
                truck_id=model.truck_id,
                document_type=model.document_type,
                expiry_date=ensure_app_timezone(model.expiry_date),
                status=model.status,
            )
            for model in query.all()
        ]

    def latest_maintenance_by_truck(self) -> dict[int, MaintenanceRecord]:
        """Return the most recent service record of every truck that has one."""

        latest_dates = (
            self.session.query(
                MaintenanceRecordModel.truck_id,
                func.max(MaintenanceRecordModel.service_date).label("service_date"),
            )
            .group_by(MaintenanceRecordModel.truck_id)
            .subquery()
        )
        query = (
            self.session.query(MaintenanceRecordModel)
            .join(
                latest_dates,
                (MaintenanceRecordModel.truck_id == latest_dates.c.truck_id)
                & (MaintenanceRecordModel.service_date == latest_dates.c.service_date),
            )
            .order_by(MaintenanceRecordModel.id)
        )
        records: dict[int, MaintenanceRecord] = {}
        for model in query.all():
            # Same-day duplicates: the last inserted record wins.
            records[model.truck_id] = MaintenanceRecord(
                id=model.id,
                truck_id=model.truck_id,
                service_date=ensure_app_timezone(model.service_date),
                service_type=model.service_type,
                mileage_at_service=model.mileage_at_service,
                next_service_due=ensure_app_timezone(model.next_service_due),
            )
        return records

    def list_fuel_since(self, since: datetime) -> Sequence[FuelRecord]:
        query = (
            self.session.query(FuelRecordModel)
            .filter(FuelRecordModel.date >= ensure_app_naive_datetime(since))
            .order_by(FuelRecordModel.date.desc(), FuelRecordModel.id.desc())
        )
        return [
            FuelRecord(
                id=model.id,
                truck_id=model.truck_id,
                date=ensure_app_timezone(model.date),
                liters=model.liters,
                efficiency_kmpl=model.efficiency_kmpl,
                route=model.route,
            )
            for model in query.all()
        ]

    @staticmethod
    def _truck_to_entity(model: TruckModel) -> Truck:
        return Truck(
            id=model.id,
            registration=model.registration,
            make=model.make,
            model=model.model,
            year=model.year,
            current_mileage=model.current_mileage or 0,
            status=model.status,
        )


__all__ = ["FleetRepository"]
