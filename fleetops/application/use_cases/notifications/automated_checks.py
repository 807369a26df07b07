"""Automated fleet checks that create, escalate and retire notifications."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import partial
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fleetops.config import Settings
from fleetops.domain.entities import Notification, NotificationPreferences, User
from fleetops.domain.errors import EvaluationFailure
from fleetops.infrastructure.repositories import (
    FleetRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
    UserRepository,
)
from fleetops.utils import ensure_app_timezone, now_in_app_timezone

from .conditions import (
    Condition,
    evaluate_compliance,
    evaluate_fuel,
    evaluate_maintenance,
)
from .delivery import deliver_notification

logger = logging.getLogger(__name__)

Deliverer = Callable[[Notification, User, NotificationPreferences], Sequence[object]]


@dataclass
class EvaluationReport:
    """Counters describing what one automated run changed."""

    conditions: int = 0
    created: int = 0
    superseded: int = 0
    retired: int = 0
    expired: int = 0
    deliveries: int = 0


def scan_fleet(session: Session, *, settings: Settings, reference: datetime) -> list[Condition]:
    """Load the monitored fleet and return every qualifying condition."""

    fleet = FleetRepository(session)
    trucks = {truck.id: truck for truck in fleet.list_monitored_trucks()}
    if not trucks:
        return []

    horizon = reference + timedelta(days=settings.compliance_warning_days)
    fuel_since = reference - timedelta(days=settings.fuel_lookback_days)
    conditions: list[Condition] = []
    conditions.extend(
        evaluate_compliance(
            fleet.list_compliance_due(until=horizon),
            trucks,
            settings=settings,
            reference=reference,
        )
    )
    conditions.extend(
        evaluate_maintenance(
            fleet.latest_maintenance_by_truck(),
            trucks,
            settings=settings,
            reference=reference,
        )
    )
    conditions.extend(
        evaluate_fuel(fleet.list_fuel_since(fuel_since), trucks, settings=settings)
    )
    return conditions


def _is_active_key_conflict(exc: IntegrityError) -> bool:
    """Return ``True`` when ``exc`` was raised by the unique active slot.

    SQLite reports the column (``notification.active_key``) while server
    databases report the constraint name (``uq_notification_active_key``).
    """

    return "active_key" in str(exc.orig)


def _upsert(
    repository: NotificationRepository,
    condition: Condition,
    recipient: User,
    *,
    reference: datetime,
    expires_at: datetime,
    report: EvaluationReport,
) -> Notification | None:
    """Create or escalate the notification of ``condition`` for ``recipient``.

    Returns the newly stored notification, or ``None`` when an equally or
    more severe one is already active.
    """

    existing = repository.get_active(
        recipient_id=recipient.id,
        truck_id=condition.truck.id,
        notification_type=condition.type,
        reference=reference,
    )
    if existing is not None and existing.priority >= condition.priority:
        return None

    candidate = condition.to_notification(
        recipient.id, created_at=reference, expires_at=expires_at
    )
    try:
        if existing is None:
            saved = repository.create(candidate)
        else:
            saved = repository.replace_active(existing.id, candidate, reference=reference)
    except IntegrityError as exc:
        repository.session.rollback()
        if not _is_active_key_conflict(exc):
            raise
        # A concurrent run claimed the active slot first.
        logger.info(
            "Skipping %s notification for truck %s and user %s: already active",
            condition.type.value,
            condition.truck.registration,
            recipient.id,
        )
        return None

    if existing is None:
        report.created += 1
    else:
        report.superseded += 1
        report.created += 1
    return saved


def run_automated_checks(
    session: Session,
    *,
    settings: Settings,
    reference: datetime | None = None,
    deliver: bool = True,
    deliverer: Deliverer | None = None,
) -> EvaluationReport:
    """Scan the fleet and bring stored notifications in line with it.

    Running twice without a change in fleet state stores nothing new. Each
    insert commits on its own, so a failure midway keeps the notifications
    already written and raises :class:`EvaluationFailure`.
    """

    now = ensure_app_timezone(reference) or now_in_app_timezone()
    expires_at = now + timedelta(days=settings.notification_ttl_days)
    report = EvaluationReport()
    repository = NotificationRepository(session)

    if deliverer is None:
        deliverer = partial(deliver_notification, settings=settings)

    logger.info("Running automated notification checks at %s", now.isoformat())
    try:
        report.expired = repository.expire_elapsed(reference=now)
        conditions = scan_fleet(session, settings=settings, reference=now)
        report.conditions = len(conditions)

        recipients = UserRepository(session).list_alert_recipients()
        preferences = NotificationPreferenceRepository(session).get_map(
            recipient.id for recipient in recipients
        )
        created: list[tuple[Notification, User]] = []
        for recipient in recipients:
            for condition in conditions:
                saved = _upsert(
                    repository,
                    condition,
                    recipient,
                    reference=now,
                    expires_at=expires_at,
                    report=report,
                )
                if saved is not None:
                    created.append((saved, recipient))

        qualifying = {condition.key for condition in conditions}
        stale = [
            notification.id
            for notification in repository.list_active_fleet_notifications(reference=now)
            if (notification.truck_id, notification.type) not in qualifying
        ]
        report.retired = repository.retire(stale, reference=now)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Automated notification checks failed: %s", exc)
        raise EvaluationFailure("Automated notification checks failed") from exc

    if deliver:
        for notification, recipient in created:
            channels = deliverer(notification, recipient, preferences[recipient.id])
            report.deliveries += len(channels)

    logger.info(
        "Automated notification checks completed: %s conditions, %s created, "
        "%s superseded, %s retired, %s expired, %s deliveries",
        report.conditions,
        report.created,
        report.superseded,
        report.retired,
        report.expired,
        report.deliveries,
    )
    return report


__all__ = ["EvaluationReport", "run_automated_checks", "scan_fleet"]
