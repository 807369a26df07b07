"""Notification use cases: automated checks, inbox operations and delivery."""

from .automated_checks import EvaluationReport, run_automated_checks, scan_fleet
from .conditions import (
    Condition,
    compliance_priority,
    evaluate_compliance,
    evaluate_fuel,
    evaluate_maintenance,
)
from .delivery import deliver_notification
from .inbox import (
    create_manual_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .preferences import get_preferences, update_preferences

__all__ = [
    "Condition",
    "EvaluationReport",
    "compliance_priority",
    "create_manual_notification",
    "deliver_notification",
    "evaluate_compliance",
    "evaluate_fuel",
    "evaluate_maintenance",
    "get_preferences",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "run_automated_checks",
    "scan_fleet",
    "update_preferences",
]
