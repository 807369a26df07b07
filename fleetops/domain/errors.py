"""Error taxonomy shared by the application and interface layers."""

from __future__ import annotations


class FleetOpsError(Exception):
    """Base class for errors raised by the notification service."""


class Unauthorized(FleetOpsError):
    """Raised when an operation requires an identity that was not presented."""


class PersistenceFailure(FleetOpsError):
    """Raised when the notification store cannot complete an I/O operation."""


class EvaluationFailure(FleetOpsError):
    """Raised when an automated check run fails while scanning or persisting."""


__all__ = [
    "EvaluationFailure",
    "FleetOpsError",
    "PersistenceFailure",
    "Unauthorized",
]
