"""Aggregate application use cases."""

from .notifications import run_automated_checks
from .users import authenticate_user, create_user

__all__ = [
    "authenticate_user",
    "create_user",
    "run_automated_checks",
]
