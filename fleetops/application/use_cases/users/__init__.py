"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_or_reset_user, create_user

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "create_or_reset_user",
    "create_user",
]
