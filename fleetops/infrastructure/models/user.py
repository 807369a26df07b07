"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from fleetops.infrastructure.database import Base
from fleetops.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a fleet user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(80), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    phone = Column(String(32), nullable=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="viewer", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UserModel"]
