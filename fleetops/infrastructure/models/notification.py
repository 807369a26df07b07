"""SQLAlchemy models for persisted notifications and delivery preferences."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from fleetops.infrastructure.database import Base
from fleetops.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications.

    ``active`` drops to false when the notification expires, retires or is
    superseded. Fleet notifications also hold ``active_key`` while active; its
    unique constraint keeps a single active notification per recipient, truck
    and type even when several check runs insert at the same time.
    """

    __tablename__ = "notification"
    __table_args__ = (UniqueConstraint("active_key", name="uq_notification_active_key"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), nullable=False, index=True)
    priority = Column(String(20), nullable=False)
    title = Column(String(160), nullable=False)
    message = Column(Text, nullable=False)
    truck_id = Column(Integer, ForeignKey("truck.id", ondelete="SET NULL"), nullable=True, index=True)
    truck_registration = Column(String(20), nullable=True)
    action_url = Column(String(255), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    expires_at = Column(DateTime(), nullable=True, index=True)
    retired_at = Column(DateTime(), nullable=True)
    superseded_at = Column(DateTime(), nullable=True)
    active = Column(Boolean, nullable=False, default=True, index=True)
    active_key = Column(String(80), nullable=True)

    user = relationship("UserModel")


class NotificationPreferenceModel(Base):
    __tablename__ = "notification_preference"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    email = Column(Boolean, nullable=False, default=True)
    sms = Column(Boolean, nullable=False, default=False)
    push = Column(Boolean, nullable=False, default=True)
    compliance = Column(Boolean, nullable=False, default=True)
    maintenance = Column(Boolean, nullable=False, default=True)
    fuel = Column(Boolean, nullable=False, default=False)
    system = Column(Boolean, nullable=False, default=True)


__all__ = ["NotificationModel", "NotificationPreferenceModel"]
