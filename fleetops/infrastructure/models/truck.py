"""SQLAlchemy models for trucks and the records attached to them."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fleetops.infrastructure.database import Base


class TruckModel(Base):
    """Database representation of a fleet vehicle."""

    __tablename__ = "truck"

    id = Column(Integer, primary_key=True, index=True)
    registration = Column(String(20), nullable=False, unique=True, index=True)
    make = Column(String(60), nullable=False)
    model = Column(String(60), nullable=False)
    year = Column(Integer, nullable=True)
    current_mileage = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="active")

    compliance_documents = relationship(
        "ComplianceDocumentModel",
        back_populates="truck",
        cascade="all, delete-orphan",
    )
    maintenance_records = relationship(
        "MaintenanceRecordModel",
        back_populates="truck",
        cascade="all, delete-orphan",
    )
    fuel_records = relationship(
        "FuelRecordModel",
        back_populates="truck",
        cascade="all, delete-orphan",
    )


class ComplianceDocumentModel(Base):
    __tablename__ = "compliance_document"

    id = Column(Integer, primary_key=True, index=True)
    truck_id = Column(Integer, ForeignKey("truck.id", ondelete="CASCADE"), nullable=False, index=True)
    document_type = Column(String(60), nullable=False)
    expiry_date = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="valid")

    truck = relationship("TruckModel", back_populates="compliance_documents")


class MaintenanceRecordModel(Base):
    __tablename__ = "maintenance_record"

    id = Column(Integer, primary_key=True, index=True)
    truck_id = Column(Integer, ForeignKey("truck.id", ondelete="CASCADE"), nullable=False, index=True)
    service_date = Column(DateTime, nullable=False, index=True)
    service_type = Column(String(60), nullable=False)
    mileage_at_service = Column(Integer, nullable=True)
    next_service_due = Column(DateTime, nullable=True)

    truck = relationship("TruckModel", back_populates="maintenance_records")


class FuelRecordModel(Base):
    __tablename__ = "fuel_record"

    id = Column(Integer, primary_key=True, index=True)
    truck_id = Column(Integer, ForeignKey("truck.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)
    liters = Column(Float, nullable=False)
    efficiency_kmpl = Column(Float, nullable=False)
    route = Column(String(120), nullable=True)

    truck = relationship("TruckModel", back_populates="fuel_records")


__all__ = [
    "ComplianceDocumentModel",
    "FuelRecordModel",
    "MaintenanceRecordModel",
    "TruckModel",
]
