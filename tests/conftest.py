"""Shared fixtures: an isolated SQLite database, seeded users and API clients."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient

from fleetops.config import Settings
from fleetops.domain.entities import ROLE_ADMIN, ROLE_MANAGER, ROLE_VIEWER, User
from fleetops.infrastructure.database import Database
from fleetops.infrastructure.models import (
    ComplianceDocumentModel,
    FuelRecordModel,
    MaintenanceRecordModel,
    TruckModel,
)
from fleetops.infrastructure.repositories import UserRepository
from fleetops.infrastructure.security import create_access_token, password_signature
from fleetops.main import create_app
from fleetops.utils import configure_app_timezone, ensure_app_naive_datetime

FAKE_PASSWORD_HASH = "pbkdf2-test-hash"


@pytest.fixture(autouse=True)
def _reset_timezone():
    configure_app_timezone(None)
    yield
    configure_app_timezone(None)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'fleetops.db'}",
        secret_key="test-secret",
    )


@pytest.fixture
def database(settings: Settings):
    db = Database(settings.database_url)
    db.initialize()
    yield db
    db.dispose()


@pytest.fixture
def session(database: Database):
    db_session = database.session()
    try:
        yield db_session
    finally:
        db_session.close()


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def app_session(client, app):
    """Session on the database owned by the running ``app``."""

    db_session = app.state.database.session()
    try:
        yield db_session
    finally:
        db_session.close()


def make_user(session, *, email: str, role: str = ROLE_MANAGER, is_active: bool = True, phone=None) -> User:
    return UserRepository(session).create(
        User(
            id=None,
            name=email.split("@")[0].title(),
            email=email,
            password=FAKE_PASSWORD_HASH,
            role=role,
            phone=phone,
            is_active=is_active,
        )
    )


def make_truck(session, registration: str = "KDD-001T", *, mileage: int = 75_000, status: str = "active") -> int:
    truck = TruckModel(
        registration=registration,
        make="Mercedes-Benz",
        model="Actros 1848",
        year=2020,
        current_mileage=mileage,
        status=status,
    )
    session.add(truck)
    session.commit()
    return truck.id


def add_document(session, truck_id: int, expiry_date: datetime, *, document_type="insurance", status="valid") -> int:
    document = ComplianceDocumentModel(
        truck_id=truck_id,
        document_type=document_type,
        expiry_date=ensure_app_naive_datetime(expiry_date),
        status=status,
    )
    session.add(document)
    session.commit()
    return document.id


def add_service(session, truck_id: int, service_date: datetime, *, mileage=None, next_due=None) -> int:
    record = MaintenanceRecordModel(
        truck_id=truck_id,
        service_date=ensure_app_naive_datetime(service_date),
        service_type="Full service",
        mileage_at_service=mileage,
        next_service_due=ensure_app_naive_datetime(next_due),
    )
    session.add(record)
    session.commit()
    return record.id


def add_fuel(session, truck_id: int, date: datetime, efficiency: float, *, route=None) -> int:
    record = FuelRecordModel(
        truck_id=truck_id,
        date=ensure_app_naive_datetime(date),
        liters=200.0,
        efficiency_kmpl=efficiency,
        route=route,
    )
    session.add(record)
    session.commit()
    return record.id


def token_for(user: User, settings: Settings) -> str:
    return create_access_token(
        {
            "sub": user.email,
            "role": user.role,
            "pwd_sig": password_signature(user.password, user.is_active),
        },
        settings,
    )


def auth_headers(user: User, settings: Settings) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(user, settings)}"}

