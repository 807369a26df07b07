"""Seed the database with the sample fleet used in demos and local testing."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from fleetops.config import get_settings
from fleetops.domain.entities import TRUCK_STATUS_ACTIVE, TRUCK_STATUS_MAINTENANCE
from fleetops.infrastructure.database import Database
from fleetops.infrastructure.models import TruckModel

SAMPLE_TRUCKS = [
    ("KDD-001T", "Mercedes-Benz", "Actros 1848", 2020, 75_000, TRUCK_STATUS_ACTIVE),
    ("KDD-002T", "Scania", "R450", 2021, 65_000, TRUCK_STATUS_ACTIVE),
    ("KDD-003T", "Volvo", "FH16", 2019, 85_000, TRUCK_STATUS_ACTIVE),
    ("KDD-004T", "MAN", "TGX 540", 2022, 45_000, TRUCK_STATUS_ACTIVE),
    ("KDD-005T", "Iveco", "Stralis 570", 2018, 95_000, TRUCK_STATUS_ACTIVE),
    ("KDD-006T", "DAF", "XF 480", 2021, 58_000, TRUCK_STATUS_MAINTENANCE),
    ("KDD-007T", "Renault", "T High 520", 2020, 72_000, TRUCK_STATUS_ACTIVE),
    ("KDD-008T", "Mercedes-Benz", "Arocs 2545", 2019, 89_000, TRUCK_STATUS_ACTIVE),
]


def main() -> None:
    """Insert the sample trucks, updating the ones already registered."""

    database = Database(get_settings().database_url)
    database.initialize()

    session = database.session()
    try:
        for registration, make, model, year, mileage, status in SAMPLE_TRUCKS:
            truck = (
                session.query(TruckModel)
                .filter(TruckModel.registration == registration)
                .one_or_none()
            )
            if truck is None:
                truck = TruckModel(registration=registration)
                session.add(truck)
            truck.make = make
            truck.model = model
            truck.year = year
            truck.current_mileage = mileage
            truck.status = status
            print(f"  {registration} - {make} {model} ({mileage:,} km, {status})")
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the sample trucks: {exc}") from exc
    finally:
        session.close()
        database.dispose()

    print(f"{len(SAMPLE_TRUCKS)} sample trucks ready.")


if __name__ == "__main__":
    main()
