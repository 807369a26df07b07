"""Utility script to create (or reset) the initial administrator."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from fleetops.application.use_cases.users.create_user import create_or_reset_user
from fleetops.config import get_settings
from fleetops.domain.entities import ROLE_ADMIN, ROLES
from fleetops.infrastructure.database import Database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create the initial user of the FleetOps notification service.",
    )
    parser.add_argument(
        "--name",
        default="Fleet Administrator",
        help="Full name of the user (default: Fleet Administrator)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address used to sign in (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password of the user. Prompted interactively when omitted.",
    )
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=ROLES,
        help="Role granted to the user (default: admin)",
    )
    parser.add_argument("--phone", default=None, help="Phone number for SMS alerts (optional)")
    return parser.parse_args()


def main() -> None:
    """Create the user, or reset its password when the email already exists."""

    args = parse_args()

    password = args.password or getpass("Password for the new user: ")
    if not password:
        raise SystemExit("No password was provided.")

    database = Database(get_settings().database_url)
    database.initialize()

    session = database.session()
    try:
        user, created = create_or_reset_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=args.role,
            phone=args.phone,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the user in the database: {exc}") from exc
    else:
        print(
            f"User {'created' if created else 'updated'}:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}"
        )
    finally:
        session.close()
        database.dispose()


if __name__ == "__main__":
    main()
