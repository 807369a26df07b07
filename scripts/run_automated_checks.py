"""Run the automated fleet notification checks once (cron entry point)."""

from __future__ import annotations

import argparse
import logging

from fleetops.application.use_cases.notifications import run_automated_checks
from fleetops.config import get_settings
from fleetops.domain.errors import EvaluationFailure
from fleetops.infrastructure.database import Database
from fleetops.utils import configure_app_timezone


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Evaluate the fleet and create, escalate or retire notifications.",
    )
    parser.add_argument(
        "--no-deliver",
        action="store_true",
        help="Store notifications without sending email, SMS or push messages.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = get_settings()
    configure_app_timezone(settings.app_timezone)
    database = Database(settings.database_url)
    database.initialize()

    session = database.session()
    try:
        report = run_automated_checks(session, settings=settings, deliver=not args.no_deliver)
    except EvaluationFailure as exc:
        print(f"Automated checks failed: {exc}")
        return 1
    finally:
        session.close()
        database.dispose()

    print(
        f"Created {report.created} notifications "
        f"({report.superseded} escalations), retired {report.retired}, "
        f"expired {report.expired}, {report.deliveries} deliveries."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
