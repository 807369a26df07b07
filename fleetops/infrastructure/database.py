"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
import logging

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Own the engine and session factory for one process.

    The entry point (``create_app`` or a script) constructs the instance and
    hands it to whoever needs sessions; nothing in the package keeps a global
    engine.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        connect_args: dict[str, object] = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.url = url
        self.engine: Engine = create_engine(
            url, pool_pre_ping=True, echo=echo, connect_args=connect_args
        )
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    def initialize(self) -> None:
        """Ensure all ORM models have corresponding database tables."""

        from fleetops.infrastructure import models  # noqa: F401  # ensure models are imported

        Base.metadata.create_all(bind=self.engine, checkfirst=True)
        logger.debug("Database schema ensured for %s", self.engine.url.render_as_string())

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session bound to the application's database and close it afterwards."""

    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Base", "Database", "get_db"]
