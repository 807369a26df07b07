from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fleetops.config import Settings, get_settings
from fleetops.infrastructure.database import Database
from fleetops.interfaces.api.routes import register_routes
from fleetops.utils import configure_app_timezone


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup and release the engine on shutdown."""

    database: Database = app.state.database
    database.initialize()
    yield
    database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application around its own database handle."""

    settings = settings or get_settings()
    configure_app_timezone(settings.app_timezone)

    app = FastAPI(title="FleetOps Notifications", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app
