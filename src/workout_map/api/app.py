"""FastAPI application for the Workout Map app."""

import logging
import threading
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .exception_handlers import register_exception_handlers
from .routes import router
from ..config import Settings, get_settings
from ..session import WorkoutMapSession, create_session
from ..utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def create_app(
    settings: Optional[Settings] = None,
    session: Optional[WorkoutMapSession] = None,
) -> FastAPI:
    """
    Build the API around one workout session.

    Args:
        settings: Defaults to the cached environment settings
        session: Prebuilt session; one is created and started otherwise
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if session is None:
        session = create_session(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logger.info(f"Starting Workout Map API v{API_VERSION}")
        logger.info(f"Workouts DB: {settings.db_path}")
        yield
        logger.info("Shutting down Workout Map API")

    app = FastAPI(
        title="Workout Map API",
        description="Log running and cycling workouts on a map",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.session = session
    app.state.gesture_lock = threading.Lock()

    register_exception_handlers(app)
    app.include_router(router, prefix="/api/v1", tags=["workouts"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Workout Map API",
            "version": API_VERSION,
            "status": "healthy",
            "workouts": len(app.state.session.controller.store),
        }

    return app
