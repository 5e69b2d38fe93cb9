"""Workout Tracker API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery); session routes before
      workout routes so "/workout/session" never matches "/workout/{workout_id}"
    - Global error handlers map AppError / validation / unknown errors to JSON
    - CORS configured from settings (default fully open)
    - Database initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.api.error_handlers import register_error_handlers
from app.api.routes import (
    auth, health, muscle_groups, workout_sessions, workouts,
)
from app.config import get_settings
from app.infrastructure import database
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Workout Tracker API started")
    yield
    await manager.dispose()
    logger.info("Workout Tracker API shutting down")


app = FastAPI(
    title="Workout Tracker API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(muscle_groups.router)
app.include_router(workout_sessions.router)
app.include_router(workouts.router)

register_error_handlers(app)
