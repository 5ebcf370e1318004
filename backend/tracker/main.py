"""Session Tracker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TrackerError → {"error": message} responses
    - CORS configured from settings (open by default)
    - Database pool created and schema ensured on startup, disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Startup fails fast if the schema cannot be created
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from tracker.api.error_handlers import register_error_handlers
from tracker.api.routes import health, locations, session_lifecycle
from tracker.config import get_settings
from tracker.infrastructure.database import close_db, init_db
from tracker.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        ssl=settings.database_ssl,
    )
    await manager.create_tables()
    logger.info("Session Tracker API started")
    yield
    logger.info("Session Tracker API shutting down")
    await close_db()


app = FastAPI(title="Session Tracker API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(session_lifecycle.router)
app.include_router(locations.router)

# Bundled web client. Mounted after API routes so /api/* takes precedence.
if os.path.isdir(settings.static_dir):
    app.mount(
        "/", StaticFiles(directory=settings.static_dir, html=True), name="static",
    )
