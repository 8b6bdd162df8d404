"""Fic.AI Signals API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FicAiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, fic lookup client and password hasher built on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event
    - Password hasher built during startup so a bad pepper stops the process
      before it serves traffic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ficai_signals.api.error_handlers import register_error_handlers
from ficai_signals.api.routes import accounts, fics, health, sessions, signals, tags
from ficai_signals.config import get_settings
from ficai_signals.infrastructure import database, fichub_client
from ficai_signals.infrastructure.observability import setup_logging
from ficai_signals.infrastructure.password_hashing import get_password_hasher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    get_password_hasher()
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    fichub_client.init_fichub(
        settings.fichub_base_url, settings.fichub_timeout_seconds,
    )
    logger.info("Fic.AI Signals API started")
    yield
    logger.info("Fic.AI Signals API shutting down")
    await fichub_client.close_fichub()
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="Fic.AI Signals", version="0.2.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(sessions.router)
app.include_router(signals.router)
app.include_router(tags.router)
app.include_router(fics.router)

register_error_handlers(app)
