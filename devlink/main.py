"""devlink API — application object, router registration and process lifecycle.

Invariants:
    - Routers registered explicitly, health first
    - Logging and the database engine are set up in lifespan, before the first request,
      and the engine is disposed on shutdown
    - Every error leaves through api/error_handlers.py (one JSON envelope)

Run with: uvicorn devlink.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import devlink.infrastructure.database as database
from devlink import __version__
from devlink.api.error_handlers import register_error_handlers
from devlink.api.routes import auth, health, posts, profile, users
from devlink.config import get_settings
from devlink.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("devlink API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("devlink API shutting down")


app = FastAPI(
    title="devlink API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes, health first
app.include_router(health.router)
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(posts.router)

register_error_handlers(app)
