"""Database Session Manager — one async engine, request-scoped sessions, readiness ping.

Invariants:
    - A session that sees any exception is rolled back before it is closed
    - DevLinkError passes through untouched (already typed, e.g. by SqlDocumentStore.commit)
    - A raw SQLAlchemy error escaping a read becomes DatabaseError; a stale version
      becomes ConcurrencyError
    - Pool sizing applies to server databases only; SQLite (tests, local runs) uses
      SQLAlchemy's default pool

Design Decisions:
    - Module-level db_manager set by init_db() from the FastAPI lifespan; the health
      route and get_db read it through the module so tests can swap it
    - expire_on_commit=False: documents are serialized after commit without a reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.orm.exc import StaleDataError

from devlink.core.errors import ConcurrencyError, DatabaseError, DevLinkError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine and hands out sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except DevLinkError:
                await session.rollback()
                raise
            except StaleDataError as e:
                await session.rollback()
                logger.warning(f"Stale document version: {e}")
                raise ConcurrencyError(
                    "Document was modified concurrently, retry the request",
                )
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database failure: {e}", extra={"operation": "query"})
                raise DatabaseError("Database operation failed", "query")
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        """True when a trivial query round-trips."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Readiness ping failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
