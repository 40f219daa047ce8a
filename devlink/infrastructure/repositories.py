"""SQL Document Repositories — SQLAlchemy implementations of core/repository_protocols.py.

Invariants:
    - Every awaited storage call is bounded by timeout_seconds (StorageTimeoutError on expiry)
    - Repositories stage changes on the shared AsyncSession; SqlDocumentStore.commit() persists
    - commit() translates StaleDataError -> ConcurrencyError, IntegrityError -> ConflictError,
      other SQLAlchemy failures -> DatabaseError; the session is rolled back first
    - Raw SQLAlchemy exceptions never leave this module from commit()

Design Decisions:
    - One store per request (wraps the request's AsyncSession): no shared mutable state
    - asyncio.wait_for over driver-level timeouts: works the same for asyncpg and aiosqlite
"""

import asyncio
import logging
from typing import Awaitable, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from devlink.core.errors import (
    ConcurrencyError, ConflictError, DatabaseError, StorageTimeoutError,
)
from devlink.models.post import Post
from devlink.models.profile import Profile
from devlink.models.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 5.0


class _BoundedRepository:
    """Shared timeout wrapper for repository calls."""

    def __init__(self, db: AsyncSession, timeout_seconds: float):
        self.db = db
        self.timeout_seconds = timeout_seconds

    async def _bounded(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.error(
                f"Storage call timed out: {operation}",
                extra={"operation": operation},
            )
            raise StorageTimeoutError(operation, self.timeout_seconds)


class SqlUserRepository(_BoundedRepository):

    async def get(self, user_id: UUID) -> User | None:
        return await self._bounded("users.get", self.db.get(User, user_id))

    async def get_many(self, user_ids: list[UUID]) -> dict[UUID, User]:
        if not user_ids:
            return {}
        result = await self._bounded(
            "users.get_many",
            self.db.execute(select(User).where(User.id.in_(set(user_ids)))),
        )
        return {u.id: u for u in result.scalars().all()}

    async def get_by_email(self, email: str) -> User | None:
        result = await self._bounded(
            "users.get_by_email",
            self.db.execute(select(User).where(User.email == email.lower())),
        )
        return result.scalar_one_or_none()

    async def add(
        self, name: str, email: str, password_hash: str, avatar: str,
    ) -> User:
        user = User(
            name=name, email=email.lower(),
            password_hash=password_hash, avatar=avatar,
        )
        self.db.add(user)
        return user

    async def delete(self, user_id: UUID) -> None:
        await self._bounded(
            "users.delete",
            self.db.execute(delete(User).where(User.id == user_id)),
        )


class SqlProfileRepository(_BoundedRepository):

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        result = await self._bounded(
            "profiles.get_by_user",
            self.db.execute(select(Profile).where(Profile.user_id == user_id)),
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Profile]:
        result = await self._bounded(
            "profiles.list_all",
            self.db.execute(select(Profile).order_by(Profile.date.desc())),
        )
        return list(result.scalars().all())

    async def add(self, user_id: UUID, fields: dict) -> Profile:
        profile = Profile(user_id=user_id, **fields)
        self.db.add(profile)
        return profile

    async def delete_by_user(self, user_id: UUID) -> None:
        await self._bounded(
            "profiles.delete_by_user",
            self.db.execute(delete(Profile).where(Profile.user_id == user_id)),
        )


class SqlPostRepository(_BoundedRepository):

    async def get(self, post_id: UUID) -> Post | None:
        return await self._bounded("posts.get", self.db.get(Post, post_id))

    async def list_recent(self) -> list[Post]:
        result = await self._bounded(
            "posts.list_recent",
            self.db.execute(select(Post).order_by(Post.date.desc())),
        )
        return list(result.scalars().all())

    async def add(
        self, user_id: UUID, text: str, name: str, avatar: str,
    ) -> Post:
        post = Post(user_id=user_id, text=text, name=name, avatar=avatar)
        self.db.add(post)
        return post

    async def delete(self, post: Post) -> None:
        await self._bounded("posts.delete", self.db.delete(post))


class SqlDocumentStore(_BoundedRepository):
    """Unit of work: three repositories over one request-scoped session."""

    def __init__(
        self, db: AsyncSession, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        super().__init__(db, timeout_seconds)
        self.users = SqlUserRepository(db, timeout_seconds)
        self.profiles = SqlProfileRepository(db, timeout_seconds)
        self.posts = SqlPostRepository(db, timeout_seconds)

    async def commit(self) -> None:
        try:
            await self._bounded("commit", self.db.commit())
        except StorageTimeoutError:
            await self.db.rollback()
            raise
        except StaleDataError as e:
            await self.db.rollback()
            logger.warning(f"Version conflict on commit: {e}")
            raise ConcurrencyError(
                "Document was modified concurrently, retry the request",
            )
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Integrity conflict on commit: {e}")
            raise ConflictError("Document already exists", code="DUPLICATE_DOCUMENT")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Commit failed: {e}")
            raise DatabaseError("Database operation failed", "commit")
