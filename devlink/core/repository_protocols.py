"""Boundary Protocols — contracts between the mutation engines and persistence.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy directly
    - Repositories stage changes; DocumentStore.commit() makes them durable
    - Ownership is by reference: documents expose user_id, never a User object

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - *Like protocols give type information about ORM documents without coupling
      services to the ORM models
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID


class UserLike(Protocol):
    """Structural contract for User documents."""
    id: UUID
    name: str
    email: str
    password_hash: str
    avatar: str
    date: datetime


class ProfileLike(Protocol):
    """Structural contract for Profile documents."""
    id: UUID
    user_id: UUID
    company: str | None
    website: str | None
    location: str | None
    bio: str | None
    status: str
    githubusername: str | None
    skills: list
    social: dict
    experience: list
    education: list
    date: datetime


class PostLike(Protocol):
    """Structural contract for Post documents."""
    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str
    likes: list
    comments: list
    date: datetime


class UserRepository(Protocol):
    """Contract for user persistence, implemented in infrastructure/repositories.py."""
    async def get(self, user_id: UUID) -> UserLike | None: ...
    async def get_many(self, user_ids: list[UUID]) -> dict[UUID, UserLike]: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def add(
        self, name: str, email: str, password_hash: str, avatar: str,
    ) -> UserLike: ...
    async def delete(self, user_id: UUID) -> None: ...


class ProfileRepository(Protocol):
    """Contract for profile persistence, implemented in infrastructure/repositories.py."""
    async def get_by_user(self, user_id: UUID) -> ProfileLike | None: ...
    async def list_all(self) -> list[ProfileLike]: ...
    async def add(self, user_id: UUID, fields: dict) -> ProfileLike: ...
    async def delete_by_user(self, user_id: UUID) -> None: ...


class PostRepository(Protocol):
    """Contract for post persistence, implemented in infrastructure/repositories.py."""
    async def get(self, post_id: UUID) -> PostLike | None: ...
    async def list_recent(self) -> list[PostLike]: ...
    async def add(
        self, user_id: UUID, text: str, name: str, avatar: str,
    ) -> PostLike: ...
    async def delete(self, post: PostLike) -> None: ...


class DocumentStore(Protocol):
    """Unit of work over the three document collections."""
    users: UserRepository
    profiles: ProfileRepository
    posts: PostRepository

    async def commit(self) -> None: ...
