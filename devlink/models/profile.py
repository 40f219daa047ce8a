"""Profile ORM — one document per user with embedded ordered sub-records.

Invariants:
    - user_id is unique: at most one Profile per user
    - experience/education are JSON arrays, newest entry first, each entry has an "id"
    - social is a JSON object of optional platform -> URL links
    - version increments on every UPDATE; stale writers get StaleDataError

Design Decisions:
    - Embedded JSON arrays over child tables: sub-records have no identity outside
      their profile and are only ever read with it
    - version_id_col: compare-and-swap on every write instead of unguarded load-mutate-save
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from devlink.db.base import Base


class Profile(Base):
    """Developer profile owned by exactly one user."""
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True, index=True,
    )
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[str] = mapped_column(String(200), nullable=False)
    githubusername: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    social: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    experience: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    education: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
