"""Post ORM — text post with embedded likes and comments.

Invariants:
    - user_id references the author; name/avatar are a snapshot taken at creation
    - likes: JSON array of {"user"}, newest first, at most one per user
    - comments: JSON array of {"id", "user", "text", "name", "avatar", "date"}, newest first
    - version increments on every UPDATE; stale writers get StaleDataError

Design Decisions:
    - user_id carries no FOREIGN KEY: deleting a user leaves their posts in place
      (see DESIGN.md open questions), which a constraint would forbid
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from devlink.db.base import Base


class Post(Base):
    """Post document."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    avatar: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    likes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    comments: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
