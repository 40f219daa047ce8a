"""Post Schemas — response shape for post documents.

Invariants:
    - user is the author id (reference), name/avatar are the creation-time snapshot
    - likes and comments preserve stored order (newest first)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from devlink.core.repository_protocols import PostLike


class PostResponse(BaseModel):
    id: UUID
    user: UUID
    text: str
    name: str
    avatar: str
    likes: list[dict] = Field(default_factory=list)
    comments: list[dict] = Field(default_factory=list)
    date: datetime

    @classmethod
    def from_document(cls, post: PostLike) -> "PostResponse":
        return cls(
            id=post.id,
            user=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            likes=list(post.likes or []),
            comments=list(post.comments or []),
            date=post.date,
        )


class MessageResponse(BaseModel):
    msg: str
