"""Post Interaction Engine — posts, likes and comments.

Invariants:
    - Author/commenter name and avatar are snapshotted at write time
    - At most one like per (post, user); double like / double unlike -> ConflictError
    - Only the author may delete a post; only a comment's author may delete that comment
    - Comments are removed by comment id, never by "first comment of the caller"
    - Malformed post ids behave like unknown ids (ResourceNotFoundError)

Design Decisions:
    - Like/comment list transforms live in core/sub_records.py (pure); this class loads,
      applies, commits
    - Writes are version-checked by the ORM (Post.version): two concurrent likes on
      the same post cannot silently overwrite each other
"""

import logging
import uuid
from datetime import datetime, timezone
from uuid import UUID

from devlink.core.errors import ResourceNotFoundError
from devlink.core.repository_protocols import DocumentStore, PostLike, UserLike
from devlink.core.sub_records import (
    add_like, ensure_owner, prepend, remove_comment, remove_like,
)
from devlink.schemas.post import PostResponse

logger = logging.getLogger(__name__)

POST_NOT_FOUND_MESSAGE = "Post not found"


class PostInteractionEngine:
    """Post state transitions over a DocumentStore."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def _load_post(self, post_id: str | UUID) -> PostLike:
        try:
            pid = post_id if isinstance(post_id, UUID) else UUID(post_id)
        except ValueError:
            pid = None
        post = await self.store.posts.get(pid) if pid else None
        if post is None:
            raise ResourceNotFoundError(
                "Post", str(post_id), message=POST_NOT_FOUND_MESSAGE,
            )
        return post

    async def _load_user(self, user_id: UUID) -> UserLike:
        user = await self.store.users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id), message="User not found")
        return user

    async def create(self, author_id: UUID, text: str) -> PostResponse:
        author = await self._load_user(author_id)
        post = await self.store.posts.add(
            user_id=author.id, text=text.strip(),
            name=author.name, avatar=author.avatar,
        )
        await self.store.commit()
        logger.info(
            "Post created", extra={"user_id": author_id, "post_id": post.id},
        )
        return PostResponse.from_document(post)

    async def list_posts(self) -> list[PostResponse]:
        return [
            PostResponse.from_document(p)
            for p in await self.store.posts.list_recent()
        ]

    async def get_post(self, post_id: str | UUID) -> PostResponse:
        return PostResponse.from_document(await self._load_post(post_id))

    async def delete(self, post_id: str | UUID, caller_id: UUID) -> None:
        post = await self._load_post(post_id)
        ensure_owner(post.user_id, caller_id)
        await self.store.posts.delete(post)
        await self.store.commit()
        logger.info(
            "Post deleted", extra={"user_id": caller_id, "post_id": post.id},
        )

    async def like(self, post_id: str | UUID, caller_id: UUID) -> list[dict]:
        post = await self._load_post(post_id)
        post.likes = add_like(post.likes, caller_id)
        await self.store.commit()
        logger.info("Post liked", extra={"user_id": caller_id, "post_id": post.id})
        return list(post.likes)

    async def unlike(self, post_id: str | UUID, caller_id: UUID) -> list[dict]:
        post = await self._load_post(post_id)
        post.likes = remove_like(post.likes, caller_id)
        await self.store.commit()
        logger.info("Post unliked", extra={"user_id": caller_id, "post_id": post.id})
        return list(post.likes)

    async def add_comment(
        self, post_id: str | UUID, caller_id: UUID, text: str,
    ) -> list[dict]:
        commenter = await self._load_user(caller_id)
        post = await self._load_post(post_id)
        comment = {
            "id": str(uuid.uuid4()),
            "user": str(commenter.id),
            "text": text.strip(),
            "name": commenter.name,
            "avatar": commenter.avatar,
            "date": datetime.now(timezone.utc).isoformat(),
        }
        post.comments = prepend(post.comments, comment)
        await self.store.commit()
        logger.info(
            f"Comment {comment['id']} added",
            extra={"user_id": caller_id, "post_id": post.id},
        )
        return list(post.comments)

    async def remove_comment(
        self, post_id: str | UUID, caller_id: UUID, comment_id: str,
    ) -> list[dict]:
        post = await self._load_post(post_id)
        post.comments = remove_comment(post.comments, comment_id, caller_id)
        await self.store.commit()
        logger.info(
            f"Comment {comment_id} removed",
            extra={"user_id": caller_id, "post_id": post.id},
        )
        return list(post.comments)
