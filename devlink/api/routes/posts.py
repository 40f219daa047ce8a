"""Post Routes — create/list/fetch/delete posts, likes and comments.

Invariants:
    - Every route requires authentication (including reads)
    - Body-taking routes validate before the identity gate
    - Like/unlike return the likes list; comment routes return the comments list
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from devlink.api.deps import get_current_user_id, get_post_engine, validated_body
from devlink.core.request_rules import COMMENT_RULES, POST_RULES
from devlink.schemas.post import MessageResponse, PostResponse
from devlink.schemas.requests import TextRequest
from devlink.services.post_engine import PostInteractionEngine

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.post("", response_model=PostResponse)
async def create_post(
    body: TextRequest = Depends(validated_body(POST_RULES, TextRequest)),
    user_id: UUID = Depends(get_current_user_id),
    engine: PostInteractionEngine = Depends(get_post_engine),
):
    return await engine.create(user_id, body.text)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    user_id: UUID = Depends(get_current_user_id),
    engine: PostInteractionEngine = Depends(get_post_engine),
):
    """All posts, newest first."""
    return await engine.list_posts()


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    user_id: UUID = Depends(get_current_user_id),
    engine: PostInteractionEngine = Depends(get_post_engine),
):
    return await engine.get_post(post_id)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    user_id: UUID = Depends(get_current_user_id),
    engine: PostInteractionEngine = Depends(get_post_engine),
):
    await engine.delete(post_id, user_id)
    return MessageResponse(msg="Post removed")


@router.put("/like/{post_id}")
async def like_post(
    post_id: str,
    user_id: UUID = Depends(get_current_user_id),
    engine: PostInteractionEngine = Depends(get_post_engine),
) -> list[dict]:
    return await engine.like(post_id, user_id)


@router.put("/unlike/{post_id}")
async def unlike_post(
    post_id: str,
    user_id: UUID = Depends(get_current_user_id),
    engine: PostInteractionEngine = Depends(get_post_engine),
) -> list[dict]:
    return await engine.unlike(post_id, user_id)


@router.put("/comment/{post_id}")
async def add_comment(
    post_id: str,
    body: TextRequest = Depends(validated_body(COMMENT_RULES, TextRequest)),
    user_id: UUID = Depends(get_current_user_id),
    engine: PostInteractionEngine = Depends(get_post_engine),
) -> list[dict]:
    return await engine.add_comment(post_id, user_id, body.text)


@router.delete("/comment/{post_id}/{comment_id}")
async def remove_comment(
    post_id: str,
    comment_id: str,
    user_id: UUID = Depends(get_current_user_id),
    engine: PostInteractionEngine = Depends(get_post_engine),
) -> list[dict]:
    """Remove one comment by id. Only its author may remove it."""
    return await engine.remove_comment(post_id, user_id, comment_id)
