"""Ordered Sub-Records — insert-at-front / remove-by-id over embedded lists.

Invariants:
    - All functions are PURE: inputs are never mutated, a new list is always returned
    - Newest entry is always at index 0
    - Removal is addressed by id only (never by position or by author)
    - At most one like per user id; likes compared by str(user id)
    - Comment removal checks the comment's own author before removing it

Design Decisions:
    - New list per mutation: SQLAlchemy JSON columns detect reassignment, not in-place edits
    - Raise domain errors (not error dicts): callers are HTTP services, the global
      handler turns them into responses
"""

from typing import Any, Sequence

from devlink.core.errors import ConflictError, ForbiddenError, ResourceNotFoundError


def prepend(entries: Sequence[dict], entry: dict) -> list[dict]:
    return [entry, *entries]


def find_by_id(entries: Sequence[dict], entry_id: str) -> dict | None:
    return next((e for e in entries if e.get("id") == entry_id), None)


def remove_by_id(entries: Sequence[dict], entry_id: str) -> list[dict]:
    """Drop the entry whose id matches. Unknown id is a no-op."""
    return [e for e in entries if e.get("id") != entry_id]


# ─── Likes ───────────────────────────────────────────────────────

def has_liked(likes: Sequence[dict], user_id: Any) -> bool:
    uid = str(user_id)
    return any(like.get("user") == uid for like in likes)


def add_like(likes: Sequence[dict], user_id: Any) -> list[dict]:
    if has_liked(likes, user_id):
        raise ConflictError("Post already liked", code="ALREADY_LIKED")
    return prepend(likes, {"user": str(user_id)})


def remove_like(likes: Sequence[dict], user_id: Any) -> list[dict]:
    """Remove the caller's single like."""
    if not has_liked(likes, user_id):
        raise ConflictError("Post has not yet been liked", code="NOT_LIKED")
    uid = str(user_id)
    index = next(i for i, like in enumerate(likes) if like.get("user") == uid)
    return [*likes[:index], *likes[index + 1:]]


# ─── Comments ────────────────────────────────────────────────────

def remove_comment(
    comments: Sequence[dict], comment_id: str, caller_id: Any,
) -> list[dict]:
    comment = find_by_id(comments, comment_id)
    if comment is None:
        raise ResourceNotFoundError(
            "Comment", comment_id, message="Comment does not exist",
        )
    if comment.get("user") != str(caller_id):
        raise ForbiddenError()
    return remove_by_id(comments, comment_id)


def ensure_owner(owner_id: Any, caller_id: Any) -> None:
    """Destructive operations require the caller to own the document."""
    if str(owner_id) != str(caller_id):
        raise ForbiddenError()
