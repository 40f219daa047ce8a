"""Ordered Sub-Records — tests for insert-at-front / remove-by-id and like/comment rules.

Tests cover:
    - prepend puts the newest entry first without mutating input
    - remove_by_id removes exactly one entry, unknown id is a no-op
    - add_like / remove_like idempotency and round trip
    - remove_comment removes by comment id and checks authorship
"""

from uuid import uuid4

import pytest

from devlink.core.errors import ConflictError, ForbiddenError, ResourceNotFoundError
from devlink.core.sub_records import (
    add_like,
    ensure_owner,
    find_by_id,
    has_liked,
    prepend,
    remove_by_id,
    remove_comment,
    remove_like,
)


# ─── prepend / remove_by_id ──────────────────────────────────────

def test_prepend_puts_new_entry_first():
    entries = [{"id": "a"}]
    result = prepend(entries, {"id": "b"})
    assert [e["id"] for e in result] == ["b", "a"]
    assert entries == [{"id": "a"}]


def test_remove_by_id_removes_only_that_entry():
    entries = [{"id": "a"}, {"id": "b"}, {"id": "c"}]
    assert [e["id"] for e in remove_by_id(entries, "b")] == ["a", "c"]


def test_remove_by_unknown_id_is_noop():
    entries = [{"id": "a"}]
    assert remove_by_id(entries, "zzz") == entries


def test_prepend_then_remove_restores_sequence():
    entries = [{"id": "a"}, {"id": "b"}]
    assert remove_by_id(prepend(entries, {"id": "n"}), "n") == entries


def test_find_by_id():
    assert find_by_id([{"id": "a"}], "a") == {"id": "a"}
    assert find_by_id([{"id": "a"}], "b") is None


# ─── likes ───────────────────────────────────────────────────────

def test_add_like_prepends_user():
    user = uuid4()
    likes = add_like([{"user": "other"}], user)
    assert likes[0] == {"user": str(user)}
    assert has_liked(likes, user)


def test_double_like_conflicts():
    user = uuid4()
    likes = add_like([], user)
    with pytest.raises(ConflictError) as exc:
        add_like(likes, user)
    assert exc.value.message == "Post already liked"
    assert exc.value.http_status == 400


def test_unlike_without_like_conflicts():
    with pytest.raises(ConflictError) as exc:
        remove_like([{"user": "other"}], uuid4())
    assert exc.value.message == "Post has not yet been liked"


def test_like_then_unlike_round_trips():
    user = uuid4()
    before = [{"user": "x"}, {"user": "y"}]
    assert remove_like(add_like(before, user), user) == before


def test_unlike_removes_only_callers_like():
    user = uuid4()
    likes = [{"user": "x"}, {"user": str(user)}, {"user": "y"}]
    assert remove_like(likes, user) == [{"user": "x"}, {"user": "y"}]


# ─── comments ────────────────────────────────────────────────────

def test_remove_comment_by_id_not_by_author():
    user = str(uuid4())
    comments = [
        {"id": "c2", "user": user, "text": "newer"},
        {"id": "c1", "user": user, "text": "older"},
    ]
    result = remove_comment(comments, "c1", user)
    assert [c["id"] for c in result] == ["c2"]


def test_remove_missing_comment_is_not_found():
    with pytest.raises(ResourceNotFoundError):
        remove_comment([{"id": "c1", "user": "u"}], "nope", "u")


def test_remove_other_users_comment_is_forbidden():
    with pytest.raises(ForbiddenError):
        remove_comment([{"id": "c1", "user": "author"}], "c1", "intruder")


# ─── ownership ───────────────────────────────────────────────────

def test_ensure_owner_accepts_uuid_and_str():
    owner = uuid4()
    ensure_owner(owner, str(owner))


def test_ensure_owner_rejects_other_user():
    with pytest.raises(ForbiddenError):
        ensure_owner(uuid4(), uuid4())
