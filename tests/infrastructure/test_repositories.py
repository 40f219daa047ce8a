"""SQL Document Store — commit error translation and bounded storage calls.

Invariants:
    - Stale version on commit -> ConcurrencyError, session usable afterwards
    - Duplicate unique key on commit -> ConflictError
    - A storage call slower than timeout_seconds -> StorageTimeoutError
"""

import asyncio

import pytest
from sqlalchemy import update

from devlink.core.errors import ConcurrencyError, ConflictError, StorageTimeoutError
from devlink.infrastructure.repositories import SqlDocumentStore
from devlink.models.post import Post


async def _user(store, email="a@x.com"):
    user = await store.users.add("Alice", email, "hash", "avatar")
    await store.commit()
    return user


async def test_add_and_find_user_by_email_case_insensitive(test_db):
    store = SqlDocumentStore(test_db)
    user = await _user(store, "Alice@X.com")
    found = await store.users.get_by_email("ALICE@x.com")
    assert found.id == user.id


async def test_get_many_returns_mapping_by_id(test_db):
    store = SqlDocumentStore(test_db)
    a = await _user(store, "a@x.com")
    b = await _user(store, "b@x.com")
    users = await store.users.get_many([a.id, b.id])
    assert set(users) == {a.id, b.id}
    assert await store.users.get_many([]) == {}


async def test_duplicate_email_is_conflict(test_db):
    store = SqlDocumentStore(test_db)
    await _user(store, "a@x.com")
    await store.users.add("Other", "a@x.com", "hash", "avatar")
    with pytest.raises(ConflictError):
        await store.commit()


async def test_stale_version_is_concurrency_error(test_db):
    store = SqlDocumentStore(test_db)
    user = await _user(store)
    post = await store.posts.add(user.id, "hello", "Alice", "avatar")
    await store.commit()

    # another writer bumps the version behind this session's back
    await test_db.execute(
        update(Post)
        .where(Post.id == post.id)
        .values(version=Post.version + 1)
        .execution_options(synchronize_session=False)
    )
    post.likes = [{"user": str(user.id)}]

    with pytest.raises(ConcurrencyError):
        await store.commit()

    reloaded = await store.posts.get(post.id)
    assert reloaded.likes == []


async def test_version_increments_on_update(test_db):
    store = SqlDocumentStore(test_db)
    user = await _user(store)
    post = await store.posts.add(user.id, "hello", "Alice", "avatar")
    await store.commit()
    first_version = post.version

    post.likes = [{"user": str(user.id)}]
    await store.commit()

    assert post.version == first_version + 1


async def test_list_recent_is_newest_first(test_db):
    store = SqlDocumentStore(test_db)
    user = await _user(store)
    await store.posts.add(user.id, "first", "Alice", "avatar")
    await store.commit()
    await asyncio.sleep(0.01)
    await store.posts.add(user.id, "second", "Alice", "avatar")
    await store.commit()

    posts = await store.posts.list_recent()
    assert [p.text for p in posts] == ["second", "first"]


async def test_slow_storage_call_times_out(test_db):
    store = SqlDocumentStore(test_db, timeout_seconds=0.01)
    with pytest.raises(StorageTimeoutError) as exc:
        await store.posts._bounded("posts.get", asyncio.sleep(1))
    assert exc.value.http_status == 504
