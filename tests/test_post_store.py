"""Tests for PostStore over the in-memory backend."""

import pytest

from board.errors import PostValidationError
from board.stores.memory import InMemoryBackend
from board.stores.posts import LIST_KEY, PostStore, post_key


@pytest.mark.asyncio
async def test_create_writes_record_and_prepends_index(store: PostStore, backend: InMemoryBackend) -> None:
    """Test create writes the hash and pushes the id to the list head."""
    first = await store.create({"title": "First", "content": "one"})
    second = await store.create({"title": "Second", "content": "two"})

    assert first.startswith("post_")
    assert first != second
    assert await backend.list_range(LIST_KEY, 0, -1) == [second, first]

    record = await backend.get_fields(post_key(first))
    assert record["title"] == "First"
    assert record["author"] == "Anonymous"
    assert record["created_at"] == record["updated_at"]


@pytest.mark.asyncio
async def test_create_keeps_given_author(store: PostStore) -> None:
    """Test a supplied author is stored as-is."""
    post_id = await store.create({"title": "t", "content": "c", "author": "kim"})
    post = await store.find_by_id(post_id)
    assert post is not None
    assert post.author == "kim"


@pytest.mark.asyncio
async def test_find_by_id_missing_returns_none(store: PostStore) -> None:
    """Test a missing record reads as None."""
    assert await store.find_by_id("post_missing") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(("page", "limit"), [(0, 10), (-1, 10), (1, 0), (1, 101)])
async def test_find_all_rejects_bad_paging(store: PostStore, page: int, limit: int) -> None:
    """Test page < 1 and limit outside 1..100 are rejected."""
    with pytest.raises(PostValidationError):
        await store.find_all(page, limit)


@pytest.mark.asyncio
async def test_find_all_accepts_limit_bounds(store: PostStore) -> None:
    """Test limits of 1 and 100 are accepted."""
    await store.create({"title": "t", "content": "c"})
    assert len(await store.find_all(1, 1)) == 1
    assert len(await store.find_all(1, 100)) == 1


@pytest.mark.asyncio
async def test_find_all_pages_newest_first(store: PostStore) -> None:
    """Test pages slice the index from the newest post."""
    ids = [await store.create({"title": f"Post {i}", "content": "c"}) for i in range(5)]

    page_one = await store.find_all(1, 2)
    page_three = await store.find_all(3, 2)

    assert [p.id for p in page_one] == [ids[4], ids[3]]
    assert [p.id for p in page_three] == [ids[0]]
    assert await store.find_all(4, 2) == []


@pytest.mark.asyncio
async def test_find_all_skips_stale_index_entries(store: PostStore, backend: InMemoryBackend) -> None:
    """Test index ids without a record are skipped."""
    kept = await store.create({"title": "kept", "content": "c"})
    await backend.push_front(LIST_KEY, "post_ghost")

    posts = await store.find_all(1, 10)

    assert [p.id for p in posts] == [kept]
    # The stale id still counts towards the index length.
    assert await store.get_total() == 2


@pytest.mark.asyncio
async def test_update_merges_non_empty_fields(store: PostStore) -> None:
    """Test update merges only non-empty values and stamps updated_at."""
    post_id = await store.create({"title": "Old", "content": "body", "author": "lee"})
    before = await store.find_by_id(post_id)

    assert await store.update(post_id, {"title": "New", "content": "", "author": None})

    after = await store.find_by_id(post_id)
    assert after is not None and before is not None
    assert after.title == "New"
    assert after.content == "body"
    assert after.author == "lee"
    assert after.created_at == before.created_at
    assert after.updated_at > before.updated_at


@pytest.mark.asyncio
async def test_update_never_overwrites_id_or_created_at(store: PostStore) -> None:
    """Test id and created_at survive an update attempt."""
    post_id = await store.create({"title": "t", "content": "c"})
    before = await store.find_by_id(post_id)

    await store.update(post_id, {"id": "post_other", "created_at": "1999-01-01 00:00:00"})

    after = await store.find_by_id(post_id)
    assert after is not None and before is not None
    assert after.id == post_id
    assert after.created_at == before.created_at


@pytest.mark.asyncio
async def test_update_missing_returns_false(store: PostStore, backend: InMemoryBackend) -> None:
    """Test updating a missing post writes nothing."""
    assert await store.update("post_missing", {"title": "x"}) is False
    assert await backend.exists(post_key("post_missing")) is False


@pytest.mark.asyncio
async def test_delete_removes_record_and_all_index_entries(store: PostStore, backend: InMemoryBackend) -> None:
    """Test delete drops the hash and duplicate index entries."""
    post_id = await store.create({"title": "t", "content": "c"})
    other = await store.create({"title": "u", "content": "d"})
    # Duplicate index entry, e.g. from an interleaved writer.
    await backend.push_front(LIST_KEY, post_id)

    assert await store.delete(post_id) is True

    assert await store.find_by_id(post_id) is None
    assert await backend.list_range(LIST_KEY, 0, -1) == [other]
    assert await store.get_total() == 1


@pytest.mark.asyncio
async def test_delete_twice(store: PostStore) -> None:
    """Test the second delete returns False."""
    post_id = await store.create({"title": "t", "content": "c"})
    assert await store.delete(post_id) is True
    assert await store.delete(post_id) is False


@pytest.mark.asyncio
async def test_get_total_empty(store: PostStore) -> None:
    """Test an empty index has length zero."""
    assert await store.get_total() == 0


@pytest.mark.asyncio
async def test_find_all_rejects_page_past_redis_index_range(store: PostStore) -> None:
    """Test pages whose offset exceeds a signed 64-bit list index are rejected."""
    with pytest.raises(PostValidationError, match="Page is out of range"):
        await store.find_all(10**20, 10)
