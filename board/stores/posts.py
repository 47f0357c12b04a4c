"""Post store: post records plus a newest-first index.

Layout:
- ``post:{id}``: hash with all post fields
- ``posts``: list of post ids, newest first (LPUSH on create)

The record write and the index write are separate calls. A failure between
them leaves an unindexed record; readers skip index entries whose record is
missing, so stale ids never surface.
"""

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from board.errors import PostValidationError
from board.schemas import DEFAULT_AUTHOR, Post
from board.stores.backend import KeyValueBackend

KEY_PREFIX = "post:"
LIST_KEY = "posts"

MAX_PAGE_SIZE = 100
# Redis list indexes are signed 64-bit integers
MAX_LIST_INDEX = 2**63 - 1
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Fields a caller may change after creation
EDITABLE_FIELDS = ("title", "content", "author")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_post_id() -> str:
    """Generate an opaque, unique post id (e.g. ``post_3f2b...``)."""
    return f"post_{uuid4().hex}"


def post_key(post_id: str) -> str:
    return f"{KEY_PREFIX}{post_id}"


class PostStore:
    """CRUD over a KeyValueBackend.

    Args:
        backend: Hash/list backend (Redis or in-memory).
        now: Clock used for created_at/updated_at stamps.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._backend = backend
        self._now = now

    def _timestamp(self) -> str:
        return self._now().strftime(TIMESTAMP_FORMAT)

    async def create(self, fields: Mapping[str, Any]) -> str:
        """Create a post and prepend it to the index.

        Args:
            fields: Validated ``title``, ``content`` and optional ``author``.

        Returns:
            The new post id.
        """
        post_id = generate_post_id()
        stamp = self._timestamp()
        post = Post(
            id=post_id,
            title=fields["title"],
            content=fields["content"],
            author=fields.get("author") or DEFAULT_AUTHOR,
            created_at=stamp,
            updated_at=stamp,
        )

        await self._backend.set_fields(post_key(post_id), post.to_record())
        await self._backend.push_front(LIST_KEY, post_id)

        return post_id

    async def find_by_id(self, post_id: str) -> Post | None:
        """Return the post, or None if no record exists."""
        record = await self._backend.get_fields(post_key(post_id))
        if not record:
            return None
        return Post.model_validate(record)

    async def find_all(self, page: int = 1, limit: int = 10) -> list[Post]:
        """Return one page of posts, newest first.

        Ids in the index without a record are skipped, so a page may hold
        fewer than ``limit`` posts.

        Raises:
            PostValidationError: If page < 1, limit is outside 1..100, or the
                page lies beyond the largest list index Redis accepts.
        """
        if page < 1:
            raise PostValidationError("Page must be greater than 0")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise PostValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

        offset = (page - 1) * limit
        if offset + limit - 1 > MAX_LIST_INDEX:
            raise PostValidationError("Page is out of range")
        post_ids = await self._backend.list_range(LIST_KEY, offset, offset + limit - 1)

        posts: list[Post] = []
        for post_id in post_ids:
            post = await self.find_by_id(post_id)
            if post is not None:
                posts.append(post)
        return posts

    async def update(self, post_id: str, fields: Mapping[str, Any]) -> bool:
        """Merge non-empty fields over an existing post.

        ``None`` and empty-string values are ignored. ``id`` and
        ``created_at`` are never overwritten.

        Returns:
            False if the post does not exist, True once written.
        """
        post = await self.find_by_id(post_id)
        if post is None:
            return False

        changes = {
            name: str(value)
            for name, value in fields.items()
            if name in EDITABLE_FIELDS and value is not None and value != ""
        }
        updated = post.model_copy(update={**changes, "updated_at": self._timestamp()})

        await self._backend.set_fields(post_key(post_id), updated.to_record())
        return True

    async def delete(self, post_id: str) -> bool:
        """Delete a post and every index entry pointing at it.

        Returns:
            False if the post does not exist.
        """
        key = post_key(post_id)
        if not await self._backend.exists(key):
            return False

        await self._backend.delete(key)
        await self._backend.remove_all(LIST_KEY, post_id)
        return True

    async def get_total(self) -> int:
        """Number of entries in the index (may include stale ids)."""
        return await self._backend.list_length(LIST_KEY)
