"""Post service: validation and response shaping on top of PostStore.

Validation rules:
- title: required on create, trimmed, max 200 characters
- content: required on create, trimmed
- author: always optional, trimmed, max 50 characters

On update every field is optional, but a field that is present is still
checked for length. Empty values are dropped so they never overwrite stored
data.
"""

from collections.abc import Mapping
import logging
import math
from typing import Any

from board.errors import PostConsistencyError, PostValidationError
from board.schemas import Pagination, Post, PostPage
from board.stores.posts import PostStore

MAX_TITLE_LENGTH = 200
MAX_AUTHOR_LENGTH = 50

logger = logging.getLogger("uvicorn.error")


def _clean(value: Any) -> str:
    return str(value).strip()


def validate_post_data(data: Mapping[str, Any], required: bool = True) -> dict[str, str]:
    """Validate and normalize submitted post fields.

    A field counts as present when its key exists and its value is not None.

    Args:
        data: Raw submitted fields (form values, JSON body, ...).
        required: Whether title and content must be present and non-empty.

    Returns:
        Trimmed, non-empty fields among ``title``, ``content``, ``author``.

    Raises:
        PostValidationError: With a human-readable message.
    """
    validated: dict[str, str] = {}

    if data.get("title") is not None:
        title = _clean(data["title"])
        if not title and required:
            raise PostValidationError("Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            raise PostValidationError(f"Title is too long (max {MAX_TITLE_LENGTH} characters)")
        if title:
            validated["title"] = title
    elif required:
        raise PostValidationError("Title is required")

    if data.get("content") is not None:
        content = _clean(data["content"])
        if not content and required:
            raise PostValidationError("Content is required")
        if content:
            validated["content"] = content
    elif required:
        raise PostValidationError("Content is required")

    if data.get("author") is not None:
        author = _clean(data["author"])
        if len(author) > MAX_AUTHOR_LENGTH:
            raise PostValidationError(f"Author name is too long (max {MAX_AUTHOR_LENGTH} characters)")
        if author:
            validated["author"] = author

    # Second pass: the result itself must carry the required fields.
    if required:
        if "title" not in validated:
            raise PostValidationError("Title is required")
        if "content" not in validated:
            raise PostValidationError("Content is required")

    return validated


class PostService:
    """Business rules for posts.

    Args:
        store: PostStore to delegate persistence to.
    """

    def __init__(self, store: PostStore) -> None:
        self._store = store

    async def create_post(self, data: Mapping[str, Any]) -> Post:
        """Validate and create a post.

        Raises:
            PostValidationError: If the submitted fields are invalid.
            PostConsistencyError: If the new post cannot be read back.
        """
        validated = validate_post_data(data)

        post_id = await self._store.create(validated)

        post = await self._store.find_by_id(post_id)
        if post is None:
            raise PostConsistencyError("Failed to create post")

        logger.info(f"Post created: {post_id}")
        return post

    async def get_post(self, post_id: str) -> Post | None:
        return await self._store.find_by_id(post_id)

    async def get_all_posts(self, page: int = 1, limit: int = 10) -> PostPage:
        """Get one page of posts, newest first.

        Raises:
            PostValidationError: If page or limit is out of range.
        """
        posts = await self._store.find_all(page, limit)
        total = await self._store.get_total()

        return PostPage(
            posts=posts,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                pages=math.ceil(total / limit),
            ),
        )

    async def update_post(self, post_id: str, data: Mapping[str, Any]) -> Post | None:
        """Apply a partial update.

        Returns:
            The updated post, or None if it does not exist.

        Raises:
            PostValidationError: If a submitted field is invalid.
        """
        validated = validate_post_data(data, required=False)

        if not await self._store.update(post_id, validated):
            return None

        logger.info(f"Post updated: {post_id}")
        return await self._store.find_by_id(post_id)

    async def delete_post(self, post_id: str) -> bool:
        deleted = await self._store.delete(post_id)
        if deleted:
            logger.info(f"Post deleted: {post_id}")
        return deleted
