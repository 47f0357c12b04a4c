"""Schemas for posts and paginated post listings."""

from pydantic import BaseModel, Field

DEFAULT_AUTHOR = "Anonymous"


class Post(BaseModel):
    """A bulletin board post as stored in a record.

    Timestamps are ``YYYY-MM-DD HH:MM:SS`` strings, so comparing them as
    strings is chronological.
    """

    id: str = Field(min_length=1)
    title: str
    content: str
    author: str = DEFAULT_AUTHOR
    created_at: str
    updated_at: str

    def to_record(self) -> dict[str, str]:
        """Flatten into the field map written to the backend."""
        return self.model_dump()


class Pagination(BaseModel):
    page: int = Field(ge=1)
    limit: int = Field(ge=1, le=100)
    total: int = Field(ge=0)
    pages: int = Field(ge=0)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages


class PostPage(BaseModel):
    """One page of posts, newest first, with pagination metadata."""

    posts: list[Post]
    pagination: Pagination
