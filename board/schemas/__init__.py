"""Pydantic schemas shared by stores, services and routes."""

from board.schemas.post import DEFAULT_AUTHOR, Pagination, Post, PostPage

__all__ = [
    "DEFAULT_AUTHOR",
    "Pagination",
    "Post",
    "PostPage",
]
