"""HTML routes."""

from fastapi import APIRouter

from board.routes import posts

api_router = APIRouter()

# Bulletin board pages (list, detail, create/edit forms, mutations)
api_router.include_router(posts.router, tags=["posts"])
