"""FastAPI dependencies resolving collaborators wired in create_app()."""

from fastapi import Request
from fastapi.templating import Jinja2Templates

from board.services.posts import PostService


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates
