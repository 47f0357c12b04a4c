"""Bulletin board pages.

GET    /, /posts            - paginated list
GET    /posts/create        - create form
POST   /posts               - create, 302 to the new post
GET    /posts/{id}          - detail
GET    /posts/{id}/edit     - edit form
PUT    /posts/{id}          - partial update, 302 to the post
PATCH  /posts/{id}          - same as PUT
DELETE /posts/{id}          - delete, 302 to /
POST   /posts/{id}          - HTML form method override via `_METHOD`

Routers are thin: validation and persistence live in PostService.
"""

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from board.dependencies import get_post_service, get_templates
from board.errors import PostValidationError
from board.services.posts import PostService

router = APIRouter()
logger = logging.getLogger("uvicorn.error")

# Methods an HTML form may request through the `_METHOD` field
OVERRIDABLE_METHODS = {"PUT", "PATCH", "DELETE"}


@router.get("/", response_class=HTMLResponse)
@router.get("/posts", response_class=HTMLResponse)
async def list_posts(
    request: Request,
    page: int = Query(default=1, description="Page number (1-based)"),
    limit: int | None = Query(default=None, description="Posts per page (1-100)"),
    service: PostService = Depends(get_post_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse:
    """Render the newest-first post list."""
    if limit is None:
        limit = request.app.state.settings.default_page_size

    try:
        data = await service.get_all_posts(page, limit)
    except PostValidationError as e:
        logger.warning(f"Invalid pagination (page={page}, limit={limit}): {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Error fetching posts")
        raise HTTPException(status_code=500)

    return templates.TemplateResponse(
        request,
        "posts/index.html",
        {"posts": data.posts, "pagination": data.pagination},
    )


@router.get("/posts/create", response_class=HTMLResponse)
async def create_form(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse:
    return templates.TemplateResponse(request, "posts/create.html", {"old": {}})


@router.post("/posts")
async def store_post(
    request: Request,
    title: str | None = Form(default=None),
    content: str | None = Form(default=None),
    author: str | None = Form(default=None),
    service: PostService = Depends(get_post_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    """Create a post from the submitted form."""
    data = {"title": title, "content": content, "author": author}

    try:
        post = await service.create_post(data)
    except PostValidationError as e:
        logger.warning(f"Validation error creating post: {e}")
        return templates.TemplateResponse(
            request,
            "posts/create.html",
            {"error": str(e), "old": data},
            status_code=422,
        )
    except Exception:
        logger.exception("Error creating post")
        raise HTTPException(status_code=500)

    return RedirectResponse(url=f"/posts/{post.id}", status_code=302)


@router.get("/posts/{post_id}", response_class=HTMLResponse)
async def show_post(
    request: Request,
    post_id: str,
    service: PostService = Depends(get_post_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse:
    try:
        post = await service.get_post(post_id)
    except Exception:
        logger.exception(f"Error fetching post {post_id}")
        raise HTTPException(status_code=500)

    if post is None:
        raise HTTPException(status_code=404)

    return templates.TemplateResponse(request, "posts/show.html", {"post": post})


@router.get("/posts/{post_id}/edit", response_class=HTMLResponse)
async def edit_form(
    request: Request,
    post_id: str,
    service: PostService = Depends(get_post_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse:
    try:
        post = await service.get_post(post_id)
    except Exception:
        logger.exception(f"Error fetching post {post_id} for edit")
        raise HTTPException(status_code=500)

    if post is None:
        raise HTTPException(status_code=404)

    return templates.TemplateResponse(request, "posts/edit.html", {"post": post, "old": {}})


@router.put("/posts/{post_id}")
@router.patch("/posts/{post_id}")
async def update_post(
    request: Request,
    post_id: str,
    title: str | None = Form(default=None),
    content: str | None = Form(default=None),
    author: str | None = Form(default=None),
    service: PostService = Depends(get_post_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    data = {"title": title, "content": content, "author": author}
    return await _apply_update(request, post_id, data, service, templates)


@router.delete("/posts/{post_id}")
async def destroy_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
) -> Response:
    return await _apply_delete(post_id, service)


@router.post("/posts/{post_id}")
async def override_post_method(
    request: Request,
    post_id: str,
    method: str | None = Form(default=None, alias="_METHOD"),
    title: str | None = Form(default=None),
    content: str | None = Form(default=None),
    author: str | None = Form(default=None),
    service: PostService = Depends(get_post_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    """Dispatch HTML form posts to update/delete.

    Browsers only submit GET and POST, so edit and delete forms send the
    intended verb in a hidden `_METHOD` field.
    """
    method = (method or "").strip().upper()
    if method not in OVERRIDABLE_METHODS:
        raise HTTPException(status_code=405)

    if method == "DELETE":
        return await _apply_delete(post_id, service)

    data = {"title": title, "content": content, "author": author}
    return await _apply_update(request, post_id, data, service, templates)


async def _apply_update(
    request: Request,
    post_id: str,
    data: dict[str, str | None],
    service: PostService,
    templates: Jinja2Templates,
) -> Response:
    try:
        post = await service.update_post(post_id, data)
    except PostValidationError as e:
        logger.warning(f"Validation error updating post {post_id}: {e}")
        return await _render_edit_error(request, post_id, str(e), data, service, templates)
    except Exception:
        logger.exception(f"Error updating post {post_id}")
        raise HTTPException(status_code=500)

    if post is None:
        raise HTTPException(status_code=404)

    return RedirectResponse(url=f"/posts/{post.id}", status_code=302)


async def _render_edit_error(
    request: Request,
    post_id: str,
    error: str,
    data: dict[str, str | None],
    service: PostService,
    templates: Jinja2Templates,
) -> Response:
    """Re-render the edit form with the error and the submitted values."""
    try:
        post = await service.get_post(post_id)
    except Exception:
        logger.exception(f"Error fetching post {post_id} for edit")
        raise HTTPException(status_code=500)

    if post is None:
        raise HTTPException(status_code=404)

    return templates.TemplateResponse(
        request,
        "posts/edit.html",
        {"post": post, "error": error, "old": data},
        status_code=422,
    )


async def _apply_delete(post_id: str, service: PostService) -> Response:
    try:
        deleted = await service.delete_post(post_id)
    except Exception:
        logger.exception(f"Error deleting post {post_id}")
        raise HTTPException(status_code=500)

    if not deleted:
        raise HTTPException(status_code=404)

    return RedirectResponse(url="/", status_code=302)
