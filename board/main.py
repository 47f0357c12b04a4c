"""FastAPI application entry point.

Bulletin Board - list, create, read, update and delete text posts.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import html
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from board.routes import api_router
from board.services.posts import PostService
from board.settings import Settings, get_settings
from board.stores.backend import KeyValueBackend
from board.stores.memory import InMemoryBackend
from board.stores.posts import PostStore
from board.stores.redis import RedisBackend, close_redis, init_redis

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    uses_redis: bool = app.state.uses_shared_redis

    # Startup
    if uses_redis:
        try:
            await init_redis(settings.redis_url)
        except Exception:
            logger.exception("Redis init failed")

    yield

    # Shutdown
    if uses_redis:
        await close_redis()


def build_backend(settings: Settings) -> KeyValueBackend:
    """Select the key-value backend configured by STORE_BACKEND."""
    if settings.store_backend == "memory":
        logger.warning("Using in-memory post store; posts are lost on restart")
        return InMemoryBackend()
    return RedisBackend()


def create_app(
    settings: Settings | None = None,
    backend: KeyValueBackend | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings.
        backend: Key-value backend to use instead of the configured one.
    """
    settings = settings or get_settings()
    if backend is None:
        backend = build_backend(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Bulletin board backed by Redis",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Explicit wiring: backend -> store -> service
    app.state.settings = settings
    # Only the module-level Redis client needs connecting in lifespan
    app.state.uses_shared_redis = isinstance(backend, RedisBackend) and backend.uses_shared_client
    app.state.post_service = PostService(PostStore(backend))
    app.state.templates = Jinja2Templates(directory=str(settings.template_dir))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        """Render HTTP errors (404, 405, 400, 500 raised by routes) as error pages."""
        if exc.status_code == 404:
            return _render_error_page(
                request, 404, "Page not found", "The requested page could not be found."
            )
        if exc.status_code >= 500:
            return _render_error_page(
                request, exc.status_code, "Internal Server Error", "An unexpected error occurred."
            )
        return _render_error_page(request, exc.status_code, "Error", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
        """Malformed query/path/form parameters (e.g. page=abc)."""
        logger.warning(f"Invalid request parameters for {request.method} {request.url.path}: {exc.errors()}")
        return _render_error_page(request, 400, "Error", "Invalid request parameters.")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> Response:
        """Global exception handler; never leaks internals unless debug is on."""
        logger.error(
            f"Application error on {request.method} {request.url}",
            exc_info=exc,
        )
        message = str(exc) if settings.debug else "An unexpected error occurred."
        return _render_error_page(request, 500, "Internal Server Error", message)

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    app.include_router(api_router)

    return app


def _render_error_page(request: Request, status_code: int, title: str, message: str) -> Response:
    """Render errors/error.html, falling back to bare HTML if templating fails."""
    templates: Jinja2Templates = request.app.state.templates
    try:
        return templates.TemplateResponse(
            request,
            "errors/error.html",
            {"status_code": status_code, "title": title, "message": message},
            status_code=status_code,
        )
    except Exception:
        logger.exception("Failed to render error template")
        return HTMLResponse(
            content=f"<h1>{status_code} {html.escape(title)}</h1><p>{html.escape(message)}</p>",
            status_code=status_code,
        )


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "board.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
