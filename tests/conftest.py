"""Shared fixtures: in-memory backend, a steppable clock and an app client."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from board.main import create_app
from board.services.posts import PostService
from board.settings import Settings
from board.stores.memory import InMemoryBackend
from board.stores.posts import PostStore


class SteppingClock:
    """Returns a time one second later on every call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(backend: InMemoryBackend) -> PostStore:
    return PostStore(backend, now=SteppingClock())


@pytest.fixture
def service(store: PostStore) -> PostService:
    return PostService(store)


@pytest.fixture
def app(backend: InMemoryBackend):
    return create_app(settings=Settings(store_backend="memory"), backend=backend)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
