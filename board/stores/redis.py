"""Redis store for post records.

Handles:
- Connection lifecycle (init on startup, close on shutdown)
- KeyValueBackend adapter over redis.asyncio

Posts are stored as hashes (``post:{id}``) with a ``posts`` list as the
newest-first index. Key naming lives in board.stores.posts.
"""

import logging

import redis.asyncio as redis

from board.settings import get_settings

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis(url: str | None = None) -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        url or settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


class RedisBackend:
    """KeyValueBackend backed by Redis hashes and lists.

    Args:
        client: Explicit client. When omitted, the module-level client set up
            by init_redis() is used at call time.
    """

    def __init__(self, client: redis.Redis | None = None) -> None:
        self._client = client

    @property
    def client(self) -> redis.Redis:
        return self._client if self._client is not None else _get_redis()

    @property
    def uses_shared_client(self) -> bool:
        """True when calls go through the client owned by init_redis()."""
        return self._client is None

    async def set_fields(self, key: str, fields: dict[str, str]) -> None:
        await self.client.hset(key, mapping=fields)

    async def get_fields(self, key: str) -> dict[str, str]:
        return await self.client.hgetall(key) or {}

    async def delete(self, key: str) -> int:
        return await self.client.delete(key)

    async def exists(self, key: str) -> bool:
        return await self.client.exists(key) > 0

    async def push_front(self, key: str, value: str) -> int:
        return await self.client.lpush(key, value)

    async def list_range(self, key: str, start: int, stop: int) -> list[str]:
        return await self.client.lrange(key, start, stop)

    async def remove_all(self, key: str, value: str) -> int:
        # count=0 removes all matching elements
        return await self.client.lrem(key, 0, value)

    async def list_length(self, key: str) -> int:
        return await self.client.llen(key)
