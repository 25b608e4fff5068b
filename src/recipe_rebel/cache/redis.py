"""Redis client and connection pool management.

One Redis database holds the per-session role cache; rate limiting uses
its own database through SlowAPI's storage URL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from recipe_rebel.core.config import get_settings
from recipe_rebel.observability.logging import get_logger


if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)

_cache_pool: ConnectionPool | None = None
_cache_client: Redis | None = None


async def init_redis_pools() -> None:
    """Initialize the cache connection pool and verify it.

    Should be called during application startup (lifespan).
    """
    global _cache_pool, _cache_client  # noqa: PLW0603

    settings = get_settings()

    logger.info(
        "Initializing Redis connections",
        host=settings.redis.host,
        port=settings.redis.port,
    )

    _cache_pool = ConnectionPool.from_url(
        settings.redis_cache_url,
        max_connections=20,
        decode_responses=True,
    )
    _cache_client = redis.Redis(connection_pool=_cache_pool)

    try:
        await _cache_client.ping()
        logger.info("Redis connections established successfully")
    except redis.ConnectionError:
        logger.exception("Failed to connect to Redis")
        raise


async def close_redis_pools() -> None:
    """Close Redis connection pools.

    Should be called during application shutdown (lifespan).
    """
    global _cache_pool, _cache_client  # noqa: PLW0603

    if _cache_client:
        await _cache_client.aclose()
        _cache_client = None

    if _cache_pool:
        await _cache_pool.disconnect()
        _cache_pool = None

    logger.info("Redis connections closed")


def get_cache_client() -> Redis:
    """Get the cache Redis client.

    Raises:
        RuntimeError: If Redis is not initialized.
    """
    if _cache_client is None:
        msg = "Redis cache client not initialized. Call init_redis_pools() first."
        raise RuntimeError(msg)
    return _cache_client


def get_cache_client_optional() -> Redis | None:
    """Get the cache client, or None when Redis was not started."""
    return _cache_client


async def check_redis_health() -> dict[str, str]:
    """Report ``healthy``, ``unhealthy`` or ``not_initialized`` for the cache."""
    if _cache_client is None:
        return {"redis_cache": "not_initialized"}
    try:
        await _cache_client.ping()
    except (redis.ConnectionError, redis.TimeoutError):
        return {"redis_cache": "unhealthy"}
    return {"redis_cache": "healthy"}


__all__ = [
    "check_redis_health",
    "close_redis_pools",
    "get_cache_client",
    "get_cache_client_optional",
    "init_redis_pools",
]
