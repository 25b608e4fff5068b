"""PostgreSQL connection pool management.

The pool is created once at startup (lifespan) and shared by all
repositories. Every connection has its ``search_path`` pointed at the
configured schema, so queries use unqualified table names.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from recipe_rebel.core.config import get_settings
from recipe_rebel.core.exceptions import ServiceUnavailableException
from recipe_rebel.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

_pool: Pool | None = None

# Errors raised while acquiring a connection or talking to a dead server
CONNECTION_ERRORS: tuple[type[Exception], ...] = (
    asyncpg.exceptions.PostgresConnectionError,
    asyncpg.exceptions.InterfaceError,
    asyncpg.exceptions.TooManyConnectionsError,
    ConnectionError,
    TimeoutError,
)


class DatabaseUnavailableError(ServiceUnavailableException):
    """Raised when the database cannot serve a request."""

    def __init__(self, message: str = "Database is not available") -> None:
        super().__init__(message)


async def init_database_pool() -> None:
    """Create the connection pool and verify connectivity.

    Should be called during application startup (lifespan).
    """
    global _pool  # noqa: PLW0603

    settings = get_settings()

    logger.info(
        "Initializing database connection pool",
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
        schema=settings.database.db_schema,
    )

    _pool = await asyncpg.create_pool(
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
        user=settings.database.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=settings.database.min_pool_size,
        max_size=settings.database.max_pool_size,
        command_timeout=settings.database.command_timeout,
        ssl=settings.database.ssl if settings.database.ssl else None,
        server_settings={"search_path": settings.database.db_schema},
    )

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        logger.info("Database connection established successfully")
    except asyncpg.PostgresError:
        logger.exception("Failed to connect to database")
        raise


async def close_database_pool() -> None:
    """Close the connection pool.

    Should be called during application shutdown (lifespan).
    """
    global _pool  # noqa: PLW0603

    if _pool:
        await _pool.close()
        _pool = None
        logger.info("Database connection pool closed")


def get_database_pool() -> Pool:
    """Get the database connection pool.

    Raises:
        DatabaseUnavailableError: If the pool was never (or not yet) created.
    """
    if _pool is None:
        raise DatabaseUnavailableError
    return _pool


async def check_database_health() -> dict[str, str]:
    """Report ``healthy``, ``unhealthy`` or ``not_initialized`` for the database."""
    if _pool is None:
        return {"database": "not_initialized"}
    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, *CONNECTION_ERRORS):
        logger.warning("Database health check failed")
        return {"database": "unhealthy"}
    return {"database": "healthy"}
