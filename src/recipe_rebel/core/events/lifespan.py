"""Application lifespan event handlers.

Startup order: logging, database pool, Redis, auth provider, then the HTTP
clients for image storage and the AI assistant. Only the auth provider is
critical; every other dependency that fails to start is logged and the
service comes up degraded (requests needing it answer 503).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_rebel.assistant import AssistantClient
from recipe_rebel.auth.providers import initialize_auth_provider, shutdown_auth_provider
from recipe_rebel.cache.redis import close_redis_pools, init_redis_pools
from recipe_rebel.core.config import Settings, get_settings
from recipe_rebel.database import close_database_pool, init_database_pool
from recipe_rebel.observability.logging import get_logger, setup_logging
from recipe_rebel.storage import ImageStorageClient


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    await _init_database()
    await _init_cache()
    await _init_auth(settings)
    await _init_storage_client(app)
    await _init_assistant_client(app)

    logger.info("Application startup complete")


async def _init_database() -> None:
    """Create the PostgreSQL pool."""
    try:
        await init_database_pool()
    except Exception:
        logger.exception("Failed to initialize database - data endpoints unavailable")


async def _init_cache() -> None:
    """Connect to Redis for the session role cache."""
    try:
        await init_redis_pools()
    except Exception:
        logger.exception("Failed to initialize Redis - continuing without role cache")


async def _init_auth(settings: Settings) -> None:
    """Initialize auth provider (critical service)."""
    try:
        await initialize_auth_provider()
        logger.info("Auth provider initialized", mode=settings.auth.mode)
    except Exception:
        logger.exception("Failed to initialize auth provider")
        raise


async def _init_storage_client(app: FastAPI) -> None:
    """Initialize the image storage client."""
    try:
        storage_client = ImageStorageClient()
        await storage_client.initialize()
        app.state.storage_client = storage_client
    except Exception:
        logger.exception(
            "Failed to initialize ImageStorageClient - image uploads unavailable"
        )
        app.state.storage_client = None


async def _init_assistant_client(app: FastAPI) -> None:
    """Initialize the AI assistant client."""
    try:
        assistant_client = AssistantClient()
        await assistant_client.initialize()
        app.state.assistant_client = assistant_client
    except Exception:
        logger.exception("Failed to initialize AssistantClient - chat unavailable")
        app.state.assistant_client = None


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")

    assistant_client = getattr(app.state, "assistant_client", None)
    if assistant_client is not None:
        await assistant_client.shutdown()

    storage_client = getattr(app.state, "storage_client", None)
    if storage_client is not None:
        await storage_client.shutdown()

    await shutdown_auth_provider()
    await close_redis_pools()
    await close_database_pool()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
