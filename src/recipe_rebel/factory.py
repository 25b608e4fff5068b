"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up middleware stack in the correct order
- Registers exception handlers and rate limiting
- Mounts API routers
- Exposes Prometheus metrics
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from recipe_rebel.api.v1.endpoints import health
from recipe_rebel.api.v1.router import router as v1_router
from recipe_rebel.cache.rate_limit import setup_rate_limiting
from recipe_rebel.core.config import Settings, get_settings
from recipe_rebel.core.events import lifespan
from recipe_rebel.core.exceptions import (
    register_unavailable_errors,
    setup_exception_handlers,
)
from recipe_rebel.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
)
from recipe_rebel.database import CONNECTION_ERRORS
from recipe_rebel.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    prefix = settings.api.v1_prefix
    docs_enabled = settings.is_non_production

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description=(
            "Recipe Rebel - community recipe sharing with moderation, "
            "ratings, comments, favorites and an AI dietician"
        ),
        lifespan=lifespan,
        docs_url=f"{prefix}/docs" if docs_enabled else None,
        redoc_url=f"{prefix}/redoc" if docs_enabled else None,
        openapi_url=f"{prefix}/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
        default_response_class=ORJSONResponse,
    )

    app.state.settings = settings

    setup_exception_handlers(app)
    register_unavailable_errors(app, CONNECTION_ERRORS, "Database is not available")

    # Added before the custom middleware so it runs inside them
    setup_rate_limiting(app)

    _setup_middleware(app, settings)
    _setup_routers(app, settings)

    # After routes are mounted
    setup_metrics(app)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition. From the request's
    perspective:
    1. SecurityHeadersMiddleware (adds security headers)
    2. RequestIDMiddleware (adds request ID for correlation)
    3. LoggingMiddleware (logs requests/responses with timing)
    4. GZipMiddleware (compresses responses)
    5. CORSMiddleware (handles CORS)
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={
            "/health",
            "/ready",
            f"{settings.api.v1_prefix}/metrics",
            "/favicon.ico",
        },
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        SecurityHeadersMiddleware,
        api_prefix=settings.api.v1_prefix,
        hsts=settings.is_production,
    )


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    # Probes stay at the root for load balancers
    app.include_router(health.router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint returning basic service info."""
        return {
            "service": settings.app.name,
            "version": settings.app.version,
            "docs": (
                f"{settings.api.v1_prefix}/docs"
                if settings.is_non_production
                else "disabled"
            ),
        }
