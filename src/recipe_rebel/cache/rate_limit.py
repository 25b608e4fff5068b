"""Rate limiting using SlowAPI with Redis backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from recipe_rebel.core.config import get_settings
from recipe_rebel.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request

logger = get_logger(__name__)


def _get_rate_limit_key(request: Request) -> str:
    """Key requests by authenticated user when known, otherwise by client IP."""
    user = getattr(request.state, "user", None)
    if user is not None:
        return f"user:{user.id}"
    return str(get_remote_address(request))


def create_limiter() -> Limiter:
    """Create the limiter; tests use in-memory storage instead of Redis."""
    settings = get_settings()
    storage_uri = "memory://" if settings.is_testing else settings.redis_rate_limit_url

    return Limiter(
        key_func=_get_rate_limit_key,
        default_limits=[settings.rate_limiting.default],
        storage_uri=storage_uri,
        strategy="fixed-window",
        headers_enabled=True,
    )


limiter = create_limiter()


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Render SlowAPI's RateLimitExceeded in the API's error shape."""
    detail = getattr(exc, "detail", "")
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        client_ip=get_remote_address(request),
        limit=str(detail),
    )
    return JSONResponse(
        status_code=429,
        content={
            "error": "RATE_LIMIT_EXCEEDED",
            "message": "Too many requests. Please try again later.",
            "details": None,
            "requestId": getattr(request.state, "request_id", None),
        },
        headers={"Retry-After": "60"},
    )


def setup_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter, apply the default limit and register the error handler.

    Endpoints decorated with ``rate_limit`` use their own limit instead of
    the default one.
    """
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.info("Rate limiting configured")


def rate_limit(limit: str) -> Any:
    """Apply a custom rate limit to an endpoint.

    The decorated endpoint must accept ``request: Request`` and
    ``response: Response`` parameters.

    Example:
        @router.post("/assistant/chat")
        @rate_limit("10/minute")
        async def chat(request: Request, response: Response, ...):
            ...
    """
    return limiter.limit(limit)


def rate_limit_assistant() -> Any:
    """Rate limit for calls that reach the AI dietician."""
    return limiter.limit(get_settings().rate_limiting.assistant)
