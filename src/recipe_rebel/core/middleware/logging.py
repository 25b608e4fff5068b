"""Request logging and timing middleware.

Logs one line when a request starts and one when it completes, with the
status code and duration. The duration is also returned in the
``X-Process-Time`` header and requests slower than the threshold are
logged as warnings.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from recipe_rebel.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)

# Seconds
SLOW_REQUEST_THRESHOLD = 1.0


def client_ip(request: Request) -> str:
    """Extract client IP from request, considering proxies."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # First hop is the original client
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Structured request/response logging with timing."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: set[str] | None = None,
        time_header: str = "X-Process-Time",
        slow_threshold: float = SLOW_REQUEST_THRESHOLD,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or {"/health", "/ready", "/favicon.ico"}
        self.time_header = time_header
        self.slow_threshold = slow_threshold

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request and response."""
        start = time.perf_counter()
        quiet = request.url.path in self.exclude_paths

        if not quiet:
            bind_context(
                method=request.method,
                path=request.url.path,
                client_ip=client_ip(request),
            )
            logger.info(
                "Request started",
                query_params=str(request.query_params) if request.query_params else None,
            )

        response = await call_next(request)

        elapsed = time.perf_counter() - start
        elapsed_ms = round(elapsed * 1000, 2)
        response.headers[self.time_header] = f"{elapsed_ms}ms"

        if elapsed > self.slow_threshold:
            logger.warning(
                "Slow request detected",
                method=request.method,
                path=request.url.path,
                process_time_ms=elapsed_ms,
                threshold_ms=self.slow_threshold * 1000,
            )
        elif not quiet:
            logger.info(
                "Request completed",
                status_code=response.status_code,
                process_time_ms=elapsed_ms,
            )

        return response
