"""Security headers middleware.

Adds the usual hardening headers. Recipe images are served from the object
storage host, so the content security policy admits ``https:`` images.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

_DEFAULT_CSP = (
    "default-src 'self'; "
    # Swagger UI needs inline scripts and styles
    "script-src 'self' 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline'; "
    "img-src 'self' data: https:; "
    "frame-ancestors 'none'; "
    "base-uri 'self'"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        api_prefix: str = "/api/",
        content_security_policy: str = _DEFAULT_CSP,
        hsts: bool = True,
    ) -> None:
        super().__init__(app)
        self.api_prefix = api_prefix
        self.content_security_policy = content_security_policy
        self.hsts = hsts

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)
        headers = response.headers

        headers["X-Content-Type-Options"] = "nosniff"
        headers["X-Frame-Options"] = "DENY"
        headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        headers["Content-Security-Policy"] = self.content_security_policy
        if self.hsts:
            headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        # API responses are per-user and must not be cached by intermediaries
        if request.url.path.startswith(self.api_prefix):
            headers["Cache-Control"] = "no-store, private"

        return response
