"""Custom middleware components."""

from recipe_rebel.core.middleware.logging import LoggingMiddleware
from recipe_rebel.core.middleware.request_id import RequestIDMiddleware
from recipe_rebel.core.middleware.security_headers import SecurityHeadersMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
