"""Custom exceptions and exception handlers.

Every error leaving the API has the same JSON shape::

    {"error": "NOT_FOUND", "message": "...", "details": null, "requestId": "..."}

Endpoints either raise an ``AppException`` subclass or an ``HTTPException``
whose ``detail`` is an ``{"error", "message"}`` mapping; both are rendered
by the handlers registered in ``setup_exception_handlers``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_rebel.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """Structured error detail for validation errors."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None

    def to_content(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by the rest of the API."""
        return {
            "error": self.error,
            "message": self.message,
            "details": (
                [d.model_dump() for d in self.details] if self.details else None
            ),
            "requestId": self.request_id,
        }


class AppException(Exception):
    """Base application exception carrying its HTTP rendering."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)


class ServiceUnavailableException(AppException):
    """Service unavailable exception."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="SERVICE_UNAVAILABLE",
            message=message,
        )


_DEFAULT_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_429_TOO_MANY_REQUESTS: "RATE_LIMIT_EXCEEDED",
}


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        """Handle custom application exceptions."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=exc.error,
                message=exc.message,
                details=exc.details,
                request_id=_get_request_id(request),
            ).to_content(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle HTTP exceptions, unpacking ``{"error", "message"}`` details."""
        if isinstance(exc.detail, dict):
            error = str(exc.detail.get("error", "HTTP_ERROR"))
            message = str(exc.detail.get("message", ""))
        else:
            error = _DEFAULT_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
            message = str(exc.detail)
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=error,
                message=message,
                request_id=_get_request_id(request),
            ).to_content(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Handle request schema errors; the first message becomes the summary."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return ORJSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(
                error="VALIDATION_ERROR",
                message=details[0].message if details else "Request validation failed",
                details=details,
                request_id=_get_request_id(request),
            ).to_content(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions."""
        logger.opt(exception=exc).error("Unhandled exception")
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
                request_id=_get_request_id(request),
            ).to_content(),
        )


def register_unavailable_errors(
    app: FastAPI,
    exc_types: tuple[type[Exception], ...],
    message: str,
) -> None:
    """Render low-level connectivity errors of a backing service as 503."""

    async def unavailable_handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.warning(
            "Backing service unavailable",
            error_type=type(exc).__name__,
            error=str(exc),
            path=request.url.path,
        )
        return ORJSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ErrorResponse(
                error="SERVICE_UNAVAILABLE",
                message=message,
                request_id=_get_request_id(request),
            ).to_content(),
        )

    for exc_type in exc_types:
        app.add_exception_handler(exc_type, unavailable_handler)
