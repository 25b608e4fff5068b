"""Authentication provider protocol definition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from starlette.requests import Request

    from recipe_rebel.auth.providers.models import AuthResult


@runtime_checkable
class AuthProvider(Protocol):
    """Protocol for authentication providers.

    Implementations validate the bearer token (or, for header mode, the
    request headers) and return an ``AuthResult``.
    """

    @property
    def provider_name(self) -> str:
        """Short provider name for logging ('local_jwt', 'header')."""
        ...

    async def validate_token(
        self,
        token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Validate a token and return authentication result.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed or signature fails.
            AuthenticationError: For other authentication failures.
        """
        ...

    async def initialize(self) -> None:
        """Validate configuration; called during application startup."""
        ...

    async def shutdown(self) -> None:
        """Release resources; called during application shutdown."""
        ...
