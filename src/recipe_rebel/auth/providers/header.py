"""Header-based authentication provider.

Reads the user id (and optionally a session id) from request headers.
Use this ONLY for local development and tests, or behind a trusted gateway
that has already authenticated the user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_rebel.auth.providers.exceptions import AuthenticationError
from recipe_rebel.auth.providers.models import AuthResult
from recipe_rebel.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


class HeaderAuthProvider:
    """Extracts user information from request headers.

    When the session header is absent every request of the user shares one
    ``header:{user_id}`` session.
    """

    def __init__(
        self,
        user_id_header: str = "X-User-ID",
        session_id_header: str = "X-Session-ID",
    ) -> None:
        self.user_id_header = user_id_header
        self.session_id_header = session_id_header

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "header"

    async def validate_token(
        self,
        _token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Build the identity from request headers; the token is ignored.

        Raises:
            AuthenticationError: If request is None or user ID header is missing.
        """
        if request is None:
            msg = "HeaderAuthProvider requires request object for header access"
            raise AuthenticationError(msg)

        user_id = request.headers.get(self.user_id_header)
        if not user_id:
            msg = f"Missing required header: {self.user_id_header}"
            raise AuthenticationError(msg)

        session_id = request.headers.get(self.session_id_header) or f"header:{user_id}"

        logger.debug("Authenticated via headers", user_id=user_id)

        return AuthResult(
            user_id=user_id,
            session_id=session_id,
            token_type="header",  # noqa: S106 - not a password
            raw_claims={"source": "headers"},
        )

    async def initialize(self) -> None:
        """Warn loudly that headers are trusted."""
        logger.warning(
            "HeaderAuthProvider is enabled - ensure this is only used in "
            "development/testing or behind a trusted gateway",
            user_id_header=self.user_id_header,
        )

    async def shutdown(self) -> None:
        """Nothing to release."""
        logger.debug("HeaderAuthProvider shutdown")
