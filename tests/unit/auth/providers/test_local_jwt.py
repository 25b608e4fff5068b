"""Unit tests for LocalJWTAuthProvider."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from jose import jwt

from recipe_rebel.auth.providers.exceptions import (
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_rebel.auth.providers.local_jwt import (
    LocalJWTAuthProvider,
    session_id_from_claims,
)


pytestmark = pytest.mark.unit

SECRET = "test-secret-key-for-testing-only-32chars"
USER_ID = "11111111-1111-1111-1111-111111111111"


def _token(secret: str = SECRET, **claims: Any) -> str:
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": USER_ID,
        "exp": now + timedelta(hours=1),
        "iat": now,
        "session_id": "session-abc",
    }
    payload.update(claims)
    return jwt.encode(
        {k: v for k, v in payload.items() if v is not None},
        secret,
        algorithm="HS256",
    )


class TestLocalJWTAuthProvider:
    """Tests for LocalJWTAuthProvider."""

    @pytest.fixture
    def provider(self) -> LocalJWTAuthProvider:
        """Create a provider without issuer or audience checks."""
        return LocalJWTAuthProvider(secret_key=SECRET)

    async def test_validates_valid_token(self, provider: LocalJWTAuthProvider) -> None:
        """Should return the subject, session and expiry."""
        result = await provider.validate_token(_token())

        assert result.user_id == USER_ID
        assert result.session_id == "session-abc"
        assert result.token_type == "access"
        assert result.expires_at is not None

    async def test_rejects_expired_token(self, provider: LocalJWTAuthProvider) -> None:
        """Should raise TokenExpiredError."""
        past = datetime.now(UTC) - timedelta(hours=1)

        with pytest.raises(TokenExpiredError):
            await provider.validate_token(_token(exp=past, iat=past - timedelta(hours=1)))

    async def test_rejects_wrong_signature(
        self,
        provider: LocalJWTAuthProvider,
    ) -> None:
        """Should raise TokenInvalidError for a foreign secret."""
        with pytest.raises(TokenInvalidError, match="Invalid token"):
            await provider.validate_token(_token(secret="another-secret-of-32-characters!"))

    async def test_rejects_garbage(self, provider: LocalJWTAuthProvider) -> None:
        """Should raise TokenInvalidError for malformed tokens."""
        with pytest.raises(TokenInvalidError):
            await provider.validate_token("not-a-jwt")

    async def test_rejects_refresh_tokens(self, provider: LocalJWTAuthProvider) -> None:
        """Should accept access tokens only."""
        with pytest.raises(TokenInvalidError, match="Invalid token type"):
            await provider.validate_token(_token(type="refresh"))

    async def test_rejects_missing_subject(
        self,
        provider: LocalJWTAuthProvider,
    ) -> None:
        """Should require a 'sub' claim."""
        with pytest.raises(TokenInvalidError, match="sub"):
            await provider.validate_token(_token(sub=None))

    async def test_checks_audience_when_configured(self) -> None:
        """Should reject tokens for another audience."""
        provider = LocalJWTAuthProvider(secret_key=SECRET, audience="authenticated")

        result = await provider.validate_token(_token(aud="authenticated"))
        assert result.user_id == USER_ID

        with pytest.raises(TokenInvalidError):
            await provider.validate_token(_token(aud="anon"))

    async def test_checks_issuer_when_configured(self) -> None:
        """Should reject tokens from another issuer."""
        provider = LocalJWTAuthProvider(secret_key=SECRET, issuer="https://auth.example")

        with pytest.raises(TokenInvalidError):
            await provider.validate_token(_token(iss="https://evil.example"))

    async def test_initialize_requires_secret(self) -> None:
        """Should refuse to start without a secret."""
        with pytest.raises(ConfigurationError):
            await LocalJWTAuthProvider(secret_key="").initialize()


class TestSessionIdFromClaims:
    """Tests for session_id_from_claims."""

    def test_prefers_session_id(self) -> None:
        """Should use the session_id claim first."""
        assert session_id_from_claims({"session_id": "s1", "jti": "j1"}, "tok") == "s1"

    def test_falls_back_to_jti(self) -> None:
        """Should use jti without a session_id."""
        assert session_id_from_claims({"jti": "j1"}, "tok") == "j1"

    def test_falls_back_to_token_digest(self) -> None:
        """Should derive a stable id from the token itself."""
        first = session_id_from_claims({}, "token-a")

        assert first == session_id_from_claims({}, "token-a")
        assert first != session_id_from_claims({}, "token-b")
        assert len(first) == 32
