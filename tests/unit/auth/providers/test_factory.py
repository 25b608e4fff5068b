"""Unit tests for the auth provider factory."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest

from recipe_rebel.auth.providers import (
    ConfigurationError,
    HeaderAuthProvider,
    LocalJWTAuthProvider,
    create_auth_provider,
    get_auth_provider,
    set_auth_provider,
    shutdown_auth_provider,
)
from recipe_rebel.core.config import Settings


if TYPE_CHECKING:
    from collections.abc import Generator


pytestmark = pytest.mark.unit


def _settings(**kwargs: object) -> Settings:
    return Settings(**kwargs)  # type: ignore[arg-type]


@pytest.fixture(autouse=True)
def clear_provider() -> Generator[None]:
    """Keep the global provider isolated per test."""
    set_auth_provider(None)
    yield
    set_auth_provider(None)


class TestCreateAuthProvider:
    """Tests for create_auth_provider."""

    def test_header_mode(self) -> None:
        """Should build a header provider outside production."""
        settings = _settings(APP_ENV="test", auth={"mode": "header"})

        assert isinstance(create_auth_provider(settings), HeaderAuthProvider)

    def test_header_mode_refused_in_production(self) -> None:
        """Should never trust headers in production."""
        settings = _settings(
            APP_ENV="production",
            auth={"mode": "header"},
            JWT_SECRET_KEY="x" * 32,
        )

        with pytest.raises(ConfigurationError, match="production"):
            create_auth_provider(settings)

    def test_local_jwt_mode(self) -> None:
        """Should build a JWT provider with the configured secret."""
        settings = _settings(
            APP_ENV="test",
            auth={"mode": "local_jwt", "jwt_validation": {"audience": "authenticated"}},
            JWT_SECRET_KEY="configured-secret",
        )

        provider = create_auth_provider(settings)

        assert isinstance(provider, LocalJWTAuthProvider)
        assert provider.secret_key == "configured-secret"
        assert provider.audience == "authenticated"

    def test_local_jwt_requires_secret_in_production(self) -> None:
        """Should refuse the development secret in production."""
        settings = _settings(
            APP_ENV="production",
            auth={"mode": "local_jwt"},
            JWT_SECRET_KEY="",
        )

        with pytest.raises(ConfigurationError, match="JWT_SECRET_KEY"):
            create_auth_provider(settings)

    def test_unknown_mode(self) -> None:
        """Should reject unknown modes."""
        settings = _settings(APP_ENV="test", auth={"mode": "magic"})

        with pytest.raises(ConfigurationError, match="Invalid auth mode"):
            create_auth_provider(settings)


class TestGlobalProvider:
    """Tests for the global provider state."""

    def test_get_before_set(self) -> None:
        """Should raise until a provider is set."""
        with pytest.raises(RuntimeError, match="not initialized"):
            get_auth_provider()

    async def test_set_and_shutdown(self) -> None:
        """Should expose and then release the provider."""
        provider = MagicMock()
        provider.provider_name = "mock"
        provider.shutdown = AsyncMock()

        set_auth_provider(provider)
        assert get_auth_provider() is provider

        await shutdown_auth_provider()

        provider.shutdown.assert_awaited_once()
        with pytest.raises(RuntimeError):
            get_auth_provider()
