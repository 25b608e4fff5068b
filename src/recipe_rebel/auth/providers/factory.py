"""Authentication provider factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_rebel.auth.providers.exceptions import ConfigurationError
from recipe_rebel.auth.providers.header import HeaderAuthProvider
from recipe_rebel.auth.providers.local_jwt import LocalJWTAuthProvider
from recipe_rebel.core.config import AuthMode, get_settings
from recipe_rebel.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_rebel.auth.providers.protocol import AuthProvider
    from recipe_rebel.core.config import Settings

logger = get_logger(__name__)

# Fixed development secret - safe for local dev, blocked in production
_DEV_JWT_SECRET = "insecure-dev-key-do-not-use-in-production"  # noqa: S105


def _get_jwt_secret(settings: Settings) -> str:
    """Get JWT secret, refusing the development fallback in production.

    Raises:
        ConfigurationError: If secret is not set in production.
    """
    if settings.JWT_SECRET_KEY:
        return settings.JWT_SECRET_KEY

    if settings.is_production:
        msg = "JWT_SECRET_KEY must be set in production for local_jwt auth mode"
        raise ConfigurationError(msg)

    logger.warning("Using insecure development JWT secret - do not use in production")
    return _DEV_JWT_SECRET


# Provider state container (avoids global statement for mutation)
_state: dict[str, AuthProvider | None] = {"provider": None}


def create_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create the provider selected by ``auth.mode``.

    Raises:
        ConfigurationError: If the mode is unknown or header mode is
            configured in production.
    """
    if settings is None:
        settings = get_settings()

    try:
        mode = settings.auth_mode_enum
    except ValueError as e:
        raise ConfigurationError(str(e)) from None

    logger.info("Creating auth provider", mode=mode.value)

    if mode == AuthMode.HEADER:
        if settings.is_production:
            msg = "Header authentication must not be used in production"
            raise ConfigurationError(msg)
        return HeaderAuthProvider(
            user_id_header=settings.auth.headers.user_id,
            session_id_header=settings.auth.headers.session_id,
        )

    return LocalJWTAuthProvider(
        secret_key=_get_jwt_secret(settings),
        algorithm=settings.auth.jwt_validation.algorithm,
        issuer=settings.auth.jwt_validation.issuer,
        audience=settings.auth.jwt_validation.audience,
    )


def get_auth_provider() -> AuthProvider:
    """Get the globally initialized provider.

    Raises:
        RuntimeError: If the provider has not been initialized.
    """
    provider = _state["provider"]
    if provider is None:
        msg = "Auth provider not initialized. Call set_auth_provider() during startup."
        raise RuntimeError(msg)
    return provider


def set_auth_provider(provider: AuthProvider | None) -> None:
    """Set (or clear, with None) the global auth provider instance."""
    _state["provider"] = provider
    if provider is not None:
        logger.info("Auth provider set", provider=provider.provider_name)


async def initialize_auth_provider() -> AuthProvider:
    """Create, initialize, and set the auth provider."""
    provider = create_auth_provider()
    await provider.initialize()
    set_auth_provider(provider)
    return provider


async def shutdown_auth_provider() -> None:
    """Shutdown the global auth provider and clear it."""
    provider = _state["provider"]
    if provider is not None:
        await provider.shutdown()
        _state["provider"] = None
        logger.info("Auth provider shutdown complete")
