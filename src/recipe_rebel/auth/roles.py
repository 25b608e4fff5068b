"""Per-session role resolution.

The role of a user is looked up in ``user_roles`` the first time a session
is seen and cached in Redis under ``{prefix}{session_id}`` until the token
expires. Later requests of the same session reuse the cached role without
touching the database.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING
from uuid import UUID

from redis.exceptions import RedisError

from recipe_rebel.auth.permissions import Role
from recipe_rebel.cache.redis import get_cache_client_optional
from recipe_rebel.core.config import get_settings
from recipe_rebel.database.repositories.profiles import UserRoleRepository
from recipe_rebel.observability.logging import get_logger


if TYPE_CHECKING:
    from redis.asyncio import Redis

    from recipe_rebel.auth.providers.models import AuthResult

logger = get_logger(__name__)


class SessionRoleResolver:
    """Resolve and cache the role of an authenticated session.

    Without a Redis client the role is resolved from the database on every
    call; a Redis error is logged and treated the same way.
    """

    def __init__(
        self,
        repository: UserRoleRepository | None = None,
        cache: Redis | None = None,
        *,
        key_prefix: str | None = None,
        default_ttl: int | None = None,
    ) -> None:
        settings = get_settings()
        self._repository = repository or UserRoleRepository()
        self._cache = cache
        self._key_prefix = key_prefix or settings.auth.role_cache.key_prefix
        self._default_ttl = default_ttl or settings.auth.role_cache.default_ttl

    def cache_key(self, session_id: str) -> str:
        """Redis key holding the role of a session."""
        return f"{self._key_prefix}{session_id}"

    def ttl_for(self, auth: AuthResult, now: float | None = None) -> int:
        """Seconds the cached role stays valid: the remaining token lifetime."""
        if auth.expires_at is None:
            return self._default_ttl
        remaining = int(auth.expires_at - (now if now is not None else time.time()))
        return max(remaining, 1)

    async def resolve(self, auth: AuthResult, user_id: UUID) -> Role:
        """Return the session's role, querying ``user_roles`` at most once per session."""
        key = self.cache_key(auth.session_id)

        cached = await self._read(key)
        if cached is not None:
            return cached

        is_admin = await self._repository.has_role(user_id, Role.ADMIN.value)
        role = Role.ADMIN if is_admin else Role.USER
        logger.debug("Resolved session role", user_id=str(user_id), role=role.value)

        await self._write(key, role, self.ttl_for(auth))
        return role

    async def _read(self, key: str) -> Role | None:
        if self._cache is None:
            return None
        try:
            value = await self._cache.get(key)
        except RedisError as e:
            logger.warning("Session role cache unavailable", error=str(e))
            return None
        if value is None:
            return None
        try:
            return Role(value)
        except ValueError:
            logger.warning("Ignoring malformed cached role", key=key)
            return None

    async def _write(self, key: str, role: Role, ttl: int) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.set(key, role.value, ex=ttl)
        except RedisError as e:
            logger.warning("Failed to cache session role", error=str(e))


def get_role_resolver() -> SessionRoleResolver:
    """Resolver bound to the global Redis cache client, if Redis is running."""
    return SessionRoleResolver(cache=get_cache_client_optional())
