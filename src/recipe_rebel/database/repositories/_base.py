"""Shared repository plumbing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_rebel.database.connection import get_database_pool


if TYPE_CHECKING:
    from asyncpg import Pool


class PoolRepository:
    """Repository bound to an explicit pool or, by default, the global one."""

    def __init__(self, pool: Pool | None = None) -> None:
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()
