"""Favorite repository.

Membership changes are single statements, so concurrent requests of the same
user never interleave a read with a write.
"""

from __future__ import annotations

from uuid import UUID

from recipe_rebel.database.repositories._base import PoolRepository


# The row is deleted when present, otherwise inserted. Data-modifying CTEs
# always run, so ``added`` executes even though only ``removed`` is read.
_TOGGLE = """
    WITH removed AS (
        DELETE FROM favorites
        WHERE recipe_id = $1 AND user_id = $2
        RETURNING 1
    ), added AS (
        INSERT INTO favorites (recipe_id, user_id)
        SELECT $1, $2
        WHERE NOT EXISTS (SELECT 1 FROM removed)
        ON CONFLICT (recipe_id, user_id) DO NOTHING
        RETURNING 1
    )
    SELECT NOT EXISTS (SELECT 1 FROM removed) AS favorited
"""


class FavoriteRepository(PoolRepository):
    """Data access for the ``favorites`` table."""

    async def toggle(self, recipe_id: UUID, user_id: UUID) -> bool:
        """Flip membership and return whether the recipe is now a favorite."""
        async with self.pool.acquire() as conn:
            return bool(await conn.fetchval(_TOGGLE, recipe_id, user_id))

    async def add(self, recipe_id: UUID, user_id: UUID) -> None:
        """Mark as favorite; a no-op when already marked."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                "INSERT INTO favorites (recipe_id, user_id) VALUES ($1, $2) "
                "ON CONFLICT (recipe_id, user_id) DO NOTHING",
                recipe_id,
                user_id,
            )

    async def remove(self, recipe_id: UUID, user_id: UUID) -> None:
        """Unmark as favorite; a no-op when not marked."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                "DELETE FROM favorites WHERE recipe_id = $1 AND user_id = $2",
                recipe_id,
                user_id,
            )

    async def exists(self, recipe_id: UUID, user_id: UUID) -> bool:
        """Whether the user has favorited the recipe."""
        async with self.pool.acquire() as conn:
            return bool(
                await conn.fetchval(
                    "SELECT EXISTS (SELECT 1 FROM favorites "
                    "WHERE recipe_id = $1 AND user_id = $2)",
                    recipe_id,
                    user_id,
                )
            )
