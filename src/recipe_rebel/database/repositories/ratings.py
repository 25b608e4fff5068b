"""Rating repository.

Ratings are keyed by ``(recipe_id, user_id)``; writing twice keeps a single
row holding the latest value.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from recipe_rebel.database.repositories._base import PoolRepository


class RatingSummary(BaseModel):
    """Aggregate rating of a recipe."""

    average: float | None = None
    count: int = 0


_UPSERT = """
    INSERT INTO ratings (recipe_id, user_id, rating)
    VALUES ($1, $2, $3)
    ON CONFLICT (recipe_id, user_id)
    DO UPDATE SET rating = EXCLUDED.rating, updated_at = now()
"""

_SUMMARY = """
    SELECT AVG(rating)::float8 AS average, COUNT(*)::int AS count
    FROM ratings
    WHERE recipe_id = $1
"""


class RatingRepository(PoolRepository):
    """Data access for the ``ratings`` table."""

    async def upsert(self, recipe_id: UUID, user_id: UUID, rating: int) -> None:
        """Insert or overwrite a user's rating of a recipe in one statement."""
        async with self.pool.acquire() as conn:
            await conn.execute(_UPSERT, recipe_id, user_id, rating)

    async def get_user_rating(self, recipe_id: UUID, user_id: UUID) -> int | None:
        """Return the user's rating of the recipe, if any."""
        async with self.pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT rating FROM ratings WHERE recipe_id = $1 AND user_id = $2",
                recipe_id,
                user_id,
            )

    async def summary(self, recipe_id: UUID) -> RatingSummary:
        """Average and number of ratings of a recipe."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(_SUMMARY, recipe_id)
        if row is None:
            return RatingSummary()
        return RatingSummary(average=row["average"], count=row["count"])
