"""Recipe repository.

Every read returns the recipe together with its author's display name and
its rating aggregate (average and count), both computed in SQL.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel

from recipe_rebel.database.repositories._base import PoolRepository
from recipe_rebel.observability.logging import get_logger
from recipe_rebel.schemas.enums import MealType, RecipeStatus


if TYPE_CHECKING:
    from asyncpg import Connection, Record

    from recipe_rebel.validation import RecipeForm

logger = get_logger(__name__)


# =============================================================================
# Data Transfer Objects
# =============================================================================


class RecipeRecord(BaseModel):
    """A stored recipe with its derived fields."""

    id: UUID
    title: str
    ingredients: list[str]
    steps: list[str]
    preparation_time: int
    meal_type: MealType | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    image_url: str | None = None
    author_id: UUID
    author_name: str | None = None
    status: RecipeStatus
    rating: float | None = None
    rating_count: int = 0
    created_at: datetime
    updated_at: datetime


class StatusCounts(BaseModel):
    """Number of recipes per moderation status."""

    total: int = 0
    approved: int = 0
    pending: int = 0
    rejected: int = 0


# =============================================================================
# SQL
# =============================================================================

_RECIPE_SELECT = """
    SELECT
        r.id, r.title, r.ingredients, r.steps, r.preparation_time, r.meal_type,
        r.calories, r.protein, r.carbs, r.fat, r.image_url, r.author_id,
        p.name AS author_name, r.status, r.created_at, r.updated_at,
        agg.rating, agg.rating_count
    FROM recipes r
    LEFT JOIN profiles p ON p.id = r.author_id
    LEFT JOIN LATERAL (
        SELECT AVG(rt.rating)::float8 AS rating, COUNT(*)::int AS rating_count
        FROM ratings rt
        WHERE rt.recipe_id = r.id
    ) agg ON TRUE
"""

# $1 search text (or NULL), $2 meal type (or NULL), $3 limit, $4 offset
_LIST_APPROVED = f"""
    {_RECIPE_SELECT}
    WHERE r.status = 'approved'
      AND (
        $1::text IS NULL
        OR r.title ILIKE '%' || $1 || '%'
        OR EXISTS (
            SELECT 1 FROM unnest(r.ingredients) AS ingredient
            WHERE ingredient ILIKE '%' || $1 || '%'
        )
      )
      AND ($2::text IS NULL OR r.meal_type = $2)
    ORDER BY r.created_at DESC, r.id
    LIMIT $3 OFFSET $4
"""

_INSERT = """
    INSERT INTO recipes (
        title, ingredients, steps, preparation_time, meal_type,
        calories, protein, carbs, fat, image_url, author_id, status
    )
    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, 'pending')
    RETURNING id
"""

# $11 image_url and $12 status keep the stored value when NULL
_UPDATE = """
    UPDATE recipes SET
        title = $2,
        ingredients = $3,
        steps = $4,
        preparation_time = $5,
        meal_type = $6,
        calories = $7,
        protein = $8,
        carbs = $9,
        fat = $10,
        image_url = COALESCE($11, image_url),
        status = COALESCE($12, status),
        updated_at = now()
    WHERE id = $1
    RETURNING id
"""

_COUNT_BY_STATUS = """
    SELECT
        COUNT(*)::int AS total,
        COUNT(*) FILTER (WHERE status = 'approved')::int AS approved,
        COUNT(*) FILTER (WHERE status = 'pending')::int AS pending,
        COUNT(*) FILTER (WHERE status = 'rejected')::int AS rejected
    FROM recipes
"""


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user text is matched literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# =============================================================================
# Repository
# =============================================================================


class RecipeRepository(PoolRepository):
    """Data access for the ``recipes`` table."""

    @staticmethod
    def _to_record(row: Record) -> RecipeRecord:
        return RecipeRecord.model_validate(dict(row))

    async def _fetch_one(self, conn: Connection, recipe_id: UUID) -> RecipeRecord | None:
        row = await conn.fetchrow(f"{_RECIPE_SELECT} WHERE r.id = $1", recipe_id)
        return self._to_record(row) if row is not None else None

    async def get_by_id(self, recipe_id: UUID) -> RecipeRecord | None:
        """Get a recipe regardless of its status."""
        async with self.pool.acquire() as conn:
            return await self._fetch_one(conn, recipe_id)

    async def list_approved(
        self,
        *,
        query: str | None = None,
        meal_type: MealType | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[RecipeRecord]:
        """List approved recipes, newest first.

        Args:
            query: Case-insensitive text matched against the title or any
                ingredient.
            meal_type: Exact meal category filter.
            limit: Page size.
            offset: Number of recipes to skip.
        """
        search = escape_like(query) if query else None
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                _LIST_APPROVED,
                search,
                meal_type.value if meal_type else None,
                limit,
                offset,
            )
        return [self._to_record(row) for row in rows]

    async def list_by_author(self, author_id: UUID) -> list[RecipeRecord]:
        """List all recipes of an author in every status, newest first."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"{_RECIPE_SELECT} WHERE r.author_id = $1 "
                "ORDER BY r.created_at DESC, r.id",
                author_id,
            )
        return [self._to_record(row) for row in rows]

    async def list_by_status(
        self,
        status: RecipeStatus,
        *,
        oldest_first: bool = False,
    ) -> list[RecipeRecord]:
        """List recipes in one moderation status."""
        direction = "ASC" if oldest_first else "DESC"
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"{_RECIPE_SELECT} WHERE r.status = $1 "
                f"ORDER BY r.created_at {direction}, r.id",
                status.value,
            )
        return [self._to_record(row) for row in rows]

    async def list_favorites(self, user_id: UUID) -> list[RecipeRecord]:
        """List approved recipes a user has favorited, most recently favorited first."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"{_RECIPE_SELECT} JOIN favorites f ON f.recipe_id = r.id "
                "WHERE f.user_id = $1 AND r.status = 'approved' "
                "ORDER BY f.created_at DESC, r.id",
                user_id,
            )
        return [self._to_record(row) for row in rows]

    async def count_by_status(self) -> StatusCounts:
        """Count recipes per moderation status."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(_COUNT_BY_STATUS)
        return StatusCounts.model_validate(dict(row)) if row else StatusCounts()

    async def create(
        self,
        author_id: UUID,
        form: RecipeForm,
        image_url: str | None = None,
    ) -> RecipeRecord:
        """Insert a new recipe. The stored status is always ``pending``."""
        async with self.pool.acquire() as conn:
            recipe_id = await conn.fetchval(
                _INSERT,
                form.title,
                form.ingredients,
                form.steps,
                form.preparation_time,
                form.meal_type.value if form.meal_type else None,
                form.calories,
                form.protein,
                form.carbs,
                form.fat,
                image_url,
                author_id,
            )
            record = await self._fetch_one(conn, recipe_id)

        if record is None:
            msg = f"Recipe {recipe_id} vanished right after insert"
            raise RuntimeError(msg)
        logger.info("Recipe created", recipe_id=str(recipe_id), author_id=str(author_id))
        return record

    async def update(
        self,
        recipe_id: UUID,
        form: RecipeForm,
        *,
        image_url: str | None = None,
        status: RecipeStatus | None = None,
    ) -> RecipeRecord | None:
        """Overwrite the editable fields of a recipe.

        ``image_url`` and ``status`` are only changed when given.

        Returns:
            The updated recipe, or None if it does not exist.
        """
        async with self.pool.acquire() as conn:
            updated_id = await conn.fetchval(
                _UPDATE,
                recipe_id,
                form.title,
                form.ingredients,
                form.steps,
                form.preparation_time,
                form.meal_type.value if form.meal_type else None,
                form.calories,
                form.protein,
                form.carbs,
                form.fat,
                image_url,
                status.value if status else None,
            )
            if updated_id is None:
                return None
            return await self._fetch_one(conn, recipe_id)

    async def set_status(self, recipe_id: UUID, status: RecipeStatus) -> bool:
        """Set the moderation status; returns False if the recipe does not exist."""
        async with self.pool.acquire() as conn:
            updated_id = await conn.fetchval(
                "UPDATE recipes SET status = $2, updated_at = now() "
                "WHERE id = $1 RETURNING id",
                recipe_id,
                status.value,
            )
        return updated_id is not None

    async def delete(self, recipe_id: UUID) -> bool:
        """Delete a recipe with its ratings, comments and favorites."""
        async with self.pool.acquire() as conn:
            deleted_id = await conn.fetchval(
                "DELETE FROM recipes WHERE id = $1 RETURNING id",
                recipe_id,
            )
        return deleted_id is not None
