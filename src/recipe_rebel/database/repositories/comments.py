"""Comment repository."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from recipe_rebel.database.repositories._base import PoolRepository


class CommentRecord(BaseModel):
    """A stored comment with its author's display name."""

    id: UUID
    recipe_id: UUID
    user_id: UUID
    author_name: str | None = None
    text: str
    created_at: datetime


_INSERT = """
    WITH c AS (
        INSERT INTO comments (recipe_id, user_id, text)
        VALUES ($1, $2, $3)
        RETURNING id, recipe_id, user_id, text, created_at
    )
    SELECT c.*, p.name AS author_name
    FROM c
    LEFT JOIN profiles p ON p.id = c.user_id
"""

_LIST_FOR_RECIPE = """
    SELECT c.id, c.recipe_id, c.user_id, c.text, c.created_at, p.name AS author_name
    FROM comments c
    LEFT JOIN profiles p ON p.id = c.user_id
    WHERE c.recipe_id = $1
    ORDER BY c.created_at DESC, c.id DESC
"""


class CommentRepository(PoolRepository):
    """Data access for the ``comments`` table."""

    async def add(self, recipe_id: UUID, user_id: UUID, text: str) -> CommentRecord:
        """Append a comment to a recipe."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(_INSERT, recipe_id, user_id, text)
        return CommentRecord.model_validate(dict(row))

    async def list_for_recipe(self, recipe_id: UUID) -> list[CommentRecord]:
        """List comments of a recipe, newest first."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(_LIST_FOR_RECIPE, recipe_id)
        return [CommentRecord.model_validate(dict(row)) for row in rows]
