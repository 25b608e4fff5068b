"""Profile and role-assignment repositories."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from recipe_rebel.database.repositories._base import PoolRepository


class ProfileRecord(BaseModel):
    """Public profile of a user."""

    id: UUID
    name: str | None = None
    created_at: datetime


_UPSERT_NAME = """
    INSERT INTO profiles (id, name)
    VALUES ($1, $2)
    ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name
    RETURNING id, name, created_at
"""


class ProfileRepository(PoolRepository):
    """Data access for the ``profiles`` table."""

    async def get(self, user_id: UUID) -> ProfileRecord | None:
        """Get a profile by user id."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT id, name, created_at FROM profiles WHERE id = $1",
                user_id,
            )
        return ProfileRecord.model_validate(dict(row)) if row else None

    async def upsert_name(self, user_id: UUID, name: str) -> ProfileRecord:
        """Create the profile or change its display name."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(_UPSERT_NAME, user_id, name)
        return ProfileRecord.model_validate(dict(row))


class UserRoleRepository(PoolRepository):
    """Data access for the ``user_roles`` table."""

    async def has_role(self, user_id: UUID, role: str) -> bool:
        """Whether the user holds the role."""
        async with self.pool.acquire() as conn:
            return bool(
                await conn.fetchval(
                    "SELECT EXISTS (SELECT 1 FROM user_roles "
                    "WHERE user_id = $1 AND role = $2)",
                    user_id,
                    role,
                )
            )
