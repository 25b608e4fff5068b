"""Profile schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import Field

from recipe_rebel.schemas.base import APIRequest, APIResponse


if TYPE_CHECKING:
    from recipe_rebel.auth.permissions import Role
    from recipe_rebel.database.repositories import ProfileRecord


class ProfileUpdateRequest(APIRequest):
    """Body of ``PUT /me``; length rules are enforced by the validator."""

    name: str | None = Field(default=None, description="Display name")


class ProfileResponse(APIResponse):
    """The caller's profile and session role."""

    id: UUID
    name: str | None = None
    role: str = Field(..., description="Role of the current session")
    created_at: datetime | None = None

    @classmethod
    def build(
        cls,
        user_id: UUID,
        role: Role,
        profile: ProfileRecord | None,
    ) -> ProfileResponse:
        """Combine the stored profile (if any) with the session role."""
        return cls(
            id=user_id,
            name=profile.name if profile else None,
            role=role.value,
            created_at=profile.created_at if profile else None,
        )
