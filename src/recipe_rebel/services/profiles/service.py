"""Profile service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_rebel.database.repositories import ProfileRecord, ProfileRepository
from recipe_rebel.observability.logging import get_logger
from recipe_rebel.validation import validate_display_name


if TYPE_CHECKING:
    from recipe_rebel.auth.dependencies import CurrentUser

logger = get_logger(__name__)


class ProfileService:
    """Read and update the caller's display name."""

    def __init__(self, profiles: ProfileRepository | None = None) -> None:
        self._profiles = profiles or ProfileRepository()

    async def get(self, user: CurrentUser) -> ProfileRecord | None:
        """The caller's profile, if one has been created."""
        return await self._profiles.get(user.id)

    async def rename(self, user: CurrentUser, name: str | None) -> ProfileRecord:
        """Set the display name shown next to recipes and comments."""
        profile = await self._profiles.upsert_name(user.id, validate_display_name(name))
        logger.info("Profile updated", user_id=str(user.id))
        return profile
