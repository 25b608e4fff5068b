"""Unit tests for ProfileService."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import pytest

from recipe_rebel.database.repositories import ProfileRecord
from recipe_rebel.services.profiles import ProfileService
from recipe_rebel.validation import FormValidationError


if TYPE_CHECKING:
    from recipe_rebel.auth.dependencies import CurrentUser


pytestmark = pytest.mark.unit


class TestProfileService:
    """Tests for ProfileService."""

    async def test_rename_trims(self, author: CurrentUser) -> None:
        """Should store the trimmed display name."""
        repo = AsyncMock()
        repo.upsert_name.return_value = ProfileRecord(
            id=author.id, name="Ada", created_at=datetime(2024, 1, 1, tzinfo=UTC)
        )

        profile = await ProfileService(repo).rename(author, "  Ada ")

        repo.upsert_name.assert_awaited_once_with(author.id, "Ada")
        assert profile.name == "Ada"

    async def test_rename_rejects_blank(self, author: CurrentUser) -> None:
        """Should refuse an empty name."""
        repo = AsyncMock()

        with pytest.raises(FormValidationError):
            await ProfileService(repo).rename(author, "")

        repo.upsert_name.assert_not_called()

    async def test_get_missing(self, author: CurrentUser) -> None:
        """Should return None before a profile exists."""
        repo = AsyncMock()
        repo.get.return_value = None

        assert await ProfileService(repo).get(author) is None
