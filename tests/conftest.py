"""Shared test fixtures and configuration for the Recipe Rebel service tests.

The environment is pinned to ``test`` before any application module is
imported: settings, the rate limiter and the auth provider are created at
import time and must pick up the test overrides (header auth, in-memory
rate limiting, metrics off).
"""

from __future__ import annotations

import os


os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only-32chars")

from datetime import UTC, datetime  # noqa: E402
from typing import TYPE_CHECKING  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import UUID, uuid4  # noqa: E402

import pytest  # noqa: E402

from recipe_rebel.auth.dependencies import CurrentUser  # noqa: E402
from recipe_rebel.auth.permissions import Role  # noqa: E402
from recipe_rebel.database.repositories import RecipeRecord  # noqa: E402
from recipe_rebel.schemas.enums import MealType, RecipeStatus  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Callable


AUTHOR_ID = UUID("11111111-1111-1111-1111-111111111111")
OTHER_USER_ID = UUID("22222222-2222-2222-2222-222222222222")
ADMIN_ID = UUID("33333333-3333-3333-3333-333333333333")


@pytest.fixture
def author() -> CurrentUser:
    """A regular user who authored the sample recipe."""
    return CurrentUser(id=AUTHOR_ID, session_id="session-author", role=Role.USER)


@pytest.fixture
def other_user() -> CurrentUser:
    """A regular user unrelated to the sample recipe."""
    return CurrentUser(id=OTHER_USER_ID, session_id="session-other", role=Role.USER)


@pytest.fixture
def admin() -> CurrentUser:
    """A session holding the administrator role."""
    return CurrentUser(id=ADMIN_ID, session_id="session-admin", role=Role.ADMIN)


@pytest.fixture
def make_recipe() -> Callable[..., RecipeRecord]:
    """Build stored recipes with sensible defaults."""

    def _make(**overrides: object) -> RecipeRecord:
        now = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
        values: dict[str, object] = {
            "id": uuid4(),
            "title": "Shakshuka",
            "ingredients": ["4 eggs", "1 can tomatoes", "1 onion"],
            "steps": ["Fry the onion", "Add tomatoes", "Crack in the eggs"],
            "preparation_time": 25,
            "meal_type": MealType.BREAKFAST,
            "calories": 320.0,
            "protein": 18.0,
            "carbs": 14.0,
            "fat": 20.0,
            "image_url": None,
            "author_id": AUTHOR_ID,
            "author_name": "Ada",
            "status": RecipeStatus.APPROVED,
            "rating": None,
            "rating_count": 0,
            "created_at": now,
            "updated_at": now,
        }
        values.update(overrides)
        return RecipeRecord.model_validate(values)

    return _make


@pytest.fixture
def mock_conn() -> AsyncMock:
    """An asyncpg connection double."""
    conn = AsyncMock()
    conn.fetchval = AsyncMock(return_value=None)
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetch = AsyncMock(return_value=[])
    conn.execute = AsyncMock(return_value="OK")
    return conn


@pytest.fixture
def mock_pool(mock_conn: AsyncMock) -> MagicMock:
    """Create a mock asyncpg pool handing out ``mock_conn``."""
    pool = MagicMock()
    pool.close = AsyncMock()

    pool.acquire = MagicMock(return_value=AsyncMock())
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=mock_conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)

    return pool
