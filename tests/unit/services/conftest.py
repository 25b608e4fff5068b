"""Service unit test fixtures: repository and storage doubles."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from recipe_rebel.database.repositories import RatingSummary, StatusCounts
from recipe_rebel.storage import StoredImage


pytestmark = pytest.mark.unit


@pytest.fixture
def recipes_repo() -> AsyncMock:
    """Recipe repository double."""
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.list_by_status = AsyncMock(return_value=[])
    repo.count_by_status = AsyncMock(return_value=StatusCounts())
    return repo


@pytest.fixture
def comments_repo() -> AsyncMock:
    """Comment repository double."""
    repo = AsyncMock()
    repo.list_for_recipe = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def ratings_repo() -> AsyncMock:
    """Rating repository double."""
    repo = AsyncMock()
    repo.get_user_rating = AsyncMock(return_value=None)
    repo.summary = AsyncMock(return_value=RatingSummary(average=None, count=0))
    return repo


@pytest.fixture
def favorites_repo() -> AsyncMock:
    """Favorite repository double."""
    repo = AsyncMock()
    repo.exists = AsyncMock(return_value=False)
    return repo


@pytest.fixture
def storage() -> MagicMock:
    """Image storage client double returning a public URL."""
    client = MagicMock()
    client.upload_image = AsyncMock(
        return_value=StoredImage(
            key="user/1.jpg",
            public_url="http://storage/public/recipe-images/user/1.jpg",
        )
    )
    client.delete_object = AsyncMock()
    return client
