"""API test fixtures.

The application is built without running its lifespan: no database, Redis
or HTTP client is started. Authentication and services are replaced
through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException, status
from fastapi.testclient import TestClient

from recipe_rebel.api.dependencies import (
    get_assistant_client,
    get_engagement_service,
    get_moderation_service,
    get_profile_service,
    get_recipe_service,
)
from recipe_rebel.auth.dependencies import get_current_user, get_current_user_optional
from recipe_rebel.cache.rate_limit import limiter
from recipe_rebel.factory import create_app


if TYPE_CHECKING:
    from collections.abc import Callable, Generator

    from fastapi import FastAPI

    from recipe_rebel.auth.dependencies import CurrentUser


pytestmark = pytest.mark.unit

API = "/api/v1"


@pytest.fixture
def app() -> Generator[FastAPI]:
    """Application with a clean rate limiter and no overrides."""
    limiter.reset()
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client that does not trigger the lifespan."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def login(app: FastAPI) -> Callable[[CurrentUser | None], None]:
    """Authenticate every request as the given user (None for anonymous)."""

    def _login(user: CurrentUser | None) -> None:
        async def _required() -> CurrentUser:
            if user is None:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail={"error": "UNAUTHORIZED", "message": "Not authenticated"},
                )
            return user

        async def _optional() -> CurrentUser | None:
            return user

        app.dependency_overrides[get_current_user] = _required
        app.dependency_overrides[get_current_user_optional] = _optional

    return _login


@pytest.fixture
def recipe_service(app: FastAPI) -> AsyncMock:
    """Recipe service double."""
    service = AsyncMock()
    app.dependency_overrides[get_recipe_service] = lambda: service
    return service


@pytest.fixture
def engagement_service(app: FastAPI) -> AsyncMock:
    """Engagement service double."""
    service = AsyncMock()
    app.dependency_overrides[get_engagement_service] = lambda: service
    return service


@pytest.fixture
def moderation_service(app: FastAPI) -> AsyncMock:
    """Moderation service double."""
    service = AsyncMock()
    app.dependency_overrides[get_moderation_service] = lambda: service
    return service


@pytest.fixture
def profile_service(app: FastAPI) -> AsyncMock:
    """Profile service double."""
    service = AsyncMock()
    app.dependency_overrides[get_profile_service] = lambda: service
    return service


@pytest.fixture
def assistant_client(app: FastAPI) -> MagicMock:
    """AI assistant client double."""
    client = MagicMock()
    client.chat = AsyncMock(return_value="Eat more greens.")
    app.dependency_overrides[get_assistant_client] = lambda: client
    return client
