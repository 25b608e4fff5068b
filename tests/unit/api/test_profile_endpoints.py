"""Unit tests for profile endpoints."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from recipe_rebel.database.repositories import ProfileRecord
from recipe_rebel.validation import FormValidationError


if TYPE_CHECKING:
    from collections.abc import Callable
    from unittest.mock import AsyncMock

    from fastapi.testclient import TestClient

    from recipe_rebel.auth.dependencies import CurrentUser


pytestmark = pytest.mark.unit

ME = "/api/v1/me"


class TestMe:
    """Tests for GET and PUT /me."""

    def test_profile_with_role(
        self,
        client: TestClient,
        login: Callable[[CurrentUser | None], None],
        admin: CurrentUser,
        profile_service: AsyncMock,
    ) -> None:
        """Should combine the stored name with the session role."""
        login(admin)
        profile_service.get.return_value = ProfileRecord(
            id=admin.id, name="Grace", created_at=datetime(2024, 1, 1, tzinfo=UTC)
        )

        response = client.get(ME)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(admin.id)
        assert body["name"] == "Grace"
        assert body["role"] == "admin"

    def test_profile_not_created_yet(
        self,
        client: TestClient,
        login: Callable[[CurrentUser | None], None],
        author: CurrentUser,
        profile_service: AsyncMock,
    ) -> None:
        """Should answer with a null name before one is set."""
        login(author)
        profile_service.get.return_value = None

        body = client.get(ME).json()

        assert body["name"] is None
        assert body["role"] == "user"

    def test_rename(
        self,
        client: TestClient,
        login: Callable[[CurrentUser | None], None],
        author: CurrentUser,
        profile_service: AsyncMock,
    ) -> None:
        """Should store and return the new display name."""
        login(author)
        profile_service.rename.return_value = ProfileRecord(
            id=author.id, name="Ada L.", created_at=datetime(2024, 1, 1, tzinfo=UTC)
        )

        response = client.put(ME, json={"name": "Ada L."})

        assert response.json()["name"] == "Ada L."
        profile_service.rename.assert_awaited_once_with(author, "Ada L.")

    def test_rename_blank(
        self,
        client: TestClient,
        login: Callable[[CurrentUser | None], None],
        author: CurrentUser,
        profile_service: AsyncMock,
    ) -> None:
        """Should answer 422 for blank names."""
        login(author)
        profile_service.rename.side_effect = FormValidationError(
            "Name cannot be empty", field="name"
        )

        assert client.put(ME, json={"name": ""}).status_code == 422
