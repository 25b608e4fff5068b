"""Unit tests for roles and recipe ownership rules."""

from __future__ import annotations

from uuid import uuid4

import pytest

from recipe_rebel.auth.dependencies import CurrentUser
from recipe_rebel.auth.permissions import Role, can_manage_recipe


pytestmark = pytest.mark.unit


class TestCanManageRecipe:
    """Tests for can_manage_recipe."""

    def test_author_can_manage(self) -> None:
        """Should allow the author."""
        author_id = uuid4()
        assert can_manage_recipe(Role.USER, author_id, author_id) is True

    def test_other_user_cannot_manage(self) -> None:
        """Should refuse unrelated users."""
        assert can_manage_recipe(Role.USER, uuid4(), uuid4()) is False

    def test_admin_can_manage_any(self) -> None:
        """Should allow administrators regardless of authorship."""
        assert can_manage_recipe(Role.ADMIN, uuid4(), uuid4()) is True


class TestCurrentUser:
    """Tests for CurrentUser."""

    def test_defaults_to_user_role(self) -> None:
        """Should be an ordinary user unless resolved otherwise."""
        user = CurrentUser(id=uuid4(), session_id="s")

        assert user.role is Role.USER
        assert user.is_admin is False

    def test_can_manage_delegates_to_rule(self, admin: CurrentUser) -> None:
        """Should apply the ownership rule with the session role."""
        assert admin.is_admin is True
        assert admin.can_manage(uuid4()) is True
