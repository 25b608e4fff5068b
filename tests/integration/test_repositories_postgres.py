"""Integration tests running the repository SQL against PostgreSQL.

Tests cover:
- Pool initialization and health check with a real server
- Visibility of pending recipes in listings and search
- Moderation queue order and status counts
- Single-statement favorite toggling and rating upserts
- Comment order and author names
- Cascading deletes
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any
from unittest.mock import patch
from uuid import UUID

import pytest

import recipe_rebel.database.connection as db_module
from recipe_rebel.core.config import Settings
from recipe_rebel.database import (
    check_database_health,
    close_database_pool,
    init_database_pool,
)
from recipe_rebel.database.repositories import (
    CommentRepository,
    FavoriteRepository,
    ProfileRepository,
    RatingRepository,
    RecipeRepository,
    UserRoleRepository,
)
from recipe_rebel.schemas.enums import MealType, RecipeStatus


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable

    import asyncpg

    from recipe_rebel.database.repositories import RecipeRecord
    from recipe_rebel.validation import RecipeForm


pytestmark = pytest.mark.integration

AUTHOR_ID = UUID("11111111-1111-1111-1111-111111111111")
READER_ID = UUID("22222222-2222-2222-2222-222222222222")
BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


async def _backdate(pool: asyncpg.Pool, recipe_id: UUID, minutes: int) -> None:
    """Pin created_at so ordering does not depend on insert timing."""
    async with pool.acquire() as conn:
        await conn.execute(
            "UPDATE recipes SET created_at = $2 WHERE id = $1",
            recipe_id,
            BASE_TIME + timedelta(minutes=minutes),
        )


async def _approved(
    recipes: RecipeRepository,
    form: RecipeForm,
) -> RecipeRecord:
    recipe = await recipes.create(AUTHOR_ID, form)
    await recipes.set_status(recipe.id, RecipeStatus.APPROVED)
    return recipe


class TestConnectionPool:
    """Tests for the global pool against a real server."""

    @pytest.fixture(autouse=True)
    async def reset_pool(self) -> AsyncGenerator[None]:
        db_module._pool = None
        yield
        await close_database_pool()

    async def test_init_and_health_check(
        self,
        postgres_config: dict[str, Any],
    ) -> None:
        """Should connect and report a healthy database."""
        settings = Settings(
            database={
                "host": postgres_config["host"],
                "port": postgres_config["port"],
                "name": postgres_config["database"],
                "user": postgres_config["user"],
                "min_pool_size": 1,
                "max_pool_size": 2,
            },
            DATABASE_PASSWORD=postgres_config["password"],
        )

        with patch("recipe_rebel.database.connection.get_settings", return_value=settings):
            await init_database_pool()

        assert await check_database_health() == {"database": "healthy"}


class TestRecipeVisibility:
    """Tests for listing and search visibility."""

    async def test_pending_is_never_listed(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should keep a new recipe out of listings and search until approved."""
        recipes = RecipeRepository(pool)
        recipe = await recipes.create(AUTHOR_ID, recipe_form())

        assert recipe.status == RecipeStatus.PENDING
        assert await recipes.list_approved() == []
        assert await recipes.list_approved(query="shakshuka") == []
        assert await recipes.list_approved(query="eggs") == []

        assert await recipes.set_status(recipe.id, RecipeStatus.APPROVED) is True

        listed = await recipes.list_approved()
        assert [r.id for r in listed] == [recipe.id]

    async def test_rejected_is_not_listed(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should hide rejected recipes."""
        recipes = RecipeRepository(pool)
        recipe = await recipes.create(AUTHOR_ID, recipe_form())
        await recipes.set_status(recipe.id, RecipeStatus.REJECTED)

        assert await recipes.list_approved() == []

    async def test_search_matches_title_or_ingredient(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should match the title or any ingredient, ignoring case."""
        recipes = RecipeRepository(pool)
        oats = await _approved(
            recipes, recipe_form(title="Overnight oats", ingredients=["Oats", "Milk"])
        )
        soup = await _approved(
            recipes, recipe_form(title="Tomato soup", ingredients=["Tomatoes", "MILK"])
        )

        assert [r.id for r in await recipes.list_approved(query="OVERNIGHT")] == [oats.id]
        found = {r.id for r in await recipes.list_approved(query="milk")}
        assert found == {oats.id, soup.id}

    async def test_search_wildcards_are_literal(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should treat % and _ in search text as plain characters."""
        recipes = RecipeRepository(pool)
        percent = await _approved(recipes, recipe_form(title="Cocoa 50% bars"))
        await _approved(recipes, recipe_form(title="Cocoa 500 bars"))

        assert [r.id for r in await recipes.list_approved(query="50%")] == [percent.id]
        assert await recipes.list_approved(query="5_%") == []

    async def test_meal_type_filter_and_order(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should filter by meal type and list newest first."""
        recipes = RecipeRepository(pool)
        older = await _approved(recipes, recipe_form(title="Old dinner", meal_type="dinner"))
        newer = await _approved(recipes, recipe_form(title="New dinner", meal_type="dinner"))
        await _approved(recipes, recipe_form(title="Lunch bowl", meal_type="lunch"))
        await _backdate(pool, older.id, 0)
        await _backdate(pool, newer.id, 10)

        dinners = await recipes.list_approved(meal_type=MealType.DINNER)

        assert [r.id for r in dinners] == [newer.id, older.id]


class TestModerationQueries:
    """Tests for the moderation queue and counts."""

    async def test_pending_queue_is_oldest_first(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should return pending recipes in submission order."""
        recipes = RecipeRepository(pool)
        first = await recipes.create(AUTHOR_ID, recipe_form(title="First"))
        second = await recipes.create(AUTHOR_ID, recipe_form(title="Second"))
        await _backdate(pool, first.id, 0)
        await _backdate(pool, second.id, 5)

        queue = await recipes.list_by_status(RecipeStatus.PENDING, oldest_first=True)

        assert [r.id for r in queue] == [first.id, second.id]

    async def test_count_by_status(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should count every status."""
        recipes = RecipeRepository(pool)
        await recipes.create(AUTHOR_ID, recipe_form())
        await _approved(recipes, recipe_form())
        rejected = await recipes.create(AUTHOR_ID, recipe_form())
        await recipes.set_status(rejected.id, RecipeStatus.REJECTED)

        counts = await recipes.count_by_status()

        assert (counts.total, counts.approved, counts.pending, counts.rejected) == (
            3,
            1,
            1,
            1,
        )

    async def test_set_status_of_unknown_recipe(self, pool: asyncpg.Pool) -> None:
        """Should report a missing recipe."""
        recipes = RecipeRepository(pool)
        missing = UUID("99999999-9999-9999-9999-999999999999")

        assert await recipes.set_status(missing, RecipeStatus.APPROVED) is False

    async def test_update_keeps_image_and_status(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should keep the stored image and status when none are given."""
        recipes = RecipeRepository(pool)
        recipe = await recipes.create(AUTHOR_ID, recipe_form(), "http://img/1.jpg")
        await recipes.set_status(recipe.id, RecipeStatus.APPROVED)

        updated = await recipes.update(recipe.id, recipe_form(title="Green shakshuka"))

        assert updated is not None
        assert updated.title == "Green shakshuka"
        assert updated.image_url == "http://img/1.jpg"
        assert updated.status == RecipeStatus.APPROVED


class TestEngagementQueries:
    """Tests for favorites, ratings and comments."""

    async def test_toggle_twice_restores_membership(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should flip membership on each toggle."""
        recipe = await _approved(RecipeRepository(pool), recipe_form())
        favorites = FavoriteRepository(pool)

        assert await favorites.toggle(recipe.id, READER_ID) is True
        assert await favorites.exists(recipe.id, READER_ID) is True
        assert await favorites.toggle(recipe.id, READER_ID) is False
        assert await favorites.exists(recipe.id, READER_ID) is False

    async def test_add_and_remove_are_idempotent(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should tolerate repeated adds and removes."""
        recipes = RecipeRepository(pool)
        recipe = await _approved(recipes, recipe_form())
        favorites = FavoriteRepository(pool)

        await favorites.add(recipe.id, READER_ID)
        await favorites.add(recipe.id, READER_ID)
        assert [r.id for r in await recipes.list_favorites(READER_ID)] == [recipe.id]

        await favorites.remove(recipe.id, READER_ID)
        await favorites.remove(recipe.id, READER_ID)
        assert await recipes.list_favorites(READER_ID) == []

    async def test_rating_twice_keeps_one_row(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should keep only the latest rating of a user."""
        recipes = RecipeRepository(pool)
        recipe = await _approved(recipes, recipe_form())
        ratings = RatingRepository(pool)

        await ratings.upsert(recipe.id, READER_ID, 2)
        await ratings.upsert(recipe.id, READER_ID, 5)

        summary = await ratings.summary(recipe.id)
        assert summary.count == 1
        assert summary.average == 5.0
        assert await ratings.get_user_rating(recipe.id, READER_ID) == 5

        stored = await recipes.get_by_id(recipe.id)
        assert stored is not None
        assert (stored.rating, stored.rating_count) == (5.0, 1)

    async def test_comments_newest_first_with_names(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should list comments newest first with the author's name."""
        recipe = await _approved(RecipeRepository(pool), recipe_form())
        await ProfileRepository(pool).upsert_name(READER_ID, "Grace")
        comments = CommentRepository(pool)

        first = await comments.add(recipe.id, READER_ID, "first")
        second = await comments.add(recipe.id, READER_ID, "second")
        async with pool.acquire() as conn:
            await conn.execute(
                "UPDATE comments SET created_at = $2 WHERE id = $1",
                first.id,
                BASE_TIME,
            )

        listed = await comments.list_for_recipe(recipe.id)

        assert [c.id for c in listed] == [second.id, first.id]
        assert {c.author_name for c in listed} == {"Grace"}

    async def test_delete_cascades(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should remove ratings, comments and favorites with the recipe."""
        recipes = RecipeRepository(pool)
        recipe = await _approved(recipes, recipe_form())
        await RatingRepository(pool).upsert(recipe.id, READER_ID, 4)
        await CommentRepository(pool).add(recipe.id, READER_ID, "tasty")
        await FavoriteRepository(pool).add(recipe.id, READER_ID)

        assert await recipes.delete(recipe.id) is True

        async with pool.acquire() as conn:
            leftovers = await conn.fetchval(
                "SELECT (SELECT COUNT(*) FROM ratings) + (SELECT COUNT(*) FROM comments)"
                " + (SELECT COUNT(*) FROM favorites)"
            )
        assert leftovers == 0


class TestProfileQueries:
    """Tests for profiles and role assignments."""

    async def test_upsert_name_and_author_name(
        self,
        pool: asyncpg.Pool,
        recipe_form: Callable[..., RecipeForm],
    ) -> None:
        """Should rename in place and show the name on recipes."""
        profiles = ProfileRepository(pool)
        await profiles.upsert_name(AUTHOR_ID, "Ada")
        await profiles.upsert_name(AUTHOR_ID, "Ada L.")

        recipe = await RecipeRepository(pool).create(AUTHOR_ID, recipe_form())

        profile = await profiles.get(AUTHOR_ID)
        assert profile is not None
        assert profile.name == "Ada L."
        assert recipe.author_name == "Ada L."

    async def test_has_role(self, pool: asyncpg.Pool) -> None:
        """Should find only assigned roles."""
        async with pool.acquire() as conn:
            await conn.execute(
                "INSERT INTO user_roles (user_id, role) VALUES ($1, 'admin')",
                AUTHOR_ID,
            )
        roles = UserRoleRepository(pool)

        assert await roles.has_role(AUTHOR_ID, "admin") is True
        assert await roles.has_role(READER_ID, "admin") is False
