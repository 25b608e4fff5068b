"""Integration test fixtures.

Provides a real PostgreSQL via testcontainers with ``sql/schema.sql``
applied. Every test starts from empty tables.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import asyncpg
import pytest
from testcontainers.postgres import PostgresContainer

from recipe_rebel.validation import RecipeForm, validate_recipe_form


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Generator


pytestmark = pytest.mark.integration

SCHEMA_FILE = Path(__file__).resolve().parents[2] / "sql" / "schema.sql"


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def postgres_config(postgres_container: PostgresContainer) -> dict[str, Any]:
    """Connection parameters of the container database."""
    return {
        "host": postgres_container.get_container_host_ip(),
        "port": int(postgres_container.get_exposed_port(5432)),
        "user": postgres_container.username,
        "password": postgres_container.password,
        "database": postgres_container.dbname,
    }


@pytest.fixture
async def pool(postgres_config: dict[str, Any]) -> AsyncGenerator[asyncpg.Pool]:
    """A pool on a database holding the schema and no rows."""
    db_pool = await asyncpg.create_pool(min_size=1, max_size=4, **postgres_config)
    async with db_pool.acquire() as conn:
        await conn.execute(SCHEMA_FILE.read_text(encoding="utf-8"))
        await conn.execute(
            "TRUNCATE recipes, ratings, comments, favorites, profiles, user_roles"
        )
    try:
        yield db_pool
    finally:
        await db_pool.close()


@pytest.fixture
def recipe_form() -> Callable[..., RecipeForm]:
    """Build validated recipe forms with sensible defaults."""

    def _make(**overrides: Any) -> RecipeForm:
        values: dict[str, Any] = {
            "title": "Shakshuka",
            "ingredients": ["4 eggs", "1 can tomatoes"],
            "steps": ["Fry", "Simmer"],
            "preparation_time": 25,
            "meal_type": "breakfast",
        }
        values.update(overrides)
        return validate_recipe_form(values)

    return _make
