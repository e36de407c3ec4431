"""SQLite persistence: insert helpers and the atomic profile + recipe save."""

import asyncio
import sqlite3

import pytest

from domain.entities import HealthProfile, Recipe
from domain.exceptions import RepositoryError
from infrastructure.persistence.health_profile_repo import insert_health_profile
from infrastructure.persistence.recipe_repo import insert_recipe
from infrastructure.persistence.recommendation_repo import SQLiteRecommendationRepository
from infrastructure.persistence.migrations import run_migrations


def test_insert_helpers_share_one_connection(connection, count_rows):
    async def _insert():
        async with connection.acquire() as conn:
            profile_id = await insert_health_profile(
                conn, HealthProfile(age=30, gender=0, symptoms='["cough"]'),
            )
            recipe_id = await insert_recipe(
                conn, Recipe(name="Pear soup", profile_id=profile_id, method="Simmer"),
            )
        return profile_id, recipe_id

    profile_id, recipe_id = asyncio.run(_insert())
    assert profile_id > 0 and recipe_id > 0
    assert count_rows("health_profiles") == 1
    assert count_rows("recipes") == 1


def test_combined_save_links_recipe_to_profile(connection, db_path):
    repo = SQLiteRecommendationRepository(connection)
    profile_id, recipe_id = asyncio.run(repo.save(HealthProfile(age=50), Recipe(name="Congee")))

    with sqlite3.connect(db_path) as conn:
        stored = conn.execute("SELECT profile_id FROM recipes WHERE id = ?", (recipe_id,)).fetchone()[0]
    assert stored == profile_id


def test_failed_recipe_insert_rolls_back_profile(connection, count_rows):
    repo = SQLiteRecommendationRepository(connection)
    with pytest.raises(RepositoryError):
        asyncio.run(repo.save(HealthProfile(age=50), Recipe(name=None)))
    assert count_rows("health_profiles") == 0
    assert count_rows("recipes") == 0


def test_integer_too_large_for_sqlite_is_a_repository_error(connection, count_rows):
    repo = SQLiteRecommendationRepository(connection)
    with pytest.raises(RepositoryError):
        asyncio.run(repo.save(HealthProfile(gender=10 ** 20), Recipe(name="Congee")))
    assert count_rows("health_profiles") == 0


def test_unknown_user_violates_foreign_key(connection):
    repo = SQLiteRecommendationRepository(connection)
    with pytest.raises(RepositoryError):
        asyncio.run(repo.save(HealthProfile(user_id=999), Recipe(name="Congee")))


def test_migrations_are_idempotent(connection, count_rows):
    asyncio.run(run_migrations(connection))
    assert count_rows("users") == 0
