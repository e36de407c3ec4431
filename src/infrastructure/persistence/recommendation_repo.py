"""
infrastructure.persistence.recommendation_repo - Atomic profile + recipe insert.

Implements RecommendationRepository port. The profile row is only written
once a validated recipe exists, and both rows share one transaction, so a
failed LLM call never leaves an orphaned profile behind.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from domain.entities import HealthProfile, Recipe
from infrastructure.persistence.connection import AsyncSQLiteConnection
from infrastructure.persistence.health_profile_repo import insert_health_profile
from infrastructure.persistence.recipe_repo import insert_recipe

logger = logging.getLogger(__name__)


class SQLiteRecommendationRepository:
    """Async SQLite implementation of RecommendationRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(
        self, profile: HealthProfile, recipe: Recipe,
    ) -> tuple[int, int]:
        async with self._conn.acquire() as conn:
            profile_id = await insert_health_profile(conn, profile)
            recipe_id = await insert_recipe(
                conn, replace(recipe, profile_id=profile_id),
            )
        logger.info(
            "Saved profile %d and recipe %d for user %s",
            profile_id, recipe_id, profile.user_id,
        )
        return profile_id, recipe_id
