"""
infrastructure.persistence.recipe_repo - recipes INSERT helper.

Insert-only; called on a connection the caller already holds.
"""

from __future__ import annotations

from datetime import datetime, timezone

import aiosqlite

from domain.entities import Recipe


async def insert_recipe(conn: aiosqlite.Connection, recipe: Recipe) -> int:
    """INSERT a recipe on an already-open connection; returns the new id."""
    created_at = recipe.created_at or datetime.now(timezone.utc).isoformat()
    cursor = await conn.execute(
        """INSERT INTO recipes
           (user_id, profile_id, name, intro, ingredients, method,
            effect, type, created_at, is_valid)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (recipe.user_id, recipe.profile_id, recipe.name, recipe.intro,
         recipe.ingredients, recipe.method, recipe.effect, recipe.type,
         created_at, recipe.is_valid),
    )
    return cursor.lastrowid
