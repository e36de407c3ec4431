"""
infrastructure.persistence.health_profile_repo - health_profiles INSERT helper.

Insert-only; called on a connection the caller already holds so the
profile can share a transaction with its recipe.
"""

from __future__ import annotations

from datetime import datetime, timezone

import aiosqlite

from domain.entities import HealthProfile


async def insert_health_profile(
    conn: aiosqlite.Connection,
    profile: HealthProfile,
) -> int:
    """INSERT a profile on an already-open connection; returns the new id."""
    created_at = profile.created_at or datetime.now(timezone.utc).isoformat()
    cursor = await conn.execute(
        """INSERT INTO health_profiles
           (user_id, age, gender, blood_pressure, blood_sugar,
            symptoms, diseases, created_at)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
        (profile.user_id, profile.age, profile.gender, profile.blood_pressure,
         profile.blood_sugar, profile.symptoms, profile.diseases, created_at),
    )
    return cursor.lastrowid
