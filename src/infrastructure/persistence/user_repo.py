"""
infrastructure.persistence.user_repo - SQLite user repository.

Implements UserRepository port.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import aiosqlite

from domain.entities import User
from domain.exceptions import DuplicateLoginError
from infrastructure.persistence.connection import AsyncSQLiteConnection

logger = logging.getLogger(__name__)


class SQLiteUserRepository:
    """Async SQLite implementation of UserRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def get_by_nickname(self, nickname: str) -> Optional[User]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT id, nickname, password, status, created_at, updated_at
                   FROM users WHERE nickname = ?""",
                (nickname,),
            )
            return self._row_to_user(rows[0]) if rows else None

    async def save(self, user: User) -> int:
        now = datetime.now(timezone.utc).isoformat()
        async with self._conn.acquire() as conn:
            try:
                cursor = await conn.execute(
                    """INSERT INTO users (nickname, password, status, created_at, updated_at)
                       VALUES (?, ?, ?, ?, ?)""",
                    (user.nickname, user.password, user.status, now, now),
                )
            except aiosqlite.IntegrityError:
                # UNIQUE(nickname): a concurrent registration got there first
                raise DuplicateLoginError(
                    f"Nickname '{user.nickname}' is already taken."
                ) from None
            return cursor.lastrowid

    @staticmethod
    def _row_to_user(row) -> User:
        return User(
            id=row[0], nickname=row[1], password=row[2],
            status=row[3] if row[3] is not None else 1,
            created_at=row[4] or "", updated_at=row[5] or "",
        )
