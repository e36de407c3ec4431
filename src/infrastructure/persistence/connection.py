"""
infrastructure.persistence.connection - Async SQLite connection manager.

Each acquire() opens a short-lived aiosqlite connection, commits on success
and rolls back on any exception. SQLite errors leave this module as
RepositoryError so callers never depend on the driver's exception types.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import aiosqlite

from domain.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class AsyncSQLiteConnection:
    """Async SQLite connection provider with auto-commit/rollback."""

    def __init__(self, db_path: str):
        self._db_path = db_path

    @property
    def db_path(self) -> str:
        return self._db_path

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield an async SQLite connection with FK support.

        Commits on success, rolls back on exception.
        """
        try:
            async with aiosqlite.connect(self._db_path) as conn:
                await conn.execute("PRAGMA foreign_keys = ON")
                conn.row_factory = aiosqlite.Row
                try:
                    yield conn
                    await conn.commit()
                except Exception:
                    await conn.rollback()
                    logger.exception("Database operation failed, transaction rolled back.")
                    raise
        except (aiosqlite.Error, OverflowError) as exc:
            # OverflowError: an int outside SQLite's 64-bit INTEGER range
            raise RepositoryError(f"Database error: {exc}") from exc
