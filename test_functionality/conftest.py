"""
Shared fixtures.

The LLM provider is replaced by StubLLMGateway, which satisfies
LLMGatewayPort without any network access. Databases live in tmp_path.
"""

from __future__ import annotations

import asyncio
import json
import sqlite3
from pathlib import Path

import pytest

from domain.models import LLMMessage, SamplingParams
from domain.exceptions import LLMGatewayError
from infrastructure.config import Settings
from infrastructure.persistence.connection import AsyncSQLiteConnection
from infrastructure.persistence.migrations import run_migrations
from factory import ServiceFactory

VALID_REPLY = json.dumps({
    "name": "X",
    "ingredients": ["a"],
    "steps": ["s1", "s2"],
    "reason": "r",
})


class StubLLMGateway:
    """Deterministic LLMGatewayPort: returns a canned reply or raises."""

    def __init__(self, reply: str = VALID_REPLY, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[list[LLMMessage], SamplingParams]] = []

    async def complete(
        self,
        messages: list[LLMMessage],
        params: SamplingParams,
    ) -> str:
        self.calls.append((messages, params))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def stub_llm() -> StubLLMGateway:
    return StubLLMGateway()


@pytest.fixture
def rate_limited_llm() -> StubLLMGateway:
    return StubLLMGateway(error=LLMGatewayError(
        "LLM returned HTTP 429", status_code=429, body="rate limited",
    ))


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "test.db")


@pytest.fixture
def connection(db_path: str) -> AsyncSQLiteConnection:
    conn = AsyncSQLiteConnection(db_path)
    asyncio.run(run_migrations(conn))
    return conn


@pytest.fixture
def settings(tmp_path: Path, db_path: str) -> Settings:
    return Settings(
        project_root=tmp_path,
        llm_api_url="https://llm.example.test/v1/chat/completions",
        llm_api_key="sk-test-secret",
        db_path=db_path,
        jwt_secret="test-secret",
    )


@pytest.fixture
def factory(settings: Settings, stub_llm: StubLLMGateway) -> ServiceFactory:
    f = ServiceFactory(settings, llm_gateway=stub_llm)
    asyncio.run(f.initialize())
    return f


@pytest.fixture
def make_llm():
    """Build a StubLLMGateway with a custom reply or error."""
    return StubLLMGateway


@pytest.fixture
def count_rows(db_path: str):
    def _count(table: str) -> int:
        with sqlite3.connect(db_path) as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    return _count
