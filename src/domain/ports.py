"""
domain.ports - Abstract interfaces (Protocols) for all system boundaries.

These define WHAT the system needs without specifying HOW. Infrastructure
modules provide concrete implementations. Application services depend only
on these protocols, never on concrete classes.

Using typing.Protocol (structural typing) instead of ABC. Any class that
implements the methods satisfies the port without explicit inheritance.
Tests rely on this to swap in a deterministic LLM stub.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from domain.models import LLMMessage, SamplingParams
from domain.entities import User, HealthProfile, Recipe


# ---------------------------------------------------------------------------
# AI Component Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class LLMGatewayPort(Protocol):
    """Send role-tagged messages to a language model and return its text reply.

    Fails with LLMGatewayError on timeout, transport error or non-success status.
    """

    async def complete(
        self,
        messages: list[LLMMessage],
        params: SamplingParams,
    ) -> str: ...


# ---------------------------------------------------------------------------
# Repository Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class UserRepository(Protocol):
    """Lookup and creation of login accounts."""

    async def get_by_nickname(self, nickname: str) -> User | None: ...
    async def save(self, user: User) -> int: ...


@runtime_checkable
class RecommendationRepository(Protocol):
    """Persist a profile together with the recipe generated from it.

    Both rows are written in one transaction; returns (profile_id, recipe_id).
    """

    async def save(
        self, profile: HealthProfile, recipe: Recipe,
    ) -> tuple[int, int]: ...
