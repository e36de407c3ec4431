"""
domain.models - Value objects for the recommendation pipeline.

Immutable data containers with no business logic and no dependencies on
infrastructure (no requests, no SQLite).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class UserHealthInfo:
    """Natural-language view of a HealthProfile, ready for the prompt.

    Lives only for the duration of one recommendation request.
    """
    symptom: str
    gender: str
    age: int = 0  # 0 = not provided
    other_conditions: str = ""


@dataclass(frozen=True)
class GeneratedRecipe:
    """Recipe as returned by the LLM, before it is persisted."""
    name: str
    ingredients: list[str] = field(default_factory=list)
    steps: list[str] = field(default_factory=list)
    reason: str = ""
    taboo: Optional[str] = None
    suitable_time: Optional[str] = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LLMMessage:
    """A single role-tagged chat message sent to the LLM provider."""
    role: str  # "system", "user" or "assistant"
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class SamplingParams:
    """Model selection and sampling settings for one completion call."""
    model: str = "deepseek-chat"
    temperature: float = 0.5
    max_tokens: int = 1500
