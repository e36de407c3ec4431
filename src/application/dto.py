"""
application.dto - Data Transfer Objects for service input/output.

These are the structured results that services return to callers
(REST endpoints, CLI adapters).
"""

from __future__ import annotations

from dataclasses import dataclass

from domain.entities import HealthProfile, Recipe
from domain.models import GeneratedRecipe


@dataclass(frozen=True)
class RecommendationResult:
    """Outcome of one recommend-and-save run.

    profile and recipe carry the ids assigned by the store.
    """
    profile: HealthProfile
    recipe: Recipe
    generated: GeneratedRecipe


@dataclass(frozen=True)
class RegisterRequest:
    """Input for account creation."""
    nickname: str
    password: str


@dataclass(frozen=True)
class LoginRequest:
    """Input for user login."""
    nickname: str
    password: str


@dataclass(frozen=True)
class AuthToken:
    """JWT token response after successful register/login."""
    access_token: str
    token_type: str = "bearer"
    user_id: int = 0
    nickname: str = ""
