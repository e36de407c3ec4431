"""
domain.entities - Persistence-aware types (have IDs, timestamps).

Decoupled from any persistence strategy: no SQL concerns, no DB imports.
Timestamps and identities are set by the repository implementations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Recipe.type value for a medicinal diet recommendation.
RECIPE_TYPE_MEDICINAL_DIET = 0


@dataclass
class User:
    """Login account."""
    id: Optional[int] = None
    nickname: str = ""
    password: str = ""  # bcrypt hash
    status: int = 1  # 1 = active, 0 = disabled
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == 1


@dataclass
class HealthProfile:
    """One health questionnaire submission.

    symptoms and diseases are JSON-encoded string arrays, e.g. '["insomnia"]'.
    blood_pressure / blood_sugar: -1 = low, 0 = normal, 1 = high.
    """
    id: Optional[int] = None
    user_id: Optional[int] = None
    age: int = 0  # 0 = not provided
    gender: Optional[int] = None  # 1 = male
    blood_pressure: Optional[int] = None
    blood_sugar: Optional[int] = None
    symptoms: str = ""
    diseases: str = ""
    created_at: str = ""


@dataclass
class Recipe:
    """A persisted medicinal diet recommendation."""
    id: Optional[int] = None
    user_id: Optional[int] = None
    profile_id: Optional[int] = None
    name: str = ""
    intro: str = ""
    ingredients: str = ""
    method: str = ""
    effect: str = ""
    type: int = RECIPE_TYPE_MEDICINAL_DIET
    created_at: str = ""
    is_valid: int = 1
