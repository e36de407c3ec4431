"""Pydantic models for REST API request/response validation."""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from application.health_info import SQLITE_INT_MIN, SQLITE_INT_MAX


# --- Auth ---

class RegisterBody(BaseModel):
    nickname: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)


class LoginBody(BaseModel):
    nickname: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    nickname: str


# --- Recommendations ---

class HealthProfileBody(BaseModel):
    """Health questionnaire. symptoms/diseases are JSON-encoded string arrays.

    A plain JSON array is accepted too and re-encoded. Age and gender are only
    bounded to what SQLite can store here; their real range checks happen in
    the service so they surface as domain errors.
    """
    model_config = ConfigDict(populate_by_name=True)

    age: Optional[int] = Field(0, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    gender: Optional[int] = Field(None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    blood_pressure: Optional[int] = Field(None, alias="bloodPressure", ge=-1, le=1)
    blood_sugar: Optional[int] = Field(None, alias="bloodSugar", ge=-1, le=1)
    symptoms: str = ""
    diseases: str = ""

    @field_validator("symptoms", "diseases", mode="before")
    @classmethod
    def _encode_tag_list(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, list):
            return json.dumps(value, ensure_ascii=False)
        return value


class RecipeOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int]
    name: str
    intro: str
    ingredients: str
    method: str
    effect: str
    type: int
    create_time: str = Field(..., alias="createTime")
    is_valid: int = Field(..., alias="isValid")
    taboo: Optional[str] = None
    suitable_time: Optional[str] = Field(None, alias="suitableTime")
    tags: list[str] = []


# --- Errors ---

class ErrorDetail(BaseModel):
    code: str
    message: str
    field: Optional[str] = None
    upstream_status: Optional[int] = None
