"""
application.recipe_parser - LLM reply → validated GeneratedRecipe.

The model is told to answer with JSON only, but replies sometimes carry
prose around the object. The payload is therefore taken from the first '{'
to the last '}'. Pure functions, no I/O.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from domain.models import GeneratedRecipe
from domain.exceptions import (
    NoJsonObjectError,
    MalformedJsonError,
    IncompleteRecipeError,
)

logger = logging.getLogger(__name__)

# Raw replies kept on exceptions are truncated to this many characters.
MAX_RAW_KEPT = 2000

REQUIRED_FIELDS = ("name", "ingredients", "steps", "reason")


def extract_json_object(raw: str) -> str:
    """Return the substring between the first '{' and the last '}'.

    Raises:
        NoJsonObjectError: If the reply is empty, or has no ordered brace pair.
    """
    kept = raw[:MAX_RAW_KEPT] if raw else ""
    if not raw or not raw.strip():
        raise NoJsonObjectError("LLM returned an empty reply.", kept)

    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or start >= end:
        raise NoJsonObjectError("LLM reply does not contain a JSON object.", kept)
    return raw[start:end + 1]


def parse_recipe_reply(raw: str) -> GeneratedRecipe:
    """Parse and validate an LLM reply.

    Raises:
        NoJsonObjectError:     no '{ ... }' in the reply.
        MalformedJsonError:    the extracted text is not a JSON object.
        IncompleteRecipeError: name / ingredients / steps / reason unusable.
    """
    payload_text = extract_json_object(raw)
    kept = raw[:MAX_RAW_KEPT]

    try:
        payload = json.loads(payload_text)
    except ValueError as exc:
        raise MalformedJsonError(f"LLM reply is not valid JSON: {exc}", kept) from exc
    if not isinstance(payload, dict):
        raise MalformedJsonError("LLM reply JSON is not an object.", kept)

    try:
        recipe = GeneratedRecipe(
            name=_required_text(payload, "name"),
            ingredients=_required_list(payload, "ingredients"),
            steps=_required_list(payload, "steps"),
            reason=_required_text(payload, "reason"),
            taboo=_optional_text(payload, "taboo"),
            suitable_time=_optional_text(payload, "suitableTime"),
            tags=_optional_list(payload, "tags"),
        )
        validate_recipe(recipe)
    except IncompleteRecipeError as exc:
        exc.raw_response = kept
        raise
    return recipe


def validate_recipe(recipe: GeneratedRecipe) -> None:
    """Check that every required field is present and non-empty.

    Raises:
        IncompleteRecipeError: naming the first offending field.
    """
    if not isinstance(recipe.name, str) or not recipe.name.strip():
        raise IncompleteRecipeError("name")
    if not _is_text_list(recipe.ingredients):
        raise IncompleteRecipeError("ingredients")
    if not _is_text_list(recipe.steps):
        raise IncompleteRecipeError("steps")
    if not isinstance(recipe.reason, str) or not recipe.reason.strip():
        raise IncompleteRecipeError("reason")


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _is_text_list(value: Any) -> bool:
    return (
        isinstance(value, list)
        and len(value) > 0
        and all(isinstance(v, str) and v.strip() for v in value)
    )


def _required_text(payload: dict, key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise IncompleteRecipeError(key, f"Recipe field '{key}' must be a string.")
    return value


def _required_list(payload: dict, key: str) -> list[str]:
    """Blank and non-string entries are dropped; the field fails only when none remain."""
    value = payload.get(key)
    if not isinstance(value, list):
        raise IncompleteRecipeError(key, f"Recipe field '{key}' must be an array of strings.")
    kept = [v for v in value if isinstance(v, str) and v.strip()]
    if len(kept) < len(value):
        logger.warning("Dropped %d blank entries from '%s'", len(value) - len(kept), key)
    if not kept:
        raise IncompleteRecipeError(key, f"Recipe field '{key}' has no non-blank entries.")
    return kept


def _optional_text(payload: dict, key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        logger.warning("Ignoring optional field '%s' of type %s", key, type(value).__name__)
        return None
    return value.strip() or None


def _optional_list(payload: dict, key: str) -> list[str]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning("Ignoring optional field '%s' of type %s", key, type(value).__name__)
        return []
    return [v.strip() for v in value if isinstance(v, str) and v.strip()]
