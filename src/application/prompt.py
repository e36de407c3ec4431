"""
application.prompt - Recipe prompt construction.

The instruction section of the template is static. User-derived values only
fill the four data slots, and each slot is neutralized first so it cannot
break out onto new instruction lines.
"""

from __future__ import annotations

import re

from domain.models import UserHealthInfo, LLMMessage
from application.locale import PromptLocale, ENGLISH

MAX_SLOT_LENGTH = 200

# Control characters (including CR/LF/TAB) and template-significant characters.
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f\u2028\u2029]+")
_STRIP_CHARS_RE = re.compile(r"[{}`]")
_SPACES_RE = re.compile(r" {2,}")


def neutralize_slot(value: str, max_length: int = MAX_SLOT_LENGTH) -> str:
    """Flatten a data slot to a single, bounded line of plain text."""
    text = _CONTROL_RE.sub(" ", value)
    text = _STRIP_CHARS_RE.sub("", text)
    text = _SPACES_RE.sub(" ", text).strip()
    return text[:max_length]


def build_recipe_prompt(
    info: UserHealthInfo,
    locale: PromptLocale = ENGLISH,
) -> str:
    """Render the recipe recommendation prompt for one user."""
    age = str(info.age) if info.age > 0 else locale.not_provided
    return locale.prompt_template.format(
        symptom=neutralize_slot(info.symptom) or locale.none,
        gender=neutralize_slot(info.gender),
        age=age,
        other_conditions=neutralize_slot(info.other_conditions) or locale.none,
    )


def build_recipe_messages(
    info: UserHealthInfo,
    locale: PromptLocale = ENGLISH,
) -> list[LLMMessage]:
    return [LLMMessage(role="user", content=build_recipe_prompt(info, locale))]
