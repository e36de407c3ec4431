"""
application.health_info - HealthProfile → UserHealthInfo normalization.

Turns numeric codes and JSON-encoded tag lists into the natural-language
fields the prompt needs. Normalization never raises: bad tag data degrades
to sentinel text. Range checks live in validate_health_info().
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from domain.entities import HealthProfile
from domain.models import UserHealthInfo
from domain.exceptions import InvalidHealthProfileError
from application.locale import PromptLocale, ENGLISH

logger = logging.getLogger(__name__)

MALE_CODE = 1
HIGH_CODE = 1
MAX_AGE = 150
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


def describe_tags(raw: Optional[str], locale: PromptLocale = ENGLISH) -> str:
    """Render a JSON-encoded string array as delimited text.

    Empty input or an empty array gives the "none" sentinel; anything that is
    not a JSON array of strings gives the "malformed" sentinel.
    """
    if raw is None or not raw.strip():
        return locale.none
    try:
        tags = json.loads(raw)
    except ValueError:
        logger.warning("Could not decode tag list: %.200s", raw)
        return locale.malformed

    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        logger.warning("Tag list is not an array of strings: %.200s", raw)
        return locale.malformed

    tags = [t.strip() for t in tags if t.strip()]
    return locale.delimiter.join(tags) if tags else locale.none


def describe_other_conditions(
    profile: HealthProfile,
    locale: PromptLocale = ENGLISH,
) -> str:
    conditions: list[str] = []
    if profile.blood_pressure == HIGH_CODE:
        conditions.append(locale.high_blood_pressure)
    if profile.blood_sugar == HIGH_CODE:
        conditions.append(locale.high_blood_sugar)

    diseases = describe_tags(profile.diseases, locale)
    if diseases not in (locale.none, locale.malformed):
        conditions.append(diseases)

    return locale.delimiter.join(conditions) if conditions else locale.none


def gender_label(code: Optional[int], locale: PromptLocale = ENGLISH) -> str:
    # Any code other than 1 is treated as female; unknown codes are not rejected.
    return locale.male if code == MALE_CODE else locale.female


def normalize_profile(
    profile: HealthProfile,
    locale: PromptLocale = ENGLISH,
) -> UserHealthInfo:
    """Build the UserHealthInfo for a profile. Never raises."""
    return UserHealthInfo(
        symptom=describe_tags(profile.symptoms, locale),
        gender=gender_label(profile.gender, locale),
        age=profile.age or 0,
        other_conditions=describe_other_conditions(profile, locale),
    )


def validate_health_info(
    info: UserHealthInfo,
    locale: PromptLocale = ENGLISH,
) -> None:
    """Reject out-of-range ages and unknown gender labels.

    Raises:
        InvalidHealthProfileError: On the first violation found.
    """
    if info.age < 0 or info.age > MAX_AGE:
        raise InvalidHealthProfileError(
            f"Invalid age: {info.age} (expected 0-{MAX_AGE}, 0 = not provided)."
        )
    if info.gender not in locale.gender_labels:
        raise InvalidHealthProfileError(f"Invalid gender: {info.gender!r}.")


def validate_profile_codes(profile: HealthProfile) -> None:
    """Reject numeric codes that cannot be stored as SQLite INTEGERs.

    Gender stays lenient (any other code renders as female), but the raw
    value is persisted alongside the recipe.

    Raises:
        InvalidHealthProfileError: Naming the first out-of-range field.
    """
    for name in ("age", "gender", "blood_pressure", "blood_sugar"):
        value = getattr(profile, name)
        if value is not None and not SQLITE_INT_MIN <= value <= SQLITE_INT_MAX:
            raise InvalidHealthProfileError(f"Invalid {name}: value out of range.")
