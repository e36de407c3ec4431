"""
application.services.recommendation - Medicinal diet recommendation pipeline.

Orchestrates one request end-to-end:
    1. Normalize the health profile into prompt-ready text
    2. Validate it (age range, gender label)
    3. Build the prompt
    4. Call the LLM (single attempt)
    5. Parse and validate the JSON reply
    6. Map it onto a persisted Recipe
    7. Save profile + recipe in one transaction

The profile is only written after step 5 succeeds, so a failed LLM call or
an unusable reply leaves nothing behind in the database.

All dependencies are injected via constructor. Stateless per call.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from domain.entities import HealthProfile, Recipe, RECIPE_TYPE_MEDICINAL_DIET
from domain.models import GeneratedRecipe, SamplingParams
from domain.ports import LLMGatewayPort, RecommendationRepository
from domain.exceptions import (
    InvalidHealthProfileError,
    LLMGatewayError,
    RecipeParseError,
)
from application.context import RequestContext
from application.dto import RecommendationResult
from application.locale import PromptLocale, ENGLISH
from application.health_info import (
    normalize_profile,
    validate_health_info,
    validate_profile_codes,
)
from application.prompt import build_recipe_messages
from application.recipe_parser import parse_recipe_reply

logger = logging.getLogger(__name__)

DEFAULT_MAX_METHOD_LENGTH = 500
TRUNCATION_MARKER = "..."
STEP_SEPARATOR = "\n"


def build_persisted_recipe(
    generated: GeneratedRecipe,
    *,
    user_id: Optional[int] = None,
    locale: PromptLocale = ENGLISH,
    max_method_length: int = DEFAULT_MAX_METHOD_LENGTH,
    now: Optional[datetime] = None,
) -> Recipe:
    """Map an accepted GeneratedRecipe onto the stored Recipe shape.

    Steps are joined with newlines; when the result is longer than
    max_method_length it is cut there and TRUNCATION_MARKER is appended.
    """
    method = STEP_SEPARATOR.join(generated.steps)
    if len(method) > max_method_length:
        method = method[:max_method_length] + TRUNCATION_MARKER

    created = now or datetime.now(timezone.utc)
    return Recipe(
        user_id=user_id,
        name=generated.name,
        intro=locale.recipe_intro,
        ingredients=locale.delimiter.join(generated.ingredients),
        method=method,
        effect=generated.reason,
        type=RECIPE_TYPE_MEDICINAL_DIET,
        created_at=created.isoformat(),
        is_valid=1,
    )


class RecommendationService:
    """Turns a health profile into a saved medicinal diet recipe."""

    def __init__(
        self,
        llm_gateway: LLMGatewayPort,
        recommendation_repo: RecommendationRepository,
        sampling_params: SamplingParams = SamplingParams(),
        locale: PromptLocale = ENGLISH,
        max_method_length: int = DEFAULT_MAX_METHOD_LENGTH,
    ):
        self._llm = llm_gateway
        self._repo = recommendation_repo
        self._params = sampling_params
        self._locale = locale
        self._max_method_length = max_method_length

    async def recommend_and_save(
        self,
        ctx: RequestContext,
        profile: HealthProfile,
    ) -> RecommendationResult:
        """Run the full pipeline for one profile submission.

        Raises:
            InvalidHealthProfileError: Profile rejected before any remote call.
            LLMGatewayError:           Provider call failed.
            RecipeParseError:          Reply unusable (subclass names the cause).
            RepositoryError:           Saving failed.
        """
        logger.info(
            "Recommendation requested by user %d (request=%s)",
            ctx.user_id, ctx.request_id,
        )
        now = datetime.now(timezone.utc)
        profile = replace(
            profile,
            user_id=profile.user_id if profile.user_id is not None else ctx.user_id,
            created_at=profile.created_at or now.isoformat(),
        )

        info = normalize_profile(profile, self._locale)
        try:
            validate_profile_codes(profile)
            validate_health_info(info, self._locale)
        except InvalidHealthProfileError as exc:
            logger.info("Profile rejected (request=%s): %s", ctx.request_id, exc)
            raise
        logger.debug("Normalized health info: %s", info)

        messages = build_recipe_messages(info, self._locale)

        try:
            reply = await self._llm.complete(messages, self._params)
        except LLMGatewayError as exc:
            logger.error(
                "LLM call failed (request=%s, status=%s): %s",
                ctx.request_id, exc.status_code, exc,
            )
            raise

        try:
            generated = parse_recipe_reply(reply)
        except RecipeParseError as exc:
            logger.error(
                "Unusable LLM reply (request=%s): %s. Raw reply: %.500s",
                ctx.request_id, exc, exc.raw_response,
            )
            raise

        recipe = build_persisted_recipe(
            generated,
            user_id=profile.user_id,
            locale=self._locale,
            max_method_length=self._max_method_length,
            now=now,
        )
        profile_id, recipe_id = await self._repo.save(profile, recipe)

        logger.info(
            "Recipe '%s' (id=%d) recommended for user %d (request=%s)",
            recipe.name, recipe_id, ctx.user_id, ctx.request_id,
        )
        return RecommendationResult(
            profile=replace(profile, id=profile_id),
            recipe=replace(recipe, id=recipe_id, profile_id=profile_id),
            generated=generated,
        )
