"""
factory - Composition root for the medicinal diet assistant.

ALL dependency wiring happens here. No other module constructs its own
dependencies. Adapters (CLI, REST) call this factory to get fully
configured services.

Usage:
    from factory import ServiceFactory
    from infrastructure.config import Settings

    config = Settings.from_env()
    factory = ServiceFactory(config)
    await factory.initialize()  # one-time startup

    service = factory.create_recommendation_service()
    result = await service.recommend_and_save(ctx, profile)
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.ports import LLMGatewayPort
from infrastructure.config import Settings
from infrastructure.llm.chat_gateway import ChatCompletionGateway
from infrastructure.persistence.connection import AsyncSQLiteConnection
from infrastructure.persistence.migrations import run_migrations
from infrastructure.persistence.user_repo import SQLiteUserRepository
from infrastructure.persistence.recommendation_repo import SQLiteRecommendationRepository
from application.locale import PromptLocale, get_locale
from application.services.recommendation import RecommendationService
from application.services.authentication import AuthenticationService

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Composition root. Wires all dependencies together.

    Call initialize() once at startup, then create services as needed.
    An llm_gateway may be passed in to replace the HTTP client (tests).
    """

    def __init__(
        self,
        config: Settings,
        llm_gateway: Optional[LLMGatewayPort] = None,
    ):
        self._config = config
        self._connection = AsyncSQLiteConnection(config.db_path)
        self._locale: PromptLocale = get_locale(config.prompt_locale)
        self._llm_gateway = llm_gateway
        self._initialized = False

    @property
    def connection(self) -> AsyncSQLiteConnection:
        return self._connection

    async def initialize(self) -> None:
        """One-time startup: run migrations, validate and build the LLM client.

        Raises:
            ConfigurationError: If the LLM endpoint or key is missing.
        """
        logger.info("Initializing ServiceFactory...")

        await run_migrations(self._connection)
        logger.info("Database migrations complete")

        if self._llm_gateway is None:
            self._config.require_llm_credentials()
            self._llm_gateway = ChatCompletionGateway(
                api_url=self._config.llm_api_url,
                api_key=self._config.llm_api_key,
                timeout=self._config.llm_timeout_seconds,
            )
        logger.info(
            "LLM gateway ready (model=%s, locale=%s)",
            self._config.llm_model, self._locale.code,
        )

        self._initialized = True
        logger.info("ServiceFactory ready")

    # ------------------------------------------------------------------
    # Service creation
    # ------------------------------------------------------------------

    def create_recommendation_service(self) -> RecommendationService:
        """Create a RecommendationService with all dependencies wired."""
        self._ensure_initialized()
        return RecommendationService(
            llm_gateway=self._llm_gateway,
            recommendation_repo=SQLiteRecommendationRepository(self._connection),
            sampling_params=self._config.sampling_params,
            locale=self._locale,
            max_method_length=self._config.max_method_length,
        )

    def create_authentication_service(self) -> AuthenticationService:
        """Create an AuthenticationService. Needs migrations only, not initialize()."""
        return AuthenticationService(
            user_repo=SQLiteUserRepository(self._connection),
            jwt_secret=self._config.jwt_secret,
            jwt_expiry_hours=self._config.jwt_expiry_hours,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError(
                "ServiceFactory not initialized. Call await factory.initialize() first."
            )
