"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass that can be constructed from environment or passed
explicitly. Read-only after startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from domain.exceptions import ConfigurationError
from domain.models import SamplingParams


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for the medicinal diet assistant.

    No module-level globals. Construct via from_env() or pass explicitly
    in tests.
    """
    project_root: Path

    # ── LLM provider (OpenAI-compatible chat completions) ───────
    llm_api_url: str = ""
    llm_api_key: str = ""
    llm_model: str = "deepseek-chat"
    # Lower than a general chat assistant; medical advice should be conservative.
    llm_temperature: float = 0.5
    llm_max_tokens: int = 1500
    llm_timeout_seconds: int = 30

    # ── Prompt / recipe mapping ─────────────────────────────────
    prompt_locale: str = "en"
    max_method_length: int = 500

    # Database
    db_path: str = "medicinal_diet.db"

    # JWT
    jwt_secret: str = "change-me-in-production"
    jwt_expiry_hours: int = 24

    log_level: str = "INFO"

    @property
    def sampling_params(self) -> SamplingParams:
        return SamplingParams(
            model=self.llm_model,
            temperature=self.llm_temperature,
            max_tokens=self.llm_max_tokens,
        )

    def require_llm_credentials(self) -> None:
        """Fail fast when the LLM endpoint or key is missing.

        Raises:
            ConfigurationError: If LLM_API_URL or LLM_API_KEY is empty.
        """
        if not self.llm_api_url.strip():
            raise ConfigurationError("LLM_API_URL is not set.")
        if not self.llm_api_key.strip():
            raise ConfigurationError("LLM_API_KEY is not set.")

    @classmethod
    def from_env(cls, project_root: Optional[Path] = None) -> Settings:
        """Build Settings from environment variables (and .env, if present)."""
        from dotenv import load_dotenv
        load_dotenv()

        root = project_root or Path(__file__).resolve().parent.parent.parent

        try:
            return cls(
                project_root=root,
                llm_api_url=os.getenv("LLM_API_URL", ""),
                llm_api_key=os.getenv("LLM_API_KEY", ""),
                llm_model=os.getenv("LLM_MODEL", "deepseek-chat"),
                llm_temperature=float(os.getenv("LLM_TEMPERATURE", "0.5")),
                llm_max_tokens=int(os.getenv("LLM_MAX_TOKENS", "1500")),
                llm_timeout_seconds=int(os.getenv("LLM_TIMEOUT_SECONDS", "30")),
                prompt_locale=os.getenv("PROMPT_LOCALE", "en"),
                max_method_length=int(os.getenv("MAX_METHOD_LENGTH", "500")),
                db_path=os.getenv("DB_PATH", "medicinal_diet.db"),
                jwt_secret=os.getenv("JWT_SECRET", "change-me-in-production"),
                jwt_expiry_hours=int(os.getenv("JWT_EXPIRY_HOURS", "24")),
                log_level=os.getenv("LOG_LEVEL", "INFO"),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc
