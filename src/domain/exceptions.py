"""
domain.exceptions - Custom exception hierarchy for the medicinal diet assistant.

All domain-level errors inherit from DomainError so callers can catch
broad or specific exceptions as needed.
"""

from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for all domain-level errors."""


class ConfigurationError(DomainError):
    """Raised when required settings (LLM endpoint, API key) are missing."""


class InvalidHealthProfileError(DomainError):
    """Raised when a health profile fails validation before any remote call."""


class LLMGatewayError(DomainError):
    """Raised when the LLM provider call fails (HTTP status, transport, timeout).

    ``body`` is already redacted of the API key.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RecipeParseError(DomainError):
    """Raised when the LLM reply cannot be turned into a valid recipe."""

    code = "llm_reply_invalid"

    def __init__(self, message: str, raw_response: str = ""):
        super().__init__(message)
        self.raw_response = raw_response


class NoJsonObjectError(RecipeParseError):
    """The reply contains no ``{ ... }`` object."""

    code = "llm_reply_no_json"


class MalformedJsonError(RecipeParseError):
    """The extracted ``{ ... }`` substring is not a decodable JSON object."""

    code = "llm_reply_malformed_json"


class IncompleteRecipeError(RecipeParseError):
    """A required recipe field is missing, null, wrongly typed or empty."""

    code = "llm_reply_incomplete"

    def __init__(self, field: str, message: str = "", raw_response: str = ""):
        super().__init__(
            message or f"Recipe field '{field}' is missing or empty.",
            raw_response,
        )
        self.field = field


class RepositoryError(DomainError):
    """Raised when a database operation fails."""


class AuthenticationError(DomainError):
    """Raised when authentication fails (bad credentials, expired token)."""


class DuplicateLoginError(DomainError):
    """Raised when attempting to register with a nickname that already exists."""
