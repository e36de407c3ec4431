"""
infrastructure.llm.chat_gateway - HTTP client for OpenAI-compatible chat completions.

Implements LLMGatewayPort with a single POST per call (DeepSeek by default).
Uses requests via run_in_executor for async compat. There is no retry: any
non-200 status, malformed envelope, transport error or timeout surfaces as
LLMGatewayError with the API key masked out of everything it carries.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import requests

from domain.models import LLMMessage, SamplingParams
from domain.exceptions import ConfigurationError, LLMGatewayError

logger = logging.getLogger(__name__)

API_KEY_MASK = "***API_KEY***"
MAX_BODY_IN_ERROR = 500


class ChatCompletionGateway:
    """Call a chat-completion endpoint and return the first choice's content.

    Implements LLMGatewayPort (structural typing, no explicit inheritance).
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 30.0,
    ):
        if not api_url or not api_url.strip():
            raise ConfigurationError("LLM API URL must not be empty.")
        if not api_key or not api_key.strip():
            raise ConfigurationError("LLM API key must not be empty.")
        self._api_url = api_url.strip()
        self._api_key = api_key.strip()
        self._timeout = timeout

    async def complete(
        self,
        messages: list[LLMMessage],
        params: SamplingParams,
    ) -> str:
        """Send the messages and return the assistant's text reply.

        Raises:
            LLMGatewayError: On timeout, transport error, non-200 status or an
                envelope without a usable first choice.
        """
        body = {
            "model": params.model,
            "messages": [m.to_dict() for m in messages],
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
        }
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self._call_service, body)

    def _call_service(self, body: dict[str, Any]) -> str:
        """Synchronous HTTP call to the provider (runs in thread pool)."""
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

        logger.info(
            "Calling LLM at %s (model=%s, max_tokens=%s)",
            self._api_url, body["model"], body["max_tokens"],
        )
        try:
            response = requests.post(
                self._api_url,
                json=body,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout:
            logger.error("LLM request timed out after %ss", self._timeout)
            raise LLMGatewayError(f"LLM request timed out after {self._timeout}s")
        except requests.exceptions.RequestException as e:
            message = self._mask(str(e))
            logger.error("LLM request failed: %s", message)
            raise LLMGatewayError(f"LLM request failed: {message}") from None

        if response.status_code != 200:
            masked = self._mask(response.text)[:MAX_BODY_IN_ERROR]
            logger.error(
                "LLM returned HTTP %d: %s", response.status_code, masked,
            )
            raise LLMGatewayError(
                f"LLM returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=masked,
            )

        content = self._extract_content(response)
        logger.info("LLM reply received (%d chars)", len(content))
        return content

    def _extract_content(self, response: requests.Response) -> str:
        masked = self._mask(response.text)[:MAX_BODY_IN_ERROR]
        try:
            envelope = response.json()
        except ValueError:
            raise LLMGatewayError(
                "LLM response body is not JSON",
                status_code=response.status_code,
                body=masked,
            )

        choices = envelope.get("choices") if isinstance(envelope, dict) else None
        if not isinstance(choices, list) or not choices:
            raise LLMGatewayError(
                "LLM returned no choices",
                status_code=response.status_code,
                body=masked,
            )

        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get("message") or {}
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise LLMGatewayError(
                "LLM choice has no message content",
                status_code=response.status_code,
                body=masked,
            )
        return content

    def _mask(self, text: Optional[str]) -> str:
        if not text:
            return ""
        return text.replace(self._api_key, API_KEY_MASK)
