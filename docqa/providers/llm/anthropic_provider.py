"""Anthropic LLM provider adapter.

Answers through the Claude Messages API.  The system prompt travels as its
own parameter and the reply is a list of content blocks, of which only the
text blocks make up the answer.
"""

from __future__ import annotations

import anthropic
import structlog

from docqa.config.settings import Settings
from docqa.interfaces.llm_provider import ILLMProvider
from docqa.utils.errors import LLMError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_MODEL = "claude-sonnet-4-20250514"
_REQUEST_TIMEOUT = 60.0


class AnthropicLLMProvider(ILLMProvider):
    """LLM provider backed by the Anthropic Claude API."""

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.anthropic_api_key
        self._model = settings.anthropic_model or _DEFAULT_MODEL
        self._client = anthropic.AsyncAnthropic(
            api_key=self._api_key,
            timeout=_REQUEST_TIMEOUT,
        )

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> str:
        try:
            response = await self._client.messages.create(
                model=self._model,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except anthropic.APIError as exc:
            raise LLMError(
                message=f"Anthropic request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        answer = self._answer_text(response)
        logger.info(
            "anthropic_completion",
            model=self._model,
            stop_reason=getattr(response, "stop_reason", None),
            output_chars=len(answer),
        )
        return answer

    def _answer_text(self, response: anthropic.types.Message) -> str:
        parts = [block.text for block in response.content if block.type == "text"]
        if not parts:
            raise LLMError(
                message="Anthropic returned no text content",
                provider_name=self.get_provider_name(),
            )
        return "\n".join(parts)

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def validate_credentials(self) -> bool:
        """List models to confirm the key is accepted, without inference cost."""
        if not self.is_available():
            return False
        try:
            await self._client.models.list(limit=1)
        except anthropic.APIError:
            return False
        return True

    def get_provider_name(self) -> str:
        return "anthropic"
