"""Ollama LLM provider adapter.

Talks to a local Ollama server through its OpenAI-compatible ``/v1``
endpoint, so it is the OpenAI adapter with a different client, model and
availability check.  Lets docqa answer questions fully offline.

Setup: install Ollama, ``ollama pull llama3.1``, and set
``OLLAMA_BASE_URL=http://localhost:11434``.
"""

from __future__ import annotations

import httpx
import openai

from docqa.config.settings import Settings
from docqa.providers.llm.openai_provider import OpenAILLMProvider


class OllamaLLMProvider(OpenAILLMProvider):
    """LLM provider backed by a local Ollama server (``llama3.1`` by default)."""

    def __init__(self, settings: Settings) -> None:
        self._base_url = settings.ollama_base_url.rstrip("/")
        super().__init__(settings)
        self._text_model = settings.ollama_text_model or "llama3.1"
        self._provider_label = "ollama"

    def _build_client(self, settings: Settings) -> openai.AsyncOpenAI:
        # Ollama ignores the key but the SDK requires a non-empty one.
        return openai.AsyncOpenAI(base_url=f"{self._base_url}/v1", api_key="ollama")

    def is_available(self) -> bool:
        """Return ``True`` if the Ollama base URL is configured."""
        return bool(self._base_url)

    async def validate_credentials(self) -> bool:
        """Check that the server answers on ``/api/tags`` (lists installed models)."""
        if not self.is_available():
            return False
        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.get(f"{self._base_url}/api/tags")
        except httpx.HTTPError:
            return False
        return response.status_code == 200
