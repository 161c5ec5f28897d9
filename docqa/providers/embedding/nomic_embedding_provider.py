"""Nomic embedding provider adapter (local/free via Ollama).

``nomic-embed-text`` served by Ollama's OpenAI-compatible ``/v1`` endpoint.
Produces 768-dimensional vectors and needs no API key.
"""

from __future__ import annotations

import httpx
import openai

from docqa.config.settings import Settings
from docqa.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider

_NOMIC_MODEL = "nomic-embed-text"
_NOMIC_DIMENSION = 768


class NomicEmbeddingProvider(OpenAIEmbeddingProvider):
    """Embedding provider backed by ``nomic-embed-text`` served via Ollama."""

    def __init__(self, settings: Settings) -> None:
        self._base_url = settings.ollama_base_url.rstrip("/")
        super().__init__(settings)
        self._model = _NOMIC_MODEL
        self._dimension = _NOMIC_DIMENSION
        self._provider_label = "nomic_embedding"

    def _build_client(self, settings: Settings) -> openai.AsyncOpenAI:
        return openai.AsyncOpenAI(base_url=f"{self._base_url}/v1", api_key="ollama")

    def is_available(self) -> bool:
        """Return ``True`` if the Ollama server answers on ``/api/tags``."""
        if not self._base_url:
            return False
        try:
            response = httpx.get(f"{self._base_url}/api/tags", timeout=3.0)
        except (httpx.ConnectError, httpx.TimeoutException):
            return False
        return response.status_code == 200
