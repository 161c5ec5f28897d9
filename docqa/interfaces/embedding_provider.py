"""Abstract base class for text-embedding service providers.

Defines the contract for turning text into embedding vectors.
Implementations wrap OpenAI ``text-embedding-ada-002`` or Nomic
``nomic-embed-text`` served locally by Ollama.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations:
#   OpenAIEmbeddingProvider — text-embedding-ada-002 (requires API key)
#   NomicEmbeddingProvider  — nomic-embed-text via Ollama (local)
# Located in: docqa/providers/embedding/
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services.

    Providers make one request per :meth:`embed` call.  Grouping texts into
    request-sized batches is the job of
    :class:`~docqa.services.embedding_batcher.EmbeddingBatcher`.
    """

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for a group of texts.

        Parameters
        ----------
        texts:
            One or more text strings to embed in a single request.

        Returns
        -------
        list[list[float]]
            Embedding vectors corresponding positionally to *texts*.

        Raises
        ------
        docqa.utils.errors.EmbeddingProviderError
            If the embedding API call fails.
        """

    @abstractmethod
    async def embed_single(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text string.

        Convenience wrapper around :meth:`embed` for the query path.
        """

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the dimensionality of the embedding vectors.

        Example values: ``1536`` (OpenAI ``text-embedding-ada-002``),
        ``768`` (Nomic ``nomic-embed-text``).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this embedding provider."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured.

        Implementations verify that credentials (if any) are present without
        generating an embedding.
        """
