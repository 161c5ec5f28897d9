"""Groups texts into fixed-size embedding requests.

The embedding provider makes one request per call; this service decides
how many texts go into each request and stitches the results back into a
single list in input order.
"""

from __future__ import annotations

from docqa.interfaces.embedding_provider import IEmbeddingProvider
from docqa.utils.errors import ConfigurationError, EmbeddingProviderError
from docqa.utils.logging import get_logger

logger = get_logger(__name__)


class EmbeddingBatcher:
    """Embeds texts in sequential groups of ``batch_size``.

    Parameters
    ----------
    provider:
        Embedding backend.
    batch_size:
        Texts per provider request (default 10).
    """

    def __init__(self, provider: IEmbeddingProvider, batch_size: int = 10) -> None:
        if batch_size < 1:
            raise ConfigurationError(message=f"batch_size must be at least 1, got {batch_size}")
        self._provider = provider
        self._batch_size = batch_size

    @property
    def provider(self) -> IEmbeddingProvider:
        return self._provider

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Return one vector per text, in the order of *texts*.

        Groups are sent one at a time.  A failing group, or a group that
        comes back with the wrong number of vectors, aborts the whole call.

        Raises
        ------
        EmbeddingProviderError
            If any group fails or returns a mismatched vector count.
        """
        if not texts:
            return []

        vectors: list[list[float]] = []
        for start in range(0, len(texts), self._batch_size):
            group = texts[start : start + self._batch_size]
            group_vectors = await self._embed_group(group, start)
            vectors.extend(group_vectors)

        logger.info(
            "embedding_batch",
            texts=len(texts),
            groups=(len(texts) + self._batch_size - 1) // self._batch_size,
            provider=self._provider.get_provider_name(),
        )
        return vectors

    async def embed_one(self, text: str) -> list[float]:
        """Return the vector for a single text (the query path)."""
        vectors = await self._embed_group([text], 0)
        return vectors[0]

    async def _embed_group(self, group: list[str], offset: int) -> list[list[float]]:
        try:
            group_vectors = await self._provider.embed(group)
        except EmbeddingProviderError:
            raise
        except Exception as exc:
            raise EmbeddingProviderError(
                message=f"Embedding group at offset {offset} failed: {exc}",
                provider_name=self._provider.get_provider_name(),
            ) from exc

        if len(group_vectors) != len(group):
            raise EmbeddingProviderError(
                message=(
                    f"Embedding group at offset {offset} returned "
                    f"{len(group_vectors)} vectors for {len(group)} texts"
                ),
                provider_name=self._provider.get_provider_name(),
            )
        return group_vectors
