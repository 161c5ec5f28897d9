"""Abstract base class for vector-store service providers.

Defines the contract for storing embedded chunks under a namespace and
running top-K similarity queries against it.  Implementations may wrap
ChromaDB, Pinecone, Qdrant, or any other vector database.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from docqa.models.document import Chunk
from docqa.models.rag import RetrievalMatch


# Concrete implementation: ChromaDBProvider (docqa/providers/vector_store/)
# Each namespace maps to one ChromaDB collection; data persists to
# CHROMADB_PERSIST_DIR when set, otherwise lives in process memory.
class IVectorStoreProvider(ABC):
    """Contract for vector-store services used by the pipeline.

    A namespace scopes the vectors of one document-processing run.  Queries
    only ever search a single namespace.
    """

    @abstractmethod
    async def upsert(
        self,
        namespace: str,
        chunks: list[Chunk],
        vectors: list[list[float]],
    ) -> int:
        """Store pre-embedded chunks under *namespace*.

        Parameters
        ----------
        namespace:
            Target namespace; created on first write.
        chunks:
            The chunks to store.  ``chunk.index`` and the chunk's source
            document are recorded as metadata.
        vectors:
            Embedding vectors corresponding positionally to *chunks*.

        Returns
        -------
        int
            The number of records written.

        Raises
        ------
        ValueError
            If ``len(chunks) != len(vectors)``.
        docqa.utils.errors.VectorStoreError
            If the store operation fails.
        """

    @abstractmethod
    async def query(
        self,
        namespace: str,
        query_vector: list[float],
        top_k: int = 5,
    ) -> list[RetrievalMatch]:
        """Return the *top_k* stored chunks most similar to *query_vector*.

        Parameters
        ----------
        namespace:
            Namespace to search.
        query_vector:
            Embedding of the question.
        top_k:
            Maximum number of matches to return.  Must be at least 1.

        Returns
        -------
        list[RetrievalMatch]
            Zero or more matches ordered by descending similarity score.

        Raises
        ------
        docqa.utils.errors.ConfigurationError
            If *top_k* is less than 1.
        docqa.utils.errors.RetrievalError
            If the namespace does not exist or the query fails.
        """

    @abstractmethod
    async def delete_namespace(self, namespace: str) -> bool:
        """Drop every record under *namespace*.

        Returns
        -------
        bool
            ``True`` if the namespace existed and was removed.
        """

    @abstractmethod
    async def count(self, namespace: str) -> int:
        """Return the number of records stored under *namespace* (0 if absent)."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this vector-store provider."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the store is reachable."""
