"""ChromaDB vector store provider adapter.

Implements :class:`IVectorStoreProvider` on top of ChromaDB.  Each
namespace is its own collection using cosine distance, so one document
run never sees another's vectors.  Uses ``chromadb.PersistentClient``
when a persist directory is configured and an in-process client otherwise.
"""

from __future__ import annotations

import os
import time
from datetime import datetime, timezone
from typing import Any

# ChromaDB reads this at import time; Settings(anonymized_telemetry=False)
# below covers versions that ignore the env var.
os.environ.setdefault("ANONYMIZED_TELEMETRY", "False")

import chromadb
import structlog
from chromadb.config import Settings as ChromaSettings
from chromadb.errors import ChromaError

from docqa.interfaces.vector_store_provider import IVectorStoreProvider
from docqa.models.document import Chunk
from docqa.models.rag import RetrievalMatch
from docqa.utils.errors import ConfigurationError, RetrievalError, VectorStoreError

logger = structlog.get_logger(logger_name=__name__)

# Raised by ChromaDB for a missing collection or an invalid collection name,
# depending on version.
_MISSING_COLLECTION_ERRORS = (ValueError, ChromaError)


class ChromaDBProvider(IVectorStoreProvider):
    """Vector store provider backed by ChromaDB.

    Embeddings are always computed outside the store and passed in
    explicitly, so collections are opened without an embedding function
    and ChromaDB never loads its default model.

    Parameters
    ----------
    persist_directory:
        Where ChromaDB keeps its files.  Empty string means in-process,
        non-persistent storage.
    upsert_batch_size:
        Records written per ChromaDB call.  Bounds the memory of one upsert.
    """

    def __init__(
        self,
        persist_directory: str = "",
        upsert_batch_size: int = 500,
    ) -> None:
        self._persist_directory = persist_directory
        self._upsert_batch_size = upsert_batch_size
        self._last_run_suffix = 0
        chroma_settings = ChromaSettings(anonymized_telemetry=False)
        if persist_directory:
            self._client = chromadb.PersistentClient(
                path=persist_directory,
                settings=chroma_settings,
            )
        else:
            self._client = chromadb.EphemeralClient(settings=chroma_settings)

    # ------------------------------------------------------------------
    # IVectorStoreProvider implementation
    # ------------------------------------------------------------------

    async def upsert(
        self,
        namespace: str,
        chunks: list[Chunk],
        vectors: list[list[float]],
    ) -> int:
        """Write pre-embedded chunks into the *namespace* collection.

        Record ids are ``{namespace}_{run_suffix}_{chunk.index}``.  The run
        suffix is taken once per call and strictly increases, so a second
        run into the same namespace adds records instead of overwriting.
        Writes are paginated in batches of ``upsert_batch_size``.
        """
        if len(chunks) != len(vectors):
            raise ValueError(
                f"chunks and vectors length mismatch: {len(chunks)} != {len(vectors)}"
            )
        if not chunks:
            return 0

        run_suffix = self._next_run_suffix()
        timestamp = datetime.now(tz=timezone.utc).isoformat()  # noqa: UP017

        try:
            collection = self._client.get_or_create_collection(
                name=namespace,
                metadata={"hnsw:space": "cosine"},
                embedding_function=None,
            )

            total_stored = 0
            for start in range(0, len(chunks), self._upsert_batch_size):
                end = min(start + self._upsert_batch_size, len(chunks))
                batch_chunks = chunks[start:end]

                collection.upsert(
                    ids=[f"{namespace}_{run_suffix}_{c.index}" for c in batch_chunks],
                    embeddings=vectors[start:end],
                    documents=[c.text for c in batch_chunks],
                    metadatas=[
                        self._chunk_to_metadata(c, timestamp, len(chunks)) for c in batch_chunks
                    ],
                )
                total_stored += len(batch_chunks)
        except Exception as exc:
            raise VectorStoreError(
                message=f"ChromaDB upsert into '{namespace}' failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info(
            "chromadb_upsert",
            namespace=namespace,
            count=total_stored,
            batches=(len(chunks) + self._upsert_batch_size - 1) // self._upsert_batch_size,
        )
        return total_stored

    async def query(
        self,
        namespace: str,
        query_vector: list[float],
        top_k: int = 5,
    ) -> list[RetrievalMatch]:
        """Return the *top_k* most similar chunks in *namespace*.

        Similarity is ``1 - cosine distance`` clamped to ``[0, 1]``.  No
        score threshold is applied.
        """
        if top_k < 1:
            raise ConfigurationError(message=f"top_k must be at least 1, got {top_k}")

        try:
            collection = self._client.get_collection(name=namespace, embedding_function=None)
        except _MISSING_COLLECTION_ERRORS as exc:
            raise RetrievalError(
                message=f"Namespace '{namespace}' does not exist",
                provider_name=self.get_provider_name(),
            ) from exc

        try:
            stored = collection.count()
            if stored == 0:
                return []

            results = collection.query(
                query_embeddings=[query_vector],
                n_results=min(top_k, stored),
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            raise RetrievalError(
                message=f"ChromaDB query on '{namespace}' failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not results["documents"] or not results["documents"][0]:
            return []

        documents = results["documents"][0]
        metadatas = results["metadatas"][0] if results["metadatas"] else [{}] * len(documents)
        distances = results["distances"][0] if results["distances"] else [1.0] * len(documents)

        matches = [
            RetrievalMatch(
                score=max(0.0, min(1.0, 1.0 - distance)),
                chunk_text=doc_text,
                chunk_index=int((meta or {}).get("chunk_index", 0)),
                source_document_url=str((meta or {}).get("document_url", "")),
            )
            for doc_text, meta, distance in zip(documents, metadatas, distances, strict=True)
        ]
        matches.sort(key=lambda m: m.score, reverse=True)
        matches = matches[:top_k]

        logger.info(
            "chromadb_query",
            namespace=namespace,
            results_count=len(matches),
            top_score=matches[0].score if matches else 0.0,
        )
        return matches

    async def delete_namespace(self, namespace: str) -> bool:
        """Drop the *namespace* collection; ``False`` if it did not exist."""
        try:
            self._client.delete_collection(name=namespace)
        except _MISSING_COLLECTION_ERRORS:
            return False
        except Exception as exc:
            raise VectorStoreError(
                message=f"ChromaDB delete of '{namespace}' failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info("chromadb_delete_namespace", namespace=namespace)
        return True

    async def count(self, namespace: str) -> int:
        """Return the number of records in *namespace* (0 when absent)."""
        try:
            collection = self._client.get_collection(name=namespace, embedding_function=None)
        except _MISSING_COLLECTION_ERRORS:
            return 0
        return collection.count()

    def get_provider_name(self) -> str:
        return "chromadb"

    def is_available(self) -> bool:
        """Return ``True`` if the ChromaDB client responds."""
        try:
            self._client.heartbeat()
            return True
        except Exception:  # noqa: BLE001
            return False

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _next_run_suffix(self) -> int:
        suffix = max(time.time_ns(), self._last_run_suffix + 1)
        self._last_run_suffix = suffix
        return suffix

    @staticmethod
    def _chunk_to_metadata(chunk: Chunk, timestamp: str, total_chunks: int) -> dict[str, Any]:
        """Convert a Chunk to a ChromaDB-compatible metadata dict.

        ChromaDB metadata values must be str, int, float, or bool.
        """
        source = chunk.source_document
        return {
            "chunk_index": chunk.index,
            "total_chunks": total_chunks,
            "document_url": source.url if source else "",
            "document_type": source.document_type.value if source else "",
            "timestamp": timestamp,
        }
