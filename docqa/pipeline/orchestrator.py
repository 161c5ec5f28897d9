"""Central orchestrator for the document question-answering pipeline.

Sequences the write path (fetch, extract, chunk, embed, store) and the read
path (embed the question, retrieve, synthesize) over injected collaborators.
The orchestrator owns no clients of its own; every dependency arrives
through the constructor, so tests can swap any of them for a mock.

Document run state is a frozen :class:`DocumentRun` advanced through
:class:`DocumentRunPhase` via ``model_copy``.  A batch of questions is a
fold: each question becomes one :class:`QueryOutcome`, and a failure in one
question is recorded in its slot without stopping the others.
"""

from __future__ import annotations

import time
import uuid

import structlog

from docqa.interfaces.cache_provider import ICacheProvider
from docqa.interfaces.document_source import IDocumentSource
from docqa.interfaces.vector_store_provider import IVectorStoreProvider
from docqa.models.document import DocumentReference, DocumentType
from docqa.models.pipeline import (
    BatchAnswerResult,
    DocumentRun,
    DocumentRunPhase,
    QueryOutcome,
    QueryPhase,
)
from docqa.models.rag import AnswerRecord, DocumentProcessingResult, RetrievalMatch
from docqa.services.answer_synthesizer import AnswerSynthesizer
from docqa.services.chunker import TextChunker
from docqa.services.embedding_batcher import EmbeddingBatcher
from docqa.services.text_extractor import TextExtractor
from docqa.utils.errors import DocQAError, ErrorKind, ExtractionFailure
from docqa.utils.logging import get_logger


def new_namespace() -> str:
    """Return a fresh namespace: ``doc_<epoch millis>_<8 hex chars>``."""
    return f"doc_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


class DocumentQAPipeline:
    """Answers questions about documents fetched by URL.

    Parameters
    ----------
    document_source:
        Fetches raw document bytes.
    extractor:
        Turns bytes into text.
    chunker:
        Splits text into chunks.
    batcher:
        Embeds chunk texts and questions.
    vector_store:
        Stores chunk vectors per namespace and runs similarity queries.
    synthesizer:
        Writes the final answer from retrieved chunks.
    cache:
        Optional memo of processed documents keyed by type and URL.  When
        ``None``, every question re-processes its document.
    top_k:
        Number of chunks retrieved per question (default 5).
    """

    def __init__(
        self,
        document_source: IDocumentSource,
        extractor: TextExtractor,
        chunker: TextChunker,
        batcher: EmbeddingBatcher,
        vector_store: IVectorStoreProvider,
        synthesizer: AnswerSynthesizer,
        cache: ICacheProvider | None = None,
        top_k: int = 5,
    ) -> None:
        self._document_source = document_source
        self._extractor = extractor
        self._chunker = chunker
        self._batcher = batcher
        self._vector_store = vector_store
        self._synthesizer = synthesizer
        self._cache = cache
        self._top_k = top_k
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    async def process_document(
        self,
        document_url: str,
        document_type: DocumentType | str = DocumentType.PDF,
        namespace: str | None = None,
    ) -> DocumentProcessingResult:
        """Fetch, extract, chunk, embed and store one document.

        Always runs in full, and refreshes the processed-document memo
        when a cache is configured.

        Parameters
        ----------
        document_url:
            Where to fetch the document.
        document_type:
            Declared format: ``pdf``, ``docx`` or ``txt``.
        namespace:
            Target namespace.  A fresh one is generated when omitted.

        Returns
        -------
        DocumentProcessingResult
            Chunk, vector and stored-record counts plus the namespace.

        Raises
        ------
        UnsupportedTypeError
            If *document_type* is not supported.
        FetchError, ExtractionFailure, EmbeddingProviderError, VectorStoreError
            From the corresponding stage.  A document that yields no chunks
            raises :class:`ExtractionFailure`.
        """
        doc_type = DocumentType.parse(document_type)
        document = DocumentReference(url=document_url, document_type=doc_type)
        run = DocumentRun(document=document, namespace=namespace or new_namespace())
        self._log_phase(run)

        document_bytes = await self._document_source.fetch(document_url)

        run = self._advance(run, DocumentRunPhase.EXTRACTING)
        text = self._extractor.extract(document_bytes, doc_type)

        run = self._advance(run, DocumentRunPhase.CHUNKING)
        chunks = self._chunker.chunk(text, document)
        if not chunks:
            raise ExtractionFailure(
                message=f"No meaningful text could be extracted from {document_url}"
            )

        run = self._advance(run, DocumentRunPhase.EMBEDDING)
        vectors = await self._batcher.embed_batch([chunk.text for chunk in chunks])

        run = self._advance(run, DocumentRunPhase.STORING)
        stored = await self._vector_store.upsert(run.namespace, chunks, vectors)

        run = self._advance(run, DocumentRunPhase.READY)
        result = DocumentProcessingResult(
            success=True,
            chunks=len(chunks),
            embeddings=len(vectors),
            stored=stored,
            namespace=run.namespace,
            document_url=document_url,
            document_type=doc_type,
        )

        if self._cache is not None:
            await self._cache.set(self._memo_key(document), result.model_dump_json())

        self._logger.info(
            "document_processed",
            document_url=document_url,
            document_type=doc_type.value,
            namespace=run.namespace,
            chunks=result.chunks,
            stored=result.stored,
        )
        return result

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    async def search_chunks(
        self,
        query: str,
        namespace: str = "default",
        top_k: int | None = None,
    ) -> list[RetrievalMatch]:
        """Return the chunks in *namespace* most similar to *query*.

        Raises
        ------
        EmbeddingProviderError
            If the question cannot be embedded.
        RetrievalError
            If the namespace does not exist or the query fails.
        """
        self._logger.debug("query_phase", phase=QueryPhase.EMBEDDING_QUERY.value)
        query_vector = await self._batcher.embed_one(query)

        self._logger.debug("query_phase", phase=QueryPhase.RETRIEVING.value)
        matches = await self._vector_store.query(
            namespace, query_vector, top_k if top_k is not None else self._top_k
        )
        self._logger.info(
            "chunks_retrieved",
            query=query[:80],
            namespace=namespace,
            results=len(matches),
        )
        return matches

    async def process_query(
        self,
        query: str,
        document_url: str,
        document_type: DocumentType | str = DocumentType.PDF,
    ) -> AnswerRecord:
        """Answer one question about the document at *document_url*.

        The document is processed first unless a memoized run exists.

        Raises
        ------
        DocQAError
            Any failure from document processing, retrieval or synthesis.
        """
        processed = await self._ensure_document(document_url, document_type)
        return await self._answer(query, processed)

    async def process_multiple_queries(
        self,
        queries: list[str],
        document_url: str,
        document_type: DocumentType | str = DocumentType.PDF,
    ) -> BatchAnswerResult:
        """Answer every question in *queries* against one document.

        The document is processed once.  Questions are answered in order;
        a failing question contributes ``"Error processing query: <message>"``
        to ``answers`` and the rest still run.

        Raises
        ------
        DocQAError
            If the document itself cannot be processed.
        """
        processed = await self._ensure_document(document_url, document_type)

        outcomes: list[QueryOutcome] = []
        for position, query in enumerate(queries):
            outcomes.append(await self._answer_outcome(query, position, processed))

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        self._logger.info(
            "batch_processed",
            document_url=document_url,
            namespace=processed.namespace,
            queries=len(queries),
            failed=failed,
        )
        return BatchAnswerResult(
            answers=[outcome.answer_text for outcome in outcomes],
            outcomes=outcomes,
            document_url=document_url,
            namespace=processed.namespace,
            queries_processed=len(outcomes),
        )

    async def aclose(self) -> None:
        """Close the document source's connections."""
        await self._document_source.aclose()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _answer(self, query: str, processed: DocumentProcessingResult) -> AnswerRecord:
        matches = await self.search_chunks(query, namespace=processed.namespace)

        self._logger.debug("query_phase", phase=QueryPhase.SYNTHESIZING.value)
        synthesized = await self._synthesizer.synthesize(query, matches)

        self._logger.debug("query_phase", phase=QueryPhase.DONE.value)
        return AnswerRecord(
            query=query,
            answer=synthesized.answer,
            explanation=synthesized.explanation,
            relevant_sections=matches,
            document_url=processed.document_url,
        )

    async def _answer_outcome(
        self, query: str, position: int, processed: DocumentProcessingResult
    ) -> QueryOutcome:
        """Answer one batch question, folding any failure into the outcome."""
        try:
            record = await self._answer(query, processed)
        except DocQAError as exc:
            self._logger.warning(
                "query_failed",
                position=position,
                query=query[:80],
                kind=exc.kind.value,
                error=str(exc),
            )
            return QueryOutcome.failure(query, position, exc.kind, exc.message)
        except Exception as exc:  # noqa: BLE001
            self._logger.error(
                "query_failed",
                position=position,
                query=query[:80],
                kind=ErrorKind.UNEXPECTED.value,
                error=str(exc),
            )
            return QueryOutcome.failure(query, position, ErrorKind.UNEXPECTED, str(exc))
        return QueryOutcome.success(query, position, record)

    async def _ensure_document(
        self, document_url: str, document_type: DocumentType | str
    ) -> DocumentProcessingResult:
        """Return the memoized run for the document, processing it if needed."""
        doc_type = DocumentType.parse(document_type)
        if self._cache is not None:
            key = self._memo_key(DocumentReference(url=document_url, document_type=doc_type))
            cached = await self._cache.get(key)
            if cached is not None:
                result = DocumentProcessingResult.model_validate_json(cached)
                self._logger.debug(
                    "document_memo_hit",
                    document_url=document_url,
                    namespace=result.namespace,
                )
                return result
        return await self.process_document(document_url, doc_type)

    @staticmethod
    def _memo_key(document: DocumentReference) -> str:
        return f"document:{document.document_type.value}:{document.url}"

    def _advance(self, run: DocumentRun, phase: DocumentRunPhase) -> DocumentRun:
        run = run.advance(phase)
        self._log_phase(run)
        return run

    def _log_phase(self, run: DocumentRun) -> None:
        self._logger.debug(
            "document_phase",
            phase=run.phase.value,
            namespace=run.namespace,
            document_url=run.document.url,
        )
