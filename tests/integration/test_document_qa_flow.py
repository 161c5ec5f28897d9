"""Integration tests for the full document question-answering flow.

Documents are served by an ``httpx.MockTransport`` behind the real
HttpDocumentSource.  Extraction, chunking, batching and ChromaDB storage
all run for real; only the embedder (deterministic hashing) and the LLM
(mock) stand in for remote services.
"""

from __future__ import annotations

import io

import docx
import fitz
import httpx
import pytest

from docqa.models.document import DocumentType
from docqa.models.pipeline import INLINE_ERROR_PREFIX
from docqa.pipeline.orchestrator import DocumentQAPipeline
from docqa.providers.cache.memory_cache import MemoryCacheProvider
from docqa.providers.document_source.http_document_source import HttpDocumentSource
from docqa.services.answer_synthesizer import AnswerSynthesizer
from docqa.services.chunker import TextChunker
from docqa.services.embedding_batcher import EmbeddingBatcher
from docqa.services.text_extractor import TextExtractor
from docqa.utils.errors import FetchError, LLMError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_BASE = "https://docs.example.com"


def _pdf_bytes(text: str) -> bytes:
    doc = fitz.open()
    for line in text.splitlines():
        page = doc.new_page()
        page.insert_textbox(fitz.Rect(72, 72, 540, 720), line, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


def _docx_bytes(text: str) -> bytes:
    document = docx.Document()
    for line in text.splitlines():
        document.add_paragraph(line)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class _DocumentServer(httpx.MockTransport):
    """Serves fixed documents by path and records every requested URL."""

    def __init__(self, documents: dict[str, bytes]) -> None:
        super().__init__(self._serve)
        self._documents = documents
        self.requests: list[str] = []

    def _serve(self, request: httpx.Request) -> httpx.Response:
        body = self._documents.get(request.url.path)
        if body is None:
            return httpx.Response(404)
        return httpx.Response(200, content=body)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(str(request.url))
        return await super().handle_async_request(request)


@pytest.fixture
def transport(policy_text: str) -> _DocumentServer:
    return _DocumentServer(
        {
            "/policy.txt": policy_text.encode("utf-8"),
            "/policy.pdf": _pdf_bytes(policy_text),
            "/policy.docx": _docx_bytes(policy_text),
        }
    )


@pytest.fixture
def pipeline(transport, embedding_provider, chroma_store, mock_llm) -> DocumentQAPipeline:
    return DocumentQAPipeline(
        document_source=HttpDocumentSource(http_client=httpx.AsyncClient(transport=transport)),
        extractor=TextExtractor(),
        chunker=TextChunker(chunk_size=160, overlap=30),
        batcher=EmbeddingBatcher(embedding_provider, batch_size=3),
        vector_store=chroma_store,
        synthesizer=AnswerSynthesizer(mock_llm),
        cache=MemoryCacheProvider(),
        top_k=3,
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestDocumentQAFlow:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("path", "doc_type"),
        [
            ("/policy.txt", DocumentType.TXT),
            ("/policy.pdf", DocumentType.PDF),
            ("/policy.docx", DocumentType.DOCX),
        ],
    )
    async def test_each_format_answers_from_its_own_text(
        self, pipeline, mock_llm, path: str, doc_type: DocumentType
    ) -> None:
        record = await pipeline.process_query(
            "How long is the grace period for premium payment?", f"{_BASE}{path}", doc_type
        )

        assert record.answer == "The grace period is thirty days."
        assert 1 <= len(record.relevant_sections) <= 3
        assert any("grace" in m.chunk_text.lower() for m in record.relevant_sections)
        prompt = mock_llm.complete.call_args.kwargs["user_prompt"]
        for match in record.relevant_sections:
            assert match.chunk_text in prompt

    @pytest.mark.asyncio
    async def test_embedding_calls_are_grouped(self, pipeline, embedding_provider) -> None:
        result = await pipeline.process_document(f"{_BASE}/policy.txt", DocumentType.TXT)

        document_calls = embedding_provider.calls
        assert sum(len(call) for call in document_calls) == result.chunks
        assert all(len(call) <= 3 for call in document_calls)

    @pytest.mark.asyncio
    async def test_batch_fetches_once_and_keeps_every_slot(
        self, pipeline, transport, mock_llm
    ) -> None:
        mock_llm.complete.side_effect = [
            "Thirty days.",
            LLMError(message="service unavailable", provider_name="openai"),
            "Thirty-six months.",
        ]
        url = f"{_BASE}/policy.txt"

        result = await pipeline.process_multiple_queries(
            ["grace period?", "maternity cover?", "pre-existing diseases?"], url, "txt"
        )

        assert transport.requests == [url]
        assert result.queries_processed == 3
        assert result.answers[0] == "Thirty days."
        assert result.answers[1].startswith(INLINE_ERROR_PREFIX)
        assert "service unavailable" in result.answers[1]
        assert result.answers[2] == "Thirty-six months."

    @pytest.mark.asyncio
    async def test_memo_reuses_namespace(self, pipeline, transport) -> None:
        url = f"{_BASE}/policy.docx"
        first = await pipeline.process_multiple_queries(["a"], url, DocumentType.DOCX)
        second = await pipeline.process_multiple_queries(["b"], url, DocumentType.DOCX)

        assert first.namespace == second.namespace
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_runs_do_not_share_vectors(self, pipeline, chroma_store) -> None:
        first = await pipeline.process_document(f"{_BASE}/policy.txt", DocumentType.TXT)
        second = await pipeline.process_document(f"{_BASE}/policy.txt", DocumentType.TXT)

        assert first.namespace != second.namespace
        assert await chroma_store.count(first.namespace) == first.stored
        assert await chroma_store.count(second.namespace) == second.stored

    @pytest.mark.asyncio
    async def test_missing_document_is_fatal(self, pipeline, mock_llm) -> None:
        with pytest.raises(FetchError, match="HTTP 404"):
            await pipeline.process_multiple_queries(["q"], f"{_BASE}/absent.pdf", DocumentType.PDF)
        mock_llm.complete.assert_not_called()
