"""Shared pytest fixtures for the docqa test suite."""

from __future__ import annotations

import hashlib
import math
import re
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from docqa.interfaces.document_source import IDocumentSource
from docqa.interfaces.embedding_provider import IEmbeddingProvider
from docqa.interfaces.llm_provider import ILLMProvider
from docqa.models.document import DocumentReference, DocumentType
from docqa.models.rag import RetrievalMatch
from docqa.providers.vector_store.chromadb_provider import ChromaDBProvider

# ---------------------------------------------------------------------------
# Sample content
# ---------------------------------------------------------------------------

POLICY_TEXT = (
    "Section 1. Coverage. The policy covers inpatient hospitalization expenses "
    "incurred during the policy period, subject to the sum insured.\n"
    "Section 2. Waiting period. Pre-existing diseases are covered only after "
    "thirty-six months of continuous coverage from the first policy inception.\n"
    "Section 3. Grace period. A grace period of thirty days is provided for "
    "premium payment after the due date to renew or continue the policy.\n"
    "Section 4. Maternity. Maternity expenses are covered after twenty-four "
    "months of continuous coverage, limited to two deliveries per policy term.\n"
    "Section 5. Exclusions. Cosmetic surgery, self-inflicted injuries and "
    "experimental treatments are excluded from all benefits under this policy.\n"
)


class HashingEmbeddingProvider(IEmbeddingProvider):
    """Deterministic bag-of-words embedder for tests.

    Each lowercased word is hashed into one of ``dimension`` buckets and the
    counts are L2-normalized, so identical texts get identical vectors and
    texts sharing words score higher than unrelated ones.
    """

    def __init__(self, dimension: int = 64) -> None:
        self._dimension = dimension
        self.calls: list[list[str]] = []

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._vector(text) for text in texts]

    async def embed_single(self, text: str) -> list[float]:
        return (await self.embed([text]))[0]

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return "hashing"

    def is_available(self) -> bool:
        return True

    def _vector(self, text: str) -> list[float]:
        buckets = [0.0] * self._dimension
        for word in re.findall(r"[a-z0-9]+", text.lower()):
            digest = hashlib.md5(word.encode("utf-8")).digest()  # noqa: S324
            buckets[int.from_bytes(digest[:4], "big") % self._dimension] += 1.0
        norm = math.sqrt(sum(v * v for v in buckets))
        if norm == 0:
            buckets[0] = 1.0
            return buckets
        return [v / norm for v in buckets]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def policy_text() -> str:
    return POLICY_TEXT


@pytest.fixture
def sample_document() -> DocumentReference:
    return DocumentReference(url="https://example.com/policy.txt", document_type=DocumentType.TXT)


@pytest.fixture
def embedding_provider() -> HashingEmbeddingProvider:
    return HashingEmbeddingProvider()


@pytest.fixture
def mock_llm() -> MagicMock:
    """An ILLMProvider mock whose completions return a fixed answer."""
    mock = MagicMock(spec=ILLMProvider)
    mock.complete = AsyncMock(return_value="The grace period is thirty days.")
    mock.get_provider_name.return_value = "mock-llm"
    mock.is_available.return_value = True
    mock.validate_credentials = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def mock_document_source(policy_text: str) -> MagicMock:
    """An IDocumentSource mock that always returns the sample policy as UTF-8."""
    mock = MagicMock(spec=IDocumentSource)
    mock.fetch = AsyncMock(return_value=policy_text.encode("utf-8"))
    mock.get_provider_name.return_value = "mock-source"
    return mock


@pytest.fixture
def chroma_store(tmp_path: Path) -> ChromaDBProvider:
    """A real ChromaDB store persisted under the test's temp directory."""
    return ChromaDBProvider(persist_directory=str(tmp_path / "chroma"))


@pytest.fixture
def sample_matches() -> list[RetrievalMatch]:
    return [
        RetrievalMatch(
            score=0.91,
            chunk_text="A grace period of thirty days is provided for premium payment.",
            chunk_index=2,
            source_document_url="https://example.com/policy.txt",
        ),
        RetrievalMatch(
            score=0.72,
            chunk_text="Pre-existing diseases are covered after thirty-six months.",
            chunk_index=1,
            source_document_url="https://example.com/policy.txt",
        ),
    ]
