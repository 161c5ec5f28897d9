"""Retrieval and answer data models.

Defines the records that flow out of the vector store and the answer
synthesizer, plus the summary returned by a document-processing run.
All models are frozen pydantic v2 models.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from docqa.models.document import DocumentType


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)  # noqa: UP017


# ---------------------------------------------------------------------------
# RetrievalMatch — one similarity-search hit.
# ---------------------------------------------------------------------------
class RetrievalMatch(BaseModel):
    """A stored chunk returned by a top-K similarity query."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(
        ge=0.0,
        le=1.0,
        description="Cosine similarity between the query vector and the chunk.",
    )
    chunk_text: str = Field(description="Text of the matched chunk.")
    chunk_index: int = Field(ge=0, description="Index of the chunk within its run.")
    source_document_url: str = Field(
        default="",
        description="URL of the document the chunk came from.",
    )


# ---------------------------------------------------------------------------
# SynthesizedAnswer — the answer synthesizer's output.
# ---------------------------------------------------------------------------
class SynthesizedAnswer(BaseModel):
    """Model answer plus a locally computed retrieval summary.

    ``explanation`` reports how many matches fed the prompt and their score
    range.  It is bookkeeping, not the model's reasoning.
    """

    model_config = ConfigDict(frozen=True)

    answer: str
    explanation: str


# ---------------------------------------------------------------------------
# AnswerRecord — the terminal artifact of a single-query run.
# ---------------------------------------------------------------------------
class AnswerRecord(BaseModel):
    """Everything a caller gets back for one answered question."""

    model_config = ConfigDict(frozen=True)

    query: str
    answer: str
    explanation: str
    relevant_sections: list[RetrievalMatch] = Field(default_factory=list)
    document_url: str
    timestamp: datetime = Field(default_factory=_utcnow)


# ---------------------------------------------------------------------------
# DocumentProcessingResult — summary of one fetch→store run.
# ---------------------------------------------------------------------------
class DocumentProcessingResult(BaseModel):
    """Counts and identifiers produced by processing one document.

    ``namespace`` is where the run's vectors live; queries against this
    document must target it.
    """

    model_config = ConfigDict(frozen=True)

    success: bool = True
    chunks: int = Field(default=0, ge=0, description="Number of chunks produced.")
    embeddings: int = Field(default=0, ge=0, description="Number of vectors generated.")
    stored: int = Field(default=0, ge=0, description="Number of vectors upserted.")
    namespace: str
    document_url: str
    document_type: DocumentType
    timestamp: datetime = Field(default_factory=_utcnow)
