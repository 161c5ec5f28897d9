"""Pipeline state models for document runs and question batches.

A document run is tracked by a frozen :class:`DocumentRun`; each transition
produces a new instance via ``model_copy(update={...})`` so a snapshot taken
at any point is never partially mutated.

A batch of questions folds into one :class:`QueryOutcome` per question.
An outcome is either a success carrying an :class:`AnswerRecord` or a
failure carrying an :class:`ErrorKind` and message, so callers branch on
``outcome.ok`` and ``outcome.error_kind`` instead of parsing strings.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from docqa.models.document import DocumentReference
from docqa.models.rag import AnswerRecord
from docqa.utils.errors import ErrorKind

# Prefix of the inline answer string that stands in for a failed question.
INLINE_ERROR_PREFIX = "Error processing query: "


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)  # noqa: UP017


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------
class DocumentRunPhase(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Phases of a document-processing run, in order.

    FETCHING → EXTRACTING → CHUNKING → EMBEDDING → STORING → READY
    """

    FETCHING = "FETCHING"
    EXTRACTING = "EXTRACTING"
    CHUNKING = "CHUNKING"
    EMBEDDING = "EMBEDDING"
    STORING = "STORING"
    READY = "READY"


class QueryPhase(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Phases of answering one question against a READY document."""

    EMBEDDING_QUERY = "EMBEDDING_QUERY"
    RETRIEVING = "RETRIEVING"
    SYNTHESIZING = "SYNTHESIZING"
    DONE = "DONE"


# ---------------------------------------------------------------------------
# DocumentRun — state of one fetch→store run.
# ---------------------------------------------------------------------------
class DocumentRun(BaseModel):
    """Snapshot of a document-processing run."""

    model_config = ConfigDict(frozen=True)

    document: DocumentReference
    namespace: str
    phase: DocumentRunPhase = DocumentRunPhase.FETCHING
    started_at: datetime = Field(default_factory=_utcnow)

    def advance(self, phase: DocumentRunPhase) -> DocumentRun:
        """Return a copy of this run moved to *phase*."""
        return self.model_copy(update={"phase": phase})


# ---------------------------------------------------------------------------
# QueryOutcome — tagged success/failure for one question in a batch.
# ---------------------------------------------------------------------------
class QueryOutcome(BaseModel):
    """Result of one question: an answer record or an error kind."""

    model_config = ConfigDict(frozen=True)

    query: str
    position: int = Field(ge=0, description="Index of the question in the batch.")
    record: AnswerRecord | None = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def success(cls, query: str, position: int, record: AnswerRecord) -> QueryOutcome:
        return cls(query=query, position=position, record=record)

    @classmethod
    def failure(
        cls, query: str, position: int, kind: ErrorKind, message: str
    ) -> QueryOutcome:
        return cls(query=query, position=position, error_kind=kind, error_message=message)

    @property
    def ok(self) -> bool:
        return self.record is not None

    @property
    def answer_text(self) -> str:
        """The answer, or the inline error string for a failed question."""
        if self.record is not None:
            return self.record.answer
        return f"{INLINE_ERROR_PREFIX}{self.error_message}"


# ---------------------------------------------------------------------------
# BatchAnswerResult — one document, many questions.
# ---------------------------------------------------------------------------
class BatchAnswerResult(BaseModel):
    """Answers for a question batch, always one slot per question.

    ``answers[i]`` is the model answer for question *i* or an inline error
    string; ``outcomes[i]`` carries the structured result behind it.
    """

    model_config = ConfigDict(frozen=True)

    answers: list[str]
    outcomes: list[QueryOutcome] = Field(default_factory=list)
    document_url: str
    namespace: str
    queries_processed: int = Field(ge=0)
    timestamp: datetime = Field(default_factory=_utcnow)

    @property
    def failed(self) -> list[QueryOutcome]:
        return [o for o in self.outcomes if not o.ok]
