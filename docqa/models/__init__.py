"""docqa domain models — re-exports all public model classes.

Other parts of the codebase import from ``docqa.models`` rather than the
individual submodules:
    - document.py — document types, references and chunks
    - rag.py      — retrieval matches, answers and processing summaries
    - pipeline.py — document-run and question-batch state
"""

from __future__ import annotations

from docqa.models.document import Chunk, DocumentReference, DocumentType
from docqa.models.pipeline import (
    INLINE_ERROR_PREFIX,
    BatchAnswerResult,
    DocumentRun,
    DocumentRunPhase,
    QueryOutcome,
    QueryPhase,
)
from docqa.models.rag import (
    AnswerRecord,
    DocumentProcessingResult,
    RetrievalMatch,
    SynthesizedAnswer,
)

__all__ = [
    "INLINE_ERROR_PREFIX",
    "AnswerRecord",
    "BatchAnswerResult",
    "Chunk",
    "DocumentProcessingResult",
    "DocumentReference",
    "DocumentRun",
    "DocumentRunPhase",
    "DocumentType",
    "QueryOutcome",
    "QueryPhase",
    "RetrievalMatch",
    "SynthesizedAnswer",
]
