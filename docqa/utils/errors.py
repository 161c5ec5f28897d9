"""Custom exception hierarchy for docqa.

All application exceptions inherit from :class:`DocQAError`, which carries
an optional ``provider_name`` so error handlers can identify which external
service (e.g. "openai", "chromadb", "http") caused the failure.

The hierarchy follows the document-to-answer pipeline:

    DocQAError  (base -- catch-all for any docqa error)
    +-- ConfigurationError       (bad chunking parameters / missing credentials)
    +-- FetchError               (document download failed)
    +-- ExtractionFailure        (bytes could not be parsed as the declared type)
    +-- UnsupportedTypeError     (declared type outside pdf/docx/txt)
    +-- EmbeddingProviderError   (embedding call failed)
    +-- VectorStoreError         (vector-store write failed)
    |   +-- RetrievalError       (vector-store query failed / unknown namespace)
    +-- LLMError                 (completion call failed)
    +-- AnswerSynthesisError     (grounded answer could not be produced)

Every class exposes an :class:`ErrorKind` so callers can branch on the kind
of failure instead of matching message strings.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Enumerated failure kinds, one per exception class."""

    CONFIGURATION = "configuration"
    FETCH = "fetch"
    EXTRACTION = "extraction"
    UNSUPPORTED_TYPE = "unsupported_type"
    EMBEDDING = "embedding"
    VECTOR_STORE = "vector_store"
    RETRIEVAL = "retrieval"
    LLM = "llm"
    ANSWER_SYNTHESIS = "answer_synthesis"
    UNEXPECTED = "unexpected"


class DocQAError(Exception):
    """Base exception for all docqa errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[openai] Rate limit exceeded``.
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class ConfigurationError(DocQAError):
    """Raised when configuration is invalid or credentials are missing."""

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Document run: fetch and extraction
# ---------------------------------------------------------------------------

class FetchError(DocQAError):
    """Raised when a document cannot be downloaded from its URL."""

    kind = ErrorKind.FETCH

    def __init__(
        self,
        message: str = "Document fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ExtractionFailure(DocQAError):
    """Raised when document bytes cannot be parsed as their declared type."""

    kind = ErrorKind.EXTRACTION

    def __init__(
        self,
        message: str = "Text extraction failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnsupportedTypeError(DocQAError):
    """Raised when the declared document type is not pdf, docx, or txt."""

    kind = ErrorKind.UNSUPPORTED_TYPE

    def __init__(
        self,
        message: str = "Unsupported document type",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Embedding / vector-store errors
# ---------------------------------------------------------------------------

class EmbeddingProviderError(DocQAError):
    """Raised when the embedding provider fails or returns malformed output."""

    kind = ErrorKind.EMBEDDING

    def __init__(
        self,
        message: str = "Embedding provider call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class VectorStoreError(DocQAError):
    """Raised when vectors cannot be written to the vector store."""

    kind = ErrorKind.VECTOR_STORE

    def __init__(
        self,
        message: str = "Vector store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RetrievalError(VectorStoreError):
    """Raised when a similarity query fails or targets an unknown namespace."""

    kind = ErrorKind.RETRIEVAL

    def __init__(
        self,
        message: str = "Retrieval failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Completion / synthesis errors
# ---------------------------------------------------------------------------

class LLMError(DocQAError):
    """Raised when an LLM API call fails or returns an empty response."""

    kind = ErrorKind.LLM

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class AnswerSynthesisError(DocQAError):
    """Raised when a grounded answer cannot be synthesized."""

    kind = ErrorKind.ANSWER_SYNTHESIS

    def __init__(
        self,
        message: str = "Answer synthesis failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
