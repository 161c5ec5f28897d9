"""Utility modules for docqa.

- **errors** -- Domain-specific exception hierarchy rooted at DocQAError;
  each pipeline stage raises its own subclass and every class carries an
  ``ErrorKind`` so callers can branch on the kind of failure.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

# -- Domain exception hierarchy --------------------------------------------
from docqa.utils.errors import (
    AnswerSynthesisError,
    ConfigurationError,
    DocQAError,
    EmbeddingProviderError,
    ErrorKind,
    ExtractionFailure,
    FetchError,
    LLMError,
    RetrievalError,
    UnsupportedTypeError,
    VectorStoreError,
)

# -- Structured logging setup ----------------------------------------------
from docqa.utils.logging import configure_logging, get_logger

__all__ = [
    "AnswerSynthesisError",
    "ConfigurationError",
    "DocQAError",
    "EmbeddingProviderError",
    "ErrorKind",
    "ExtractionFailure",
    "FetchError",
    "LLMError",
    "RetrievalError",
    "UnsupportedTypeError",
    "VectorStoreError",
    "configure_logging",
    "get_logger",
]
