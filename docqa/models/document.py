"""Document-side data models: document types, references, and chunks.

All models use frozen config; a chunk or reference never changes once built.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from docqa.utils.errors import UnsupportedTypeError


class DocumentType(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Document formats the text extractor can read."""

    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"

    @classmethod
    def parse(cls, value: str | DocumentType) -> DocumentType:
        """Return the member for *value*, ignoring case and surrounding blanks.

        Raises
        ------
        UnsupportedTypeError
            If *value* names no supported format.
        """
        if isinstance(value, DocumentType):
            return value
        normalized = str(value).strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedTypeError(
                message=f"Unsupported document type: {value}"
            ) from None


class DocumentReference(BaseModel):
    """Where a document lives and what format the caller says it is."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Location the document is fetched from.")
    document_type: DocumentType = Field(
        default=DocumentType.PDF,
        description="Declared format; content is never sniffed.",
    )


class Chunk(BaseModel):
    """A bounded, ordered segment of a document's extracted text.

    ``index`` is the chunk's position among the chunks emitted for one
    processing run and is stored alongside its vector as the join key back
    to retrieval results.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Position among emitted chunks, in document order.")
    text: str = Field(min_length=1, description="Trimmed chunk text.")
    source_document: DocumentReference | None = Field(
        default=None,
        description="Document the chunk was cut from.",
    )
