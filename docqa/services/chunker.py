"""Character-window text chunking with sentence-aware cut points.

Splits extracted document text into :class:`~docqa.models.document.Chunk`
objects sized for embedding.

The text is walked in windows of ``chunk_size`` characters:

1. **Sentence-aware cuts** -- For a window that stops short of the end of
   the text, the later of the last ``.`` and the last newline in the window
   is a candidate cut point.  If it sits past 70% of the window, the chunk
   ends just after it and the next window starts right behind it.

2. **Overlapping windows** -- Without a usable cut point the full window is
   kept and the next window starts ``overlap`` characters before its end,
   so text spanning the boundary lands in both chunks.

Segments whose trimmed length does not exceed ``min_chunk_chars`` are
dropped; they carry too little content to retrieve on.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from docqa.models.document import Chunk, DocumentReference
from docqa.utils.errors import ConfigurationError

logger = structlog.get_logger(logger_name=__name__)

# Fraction of the window a cut point must lie beyond to be used.
_BREAK_THRESHOLD = 0.7


class TextChunker:
    """Splits text into overlapping, sentence-aligned chunks.

    Parameters
    ----------
    chunk_size:
        Maximum characters per chunk (default 1000).
    overlap:
        Characters shared by consecutive windows when no cut point is
        found (default 200).  Must be smaller than *chunk_size*.
    min_chunk_chars:
        Chunks whose trimmed length is at most this are discarded
        (default 50).

    Raises
    ------
    ConfigurationError
        If ``chunk_size <= 0``, ``overlap < 0`` or ``chunk_size <= overlap``.
    """

    def __init__(
        self,
        chunk_size: int = 1000,
        overlap: int = 200,
        min_chunk_chars: int = 50,
    ) -> None:
        if chunk_size <= 0:
            raise ConfigurationError(message=f"chunk_size must be positive, got {chunk_size}")
        if overlap < 0:
            raise ConfigurationError(message=f"overlap must not be negative, got {overlap}")
        if chunk_size <= overlap:
            raise ConfigurationError(
                message=f"chunk_size ({chunk_size}) must be greater than overlap ({overlap})"
            )
        self._chunk_size = chunk_size
        self._overlap = overlap
        self._min_chunk_chars = min_chunk_chars

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def overlap(self) -> int:
        return self._overlap

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def chunk(self, text: str, document: DocumentReference | None = None) -> list[Chunk]:
        """Split *text* into a list of :class:`Chunk` objects.

        Parameters
        ----------
        text:
            The full extracted text.
        document:
            Source document recorded on every chunk.

        Returns
        -------
        list[Chunk]
            Chunks in document order, indexed from 0.  Empty input returns
            an empty list.
        """
        chunks = list(self.iter_chunks(text, document))
        logger.info(
            "chunks_created",
            num_chunks=len(chunks),
            text_length=len(text),
            chunk_size=self._chunk_size,
            overlap=self._overlap,
        )
        return chunks

    def iter_chunks(
        self, text: str, document: DocumentReference | None = None
    ) -> Iterator[Chunk]:
        """Lazily yield chunks of *text*; each call starts a fresh pass."""
        index = 0
        for segment in self._segments(text):
            trimmed = segment.strip()
            if len(trimmed) <= self._min_chunk_chars:
                continue
            yield Chunk(index=index, text=trimmed, source_document=document)
            index += 1

    # ------------------------------------------------------------------
    # Window walk
    # ------------------------------------------------------------------

    def _segments(self, text: str) -> Iterator[str]:
        """Yield the raw (untrimmed) window segments of *text*."""
        text_length = len(text)
        start = 0
        while start < text_length:
            end = min(start + self._chunk_size, text_length)
            segment = text[start:end]

            if end < text_length:
                break_point = max(segment.rfind("."), segment.rfind("\n"))
                if break_point > len(segment) * _BREAK_THRESHOLD:
                    segment = segment[: break_point + 1]
                    start += break_point + 1
                else:
                    start = end - self._overlap
            else:
                start = end

            yield segment
