"""Abstract base class for document sources.

A document source turns a URL into the raw bytes of a document.  It knows
nothing about formats; the text extractor interprets the bytes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: HttpDocumentSource (docqa/providers/document_source/)
class IDocumentSource(ABC):
    """Contract for fetching document bytes by URL."""

    @abstractmethod
    async def fetch(self, url: str) -> bytes:
        """Download the document at *url*.

        Parameters
        ----------
        url:
            Location of the document.

        Returns
        -------
        bytes
            The full response body.

        Raises
        ------
        docqa.utils.errors.FetchError
            On a network failure, a non-success status, or a body that
            exceeds the source's size limit.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this source."""

    async def aclose(self) -> None:
        """Release any connections held by the source.  No-op by default."""
