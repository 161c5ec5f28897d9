"""HTTP document source using httpx.

Downloads document bytes for a URL.  The body is streamed so a document
larger than the configured limit is rejected before it is fully buffered.
"""

from __future__ import annotations

import httpx
import structlog

from docqa.interfaces.document_source import IDocumentSource
from docqa.utils.errors import FetchError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 30.0
_DEFAULT_MAX_BYTES = 50 * 1024 * 1024
_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; docqa/0.1)",
    "Accept": "application/pdf,application/vnd.openxmlformats-officedocument."
    "wordprocessingml.document,text/plain;q=0.9,*/*;q=0.8",
}


class HttpDocumentSource(IDocumentSource):
    """Document source backed by ``httpx.AsyncClient``.

    Follows redirects and applies a timeout.  Pass *http_client* to share a
    client or to inject a mock transport.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
        max_document_bytes: int = _DEFAULT_MAX_BYTES,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=_DEFAULT_HEADERS,
            follow_redirects=True,
        )
        self._max_document_bytes = max_document_bytes

    # ------------------------------------------------------------------
    # IDocumentSource implementation
    # ------------------------------------------------------------------

    async def fetch(self, url: str) -> bytes:
        """GET *url* and return the response body."""
        try:
            async with self._client.stream("GET", url) as response:
                response.raise_for_status()

                declared = response.headers.get("content-length")
                if declared and declared.isdigit() and int(declared) > self._max_document_bytes:
                    raise self._too_large(url)

                body = bytearray()
                async for piece in response.aiter_bytes():
                    body.extend(piece)
                    if len(body) > self._max_document_bytes:
                        raise self._too_large(url)
        except httpx.TimeoutException as exc:
            raise FetchError(
                message=f"Timeout fetching {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                message=f"HTTP {exc.response.status_code} for {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(
                message=f"HTTP error fetching {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.InvalidURL as exc:
            raise FetchError(
                message=f"Invalid document URL {url!r}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info("document_fetched", url=url, size_bytes=len(body))
        return bytes(body)

    def get_provider_name(self) -> str:
        return "http"

    async def aclose(self) -> None:
        """Close the underlying client if this source created it."""
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _too_large(self, url: str) -> FetchError:
        return FetchError(
            message=f"Document at {url} exceeds {self._max_document_bytes} bytes",
            provider_name=self.get_provider_name(),
        )
