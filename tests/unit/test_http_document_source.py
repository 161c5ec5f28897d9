"""Unit tests for HttpDocumentSource using httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from docqa.providers.document_source.http_document_source import HttpDocumentSource
from docqa.utils.errors import FetchError

_URL = "https://docs.example.com/policy.pdf"


def _source(handler, **kwargs) -> HttpDocumentSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
    return HttpDocumentSource(http_client=client, **kwargs)


class TestHttpDocumentSource:
    def test_get_provider_name(self) -> None:
        assert HttpDocumentSource().get_provider_name() == "http"

    @pytest.mark.asyncio
    async def test_fetch_returns_body(self) -> None:
        source = _source(lambda request: httpx.Response(200, content=b"%PDF-1.7 body"))
        assert await source.fetch(_URL) == b"%PDF-1.7 body"

    @pytest.mark.asyncio
    async def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old.pdf":
                return httpx.Response(302, headers={"Location": _URL})
            return httpx.Response(200, content=b"moved here")

        source = _source(handler)
        assert await source.fetch("https://docs.example.com/old.pdf") == b"moved here"

    @pytest.mark.asyncio
    async def test_http_status_error(self) -> None:
        source = _source(lambda request: httpx.Response(404))

        with pytest.raises(FetchError, match="HTTP 404") as exc_info:
            await source.fetch(_URL)

        assert exc_info.value.provider_name == "http"
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError, match="connection refused"):
            await _source(handler).fetch(_URL)

    @pytest.mark.asyncio
    async def test_malformed_url(self) -> None:
        source = _source(lambda request: httpx.Response(200, content=b"unreachable"))

        with pytest.raises(FetchError, match="Invalid document URL") as exc_info:
            await source.fetch("http://[::1/policy.pdf")

        assert exc_info.value.provider_name == "http"
        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(FetchError, match="Timeout fetching"):
            await _source(handler).fetch(_URL)

    @pytest.mark.asyncio
    async def test_declared_length_over_limit(self) -> None:
        source = _source(
            lambda request: httpx.Response(200, content=b"x" * 100),
            max_document_bytes=10,
        )
        with pytest.raises(FetchError, match="exceeds 10 bytes"):
            await source.fetch(_URL)

    @pytest.mark.asyncio
    async def test_streamed_body_over_limit(self) -> None:
        async def body():
            yield b"a" * 6
            yield b"b" * 6

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body())

        with pytest.raises(FetchError, match="exceeds 10 bytes"):
            await _source(handler, max_document_bytes=10).fetch(_URL)

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        source = HttpDocumentSource(http_client=client)

        await source.aclose()

        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_aclose_closes_owned_client(self) -> None:
        source = HttpDocumentSource()
        await source.aclose()
        assert source._client.is_closed is True
