"""Unit tests for EmbeddingBatcher — grouping, ordering and failure handling."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from docqa.interfaces.embedding_provider import IEmbeddingProvider
from docqa.services.embedding_batcher import EmbeddingBatcher
from docqa.utils.errors import ConfigurationError, EmbeddingProviderError


def _mock_provider(side_effect=None) -> MagicMock:
    mock = MagicMock(spec=IEmbeddingProvider)
    mock.embed = AsyncMock(side_effect=side_effect)
    mock.get_provider_name.return_value = "mock-embed"
    return mock


async def _index_vectors(texts: list[str]) -> list[list[float]]:
    return [[float(text.split("-")[1])] for text in texts]


class TestEmbedBatch:
    @pytest.mark.asyncio
    async def test_empty_input_returns_empty(self) -> None:
        provider = _mock_provider(side_effect=_index_vectors)
        assert await EmbeddingBatcher(provider).embed_batch([]) == []
        provider.embed.assert_not_called()

    @pytest.mark.asyncio
    async def test_groups_of_batch_size(self) -> None:
        provider = _mock_provider(side_effect=_index_vectors)
        texts = [f"text-{i}" for i in range(23)]

        await EmbeddingBatcher(provider, batch_size=10).embed_batch(texts)

        sizes = [len(call.args[0]) for call in provider.embed.call_args_list]
        assert sizes == [10, 10, 3]

    @pytest.mark.asyncio
    async def test_order_and_length_preserved(self) -> None:
        provider = _mock_provider(side_effect=_index_vectors)
        texts = [f"text-{i}" for i in range(17)]

        vectors = await EmbeddingBatcher(provider, batch_size=4).embed_batch(texts)

        assert len(vectors) == len(texts)
        assert vectors == [[float(i)] for i in range(17)]

    @pytest.mark.asyncio
    async def test_deterministic_provider_gives_identical_results(self, embedding_provider) -> None:
        batcher = EmbeddingBatcher(embedding_provider, batch_size=3)
        texts = ["alpha beta", "gamma", "delta epsilon", "alpha beta"]

        first = await batcher.embed_batch(texts)
        second = await batcher.embed_batch(texts)

        assert first == second
        assert first[0] == first[3]

    @pytest.mark.asyncio
    async def test_group_failure_raises_embedding_error(self) -> None:
        calls = {"n": 0}

        async def fail_second(texts: list[str]) -> list[list[float]]:
            calls["n"] += 1
            if calls["n"] == 2:
                raise RuntimeError("upstream 500")
            return [[0.0] for _ in texts]

        provider = _mock_provider(side_effect=fail_second)
        with pytest.raises(EmbeddingProviderError, match="offset 2") as exc_info:
            await EmbeddingBatcher(provider, batch_size=2).embed_batch(["a-1", "b-2", "c-3"])
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_provider_error_passes_through(self) -> None:
        original = EmbeddingProviderError(message="quota exceeded", provider_name="openai_embedding")
        provider = _mock_provider(side_effect=original)

        with pytest.raises(EmbeddingProviderError) as exc_info:
            await EmbeddingBatcher(provider).embed_batch(["x-1"])
        assert exc_info.value is original

    @pytest.mark.asyncio
    async def test_vector_count_mismatch_raises(self) -> None:
        async def short(texts: list[str]) -> list[list[float]]:
            return [[0.0]] * (len(texts) - 1)

        provider = _mock_provider(side_effect=short)
        with pytest.raises(EmbeddingProviderError, match="returned 2 vectors for 3 texts"):
            await EmbeddingBatcher(provider, batch_size=5).embed_batch(["a-1", "b-2", "c-3"])

    def test_batch_size_must_be_positive(self) -> None:
        with pytest.raises(ConfigurationError, match="batch_size"):
            EmbeddingBatcher(_mock_provider(), batch_size=0)


class TestEmbedOne:
    @pytest.mark.asyncio
    async def test_single_vector(self) -> None:
        provider = _mock_provider(side_effect=_index_vectors)
        assert await EmbeddingBatcher(provider).embed_one("query-7") == [7.0]

    @pytest.mark.asyncio
    async def test_empty_response_raises(self) -> None:
        provider = _mock_provider(side_effect=None)
        provider.embed.return_value = []
        with pytest.raises(EmbeddingProviderError):
            await EmbeddingBatcher(provider).embed_one("anything")
