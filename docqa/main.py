"""docqa composition root.

Builds every provider and service from :class:`Settings` and wires them
into a :class:`DocumentQAPipeline`.  Nothing else in the package constructs
SDK clients; the CLI and any embedding application go through
:func:`build_pipeline`.
"""

from __future__ import annotations

import structlog

from docqa.config.loader import load_settings
from docqa.config.settings import Settings
from docqa.interfaces.cache_provider import ICacheProvider
from docqa.interfaces.embedding_provider import IEmbeddingProvider
from docqa.interfaces.llm_provider import ILLMProvider
from docqa.pipeline.orchestrator import DocumentQAPipeline
from docqa.providers.cache.memory_cache import MemoryCacheProvider
from docqa.providers.document_source.http_document_source import HttpDocumentSource
from docqa.providers.embedding.nomic_embedding_provider import NomicEmbeddingProvider
from docqa.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from docqa.providers.llm.anthropic_provider import AnthropicLLMProvider
from docqa.providers.llm.ollama_provider import OllamaLLMProvider
from docqa.providers.llm.openai_provider import OpenAILLMProvider
from docqa.providers.vector_store.chromadb_provider import ChromaDBProvider
from docqa.services.answer_synthesizer import AnswerSynthesizer
from docqa.services.chunker import TextChunker
from docqa.services.embedding_batcher import EmbeddingBatcher
from docqa.services.text_extractor import TextExtractor
from docqa.utils.errors import ConfigurationError
from docqa.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def _build_llm_provider(app_settings: Settings) -> ILLMProvider:
    """Return the LLM provider named by ``LLM_PROVIDER``.

    Raises
    ------
    ConfigurationError
        If the named provider has no usable API key, or the name is unknown.
    """
    name = app_settings.llm_provider.strip().lower()
    if name == "openai":
        if not app_settings.has_openai_key():
            raise ConfigurationError(
                message="OPENAI_API_KEY is not set", provider_name="openai"
            )
        return OpenAILLMProvider(settings=app_settings)
    if name == "anthropic":
        if not app_settings.has_anthropic_key():
            raise ConfigurationError(
                message="ANTHROPIC_API_KEY is not set", provider_name="anthropic"
            )
        return AnthropicLLMProvider(settings=app_settings)
    if name == "ollama":
        return OllamaLLMProvider(settings=app_settings)
    raise ConfigurationError(message=f"Unknown LLM provider: {app_settings.llm_provider}")


def _build_embedding_provider(app_settings: Settings) -> IEmbeddingProvider:
    """Return the embedding provider named by ``EMBEDDING_PROVIDER``.

    Raises
    ------
    ConfigurationError
        If the named provider has no usable API key, or the name is unknown.
    """
    name = app_settings.embedding_provider.strip().lower()
    if name == "openai":
        if not app_settings.has_openai_key():
            raise ConfigurationError(
                message="OPENAI_API_KEY is not set", provider_name="openai_embedding"
            )
        return OpenAIEmbeddingProvider(settings=app_settings)
    if name == "nomic":
        return NomicEmbeddingProvider(settings=app_settings)
    raise ConfigurationError(
        message=f"Unknown embedding provider: {app_settings.embedding_provider}"
    )


def _build_cache(app_settings: Settings) -> ICacheProvider | None:
    if not app_settings.document_cache_enabled:
        return None
    return MemoryCacheProvider(
        max_size=app_settings.document_cache_size,
        ttl=app_settings.document_cache_ttl,
    )


# ---------------------------------------------------------------------------
# Pipeline assembly
# ---------------------------------------------------------------------------


def build_pipeline(custom_settings: Settings | None = None) -> DocumentQAPipeline:
    """Construct a fully wired :class:`DocumentQAPipeline`.

    Parameters
    ----------
    custom_settings:
        Application settings.  Loaded from ``config/config.yaml``, ``.env``
        and the environment when not provided.

    Raises
    ------
    ConfigurationError
        On missing credentials, an unknown provider name, or invalid
        chunking parameters.
    """
    s = custom_settings or load_settings()

    llm = _build_llm_provider(s)
    embedding_provider = _build_embedding_provider(s)

    pipeline = DocumentQAPipeline(
        document_source=HttpDocumentSource(
            timeout=s.fetch_timeout,
            max_document_bytes=s.max_document_bytes,
        ),
        extractor=TextExtractor(),
        chunker=TextChunker(
            chunk_size=s.chunk_size,
            overlap=s.chunk_overlap,
            min_chunk_chars=s.min_chunk_chars,
        ),
        batcher=EmbeddingBatcher(embedding_provider, batch_size=s.embedding_batch_size),
        vector_store=ChromaDBProvider(persist_directory=s.chromadb_persist_dir),
        synthesizer=AnswerSynthesizer(
            llm,
            max_tokens=s.answer_max_tokens,
            temperature=s.answer_temperature,
        ),
        cache=_build_cache(s),
        top_k=s.retrieval_top_k,
    )

    _logger.info(
        "pipeline_built",
        llm=llm.get_provider_name(),
        embedding=embedding_provider.get_provider_name(),
        persistent_store=bool(s.chromadb_persist_dir),
        document_cache=s.document_cache_enabled,
    )
    return pipeline
