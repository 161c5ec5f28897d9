"""Public interface definitions for all external service providers.

Every external service in the docqa pipeline is accessed through the
abstract base classes defined in this package.  Concrete adapters implement
these interfaces and are injected at construction time by
``docqa.main.build_pipeline``, so swapping OpenAI for Anthropic or
ChromaDB for another store touches only the factory.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations (in docqa/providers/)
    ─────────────────────────────────────────────────────────────────────
    IDocumentSource            →  HttpDocumentSource
    ILLMProvider               →  OpenAILLMProvider, AnthropicLLMProvider,
                                  OllamaLLMProvider
    IEmbeddingProvider         →  OpenAIEmbeddingProvider,
                                  NomicEmbeddingProvider
    IVectorStoreProvider       →  ChromaDBProvider
    ICacheProvider             →  MemoryCacheProvider
"""

from docqa.interfaces.cache_provider import ICacheProvider
from docqa.interfaces.document_source import IDocumentSource
from docqa.interfaces.embedding_provider import IEmbeddingProvider
from docqa.interfaces.llm_provider import ILLMProvider
from docqa.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "ICacheProvider",
    "IDocumentSource",
    "IEmbeddingProvider",
    "ILLMProvider",
    "IVectorStoreProvider",
]
