"""Embedding provider implementations.

Embeddings convert text into numeric vectors that capture semantic meaning.
These vectors are stored in ChromaDB and used for similarity search.

Two implementations of IEmbeddingProvider:
    1. OpenAIEmbeddingProvider — text-embedding-ada-002 (1536 dims).
       Requires an API key and incurs cost per token.
    2. NomicEmbeddingProvider  — nomic-embed-text via Ollama (768 dims).
       Free and local, but requires a running Ollama server.
"""

from docqa.providers.embedding.nomic_embedding_provider import NomicEmbeddingProvider
from docqa.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider

__all__ = ["OpenAIEmbeddingProvider", "NomicEmbeddingProvider"]
