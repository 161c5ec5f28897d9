"""Vector store provider implementations.

ChromaDB is the sole vector store implementation. Each namespace is one
collection with cosine distance. Data persists at CHROMADB_PERSIST_DIR when
set and lives in process memory otherwise.

To swap ChromaDB for another vector database (Pinecone, Qdrant, Weaviate),
create a new class implementing IVectorStoreProvider and build it in
docqa/main.py.
"""

from docqa.providers.vector_store.chromadb_provider import ChromaDBProvider

__all__ = ["ChromaDBProvider"]
