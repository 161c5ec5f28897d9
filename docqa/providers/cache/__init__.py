"""Cache providers.

In-memory TTL cache the pipeline uses to skip re-processing a document it
has already embedded (keyed by document type and URL).

MemoryCacheProvider is process-local. For multi-worker deployments, swap in
a Redis adapter implementing ICacheProvider without changing the pipeline.
"""

from docqa.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
