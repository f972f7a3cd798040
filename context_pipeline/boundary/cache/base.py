"""
Embedding cache interface.

Dependencies: context_pipeline.models
System role: Abstraction injected into the embedding service
"""

from abc import ABC, abstractmethod

from context_pipeline.models.embedding import CacheStats, EmbeddingCacheEntry


class EmbeddingCache(ABC):
    """Content-hash keyed store of embeddings."""

    @abstractmethod
    async def get(self, key: str) -> EmbeddingCacheEntry | None:
        """Return the live entry for key, or None on a miss."""

    @abstractmethod
    async def set(self, key: str, entry: EmbeddingCacheEntry) -> bool:
        """
        Insert entry if no live entry exists for key.

        Returns:
            bool: True if inserted, False if an entry was already present
        """

    @abstractmethod
    async def touch(self, key: str) -> EmbeddingCacheEntry | None:
        """Atomically increment usage_count and refresh last_used_at."""

    @abstractmethod
    async def stats(self) -> CacheStats:
        """Entry count, hit/miss counters and tokens saved."""

    @abstractmethod
    async def purge_expired(self) -> int:
        """Remove entries idle past the TTL and return how many were removed."""
