"""
In-memory embedding cache.

Process-local LRU bounded by max_entries, with entries expiring after
ttl_seconds without use. Updates to a key are serialized by a per-key lock.

Dependencies: asyncio, collections
System role: Default embedding cache for development and tests
"""

import asyncio
import logging
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Callable

from context_pipeline.boundary.cache.base import EmbeddingCache
from context_pipeline.models.embedding import CacheStats, EmbeddingCacheEntry

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryEmbeddingCache(EmbeddingCache):
    """LRU + idle-TTL embedding cache held in process memory."""

    def __init__(
        self,
        max_entries: int = 10_000,
        ttl_seconds: int = 30 * 24 * 60 * 60,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize cache.

        Args:
            max_entries: Least recently used entries are evicted beyond this
            ttl_seconds: Entries unused for longer are treated as absent
            clock: Source of the current UTC time
        """
        self.max_entries = max_entries
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entries: OrderedDict[str, EmbeddingCacheEntry] = OrderedDict()
        self._locks: dict[str, asyncio.Lock] = {}
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def _lock(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def _is_expired(self, entry: EmbeddingCacheEntry, now: datetime) -> bool:
        return now - entry.last_used_at > self.ttl

    def _drop(self, key: str) -> None:
        self._entries.pop(key, None)
        lock = self._locks.get(key)
        if lock is not None and not lock.locked():
            del self._locks[key]

    async def get(self, key: str) -> EmbeddingCacheEntry | None:
        entry = self._entries.get(key)
        if entry is not None and self._is_expired(entry, self._clock()):
            self._drop(key)
            entry = None

        if entry is None:
            self._misses += 1
            return None

        self._entries.move_to_end(key)
        self._hits += 1
        return entry

    async def set(self, key: str, entry: EmbeddingCacheEntry) -> bool:
        async with self._lock(key):
            existing = self._entries.get(key)
            if existing is not None and not self._is_expired(existing, self._clock()):
                return False
            self._entries[key] = entry
            self._entries.move_to_end(key)

        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self._locks.pop(evicted, None)
            logger.debug(f"{__name__}:set - Evicted least recently used entry", extra={"content_hash": evicted})
        return True

    async def touch(self, key: str) -> EmbeddingCacheEntry | None:
        if key not in self._entries:
            return None
        async with self._lock(key):
            entry = self._entries.get(key)
            if entry is None:
                # Dropped while waiting for the lock
                self._locks.pop(key, None)
                return None
            updated = entry.model_copy(
                update={"usage_count": entry.usage_count + 1, "last_used_at": self._clock()}
            )
            self._entries[key] = updated
            self._entries.move_to_end(key)
            return updated

    async def stats(self) -> CacheStats:
        return CacheStats(
            total_entries=len(self._entries),
            hits=self._hits,
            misses=self._misses,
            total_tokens_saved=sum(
                entry.token_count * max(entry.usage_count - 1, 0) for entry in self._entries.values()
            ),
        )

    async def purge_expired(self) -> int:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in expired:
            self._drop(key)
        if expired:
            logger.info(f"{__name__}:purge_expired - Purged {len(expired)} idle entries")
        return len(expired)
