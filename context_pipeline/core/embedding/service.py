"""
Embedding service with content-addressed caching.

Generates embeddings through an injected provider and caches them by the
SHA-256 of the trimmed text, so identical content is embedded at most once.
Batch requests are split into provider-sized batches that run concurrently;
a failing batch only marks its own unresolved items.

Dependencies: asyncio, hashlib, context_pipeline.boundary.cache,
    context_pipeline.boundary.embeddings
System role: Second stage of ingestion and first step of retrieval
"""

import asyncio
import hashlib
import logging
from datetime import datetime, timezone

from context_pipeline.boundary.cache.base import EmbeddingCache
from context_pipeline.boundary.embeddings.provider import EmbeddingProvider
from context_pipeline.core.chunking.tokens import estimate_token_count
from context_pipeline.core.embedding.similarity import calculate_similarity, is_valid_embedding
from context_pipeline.core.exceptions import EmbeddingError, ValidationError
from context_pipeline.models.embedding import (
    CacheStats,
    EmbeddingBatchItem,
    EmbeddingBatchResult,
    EmbeddingCacheEntry,
    EmbeddingResult,
)
from context_pipeline.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

CONTENT_PREVIEW_CHARS = 200


class EmbeddingService:
    """
    Cached embedding generation.

    Cache reads that fail are treated as misses; cache writes and usage
    updates are best effort. Provider failures surface as EmbeddingError on
    single requests and as per-item error markers on batch requests.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        cache: EmbeddingCache,
        dimensions: int = 1536,
        max_batch_size: int = 100,
        max_concurrent_batches: int = 4,
    ) -> None:
        """
        Initialize embedding service.

        Args:
            provider: Embedding provider adapter
            cache: Embedding cache backend
            dimensions: Expected vector dimensionality
            max_batch_size: Maximum texts per provider call
            max_concurrent_batches: Provider batches allowed in flight at once
        """
        self._provider = provider
        self._cache = cache
        self.dimensions = dimensions
        self.max_batch_size = max_batch_size
        self.max_concurrent_batches = max_concurrent_batches

    @staticmethod
    def content_hash(text: str) -> str:
        """
        Cache key for text.

        Args:
            text: Text to hash (leading and trailing whitespace ignored)

        Returns:
            str: SHA-256 hex digest of the trimmed text
        """
        return hashlib.sha256(text.strip().encode("utf-8")).hexdigest()

    def is_valid_embedding(self, vector: object) -> bool:
        """True if vector matches the configured dimensionality and is finite."""
        return is_valid_embedding(vector, self.dimensions)

    @staticmethod
    def calculate_similarity(a: list[float], b: list[float]) -> float:
        """Cosine similarity of two embeddings."""
        return calculate_similarity(a, b)

    async def generate_embedding(self, text: str) -> EmbeddingResult:
        """
        Embed a single text, serving it from cache when possible.

        Args:
            text: Text to embed

        Returns:
            EmbeddingResult: Vector, token estimate and whether it was cached

        Raises:
            ValidationError: If text is blank
            EmbeddingError: If the provider fails or returns an invalid vector
        """
        trimmed = text.strip()
        if not trimmed:
            raise ValidationError("Cannot embed empty text", field="text")

        key = self.content_hash(trimmed)
        entry = await self._cache_get(key)
        if entry is not None:
            await self._cache_touch(key)
            return EmbeddingResult(embedding=entry.embedding, token_count=entry.token_count, cached=True)

        vectors = await self._provider.embed_texts([trimmed])
        vector = vectors[0] if vectors else None
        if not self.is_valid_embedding(vector):
            raise EmbeddingError(
                "Provider returned an invalid embedding",
                details={"model": self._provider.model_name, "expected_dimensions": self.dimensions},
            )

        token_count = estimate_token_count(trimmed)
        await self._cache_store(key, trimmed, vector, token_count)
        return EmbeddingResult(embedding=list(vector), token_count=token_count, cached=False)

    async def generate_embedding_batch(
        self,
        items: list[EmbeddingBatchItem],
    ) -> dict[str, EmbeddingBatchResult]:
        """
        Embed many texts with per-item failure isolation.

        Items are split into batches of at most max_batch_size. Each batch
        resolves cache hits first, then sends its distinct misses to the
        provider in one call.

        Args:
            items: Items to embed

        Returns:
            dict[str, EmbeddingBatchResult]: Result per item id; failed items
                carry an empty vector and an error message
        """
        if not items:
            return {}

        batches = [
            items[start : start + self.max_batch_size]
            for start in range(0, len(items), self.max_batch_size)
        ]
        semaphore = asyncio.Semaphore(self.max_concurrent_batches)

        async def run(batch: list[EmbeddingBatchItem]) -> dict[str, EmbeddingBatchResult]:
            async with semaphore:
                return await self._process_batch(batch)

        results: dict[str, EmbeddingBatchResult] = {}
        for batch_results in await asyncio.gather(*(run(batch) for batch in batches)):
            results.update(batch_results)

        failed = sum(1 for result in results.values() if not result.ok)
        logger.info(
            f"{__name__}:generate_embedding_batch - Embedded {len(results)} items "
            f"in {len(batches)} batches",
            extra={
                "item_count": len(items),
                "batch_count": len(batches),
                "cached_count": sum(1 for result in results.values() if result.cached),
                "failed_count": failed,
            },
        )
        return results

    async def get_cache_stats(self) -> CacheStats:
        """
        Current cache statistics.

        Returns:
            CacheStats: Entry count, hit/miss counters and tokens saved
        """
        return await self._cache.stats()

    async def purge_expired_cache(self) -> int:
        """
        Delete cache entries idle past the cache TTL.

        Returns:
            int: Number of removed entries
        """
        return await self._cache.purge_expired()

    async def _process_batch(self, batch: list[EmbeddingBatchItem]) -> dict[str, EmbeddingBatchResult]:
        results: dict[str, EmbeddingBatchResult] = {}
        keys = {item.id: self.content_hash(item.content) for item in batch}

        lookup_keys = list(dict.fromkeys(keys[item.id] for item in batch if item.content.strip()))
        cached = await asyncio.gather(*(self._cache_get(key) for key in lookup_keys))
        entries = dict(zip(lookup_keys, cached))

        misses: dict[str, str] = {}
        hit_keys: list[str] = []
        for item in batch:
            key = keys[item.id]
            entry = entries.get(key)
            if not item.content.strip():
                results[item.id] = self._failed(item.id, "Cannot embed empty content")
            elif entry is not None:
                results[item.id] = EmbeddingBatchResult(
                    id=item.id,
                    embedding=entry.embedding,
                    token_count=entry.token_count,
                    cached=True,
                )
                hit_keys.append(key)
            else:
                misses.setdefault(key, item.content.strip())

        if hit_keys:
            await asyncio.gather(*(self._cache_touch(key) for key in hit_keys))
        if not misses:
            return results

        embedded: dict[str, tuple[list[float], int]] = {}
        errors: dict[str, str] = {}
        try:
            vectors = await self._provider.embed_texts(list(misses.values()))
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_process_batch - Provider call failed for batch",
                e,
                miss_count=len(misses),
                batch_size=len(batch),
            )
            errors = {key: f"Embedding provider failed: {e}" for key in misses}
        else:
            for (key, text), vector in zip(misses.items(), vectors):
                if not self.is_valid_embedding(vector):
                    errors[key] = "Provider returned an invalid embedding"
                    continue
                token_count = estimate_token_count(text)
                await self._cache_store(key, text, vector, token_count)
                embedded[key] = (list(vector), token_count)

        for item in batch:
            if item.id in results:
                continue
            key = keys[item.id]
            if key in embedded:
                vector, token_count = embedded[key]
                results[item.id] = EmbeddingBatchResult(id=item.id, embedding=vector, token_count=token_count)
            else:
                results[item.id] = self._failed(item.id, errors.get(key, "Provider returned no embedding"))
        return results

    @staticmethod
    def _failed(item_id: str, message: str) -> EmbeddingBatchResult:
        return EmbeddingBatchResult(id=item_id, embedding=[], token_count=0, cached=False, error=message)

    async def _cache_get(self, key: str) -> EmbeddingCacheEntry | None:
        try:
            return await self._cache.get(key)
        except Exception as e:
            logger.warning(
                f"{__name__}:_cache_get - Cache read failed, treating as miss: {e}",
                extra={"content_hash": key},
            )
            return None

    async def _cache_touch(self, key: str) -> None:
        try:
            await self._cache.touch(key)
        except Exception as e:
            logger.warning(
                f"{__name__}:_cache_touch - Cache usage update failed: {e}",
                extra={"content_hash": key},
            )

    async def _cache_store(self, key: str, text: str, vector: list[float], token_count: int) -> None:
        now = datetime.now(timezone.utc)
        entry = EmbeddingCacheEntry(
            content_hash=key,
            embedding=list(vector),
            token_count=token_count,
            content_preview=text[:CONTENT_PREVIEW_CHARS],
            created_at=now,
            last_used_at=now,
            usage_count=1,
        )
        try:
            await self._cache.set(key, entry)
        except Exception as e:
            logger.warning(
                f"{__name__}:_cache_store - Cache write failed: {e}",
                extra={"content_hash": key},
            )
