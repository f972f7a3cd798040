"""
Tests for EmbeddingService.

Covers cache-first single embedding, batch splitting and per-item failure
isolation, and tolerance of cache backend failures.
"""

import asyncio
import hashlib
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from context_pipeline.boundary.cache.memory_cache import InMemoryEmbeddingCache
from context_pipeline.boundary.embeddings.provider import EmbeddingProvider
from context_pipeline.core.embedding import calculate_similarity, is_valid_embedding
from context_pipeline.core.embedding.service import EmbeddingService
from context_pipeline.core.exceptions import EmbeddingCacheError, EmbeddingError, ValidationError
from context_pipeline.models.embedding import EmbeddingBatchItem

DIMENSIONS = 8


def _items(*contents: str) -> list[EmbeddingBatchItem]:
    return [EmbeddingBatchItem(id=f"item-{i}", content=content) for i, content in enumerate(contents)]


@pytest.fixture
def failing_cache() -> AsyncMock:
    """Provide cache whose every operation raises EmbeddingCacheError."""
    cache = AsyncMock(spec=InMemoryEmbeddingCache)
    cache.get.side_effect = EmbeddingCacheError("cache offline", operation="get")
    cache.set.side_effect = EmbeddingCacheError("cache offline", operation="set")
    cache.touch.side_effect = EmbeddingCacheError("cache offline", operation="touch")
    return cache


class TestContentHash:
    """Test suite for cache key derivation."""

    def test_content_hash_should_be_sha256_of_trimmed_text(self) -> None:
        """Should hash the text with surrounding whitespace removed."""
        expected = hashlib.sha256(b"grant narrative").hexdigest()

        assert EmbeddingService.content_hash("  grant narrative\n") == expected

    def test_different_texts_should_have_different_hashes(self) -> None:
        """Should produce distinct keys for distinct content."""
        assert EmbeddingService.content_hash("alpha") != EmbeddingService.content_hash("beta")


class TestGenerateEmbedding:
    """Test suite for EmbeddingService.generate_embedding()."""

    @pytest.mark.asyncio
    async def test_second_request_should_be_served_from_cache(self, embedding_service, fake_provider, memory_cache) -> None:
        """Should return cached=True with an identical vector on repeat requests."""
        # Arrange
        text = "Our program serves two hundred families each year."
        assert len(text) == 50

        # Act
        first = await embedding_service.generate_embedding(text)
        second = await embedding_service.generate_embedding(text)

        # Assert
        assert first.cached is False
        assert second.cached is True
        assert second.embedding == first.embedding
        assert second.token_count == first.token_count
        assert fake_provider.calls == [[text]]
        entry = await memory_cache.get(EmbeddingService.content_hash(text))
        assert entry.usage_count == 2

    @pytest.mark.asyncio
    async def test_whitespace_variants_should_share_cache_entry(self, embedding_service, fake_provider) -> None:
        """Should treat texts that differ only in surrounding whitespace as the same content."""
        await embedding_service.generate_embedding("shared content")

        result = await embedding_service.generate_embedding("   shared content \n")

        assert result.cached is True
        assert len(fake_provider.calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    async def test_blank_text_should_raise_validation_error(self, embedding_service, fake_provider, text) -> None:
        """Should reject blank text without calling the provider."""
        with pytest.raises(ValidationError):
            await embedding_service.generate_embedding(text)

        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_provider_failure_should_raise_embedding_error(self, embedding_service, fake_provider) -> None:
        """Should surface provider failures as EmbeddingError."""
        fake_provider.fail_when = lambda texts: True

        with pytest.raises(EmbeddingError):
            await embedding_service.generate_embedding("some text")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "vector",
        [[0.1] * 3, [float("nan")] * DIMENSIONS, [float("inf")] + [0.1] * (DIMENSIONS - 1)],
    )
    async def test_invalid_vector_should_raise_and_not_be_cached(
        self, embedding_service, fake_provider, memory_cache, vector
    ) -> None:
        """Should reject wrong-length or non-finite vectors and leave the cache untouched."""
        fake_provider.vectors["bad text"] = vector

        with pytest.raises(EmbeddingError):
            await embedding_service.generate_embedding("bad text")

        assert len(memory_cache) == 0

    @pytest.mark.asyncio
    async def test_cache_failures_should_not_fail_embedding(self, fake_provider, failing_cache) -> None:
        """Should treat cache read failure as a miss and ignore write failure."""
        service = EmbeddingService(provider=fake_provider, cache=failing_cache, dimensions=DIMENSIONS)

        result = await service.generate_embedding("resilient text")

        assert result.cached is False
        assert len(result.embedding) == DIMENSIONS
        assert fake_provider.calls == [["resilient text"]]
        failing_cache.set.assert_awaited_once()


class TestGenerateEmbeddingBatch:
    """Test suite for EmbeddingService.generate_embedding_batch()."""

    @pytest.mark.asyncio
    async def test_empty_batch_should_return_empty_mapping(self, embedding_service, fake_provider) -> None:
        """Should return {} without calling the provider."""
        assert await embedding_service.generate_embedding_batch([]) == {}
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_batch_should_split_into_provider_sized_calls(self, embedding_service, fake_provider) -> None:
        """Should call the provider once per batch of at most max_batch_size misses."""
        items = _items(*(f"distinct text number {letter}" for letter in "abcdefg"))

        results = await embedding_service.generate_embedding_batch(items)

        assert set(results) == {item.id for item in items}
        assert all(result.ok and not result.cached for result in results.values())
        assert sorted(len(call) for call in fake_provider.calls) == [1, 3, 3]

    @pytest.mark.asyncio
    async def test_duplicate_content_should_be_embedded_once(self, embedding_service, fake_provider) -> None:
        """Should send repeated content in one batch to the provider once."""
        items = _items("repeated text", "repeated text ", "other text")

        results = await embedding_service.generate_embedding_batch(items)

        assert fake_provider.calls == [["repeated text", "other text"]]
        assert results["item-0"].embedding == results["item-1"].embedding

    @pytest.mark.asyncio
    async def test_cached_items_should_skip_provider(self, embedding_service, fake_provider) -> None:
        """Should resolve previously embedded content from cache."""
        await embedding_service.generate_embedding("alpha text")

        results = await embedding_service.generate_embedding_batch(_items("alpha text", "beta text"))

        assert results["item-0"].cached is True
        assert results["item-1"].cached is False
        assert fake_provider.calls[-1] == ["beta text"]

    @pytest.mark.asyncio
    async def test_failed_batch_should_only_mark_its_own_misses(self, embedding_service, fake_provider) -> None:
        """Should isolate a provider failure to the unresolved items of that batch."""
        # Arrange
        await embedding_service.generate_embedding("text a")
        fake_provider.fail_when = lambda texts: "poison" in texts
        items = _items("text a", "text b", "poison", "text d", "text e", "text f")

        # Act
        results = await embedding_service.generate_embedding_batch(items)

        # Assert
        assert results["item-0"].ok and results["item-0"].cached
        for failed_id in ("item-1", "item-2"):
            assert results[failed_id].error is not None
            assert results[failed_id].embedding == []
            assert results[failed_id].token_count == 0
        assert all(results[item_id].ok for item_id in ("item-3", "item-4", "item-5"))

    @pytest.mark.asyncio
    async def test_invalid_vector_should_only_fail_that_item(self, embedding_service, fake_provider) -> None:
        """Should mark only the item whose vector is invalid."""
        fake_provider.vectors["broken"] = [0.0] * 3

        results = await embedding_service.generate_embedding_batch(_items("fine one", "broken", "fine two"))

        assert results["item-1"].error == "Provider returned an invalid embedding"
        assert results["item-0"].ok and results["item-2"].ok

    @pytest.mark.asyncio
    async def test_blank_item_should_be_marked_failed(self, embedding_service) -> None:
        """Should mark empty content as failed while embedding the rest."""
        results = await embedding_service.generate_embedding_batch(_items("  ", "real content"))

        assert results["item-0"].error == "Cannot embed empty content"
        assert results["item-1"].ok

    @pytest.mark.asyncio
    async def test_concurrent_batches_should_respect_limit(self, memory_cache) -> None:
        """Should never run more than max_concurrent_batches provider calls at once."""

        class SlowProvider(EmbeddingProvider):
            model_name = "slow"

            def __init__(self) -> None:
                self.in_flight = 0
                self.peak = 0

            async def embed_texts(self, texts: list[str]) -> list[list[float]]:
                self.in_flight += 1
                self.peak = max(self.peak, self.in_flight)
                await asyncio.sleep(0.01)
                self.in_flight -= 1
                return [[0.5] * DIMENSIONS for _ in texts]

        provider = SlowProvider()
        service = EmbeddingService(
            provider=provider,
            cache=memory_cache,
            dimensions=DIMENSIONS,
            max_batch_size=1,
            max_concurrent_batches=2,
        )

        results = await service.generate_embedding_batch(_items(*(f"text {i}" for i in range(6))))

        assert all(result.ok for result in results.values())
        assert provider.peak == 2

    @pytest.mark.asyncio
    async def test_cache_stats_should_reflect_hits_and_savings(self, embedding_service) -> None:
        """Should report entries, hits and tokens saved after reuse."""
        text = "a reused passage of text for statistics"
        first = await embedding_service.generate_embedding(text)
        await embedding_service.generate_embedding(text)

        stats = await embedding_service.get_cache_stats()

        assert stats.total_entries == 1
        assert stats.hits == 1
        assert stats.total_tokens_saved == first.token_count

    @pytest.mark.asyncio
    async def test_purge_should_remove_entries_idle_past_ttl(self, fake_provider) -> None:
        """Should delete idle cache entries so the next request embeds again."""
        # Arrange
        offset = [timedelta(0)]
        cache = InMemoryEmbeddingCache(ttl_seconds=100, clock=lambda: datetime.now(timezone.utc) + offset[0])
        service = EmbeddingService(provider=fake_provider, cache=cache, dimensions=DIMENSIONS)
        await service.generate_embedding("a passage that will sit idle in the cache")
        offset[0] = timedelta(seconds=500)

        # Act
        removed = await service.purge_expired_cache()

        # Assert
        assert removed == 1
        assert (await service.get_cache_stats()).total_entries == 0


class TestSimilarity:
    """Test suite for vector helpers."""

    def test_identical_vectors_should_have_similarity_one(self) -> None:
        """Should return 1.0 for identical non-zero vectors."""
        assert calculate_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors_should_have_similarity_zero(self) -> None:
        """Should return 0.0 for orthogonal vectors."""
        assert calculate_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_zero_vector_should_have_similarity_zero(self) -> None:
        """Should return 0.0 rather than dividing by zero."""
        assert calculate_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0

    def test_length_mismatch_should_raise(self) -> None:
        """Should raise ValueError for vectors of different lengths."""
        with pytest.raises(ValueError):
            calculate_similarity([1.0], [1.0, 0.0])

    def test_is_valid_embedding_should_check_length_and_values(self) -> None:
        """Should accept finite vectors of the right length only."""
        assert is_valid_embedding([0.1] * 4, 4)
        assert is_valid_embedding([1, 0, 0, 0], 4)
        assert not is_valid_embedding([0.1] * 3, 4)
        assert not is_valid_embedding([True, 0.1, 0.1, 0.1], 4)
        assert not is_valid_embedding([float("nan"), 0.1, 0.1, 0.1], 4)
        assert not is_valid_embedding("not a vector", 4)
