"""
Shared test fixtures and configuration for entire test suite.

Provides: fake embedding provider, in-memory cache/store wiring,
aiosqlite session factory, vector helpers
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import hashlib
import math

import pytest

from context_pipeline.boundary.cache.memory_cache import InMemoryEmbeddingCache
from context_pipeline.boundary.embeddings.provider import EmbeddingProvider
from context_pipeline.boundary.vdb.memory_store import InMemoryVectorStore
from context_pipeline.configs.retrieval import RetrievalSettings
from context_pipeline.core.embedding.service import EmbeddingService
from context_pipeline.core.exceptions import EmbeddingError

TEST_DIMENSIONS = 8


def unit_vector_with_similarity(similarity: float, dimensions: int = TEST_DIMENSIONS) -> list[float]:
    """Vector whose cosine similarity to the first basis vector equals `similarity`."""
    vector = [0.0] * dimensions
    vector[0] = similarity
    vector[1] = math.sqrt(max(0.0, 1 - similarity * similarity))
    return vector


def hashed_vector(text: str, dimensions: int = TEST_DIMENSIONS) -> list[float]:
    """Deterministic non-zero vector derived from text."""
    digest = hashlib.sha256(text.strip().encode()).digest()
    return [(byte + 1) / 256 for byte in digest[:dimensions]]


class FakeEmbeddingProvider(EmbeddingProvider):
    """Provider returning fixed or hashed vectors and recording every call."""

    def __init__(self, vectors: dict[str, list[float]] | None = None, dimensions: int = TEST_DIMENSIONS) -> None:
        self.model_name = "fake-embedding"
        self.vectors = vectors or {}
        self.dimensions = dimensions
        self.calls: list[list[str]] = []
        self.fail_when = None

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if self.fail_when is not None and self.fail_when(texts):
            raise EmbeddingError("provider unavailable")
        return [self.vectors.get(text, hashed_vector(text, self.dimensions)) for text in texts]


@pytest.fixture
def fake_provider() -> FakeEmbeddingProvider:
    """Provide fake embedding provider."""
    return FakeEmbeddingProvider()


@pytest.fixture
def memory_cache() -> InMemoryEmbeddingCache:
    """Provide empty in-memory embedding cache."""
    return InMemoryEmbeddingCache(max_entries=1000, ttl_seconds=3600)


@pytest.fixture
def embedding_service(fake_provider: FakeEmbeddingProvider, memory_cache: InMemoryEmbeddingCache) -> EmbeddingService:
    """Provide embedding service wired to fake provider and memory cache."""
    return EmbeddingService(
        provider=fake_provider,
        cache=memory_cache,
        dimensions=TEST_DIMENSIONS,
        max_batch_size=3,
        max_concurrent_batches=2,
    )


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    """Provide empty in-memory vector store."""
    return InMemoryVectorStore()


@pytest.fixture
def retrieval_settings() -> RetrievalSettings:
    """Provide retrieval settings with defaults independent of the environment."""
    return RetrievalSettings(
        max_results=10,
        similarity_threshold=0.7,
        diversity_threshold=0.85,
        candidate_multiplier=2,
        keyword_weight=0.3,
        search_timeout_seconds=1.0,
        max_context_length=4000,
    )


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Session factory bound to a fresh schema
    """
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from context_pipeline.boundary.db.base import Base
    from context_pipeline.boundary.db import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def vector_with_similarity():
    """Provide helper building vectors with a chosen similarity to the first basis vector."""
    return unit_vector_with_similarity


@pytest.fixture
def query_vector() -> list[float]:
    """Provide the query vector all similarity fixtures are measured against."""
    return unit_vector_with_similarity(1.0)
