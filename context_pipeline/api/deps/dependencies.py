"""
Dependency injection container.

Lazily builds and caches the pipeline components from settings and exposes
them as FastAPI dependencies.

Dependencies: context_pipeline.configs, context_pipeline.application,
    context_pipeline.boundary
System role: DI container for service injection
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from context_pipeline.application.services import GroundingService, IngestionService
from context_pipeline.boundary.cache import EmbeddingCache, InMemoryEmbeddingCache, SqlEmbeddingCache
from context_pipeline.boundary.db.connection import get_async_engine, get_async_session_factory
from context_pipeline.boundary.embeddings import EmbeddingProvider, create_embedding_provider
from context_pipeline.boundary.vdb import VectorSearchBackend, get_vector_store
from context_pipeline.configs import Settings, get_settings
from context_pipeline.core.chunking import DocumentChunker
from context_pipeline.core.embedding import EmbeddingService
from context_pipeline.core.exceptions import ValidationError
from context_pipeline.core.retrieval import RetrievalEngine
from context_pipeline.models.chunk import ChunkingOptions
from context_pipeline.observability.analytics import (
    LoggingRetrievalAnalytics,
    RetrievalAnalytics,
    SqlRetrievalAnalytics,
)

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker | None = None
        self._embedding_cache: EmbeddingCache | None = None
        self._embedding_provider: EmbeddingProvider | None = None
        self._embedding_service: EmbeddingService | None = None
        self._vector_store: VectorSearchBackend | None = None
        self._analytics: RetrievalAnalytics | None = None
        self._retrieval_engine: RetrievalEngine | None = None
        self._ingestion_service: IngestionService | None = None
        self._grounding_service: GroundingService | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def uses_database(self) -> bool:
        """True when any component is configured to use PostgreSQL."""
        return (
            self.settings.embedding_cache.backend.lower() == "sql"
            or self.settings.vector_store.store_type.lower() == "pgvector"
        )

    @property
    def engine(self) -> AsyncEngine:
        """Get cached async database engine."""
        if self._engine is None:
            self._engine = get_async_engine()
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker:
        """Get cached async session factory."""
        if self._session_factory is None:
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def embedding_cache(self) -> EmbeddingCache:
        """Get cached embedding cache backend."""
        if self._embedding_cache is None:
            config = self.settings.embedding_cache
            backend = config.backend.lower()
            if backend == "memory":
                self._embedding_cache = InMemoryEmbeddingCache(
                    max_entries=config.max_entries,
                    ttl_seconds=config.ttl_seconds,
                )
            elif backend == "sql":
                self._embedding_cache = SqlEmbeddingCache(self.session_factory, ttl_seconds=config.ttl_seconds)
            else:
                raise ValidationError(f"Invalid embedding cache backend: {config.backend}", field="backend")
        return self._embedding_cache

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        """Get cached embedding provider."""
        if self._embedding_provider is None:
            self._embedding_provider = create_embedding_provider(self.settings.embedding)
        return self._embedding_provider

    @property
    def embedding_service(self) -> EmbeddingService:
        """Get cached embedding service."""
        if self._embedding_service is None:
            config = self.settings.embedding
            self._embedding_service = EmbeddingService(
                provider=self.embedding_provider,
                cache=self.embedding_cache,
                dimensions=config.dimensions,
                max_batch_size=config.max_batch_size,
                max_concurrent_batches=config.max_concurrent_batches,
            )
        return self._embedding_service

    @property
    def vector_store(self) -> VectorSearchBackend:
        """Get cached vector store."""
        if self._vector_store is None:
            needs_db = self.settings.vector_store.store_type.lower() == "pgvector"
            self._vector_store = get_vector_store(
                self.settings.vector_store,
                session_factory=self.session_factory if needs_db else None,
            )
        return self._vector_store

    @property
    def analytics(self) -> RetrievalAnalytics:
        """Get cached retrieval analytics sink."""
        if self._analytics is None:
            if self.uses_database:
                self._analytics = SqlRetrievalAnalytics(self.session_factory)
            else:
                self._analytics = LoggingRetrievalAnalytics()
        return self._analytics

    @property
    def retrieval_engine(self) -> RetrievalEngine:
        """Get cached retrieval engine."""
        if self._retrieval_engine is None:
            self._retrieval_engine = RetrievalEngine(
                embedding_service=self.embedding_service,
                vector_store=self.vector_store,
                settings=self.settings.retrieval,
                analytics=self.analytics,
            )
        return self._retrieval_engine

    @property
    def ingestion_service(self) -> IngestionService:
        """Get cached ingestion service."""
        if self._ingestion_service is None:
            config = self.settings.chunking
            self._ingestion_service = IngestionService(
                chunker=DocumentChunker(min_chunk_chars=config.min_chunk_chars),
                embedding_service=self.embedding_service,
                vector_store=self.vector_store,
                default_options=ChunkingOptions(
                    max_tokens=config.max_tokens,
                    overlap_tokens=config.overlap_tokens,
                    preserve_structure=config.preserve_structure,
                    split_on_sentences=config.split_on_sentences,
                ),
            )
        return self._ingestion_service

    @property
    def grounding_service(self) -> GroundingService:
        """Get cached grounding service."""
        if self._grounding_service is None:
            self._grounding_service = GroundingService(
                retrieval_engine=self.retrieval_engine,
                max_context_length=self.settings.retrieval.max_context_length,
            )
        return self._grounding_service

    async def aclose(self) -> None:
        """Flush analytics and dispose the database engine."""
        if self._retrieval_engine is not None:
            await self._retrieval_engine.wait_for_analytics()
        if self._engine is not None:
            await self._engine.dispose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._session_factory = None
        self._embedding_cache = None
        self._embedding_provider = None
        self._embedding_service = None
        self._vector_store = None
        self._analytics = None
        self._retrieval_engine = None
        self._ingestion_service = None
        self._grounding_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_ingestion_service() -> IngestionService:
    """
    Get ingestion service instance.

    Returns:
        IngestionService: Cached ingestion service
    """
    return get_service_cache().ingestion_service


def get_grounding_service() -> GroundingService:
    """
    Get grounding service instance.

    Returns:
        GroundingService: Cached grounding service
    """
    return get_service_cache().grounding_service


def get_embedding_service() -> EmbeddingService:
    """
    Get embedding service instance.

    Returns:
        EmbeddingService: Cached embedding service
    """
    return get_service_cache().embedding_service
