"""
SQL-backed embedding cache.

Stores entries in the embedding_cache table. Uniqueness of content_hash
keeps one row per content even under concurrent inserts, and usage is
counted with a single atomic UPDATE.

Dependencies: sqlalchemy, context_pipeline.boundary.db
System role: Persistent embedding cache shared across processes
"""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from context_pipeline.boundary.cache.base import EmbeddingCache
from context_pipeline.boundary.db.CRUD.embedding_cache_crud import embedding_cache_crud
from context_pipeline.boundary.db.models import EmbeddingCacheModel
from context_pipeline.core.exceptions import EmbeddingCacheError
from context_pipeline.models.embedding import CacheStats, EmbeddingCacheEntry

logger = logging.getLogger(__name__)


def _to_entry(row: EmbeddingCacheModel) -> EmbeddingCacheEntry:
    return EmbeddingCacheEntry(
        content_hash=row.content_hash,
        embedding=list(row.embedding),
        token_count=row.token_count,
        content_preview=row.content_preview,
        created_at=row.created_at,
        last_used_at=row.last_used_at,
        usage_count=row.usage_count,
    )


class SqlEmbeddingCache(EmbeddingCache):
    """Embedding cache persisted through SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker, ttl_seconds: int = 30 * 24 * 60 * 60) -> None:
        """
        Initialize cache.

        Args:
            session_factory: Async session factory
            ttl_seconds: purge_expired removes entries idle longer than this
        """
        self._session_factory = session_factory
        self.ttl = timedelta(seconds=ttl_seconds)
        self._hits = 0
        self._misses = 0

    async def get(self, key: str) -> EmbeddingCacheEntry | None:
        try:
            async with self._session_factory() as session:
                row = await embedding_cache_crud.get_by_hash(session, key)
                entry = _to_entry(row) if row is not None else None
        except SQLAlchemyError as e:
            raise EmbeddingCacheError(f"Cache lookup failed: {e}", operation="get") from e

        if entry is None:
            self._misses += 1
        else:
            self._hits += 1
        return entry

    async def set(self, key: str, entry: EmbeddingCacheEntry) -> bool:
        try:
            async with self._session_factory() as session:
                try:
                    await embedding_cache_crud.create(
                        session,
                        content_hash=key,
                        embedding=list(entry.embedding),
                        token_count=entry.token_count,
                        content_preview=entry.content_preview,
                        usage_count=entry.usage_count,
                        created_at=entry.created_at,
                        last_used_at=entry.last_used_at,
                    )
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    return False
        except SQLAlchemyError as e:
            raise EmbeddingCacheError(f"Cache write failed: {e}", operation="set") from e
        return True

    async def touch(self, key: str) -> EmbeddingCacheEntry | None:
        try:
            async with self._session_factory() as session:
                updated = await embedding_cache_crud.increment_usage(
                    session, key, used_at=datetime.now(timezone.utc)
                )
                await session.commit()
                if not updated:
                    return None
                row = await embedding_cache_crud.get_by_hash(session, key)
                return _to_entry(row) if row is not None else None
        except SQLAlchemyError as e:
            raise EmbeddingCacheError(f"Cache usage update failed: {e}", operation="touch") from e

    async def stats(self) -> CacheStats:
        try:
            async with self._session_factory() as session:
                total_entries = await embedding_cache_crud.count(session)
                tokens_saved = await embedding_cache_crud.tokens_saved(session)
        except SQLAlchemyError as e:
            raise EmbeddingCacheError(f"Cache stats failed: {e}", operation="stats") from e

        return CacheStats(
            total_entries=total_entries,
            hits=self._hits,
            misses=self._misses,
            total_tokens_saved=tokens_saved,
        )

    async def purge_expired(self) -> int:
        cutoff = datetime.now(timezone.utc) - self.ttl
        try:
            async with self._session_factory() as session:
                removed = await embedding_cache_crud.delete_idle_since(session, cutoff)
                await session.commit()
        except SQLAlchemyError as e:
            raise EmbeddingCacheError(f"Cache purge failed: {e}", operation="purge_expired") from e

        logger.info(f"{__name__}:purge_expired - Purged {removed} idle entries", extra={"cutoff": cutoff.isoformat()})
        return removed
