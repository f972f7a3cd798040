"""
Embedding cache CRUD operations.

Dependencies: sqlalchemy, context_pipeline.boundary.db.models
System role: Embedding cache persistence
"""

from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from context_pipeline.boundary.db.CRUD.base_crud import BaseCRUD
from context_pipeline.boundary.db.models import EmbeddingCacheModel


class EmbeddingCacheCRUD(BaseCRUD[EmbeddingCacheModel]):
    """CRUD operations for cached embeddings."""

    def __init__(self) -> None:
        super().__init__(EmbeddingCacheModel)

    async def get_by_hash(self, session: AsyncSession, content_hash: str) -> EmbeddingCacheModel | None:
        """
        Retrieve a cached embedding by content hash.

        Args:
            session: Async database session
            content_hash: SHA-256 hex digest of the trimmed text

        Returns:
            EmbeddingCacheModel if cached, None otherwise
        """
        return await self.get_one_by(session, content_hash=content_hash)

    async def increment_usage(self, session: AsyncSession, content_hash: str, used_at: datetime) -> bool:
        """
        Atomically bump usage_count and last_used_at.

        A single UPDATE with usage_count = usage_count + 1, so concurrent
        touches never lose increments.

        Returns:
            bool: True if a row was updated
        """
        stmt = (
            update(EmbeddingCacheModel)
            .where(EmbeddingCacheModel.content_hash == content_hash)
            .values(usage_count=EmbeddingCacheModel.usage_count + 1, last_used_at=used_at)
        )
        result = await session.execute(stmt)
        return (result.rowcount or 0) > 0

    async def tokens_saved(self, session: AsyncSession) -> int:
        """Sum of token_count * (usage_count - 1) over all rows."""
        stmt = select(
            func.coalesce(
                func.sum(EmbeddingCacheModel.token_count * (EmbeddingCacheModel.usage_count - 1)),
                0,
            )
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def delete_idle_since(self, session: AsyncSession, cutoff: datetime) -> int:
        """
        Delete entries not used since cutoff.

        Returns:
            int: Number of deleted rows
        """
        stmt = delete(EmbeddingCacheModel).where(EmbeddingCacheModel.last_used_at < cutoff)
        result = await session.execute(stmt)
        return result.rowcount or 0


embedding_cache_crud = EmbeddingCacheCRUD()
