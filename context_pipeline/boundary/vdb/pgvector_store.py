"""
PostgreSQL + pgvector store.

Chunks live in the doc_chunks table; similarity search orders by the
pgvector cosine distance operator and converts it to similarity
(1 - distance).

Dependencies: sqlalchemy, pgvector, context_pipeline.boundary.db
System role: Production vector search backend
"""

import logging

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from context_pipeline.boundary.db.models import DocChunkModel
from context_pipeline.boundary.vdb.base import VectorSearchBackend, build_stored_chunks
from context_pipeline.boundary.vdb.vector_schemas import StoredChunk, VectorSearchHit, VectorSearchRequest
from context_pipeline.core.exceptions import VectorStoreError
from context_pipeline.models.chunk import Chunk, ChunkMetadata, Document

logger = logging.getLogger(__name__)


def _to_stored_chunk(row: DocChunkModel) -> StoredChunk:
    return StoredChunk(
        chunk_id=row.chunk_id,
        organization_id=row.organization_id,
        document_id=row.document_id,
        document_title=row.document_title,
        document_category=row.document_category,
        chunk_index=row.chunk_index,
        chunk_type=row.chunk_type,
        content=row.content,
        token_count=row.token_count,
        metadata=ChunkMetadata.model_validate_json(row.metadata_json),
        # pgvector returns numpy arrays
        embedding=[float(value) for value in row.embedding],
    )


class PGVectorStore(VectorSearchBackend):
    """Vector store backed by a pgvector column."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize store.

        Args:
            session_factory: Async session factory bound to PostgreSQL
        """
        self._session_factory = session_factory

    @staticmethod
    def build_search_statement(request: VectorSearchRequest) -> Select:
        """
        Build the similarity search query for a request.

        Args:
            request: Search parameters

        Returns:
            Select: Rows of (DocChunkModel, similarity) ordered by distance
        """
        distance = DocChunkModel.embedding.cosine_distance(request.embedding)
        stmt = (
            select(DocChunkModel, (1 - distance).label("similarity"))
            .where(DocChunkModel.organization_id == request.organization_id)
            .where(distance <= 1 - request.similarity_threshold)
        )
        if request.document_ids is not None:
            stmt = stmt.where(DocChunkModel.document_id.in_(request.document_ids))
        if request.categories is not None:
            stmt = stmt.where(DocChunkModel.document_category.in_(request.categories))
        if request.exclude_chunk_ids:
            stmt = stmt.where(DocChunkModel.chunk_id.not_in(request.exclude_chunk_ids))
        return stmt.order_by(distance).limit(request.limit)

    async def search(self, request: VectorSearchRequest) -> list[VectorSearchHit]:
        stmt = self.build_search_statement(request)
        try:
            async with self._session_factory() as session:
                rows = (await session.execute(stmt)).all()
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Vector search failed: {e}", operation="query") from e

        return [
            VectorSearchHit(chunk=_to_stored_chunk(row), similarity=min(max(float(similarity), 0.0), 1.0))
            for row, similarity in rows
        ]

    async def replace_document_chunks(
        self,
        document: Document,
        chunks: list[Chunk],
        embeddings: list[list[float]],
    ) -> int:
        stored = build_stored_chunks(document, chunks, embeddings)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(delete(DocChunkModel).where(DocChunkModel.document_id == document.id))
                    session.add_all(
                        DocChunkModel(
                            chunk_id=chunk.chunk_id,
                            organization_id=chunk.organization_id,
                            document_id=chunk.document_id,
                            document_title=chunk.document_title,
                            document_category=chunk.document_category,
                            chunk_index=chunk.chunk_index,
                            chunk_type=chunk.chunk_type.value,
                            content=chunk.content,
                            token_count=chunk.token_count,
                            metadata_json=chunk.metadata.model_dump_json(exclude_none=True),
                            embedding=chunk.embedding,
                        )
                        for chunk in stored
                    )
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to store document chunks: {e}",
                operation="upsert",
                details={"document_id": document.id},
            ) from e

        logger.info(
            f"{__name__}:replace_document_chunks - Stored {len(stored)} chunks",
            extra={"document_id": document.id},
        )
        return len(stored)

    async def delete_document(self, document_id: str) -> int:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        delete(DocChunkModel).where(DocChunkModel.document_id == document_id)
                    )
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to delete document chunks: {e}",
                operation="delete",
                details={"document_id": document_id},
            ) from e
        return result.rowcount or 0

    async def get_chunk(self, chunk_id: str) -> StoredChunk | None:
        try:
            async with self._session_factory() as session:
                row = await session.get(DocChunkModel, chunk_id)
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Failed to load chunk: {e}", operation="get") from e
        return _to_stored_chunk(row) if row is not None else None

    async def count(self) -> int:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(func.count()).select_from(DocChunkModel))
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Failed to count chunks: {e}", operation="count") from e
        return int(result.scalar_one())
