"""
In-memory vector store.

Brute-force cosine search over chunks held in a dict. Used for local
development and tests.

Dependencies: asyncio, context_pipeline.core.embedding
System role: Vector search backend without external services
"""

import asyncio
import logging

from context_pipeline.boundary.vdb.base import VectorSearchBackend, build_stored_chunks
from context_pipeline.boundary.vdb.vector_schemas import StoredChunk, VectorSearchHit, VectorSearchRequest
from context_pipeline.core.embedding.similarity import calculate_similarity
from context_pipeline.core.exceptions import VectorStoreError
from context_pipeline.models.chunk import Chunk, Document

logger = logging.getLogger(__name__)


class InMemoryVectorStore(VectorSearchBackend):
    """Dict-backed vector store with exact cosine search."""

    def __init__(self) -> None:
        self._chunks: dict[str, StoredChunk] = {}
        self._write_lock = asyncio.Lock()

    async def search(self, request: VectorSearchRequest) -> list[VectorSearchHit]:
        excluded = set(request.exclude_chunk_ids or ())
        hits = []
        for chunk in list(self._chunks.values()):
            if chunk.organization_id != request.organization_id or chunk.chunk_id in excluded:
                continue
            if request.document_ids is not None and chunk.document_id not in request.document_ids:
                continue
            if request.categories is not None and chunk.document_category not in request.categories:
                continue
            try:
                similarity = calculate_similarity(request.embedding, chunk.embedding)
            except ValueError as e:
                raise VectorStoreError(str(e), operation="query") from e
            if similarity >= request.similarity_threshold:
                hits.append(VectorSearchHit(chunk=chunk, similarity=similarity))

        hits.sort(key=lambda hit: hit.similarity, reverse=True)
        return hits[: request.limit]

    async def replace_document_chunks(
        self,
        document: Document,
        chunks: list[Chunk],
        embeddings: list[list[float]],
    ) -> int:
        stored = build_stored_chunks(document, chunks, embeddings)
        async with self._write_lock:
            self._remove_document(document.id)
            for chunk in stored:
                self._chunks[chunk.chunk_id] = chunk

        logger.info(
            f"{__name__}:replace_document_chunks - Stored {len(stored)} chunks",
            extra={"document_id": document.id},
        )
        return len(stored)

    async def delete_document(self, document_id: str) -> int:
        async with self._write_lock:
            return self._remove_document(document_id)

    async def get_chunk(self, chunk_id: str) -> StoredChunk | None:
        return self._chunks.get(chunk_id)

    async def count(self) -> int:
        return len(self._chunks)

    def _remove_document(self, document_id: str) -> int:
        stale = [chunk_id for chunk_id, chunk in self._chunks.items() if chunk.document_id == document_id]
        for chunk_id in stale:
            del self._chunks[chunk_id]
        return len(stale)
