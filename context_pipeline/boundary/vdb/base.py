"""
Vector search backend interface.

Dependencies: context_pipeline.models, context_pipeline.boundary.vdb.vector_schemas
System role: Pluggable corpus storage and similarity search
"""

from abc import ABC, abstractmethod

from context_pipeline.boundary.vdb.vector_schemas import StoredChunk, VectorSearchHit, VectorSearchRequest
from context_pipeline.models.chunk import Chunk, Document


class VectorSearchBackend(ABC):
    """Organization-scoped chunk store with cosine similarity search."""

    @abstractmethod
    async def search(self, request: VectorSearchRequest) -> list[VectorSearchHit]:
        """
        Find chunks similar to the request embedding.

        Returns:
            list[VectorSearchHit]: Hits at or above the threshold, best first
        """

    @abstractmethod
    async def replace_document_chunks(
        self,
        document: Document,
        chunks: list[Chunk],
        embeddings: list[list[float]],
    ) -> int:
        """
        Replace every stored chunk of a document.

        Args:
            document: Source document
            chunks: New chunks of the document
            embeddings: One vector per chunk, in the same order

        Returns:
            int: Number of chunks stored
        """

    @abstractmethod
    async def delete_document(self, document_id: str) -> int:
        """Delete all chunks of a document and return how many were removed."""

    @abstractmethod
    async def get_chunk(self, chunk_id: str) -> StoredChunk | None:
        """Fetch a stored chunk with its embedding."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored chunks."""


def build_stored_chunks(
    document: Document,
    chunks: list[Chunk],
    embeddings: list[list[float]],
) -> list[StoredChunk]:
    """Pair chunks with their vectors and document attributes."""
    if len(chunks) != len(embeddings):
        raise ValueError(f"Got {len(embeddings)} embeddings for {len(chunks)} chunks")
    return [
        StoredChunk(
            chunk_id=chunk.chunk_id,
            organization_id=document.organization_id,
            document_id=document.id,
            document_title=document.display_title,
            document_category=document.category,
            chunk_index=chunk.chunk_index,
            chunk_type=chunk.chunk_type,
            content=chunk.content,
            token_count=chunk.token_count,
            metadata=chunk.metadata,
            embedding=list(embedding),
        )
        for chunk, embedding in zip(chunks, embeddings)
    ]
