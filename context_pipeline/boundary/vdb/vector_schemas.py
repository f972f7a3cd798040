"""
Vector database schemas.

Pydantic models for vector store interactions (stored chunks, search
requests and hits).

Dependencies: pydantic, context_pipeline.models
System role: Type definitions for vector operations
"""

from pydantic import BaseModel, Field

from context_pipeline.models.chunk import ChunkMetadata, ChunkType


class StoredChunk(BaseModel):
    """Chunk as persisted in the vector store, with document attributes."""

    chunk_id: str = Field(description="Deterministic chunk identifier")
    organization_id: str = Field(description="Organization scope for isolation")
    document_id: str = Field(description="Owning document identifier")
    document_title: str | None = Field(default=None, description="Title used in attributions")
    document_category: str | None = Field(default=None, description="Document type for category filters")
    chunk_index: int = Field(description="Position within the document")
    chunk_type: ChunkType = Field(default=ChunkType.PARAGRAPH)
    content: str = Field(description="Chunk text content")
    token_count: int = Field(default=0)
    metadata: ChunkMetadata = Field(default_factory=ChunkMetadata)
    embedding: list[float] = Field(description="Chunk embedding vector")


class VectorSearchRequest(BaseModel):
    """Query parameters for vector search."""

    embedding: list[float] = Field(description="Query embedding vector")
    organization_id: str = Field(description="Only chunks of this organization are searched")
    limit: int = Field(default=20, ge=1, description="Maximum number of hits")
    similarity_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity (inclusive)",
    )
    document_ids: list[str] | None = Field(default=None, description="Restrict to these documents")
    categories: list[str] | None = Field(default=None, description="Restrict to these document categories")
    exclude_chunk_ids: list[str] | None = Field(default=None, description="Never return these chunks")


class VectorSearchHit(BaseModel):
    """Single result from vector search."""

    chunk: StoredChunk
    similarity: float = Field(description="Cosine similarity (0.0-1.0)")
