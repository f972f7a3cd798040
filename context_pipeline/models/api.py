"""
HTTP request and response schemas.

Dependencies: pydantic, context_pipeline.models
System role: API contracts for the FastAPI routers
"""

from pydantic import BaseModel, Field

from context_pipeline.models.chunk import ChunkingOptions
from context_pipeline.models.retrieval import RetrievalQuery


class IngestDocumentRequest(BaseModel):
    """Document content and attributes for ingestion."""

    organization_id: str = Field(min_length=1, description="Organization scope")
    content: str = Field(description="Extracted document text")
    filename: str = Field(min_length=1, description="Original filename")
    title: str | None = Field(default=None, description="Display title")
    category: str | None = Field(default=None, description="Document type")
    options: ChunkingOptions | None = Field(default=None, description="Chunking options override")


class DeleteDocumentResponse(BaseModel):
    """Result of removing a document from the vector store."""

    document_id: str
    removed_chunks: int


class ContextRequest(RetrievalQuery):
    """Retrieval query plus an optional context length budget."""

    max_length: int | None = Field(default=None, ge=1, description="Character budget for the assembled context")


class HybridContextRequest(ContextRequest):
    """Context request with keyword boosting."""

    keywords: list[str] = Field(default_factory=list, description="Keywords boosting matching passages")
    keyword_weight: float | None = Field(default=None, ge=0.0, le=1.0, description="Weight of keyword matches")


class CacheStatsResponse(BaseModel):
    """Embedding cache statistics."""

    total_entries: int
    hits: int
    misses: int
    hit_rate: float
    total_tokens_saved: int


class CachePurgeResponse(BaseModel):
    """Result of an embedding cache purge."""

    removed: int
