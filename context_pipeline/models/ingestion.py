"""
Ingestion result model.

Represents the outcome of chunking and embedding a document.

Dependencies: pydantic
System role: Return type for IngestionService.ingest_document()
"""

from pydantic import BaseModel, Field


class IngestionResult(BaseModel):
    """Result of document ingestion."""

    document_id: str = Field(description="Ingested document identifier")
    chunk_count: int = Field(description="Chunks stored in the vector store")
    embedded_count: int = Field(description="Chunks embedded by the provider during this run")
    cached_count: int = Field(description="Chunks served from the embedding cache")
    failed_count: int = Field(description="Chunks dropped because embedding failed")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
