"""
Retrieval domain models and schemas.

Queries, ranked results and the per-query context handed to generation.

Dependencies: pydantic, context_pipeline.models.chunk
System role: Retrieval API contracts
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from context_pipeline.models.chunk import ChunkMetadata


class RetrievalQuery(BaseModel):
    """Query text plus organization scope and optional filters."""

    text: str = Field(description="Natural language query")
    organization_id: str = Field(description="Organization scope")
    question_types: list[str] | None = Field(
        default=None,
        description="Keep only candidates matching one of these question types",
    )
    document_ids: list[str] | None = Field(default=None, description="Restrict to these documents")
    categories: list[str] | None = Field(default=None, description="Restrict to these document categories")
    similarity_threshold: float | None = Field(default=None, ge=0.0, le=1.0)
    max_results: int | None = Field(default=None, ge=1, le=100)
    diversity_threshold: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        alias="diversity_factor",
        description="Word-overlap at which a candidate counts as a near duplicate",
    )

    model_config = {"populate_by_name": True}


class RetrievalResult(BaseModel):
    """Single ranked passage."""

    chunk_id: str
    document_id: str
    chunk_index: int
    content: str
    similarity: float = Field(description="Cosine similarity to the query (0.0-1.0)")
    score: float = Field(description="Ranking score (equals similarity outside hybrid search)")
    metadata: ChunkMetadata = Field(default_factory=ChunkMetadata)
    document_title: str | None = None
    section_title: str | None = None
    page_number: int | None = None


class RetrievalSource(BaseModel):
    """Per-document result count."""

    document_id: str
    document_title: str
    chunk_count: int


class RetrievalContext(BaseModel):
    """Ranked, deduplicated results for one query."""

    query: str
    results: list[RetrievalResult] = Field(default_factory=list)
    total_results: int = 0
    average_similarity: float = 0.0
    processing_time_ms: float = 0.0
    sources: list[RetrievalSource] = Field(default_factory=list)

    @classmethod
    def empty(cls, query: str, processing_time_ms: float = 0.0) -> "RetrievalContext":
        """Context returned when nothing could be retrieved."""
        return cls(query=query, processing_time_ms=processing_time_ms)


class QualityReport(BaseModel):
    """Advisory assessment of a retrieval context."""

    is_high_quality: bool
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class RetrievalSessionRecord(BaseModel):
    """Analytics record emitted after each retrieval."""

    organization_id: str
    query_text: str
    results_count: int
    average_similarity: float
    processing_time_ms: float
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class GroundingContext(BaseModel):
    """Assembled context delivered to the generation component."""

    context: RetrievalContext
    text: str = Field(description="Assembled context string or the no-context signal")
    has_context: bool
    quality: QualityReport
