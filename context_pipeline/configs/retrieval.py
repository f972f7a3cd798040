"""
Retrieval configuration settings.

Manages ranking thresholds, candidate pool sizing and context budget.

Dependencies: pydantic, pydantic_settings
System role: Retrieval engine configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Retrieval engine defaults."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    max_results: int = Field(default=10, ge=1, description="Number of results returned per query")
    similarity_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity for a candidate (0.0-1.0)",
    )
    diversity_threshold: float = Field(
        default=0.85,
        ge=0.0,
        le=1.0,
        description="Word-overlap (Jaccard) at or above which a candidate is a near duplicate",
    )
    candidate_multiplier: int = Field(
        default=2,
        ge=1,
        description="Vector search fetches max_results * candidate_multiplier candidates",
    )
    keyword_weight: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Default keyword weight for hybrid search",
    )
    search_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout applied to each vector search call",
    )
    max_context_length: int = Field(
        default=4000,
        ge=1,
        description="Default character budget for assembled context",
    )
