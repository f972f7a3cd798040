"""
Embedding domain models.

Dependencies: pydantic
System role: Data structures for embedding generation and caching
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class EmbeddingResult(BaseModel):
    """Outcome of a single embedding request."""

    embedding: list[float] = Field(description="Embedding vector")
    token_count: int = Field(description="Token estimate for the embedded text")
    cached: bool = Field(description="True when served from the embedding cache")


class EmbeddingBatchItem(BaseModel):
    """Single input of a batch embedding request."""

    id: str = Field(description="Caller-supplied identifier used to key the result")
    content: str = Field(description="Text to embed")
    metadata: dict[str, Any] | None = Field(default=None, description="Opaque caller metadata")


class EmbeddingBatchResult(BaseModel):
    """Per-item outcome of a batch embedding request."""

    id: str
    embedding: list[float] = Field(default_factory=list)
    token_count: int = 0
    cached: bool = False
    error: str | None = Field(default=None, description="Set when this item could not be embedded")

    @property
    def ok(self) -> bool:
        """True when the item carries a usable vector."""
        return self.error is None


class EmbeddingCacheEntry(BaseModel):
    """Cached embedding keyed by content hash."""

    content_hash: str = Field(description="SHA-256 hex digest of the trimmed text")
    embedding: list[float] = Field(description="Cached embedding vector")
    token_count: int = Field(default=0, description="Token estimate of the cached text")
    content_preview: str = Field(default="", description="First characters of the source text")
    created_at: datetime
    last_used_at: datetime
    usage_count: int = Field(default=1, ge=0)


class CacheStats(BaseModel):
    """Embedding cache statistics."""

    total_entries: int = 0
    hits: int = 0
    misses: int = 0
    total_tokens_saved: int = 0

    @property
    def hit_rate(self) -> float:
        """Share of lookups served from the cache."""
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0
