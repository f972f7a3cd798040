"""
Embedding cache configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding cache backend and eviction configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingCacheSettings(BaseSettings):
    """Embedding cache backend selection and eviction limits."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_CACHE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="memory",
        description="Cache backend: 'memory' (process-local LRU) or 'sql' (PostgreSQL table)",
    )
    max_entries: int = Field(
        default=10_000,
        ge=1,
        description="LRU bound for the in-memory cache",
    )
    ttl_seconds: int = Field(
        default=30 * 24 * 60 * 60,
        ge=1,
        description="Entries idle longer than this are evicted",
    )
