"""
Embedding provider configuration settings.

Selects the LangChain embedding backend and its batching/timeout limits.

Dependencies: pydantic, pydantic_settings
System role: Embedding provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Embedding provider settings (Google Gemini by default, Bedrock optional)."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="google",
        description="Embedding backend: 'google' (Gemini) or 'bedrock' (Titan)",
    )
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID passed to the provider",
    )
    dimensions: int = Field(
        default=1536,
        ge=1,
        description="Fixed embedding dimensionality; every vector is validated against it",
    )
    max_batch_size: int = Field(
        default=100,
        ge=1,
        description="Maximum number of texts per provider call",
    )
    max_concurrent_batches: int = Field(
        default=4,
        ge=1,
        description="Number of provider batches allowed in flight at once",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to every provider round trip",
    )
    bedrock_model_id: str = Field(
        default="amazon.titan-embed-text-v1",
        description="Bedrock model ID used when provider is 'bedrock' (Titan v1 = 1536 dims)",
    )
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region for Bedrock embeddings",
    )
