"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from context_pipeline.configs.cache import EmbeddingCacheSettings
from context_pipeline.configs.chunking import ChunkingSettings
from context_pipeline.configs.database import DatabaseSettings
from context_pipeline.configs.embedding import EmbeddingSettings
from context_pipeline.configs.retrieval import RetrievalSettings
from context_pipeline.configs.settings import Settings, get_settings
from context_pipeline.configs.vector_store import VectorStoreSettings

__all__ = [
    "ChunkingSettings",
    "DatabaseSettings",
    "EmbeddingCacheSettings",
    "EmbeddingSettings",
    "RetrievalSettings",
    "Settings",
    "VectorStoreSettings",
    "get_settings",
]
