"""
Embedding cache backends.

Exports: EmbeddingCache, InMemoryEmbeddingCache, SqlEmbeddingCache
"""

from .base import EmbeddingCache
from .memory_cache import InMemoryEmbeddingCache
from .sql_cache import SqlEmbeddingCache

__all__ = ["EmbeddingCache", "InMemoryEmbeddingCache", "SqlEmbeddingCache"]
