"""
Embedding provider boundary.

Exports: EmbeddingProvider, LangChainEmbeddingProvider, create_embedding_provider
"""

from .factory import create_embedding_provider, create_embeddings
from .provider import EmbeddingProvider, LangChainEmbeddingProvider

__all__ = [
    "EmbeddingProvider",
    "LangChainEmbeddingProvider",
    "create_embedding_provider",
    "create_embeddings",
]
