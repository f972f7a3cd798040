"""
ORM models.

Exports: EmbeddingCacheModel, DocChunkModel, RetrievalSessionModel
"""

from .doc_chunk_model import EMBEDDING_DIMENSIONS, DocChunkModel
from .embedding_cache_model import EmbeddingCacheModel
from .retrieval_session_model import RetrievalSessionModel

__all__ = ["DocChunkModel", "EMBEDDING_DIMENSIONS", "EmbeddingCacheModel", "RetrievalSessionModel"]
