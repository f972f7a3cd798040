"""
Vector store boundary.

Exports: VectorSearchBackend, InMemoryVectorStore, PGVectorStore,
get_vector_store, vector schemas
"""

from .base import VectorSearchBackend
from .factory import get_vector_store
from .memory_store import InMemoryVectorStore
from .pgvector_store import PGVectorStore
from .vector_schemas import StoredChunk, VectorSearchHit, VectorSearchRequest

__all__ = [
    "InMemoryVectorStore",
    "PGVectorStore",
    "StoredChunk",
    "VectorSearchBackend",
    "VectorSearchHit",
    "VectorSearchRequest",
    "get_vector_store",
]
