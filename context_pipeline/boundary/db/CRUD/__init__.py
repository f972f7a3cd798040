"""
CRUD operations.

Exports: BaseCRUD, embedding_cache_crud, retrieval_session_crud
"""

from .base_crud import BaseCRUD
from .embedding_cache_crud import EmbeddingCacheCRUD, embedding_cache_crud
from .retrieval_session_crud import RetrievalSessionCRUD, retrieval_session_crud

__all__ = [
    "BaseCRUD",
    "EmbeddingCacheCRUD",
    "RetrievalSessionCRUD",
    "embedding_cache_crud",
    "retrieval_session_crud",
]
