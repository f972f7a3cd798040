"""
API routers.

Exports: health_router, documents_router, retrieval_router, embeddings_router
"""

from .documents import router as documents_router
from .embeddings import router as embeddings_router
from .health import router as health_router
from .retrieval import router as retrieval_router

__all__ = ["documents_router", "embeddings_router", "health_router", "retrieval_router"]
