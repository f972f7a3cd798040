"""
FastAPI dependencies.

Exports: ServiceCache, get_service_cache and per-service dependency functions
"""

from .dependencies import (
    ServiceCache,
    get_embedding_service,
    get_grounding_service,
    get_ingestion_service,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_embedding_service",
    "get_grounding_service",
    "get_ingestion_service",
    "get_service_cache",
]
