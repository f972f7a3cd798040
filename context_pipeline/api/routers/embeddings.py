"""
Embedding cache API endpoints.

Routes: GET /embeddings/cache/stats, POST /embeddings/cache/purge

Dependencies: context_pipeline.core.embedding
System role: Embedding cache monitoring HTTP API
"""

from fastapi import APIRouter, Depends

from context_pipeline.api.deps import get_embedding_service
from context_pipeline.api.error_handling import handle_pipeline_errors
from context_pipeline.core.embedding.service import EmbeddingService
from context_pipeline.models.api import CachePurgeResponse, CacheStatsResponse

router = APIRouter(prefix="/embeddings", tags=["embeddings"])


@router.get("/cache/stats", response_model=CacheStatsResponse)
@handle_pipeline_errors
async def get_cache_stats(
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> CacheStatsResponse:
    """Embedding cache entry count, hit rate and tokens saved."""
    stats = await embedding_service.get_cache_stats()
    return CacheStatsResponse(
        total_entries=stats.total_entries,
        hits=stats.hits,
        misses=stats.misses,
        hit_rate=stats.hit_rate,
        total_tokens_saved=stats.total_tokens_saved,
    )


@router.post("/cache/purge", response_model=CachePurgeResponse)
@handle_pipeline_errors
async def purge_cache(
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> CachePurgeResponse:
    """Delete cache entries idle past the configured TTL."""
    removed = await embedding_service.purge_expired_cache()
    return CachePurgeResponse(removed=removed)
