"""
Domain models.

Exports: Document, Chunk, ChunkMetadata, ChunkType, ChunkingOptions,
embedding models, retrieval models, IngestionResult
"""

from .api import (
    CachePurgeResponse,
    CacheStatsResponse,
    ContextRequest,
    DeleteDocumentResponse,
    HybridContextRequest,
    IngestDocumentRequest,
)
from .chunk import Chunk, ChunkingOptions, ChunkMetadata, ChunkType, Document
from .embedding import (
    CacheStats,
    EmbeddingBatchItem,
    EmbeddingBatchResult,
    EmbeddingCacheEntry,
    EmbeddingResult,
)
from .ingestion import IngestionResult
from .retrieval import (
    GroundingContext,
    QualityReport,
    RetrievalContext,
    RetrievalQuery,
    RetrievalResult,
    RetrievalSessionRecord,
    RetrievalSource,
)

__all__ = [
    "CachePurgeResponse",
    "CacheStatsResponse",
    "ContextRequest",
    "DeleteDocumentResponse",
    "HybridContextRequest",
    "IngestDocumentRequest",
    "CacheStats",
    "Chunk",
    "ChunkMetadata",
    "ChunkType",
    "ChunkingOptions",
    "Document",
    "EmbeddingBatchItem",
    "EmbeddingBatchResult",
    "EmbeddingCacheEntry",
    "EmbeddingResult",
    "GroundingContext",
    "IngestionResult",
    "QualityReport",
    "RetrievalContext",
    "RetrievalQuery",
    "RetrievalResult",
    "RetrievalSessionRecord",
    "RetrievalSource",
]
