"""
Embedding generation.

Exports: EmbeddingService, calculate_similarity, is_valid_embedding
"""

from .service import EmbeddingService
from .similarity import calculate_similarity, is_valid_embedding

__all__ = ["EmbeddingService", "calculate_similarity", "is_valid_embedding"]
