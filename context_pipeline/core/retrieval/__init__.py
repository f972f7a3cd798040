"""
Retrieval.

Exports: RetrievalEngine, validate_retrieval_quality, filter helpers
"""

from .engine import RetrievalEngine
from .filters import (
    aggregate_sources,
    apply_diversity_filter,
    filter_by_question_types,
    keyword_match_fraction,
    word_overlap,
)
from .quality import validate_retrieval_quality

__all__ = [
    "RetrievalEngine",
    "aggregate_sources",
    "apply_diversity_filter",
    "filter_by_question_types",
    "keyword_match_fraction",
    "validate_retrieval_quality",
    "word_overlap",
]
