"""
Document chunking.

Exports: DocumentChunker, estimate_token_count, normalize_content,
detect_structure, DocumentStructure, question-type helpers
"""

from .chunker import DocumentChunker
from .question_types import (
    CHUNK_TOPIC_KEYWORDS,
    RETRIEVAL_TOPIC_KEYWORDS,
    identify_relevant_question_types,
    matches_question_types,
)
from .structure import DocumentStructure, SectionSpan, Span, detect_structure, normalize_content
from .tokens import estimate_token_count

__all__ = [
    "CHUNK_TOPIC_KEYWORDS",
    "DocumentChunker",
    "DocumentStructure",
    "RETRIEVAL_TOPIC_KEYWORDS",
    "SectionSpan",
    "Span",
    "detect_structure",
    "estimate_token_count",
    "identify_relevant_question_types",
    "matches_question_types",
    "normalize_content",
]
