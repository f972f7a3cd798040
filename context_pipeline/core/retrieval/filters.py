"""
Candidate filtering and aggregation for retrieval.

Dependencies: context_pipeline.core.chunking, context_pipeline.models
System role: Post-search filtering (question types, diversity, keywords)
"""

from context_pipeline.core.chunking.question_types import matches_question_types
from context_pipeline.models.retrieval import RetrievalResult, RetrievalSource


def filter_by_question_types(
    results: list[RetrievalResult],
    question_types: list[str] | None,
) -> list[RetrievalResult]:
    """Keep results mentioning a keyword of any requested question type."""
    if not question_types:
        return results
    return [result for result in results if matches_question_types(result.content, question_types)]


def word_overlap(a: str, b: str) -> float:
    """
    Jaccard similarity of the lower-cased word sets of two texts.

    Returns:
        float: |A & B| / |A | B|, 0.0 when both texts are empty
    """
    words_a = set(a.lower().split())
    words_b = set(b.lower().split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def apply_diversity_filter(results: list[RetrievalResult], threshold: float) -> list[RetrievalResult]:
    """
    Greedily drop near-duplicates, keeping rank order.

    The first result is always kept. Each later result is rejected when its
    word overlap with any accepted result is at or above threshold.
    """
    accepted: list[RetrievalResult] = []
    for result in results:
        if all(word_overlap(result.content, kept.content) < threshold for kept in accepted):
            accepted.append(result)
    return accepted


def keyword_match_fraction(content: str, keywords: list[str]) -> float:
    """Share of keywords found in content (case-insensitive substring match)."""
    terms = [keyword.strip().lower() for keyword in keywords if keyword.strip()]
    if not terms:
        return 0.0
    lowered = content.lower()
    return sum(1 for term in terms if term in lowered) / len(terms)


def aggregate_sources(results: list[RetrievalResult]) -> list[RetrievalSource]:
    """Per-document result counts in order of first appearance."""
    sources: dict[str, RetrievalSource] = {}
    for result in results:
        source = sources.get(result.document_id)
        if source is None:
            sources[result.document_id] = RetrievalSource(
                document_id=result.document_id,
                document_title=result.document_title or f"Document {result.document_id}",
                chunk_count=1,
            )
        else:
            source.chunk_count += 1
    return list(sources.values())
