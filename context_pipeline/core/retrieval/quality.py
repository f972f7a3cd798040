"""
Retrieval quality assessment.

Dependencies: context_pipeline.models
System role: Advisory checks surfaced alongside grounding context
"""

from context_pipeline.models.retrieval import QualityReport, RetrievalContext

MIN_AVERAGE_SIMILARITY = 0.7
MIN_RESULTS = 3
MAX_PROCESSING_TIME_MS = 5000
MIN_SOURCES = 2
SOURCE_DIVERSITY_RESULT_COUNT = 5


def validate_retrieval_quality(context: RetrievalContext) -> QualityReport:
    """
    Assess a retrieval context.

    Args:
        context: Retrieval context to assess

    Returns:
        QualityReport: Issues and recommendations; high quality when no issue was found
    """
    issues: list[str] = []
    recommendations: list[str] = []

    if context.average_similarity < MIN_AVERAGE_SIMILARITY:
        issues.append("Low average similarity score")
        recommendations.append("Consider refining your query or adding more specific documents")

    if context.total_results < MIN_RESULTS:
        issues.append("Low number of relevant results found")
        recommendations.append("Upload more relevant organizational documents")

    if context.processing_time_ms > MAX_PROCESSING_TIME_MS:
        issues.append("Slow retrieval performance")
        recommendations.append("Consider optimizing your document collection")

    if len(context.sources) < MIN_SOURCES and context.total_results > SOURCE_DIVERSITY_RESULT_COUNT:
        issues.append("Results from limited sources")
        recommendations.append("Ensure documents cover diverse aspects of your organization")

    return QualityReport(is_high_quality=not issues, issues=issues, recommendations=recommendations)
