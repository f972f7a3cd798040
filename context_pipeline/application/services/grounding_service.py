"""
Grounding service.

Produces the context handed to text generation: retrieve, assemble within
the length budget and assess quality. When nothing relevant was found the
text is the explicit NO_CONTEXT_AVAILABLE signal instead of an empty string.

Dependencies: context_pipeline.core.retrieval, context_pipeline.core.context
System role: Query-time orchestration (Retrieve -> Assemble)
"""

import logging

from context_pipeline.core.context.assembler import NO_CONTEXT_AVAILABLE, build_context_string
from context_pipeline.core.retrieval.engine import RetrievalEngine
from context_pipeline.core.retrieval.quality import validate_retrieval_quality
from context_pipeline.models.retrieval import GroundingContext, RetrievalContext, RetrievalQuery

logger = logging.getLogger(__name__)


class GroundingService:
    """Grounding context orchestrator."""

    def __init__(self, retrieval_engine: RetrievalEngine, max_context_length: int = 4000) -> None:
        """
        Initialize grounding service.

        Args:
            retrieval_engine: Retrieval engine
            max_context_length: Character budget for assembled passages
        """
        self._retrieval_engine = retrieval_engine
        self.max_context_length = max_context_length

    async def get_context(self, query: RetrievalQuery, max_length: int | None = None) -> GroundingContext:
        """
        Retrieve and assemble grounding context for a query.

        Args:
            query: Retrieval query
            max_length: Character budget override

        Returns:
            GroundingContext: Retrieval context, assembled text and quality report
        """
        context = await self._retrieval_engine.retrieve_context(query)
        return self._assemble(context, max_length)

    async def get_hybrid_context(
        self,
        query: RetrievalQuery,
        keywords: list[str],
        keyword_weight: float | None = None,
        max_length: int | None = None,
    ) -> GroundingContext:
        """
        Retrieve with hybrid keyword scoring and assemble grounding context.

        Args:
            query: Retrieval query
            keywords: Keywords boosting matching passages
            keyword_weight: Weight of the keyword component
            max_length: Character budget override

        Returns:
            GroundingContext: Retrieval context, assembled text and quality report
        """
        context = await self._retrieval_engine.hybrid_search(query, keywords, keyword_weight)
        return self._assemble(context, max_length)

    def _assemble(self, context: RetrievalContext, max_length: int | None) -> GroundingContext:
        quality = validate_retrieval_quality(context)
        if context.total_results == 0:
            logger.info(
                f"{__name__}:_assemble - No context available for query",
                extra={"processing_time_ms": round(context.processing_time_ms, 1)},
            )
            return GroundingContext(context=context, text=NO_CONTEXT_AVAILABLE, has_context=False, quality=quality)

        text = build_context_string(context, max_length or self.max_context_length)
        return GroundingContext(context=context, text=text, has_context=True, quality=quality)
