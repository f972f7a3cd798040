"""
Retrieval engine.

Embeds a query, searches the organization's corpus and turns the
candidates into a ranked, deduplicated RetrievalContext. Retrieval never
raises to its caller: embedding or search failures yield an empty context.
Cancellation of the calling task still propagates.

Dependencies: asyncio, context_pipeline.core.embedding, context_pipeline.boundary.vdb,
    context_pipeline.observability
System role: Query-time retrieval for grounding
"""

import asyncio
import logging
import time

from context_pipeline.boundary.vdb.base import VectorSearchBackend
from context_pipeline.boundary.vdb.vector_schemas import VectorSearchHit, VectorSearchRequest
from context_pipeline.configs.retrieval import RetrievalSettings
from context_pipeline.core.embedding.service import EmbeddingService
from context_pipeline.core.retrieval.filters import (
    aggregate_sources,
    apply_diversity_filter,
    filter_by_question_types,
    keyword_match_fraction,
)
from context_pipeline.models.retrieval import (
    RetrievalContext,
    RetrievalQuery,
    RetrievalResult,
    RetrievalSessionRecord,
)
from context_pipeline.observability.analytics import RetrievalAnalytics
from context_pipeline.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def _to_result(hit: VectorSearchHit, score: float | None = None) -> RetrievalResult:
    chunk = hit.chunk
    return RetrievalResult(
        chunk_id=chunk.chunk_id,
        document_id=chunk.document_id,
        chunk_index=chunk.chunk_index,
        content=chunk.content,
        similarity=hit.similarity,
        score=hit.similarity if score is None else score,
        metadata=chunk.metadata,
        document_title=chunk.document_title,
        section_title=chunk.metadata.section_title,
        page_number=chunk.metadata.page_number,
    )


class RetrievalEngine:
    """
    Similarity and hybrid retrieval over a vector search backend.

    Each retrieval schedules an analytics record as a background task; sink
    failures are logged and never reach the caller.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: VectorSearchBackend,
        settings: RetrievalSettings | None = None,
        analytics: RetrievalAnalytics | None = None,
    ) -> None:
        """
        Initialize retrieval engine.

        Args:
            embedding_service: Service used to embed query text
            vector_store: Corpus search backend
            settings: Retrieval defaults (environment settings when None)
            analytics: Optional sink for retrieval session records
        """
        self._embedding_service = embedding_service
        self._vector_store = vector_store
        self.settings = settings or RetrievalSettings()
        self._analytics = analytics
        self._pending_analytics: set[asyncio.Task] = set()

    async def retrieve_context(self, query: RetrievalQuery) -> RetrievalContext:
        """
        Retrieve ranked, deduplicated passages for a query.

        Args:
            query: Query text, organization scope and optional filters

        Returns:
            RetrievalContext: Results ordered by similarity (empty on failure)
        """
        return await self._retrieve(query)

    async def hybrid_search(
        self,
        query: RetrievalQuery,
        keywords: list[str],
        keyword_weight: float | None = None,
    ) -> RetrievalContext:
        """
        Retrieve passages ranked by a blend of similarity and keyword matches.

        score = (1 - w) * similarity + w * fraction of keywords found. The
        similarity threshold still applies to the cosine similarity.

        Args:
            query: Query text, organization scope and optional filters
            keywords: Keywords to look for in candidate content
            keyword_weight: Weight w of the keyword component (settings default
                when None); values outside [0, 1] are clamped

        Returns:
            RetrievalContext: Results ordered by hybrid score (empty on failure)
        """
        weight = self.settings.keyword_weight if keyword_weight is None else keyword_weight
        if not 0.0 <= weight <= 1.0:
            clamped = min(max(weight, 0.0), 1.0)
            logger.warning(
                f"{__name__}:hybrid_search - keyword_weight out of range, clamped",
                extra={"keyword_weight": weight, "clamped_weight": clamped},
            )
            weight = clamped
        return await self._retrieve(query, keywords=keywords, keyword_weight=weight)

    async def find_similar_chunks(
        self,
        chunk_id: str,
        organization_id: str,
        max_results: int = 5,
        similarity_threshold: float | None = None,
    ) -> list[RetrievalResult]:
        """
        Find chunks similar to a stored chunk.

        Args:
            chunk_id: Reference chunk (never included in the results)
            organization_id: Organization scope
            max_results: Maximum number of results
            similarity_threshold: Minimum similarity (settings default when None)

        Returns:
            list[RetrievalResult]: Similar chunks, best first (empty on failure)
        """
        threshold = self.settings.similarity_threshold if similarity_threshold is None else similarity_threshold
        try:
            reference = await self._vector_store.get_chunk(chunk_id)
            if reference is None or reference.organization_id != organization_id:
                return []
            hits = await asyncio.wait_for(
                self._vector_store.search(
                    VectorSearchRequest(
                        embedding=reference.embedding,
                        organization_id=organization_id,
                        limit=max_results,
                        similarity_threshold=threshold,
                        exclude_chunk_ids=[chunk_id],
                    )
                ),
                timeout=self.settings.search_timeout_seconds,
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:find_similar_chunks - Similar chunk search failed",
                e,
                chunk_id=chunk_id,
                organization_id=organization_id,
            )
            return []
        return [_to_result(hit) for hit in hits[:max_results]]

    async def wait_for_analytics(self) -> None:
        """Wait until scheduled analytics records have been handled."""
        if self._pending_analytics:
            await asyncio.gather(*list(self._pending_analytics), return_exceptions=True)

    async def _retrieve(
        self,
        query: RetrievalQuery,
        keywords: list[str] | None = None,
        keyword_weight: float = 0.0,
    ) -> RetrievalContext:
        started = time.perf_counter()
        if not query.text.strip():
            return RetrievalContext.empty(query.text)

        max_results = query.max_results or self.settings.max_results
        threshold = (
            self.settings.similarity_threshold
            if query.similarity_threshold is None
            else query.similarity_threshold
        )
        diversity_threshold = (
            self.settings.diversity_threshold
            if query.diversity_threshold is None
            else query.diversity_threshold
        )

        try:
            query_embedding = await self._embedding_service.generate_embedding(query.text)
            hits = await asyncio.wait_for(
                self._vector_store.search(
                    VectorSearchRequest(
                        embedding=query_embedding.embedding,
                        organization_id=query.organization_id,
                        limit=max_results * self.settings.candidate_multiplier,
                        similarity_threshold=threshold,
                        document_ids=query.document_ids,
                        categories=query.categories,
                    )
                ),
                timeout=self.settings.search_timeout_seconds,
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_retrieve - Retrieval failed, returning empty context",
                e,
                organization_id=query.organization_id,
                query_length=len(query.text),
            )
            context = RetrievalContext.empty(query.text, _elapsed_ms(started))
            self._schedule_analytics(query, context)
            return context

        if keywords is None:
            candidates = [_to_result(hit) for hit in hits]
        else:
            candidates = [
                _to_result(
                    hit,
                    score=(1 - keyword_weight) * hit.similarity
                    + keyword_weight * keyword_match_fraction(hit.chunk.content, keywords),
                )
                for hit in hits
            ]
            candidates.sort(key=lambda result: result.score, reverse=True)

        candidates = filter_by_question_types(candidates, query.question_types)
        results = apply_diversity_filter(candidates, diversity_threshold)[:max_results]

        context = RetrievalContext(
            query=query.text,
            results=results,
            total_results=len(results),
            average_similarity=(
                sum(result.similarity for result in results) / len(results) if results else 0.0
            ),
            processing_time_ms=_elapsed_ms(started),
            sources=aggregate_sources(results),
        )

        logger.info(
            f"{__name__}:_retrieve - Retrieved {context.total_results} results "
            f"from {len(hits)} candidates",
            extra={
                "organization_id": query.organization_id,
                "candidate_count": len(hits),
                "result_count": context.total_results,
                "average_similarity": round(context.average_similarity, 4),
                "hybrid": keywords is not None,
            },
        )
        self._schedule_analytics(query, context)
        return context

    def _schedule_analytics(self, query: RetrievalQuery, context: RetrievalContext) -> None:
        if self._analytics is None:
            return
        record = RetrievalSessionRecord(
            organization_id=query.organization_id,
            query_text=query.text,
            results_count=context.total_results,
            average_similarity=context.average_similarity,
            processing_time_ms=context.processing_time_ms,
        )
        task = asyncio.create_task(self._analytics.record(record))
        self._pending_analytics.add(task)
        task.add_done_callback(self._on_analytics_done)

    def _on_analytics_done(self, task: asyncio.Task) -> None:
        self._pending_analytics.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(
                f"{__name__}:_on_analytics_done - Retrieval analytics failed: {exc}",
                extra={"error_type": type(exc).__name__},
            )
