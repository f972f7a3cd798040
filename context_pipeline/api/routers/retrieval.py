"""
Grounding context API endpoints.

Routes: POST /retrieval/context, POST /retrieval/hybrid

Dependencies: context_pipeline.application.services.grounding_service
System role: Retrieval HTTP API
"""

from fastapi import APIRouter, Depends

from context_pipeline.api.deps import get_grounding_service
from context_pipeline.api.error_handling import handle_pipeline_errors
from context_pipeline.application.services.grounding_service import GroundingService
from context_pipeline.models.api import ContextRequest, HybridContextRequest
from context_pipeline.models.retrieval import GroundingContext, RetrievalQuery

router = APIRouter(prefix="/retrieval", tags=["retrieval"])

_REQUEST_ONLY_FIELDS = {"max_length", "keywords", "keyword_weight"}


def _to_query(request: ContextRequest) -> RetrievalQuery:
    return RetrievalQuery.model_validate(request.model_dump(exclude=_REQUEST_ONLY_FIELDS))


@router.post("/context", response_model=GroundingContext)
@handle_pipeline_errors
async def get_context(
    request: ContextRequest,
    grounding_service: GroundingService = Depends(get_grounding_service),
) -> GroundingContext:
    """Retrieve and assemble grounding context for a query."""
    return await grounding_service.get_context(_to_query(request), max_length=request.max_length)


@router.post("/hybrid", response_model=GroundingContext)
@handle_pipeline_errors
async def get_hybrid_context(
    request: HybridContextRequest,
    grounding_service: GroundingService = Depends(get_grounding_service),
) -> GroundingContext:
    """Retrieve with keyword boosting and assemble grounding context."""
    return await grounding_service.get_hybrid_context(
        _to_query(request),
        keywords=request.keywords,
        keyword_weight=request.keyword_weight,
        max_length=request.max_length,
    )
