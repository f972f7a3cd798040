"""
Document ingestion API endpoints.

Routes: POST /documents/{document_id}/ingest, DELETE /documents/{document_id}

Dependencies: context_pipeline.application.services.ingestion_service
System role: Document ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from context_pipeline.api.deps import get_ingestion_service
from context_pipeline.api.error_handling import handle_pipeline_errors
from context_pipeline.application.services.ingestion_service import IngestionService
from context_pipeline.models.api import DeleteDocumentResponse, IngestDocumentRequest
from context_pipeline.models.chunk import Document
from context_pipeline.models.ingestion import IngestionResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/{document_id}/ingest", response_model=IngestionResult)
@handle_pipeline_errors
async def ingest_document(
    document_id: str,
    request: IngestDocumentRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResult:
    """
    Chunk, embed and store a document, replacing any previous version.

    Args:
        document_id: Document identifier
        request: Document content and attributes
        ingestion_service: Injected ingestion service

    Returns:
        IngestionResult: Chunk counts and timing
    """
    document = Document(
        id=document_id,
        organization_id=request.organization_id,
        content=request.content,
        filename=request.filename,
        title=request.title,
        category=request.category,
    )
    return await ingestion_service.ingest_document(document, request.options)


@router.delete("/{document_id}", response_model=DeleteDocumentResponse)
@handle_pipeline_errors
async def delete_document(
    document_id: str,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> DeleteDocumentResponse:
    """Remove all chunks of a document."""
    removed = await ingestion_service.delete_document(document_id)
    return DeleteDocumentResponse(document_id=document_id, removed_chunks=removed)
