"""
Document ingestion service.

Chunks a document, embeds its chunks in batches and replaces the
document's chunks in the vector store.

Dependencies: context_pipeline.core, context_pipeline.boundary.vdb
System role: Ingestion orchestration (Chunker -> EmbeddingService -> vector store)
"""

import logging
import time

from context_pipeline.boundary.vdb.base import VectorSearchBackend
from context_pipeline.core.chunking.chunker import DocumentChunker
from context_pipeline.core.embedding.service import EmbeddingService
from context_pipeline.core.exceptions import ChunkingError, EmbeddingError, ValidationError
from context_pipeline.models.chunk import ChunkingOptions, Document
from context_pipeline.models.embedding import EmbeddingBatchItem
from context_pipeline.models.ingestion import IngestionResult
from context_pipeline.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class IngestionService:
    """
    Ingestion orchestrator.

    Chunks whose embedding failed are left out of the vector store and
    reported in failed_count; the rest of the document is still stored.
    Re-ingesting a document replaces all of its previous chunks, unless no
    chunk could be embedded, in which case the stored chunks are kept.
    """

    def __init__(
        self,
        chunker: DocumentChunker,
        embedding_service: EmbeddingService,
        vector_store: VectorSearchBackend,
        default_options: ChunkingOptions | None = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            chunker: Document chunker
            embedding_service: Embedding service used for chunk batches
            vector_store: Destination vector store
            default_options: Chunking options used when a call passes none
        """
        self._chunker = chunker
        self._embedding_service = embedding_service
        self._vector_store = vector_store
        self.default_options = default_options or ChunkingOptions()

    async def ingest_document(
        self,
        document: Document,
        options: ChunkingOptions | None = None,
    ) -> IngestionResult:
        """
        Chunk, embed and store a document.

        Args:
            document: Document to ingest
            options: Chunking options (service defaults when None)

        Returns:
            IngestionResult: Chunk, cache and failure counts with timing

        Raises:
            ValidationError: If the document has no id or organization
            ChunkingError: If chunking fails unexpectedly
            EmbeddingError: If no chunk of a non-empty document could be embedded
            VectorStoreError: If the vector store write fails
        """
        if not document.id.strip():
            raise ValidationError("Document id is required", field="id")
        if not document.organization_id.strip():
            raise ValidationError("Organization id is required", field="organization_id")

        started = time.perf_counter()
        try:
            chunks = self._chunker.chunk_document(document.id, document.content, options or self.default_options)
        except Exception as e:
            raise ChunkingError(f"Chunking failed: {e}", document_id=document.id) from e

        results = await self._embedding_service.generate_embedding_batch(
            [
                EmbeddingBatchItem(
                    id=chunk.chunk_id,
                    content=chunk.content,
                    metadata={"document_id": document.id, "chunk_index": chunk.chunk_index},
                )
                for chunk in chunks
            ]
        )

        embedded = [(chunk, results[chunk.chunk_id]) for chunk in chunks if results[chunk.chunk_id].ok]
        if chunks and not embedded:
            first_error = results[chunks[0].chunk_id].error
            logger.error(
                f"{__name__}:ingest_document - No chunk could be embedded, keeping stored chunks",
                extra={"document_id": document.id, "chunk_count": len(chunks), "error": first_error},
            )
            raise EmbeddingError(
                f"Embedding failed for all {len(chunks)} chunks: {first_error}",
                document_id=document.id,
            )

        stored = await self._vector_store.replace_document_chunks(
            document,
            [chunk for chunk, _ in embedded],
            [result.embedding for _, result in embedded],
        )

        cached_count = sum(1 for _, result in embedded if result.cached)
        result = IngestionResult(
            document_id=document.id,
            chunk_count=stored,
            embedded_count=len(embedded) - cached_count,
            cached_count=cached_count,
            failed_count=len(chunks) - len(embedded),
            processing_time_ms=(time.perf_counter() - started) * 1000,
        )

        log_with_context(
            logger,
            logging.WARNING if result.failed_count else logging.INFO,
            f"{__name__}:ingest_document - Ingested {result.chunk_count}/{len(chunks)} chunks",
            **result.model_dump(),
        )
        return result

    async def delete_document(self, document_id: str) -> int:
        """
        Remove all chunks of a document from the vector store.

        Args:
            document_id: Document identifier

        Returns:
            int: Number of removed chunks
        """
        removed = await self._vector_store.delete_document(document_id)
        logger.info(
            f"{__name__}:delete_document - Removed {removed} chunks",
            extra={"document_id": document_id},
        )
        return removed
