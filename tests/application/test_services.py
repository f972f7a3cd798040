"""
Tests for the ingestion and grounding services.

Exercises the full pipeline (chunk, embed, store, retrieve, assemble) with
the in-memory cache and vector store and a fake embedding provider.
"""

import pytest

from context_pipeline.application.services.grounding_service import GroundingService
from context_pipeline.application.services.ingestion_service import IngestionService
from context_pipeline.core.chunking import DocumentChunker
from context_pipeline.core.context import NO_CONTEXT_AVAILABLE
from context_pipeline.core.exceptions import EmbeddingError, ValidationError
from context_pipeline.core.retrieval import RetrievalEngine
from context_pipeline.models.chunk import Document
from context_pipeline.models.retrieval import RetrievalQuery

SECTIONS = {
    "Mission": "Our mission is to expand access to fresh food for families across the county.",
    "Budget": "The budget requests funding for two staff members and a refrigerated van.",
    "Timeline": "The project runs for eighteen months, starting with a pilot phase in spring.",
    "Evaluation": "Evaluation tracks pantry visits and household survey results every quarter.",
}


def _document(sections: dict[str, str], document_id: str = "doc-1") -> Document:
    content = "\n\n".join(f"# {title}\n{body}" for title, body in sections.items())
    return Document(
        id=document_id,
        organization_id="org-1",
        content=content,
        filename="proposal.docx",
        title="Food Access Proposal",
        category="proposal",
    )


@pytest.fixture
def ingestion_service(embedding_service, vector_store) -> IngestionService:
    """Provide ingestion service over the in-memory store."""
    return IngestionService(DocumentChunker(), embedding_service, vector_store)


@pytest.fixture
def grounding_service(embedding_service, vector_store, retrieval_settings) -> GroundingService:
    """Provide grounding service with permissive similarity threshold."""
    retrieval_settings.similarity_threshold = 0.0
    engine = RetrievalEngine(embedding_service, vector_store, retrieval_settings)
    return GroundingService(engine, max_context_length=4000)


class TestIngestionService:
    """Test suite for IngestionService."""

    @pytest.mark.asyncio
    async def test_ingest_should_store_every_chunk(self, ingestion_service, vector_store) -> None:
        """Should chunk, embed and store all sections of a document."""
        result = await ingestion_service.ingest_document(_document(SECTIONS))

        assert result.chunk_count == 4
        assert result.embedded_count == 4
        assert result.cached_count == 0
        assert result.failed_count == 0
        assert await vector_store.count() == 4

    @pytest.mark.asyncio
    async def test_reingest_should_replace_chunks_and_reuse_cache(self, ingestion_service, vector_store) -> None:
        """Should serve unchanged chunks from cache and not duplicate stored chunks."""
        await ingestion_service.ingest_document(_document(SECTIONS))

        result = await ingestion_service.ingest_document(_document(SECTIONS))

        assert result.cached_count == 4
        assert result.embedded_count == 0
        assert await vector_store.count() == 4

    @pytest.mark.asyncio
    async def test_failed_batch_should_skip_only_its_chunks(
        self, ingestion_service, vector_store, fake_provider
    ) -> None:
        """Should store chunks from healthy batches and report failed ones."""
        # Arrange
        sections = dict(SECTIONS, Evaluation="Evaluation poison marker makes this provider batch fail entirely.")
        fake_provider.fail_when = lambda texts: any("poison" in text for text in texts)

        # Act
        result = await ingestion_service.ingest_document(_document(sections))

        # Assert
        assert result.chunk_count == 3
        assert result.failed_count == 1
        assert await vector_store.count() == 3

    @pytest.mark.asyncio
    async def test_total_embedding_failure_should_keep_stored_chunks(
        self, ingestion_service, vector_store, fake_provider
    ) -> None:
        """Should raise and leave the previous chunks in place when no chunk embeds."""
        # Arrange
        await ingestion_service.ingest_document(_document(SECTIONS))
        revised = {title: f"{body} Revised for the next funding cycle." for title, body in SECTIONS.items()}
        fake_provider.fail_when = lambda texts: True

        # Act
        with pytest.raises(EmbeddingError) as exc_info:
            await ingestion_service.ingest_document(_document(revised))

        # Assert
        assert exc_info.value.details["document_id"] == "doc-1"
        assert await vector_store.count() == 4

    @pytest.mark.asyncio
    async def test_missing_organization_should_raise(self, ingestion_service) -> None:
        """Should reject documents without an organization."""
        document = _document(SECTIONS).model_copy(update={"organization_id": "  "})

        with pytest.raises(ValidationError):
            await ingestion_service.ingest_document(document)

    @pytest.mark.asyncio
    async def test_empty_document_should_store_nothing(self, ingestion_service, vector_store) -> None:
        """Should succeed with zero chunks for blank content."""
        document = _document(SECTIONS).model_copy(update={"content": "   "})

        result = await ingestion_service.ingest_document(document)

        assert result.chunk_count == 0
        assert await vector_store.count() == 0

    @pytest.mark.asyncio
    async def test_delete_should_remove_document_chunks(self, ingestion_service, vector_store) -> None:
        """Should delete all chunks of the document."""
        await ingestion_service.ingest_document(_document(SECTIONS))

        removed = await ingestion_service.delete_document("doc-1")

        assert removed == 4
        assert await vector_store.count() == 0


class TestGroundingService:
    """Test suite for GroundingService."""

    @pytest.mark.asyncio
    async def test_context_should_be_assembled_with_sources(self, ingestion_service, grounding_service) -> None:
        """Should return attributed passages and the source summary."""
        await ingestion_service.ingest_document(_document(SECTIONS))

        grounding = await grounding_service.get_context(
            RetrievalQuery(text="What is the project budget?", organization_id="org-1")
        )

        assert grounding.has_context is True
        assert grounding.text.startswith("[Source: Food Access Proposal, ")
        assert grounding.text.endswith("Information sourced from 1 document(s): Food Access Proposal")
        assert grounding.context.total_results == 4

    @pytest.mark.asyncio
    async def test_no_results_should_return_no_context_signal(self, grounding_service) -> None:
        """Should return the explicit no-context signal instead of empty text."""
        grounding = await grounding_service.get_context(
            RetrievalQuery(text="Anything at all?", organization_id="org-empty")
        )

        assert grounding.has_context is False
        assert grounding.text == NO_CONTEXT_AVAILABLE
        assert grounding.quality.is_high_quality is False

    @pytest.mark.asyncio
    async def test_max_length_override_should_bound_passages(self, ingestion_service, grounding_service) -> None:
        """Should apply the per-call character budget."""
        await ingestion_service.ingest_document(_document(SECTIONS))

        grounding = await grounding_service.get_context(
            RetrievalQuery(text="Tell me about the mission", organization_id="org-1"),
            max_length=10,
        )

        assert grounding.has_context is True
        assert "[Source:" not in grounding.text

    @pytest.mark.asyncio
    async def test_hybrid_context_should_put_keyword_match_first(self, ingestion_service, grounding_service) -> None:
        """Should rank the passage matching every keyword first with full keyword weight."""
        await ingestion_service.ingest_document(_document(SECTIONS))

        grounding = await grounding_service.get_hybrid_context(
            RetrievalQuery(text="refrigerated van", organization_id="org-1"),
            keywords=["refrigerated", "van"],
            keyword_weight=1.0,
        )

        assert grounding.context.results[0].section_title == "Budget"
        assert grounding.text.startswith("[Source: Food Access Proposal, Budget]")
