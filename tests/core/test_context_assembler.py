"""
Tests for context assembly and retrieval quality assessment.
"""

import pytest

from context_pipeline.core.context import NO_CONTEXT_AVAILABLE, build_context_string, format_result_block
from context_pipeline.core.retrieval import aggregate_sources, validate_retrieval_quality
from context_pipeline.models.retrieval import RetrievalContext, RetrievalResult, RetrievalSource


def _result(content: str, document_id: str = "doc-1", title: str | None = "T", section: str | None = None):
    return RetrievalResult(
        chunk_id=f"{document_id}-{content[:8]}",
        document_id=document_id,
        chunk_index=0,
        content=content,
        similarity=0.9,
        score=0.9,
        document_title=title,
        section_title=section,
    )


def _context(results: list[RetrievalResult], **overrides) -> RetrievalContext:
    values = {
        "query": "query",
        "results": results,
        "total_results": len(results),
        "average_similarity": 0.9,
        "processing_time_ms": 10.0,
        "sources": aggregate_sources(results),
    }
    values.update(overrides)
    return RetrievalContext(**values)


class TestFormatResultBlock:
    """Test suite for format_result_block()."""

    def test_block_should_include_title_header(self) -> None:
        """Should prefix content with a source header."""
        assert format_result_block(_result("Body text")) == "[Source: T]\nBody text\n\n"

    def test_block_should_include_section_when_present(self) -> None:
        """Should add the section title to the header."""
        block = format_result_block(_result("Body text", section="Budget"))

        assert block.startswith("[Source: T, Budget]\n")

    def test_block_should_fall_back_to_document_id(self) -> None:
        """Should label untitled documents by id."""
        block = format_result_block(_result("Body text", document_id="abc", title=None))

        assert block.startswith("[Source: Document abc]\n")


class TestBuildContextString:
    """Test suite for build_context_string()."""

    def test_budget_should_stop_before_overflowing_block(self) -> None:
        """Should include exactly one 80-char block under a 100-char budget, then the summary."""
        # Arrange
        first = _result("a" * 66)
        second = _result("b" * 66)
        assert len(format_result_block(first)) == 80
        context = _context([first, second])

        # Act
        text = build_context_string(context, max_length=100)

        # Assert
        assert text == format_result_block(first) + "\nInformation sourced from 1 document(s): T"

    @pytest.mark.parametrize("max_length", [0, 50, 80, 159, 160, 1000])
    def test_passage_blocks_should_never_exceed_budget(self, max_length: int) -> None:
        """Should keep the passage portion within max_length for any budget."""
        context = _context([_result("a" * 66), _result("b" * 66, document_id="doc-2")])

        text = build_context_string(context, max_length=max_length)

        passages = text.split("\nInformation sourced from")[0]
        assert len(passages) <= max_length

    def test_summary_should_list_all_sources(self) -> None:
        """Should name every source document in first-appearance order."""
        context = _context([_result("first passage", title="Annual Report"), _result("second", "doc-2", "Budget")])

        text = build_context_string(context)

        assert text.endswith("\nInformation sourced from 2 document(s): Annual Report, Budget")

    def test_empty_context_should_produce_empty_string(self) -> None:
        """Should return an empty string when there are no results or sources."""
        assert build_context_string(_context([])) == ""

    def test_no_context_signal_should_be_distinct_text(self) -> None:
        """Should expose a non-empty no-context signal."""
        assert NO_CONTEXT_AVAILABLE
        assert not NO_CONTEXT_AVAILABLE.startswith("[Source:")


class TestAggregateSources:
    """Test suite for aggregate_sources()."""

    def test_missing_title_should_use_document_placeholder(self) -> None:
        """Should fall back to 'Document <id>' for untitled documents."""
        sources = aggregate_sources([_result("text", document_id="x1", title=None)])

        assert sources == [RetrievalSource(document_id="x1", document_title="Document x1", chunk_count=1)]


class TestValidateRetrievalQuality:
    """Test suite for validate_retrieval_quality()."""

    def test_strong_context_should_be_high_quality(self) -> None:
        """Should report no issues for many similar results from several sources."""
        results = [_result(f"text {i}", document_id=f"doc-{i % 2}") for i in range(4)]

        report = validate_retrieval_quality(_context(results, average_similarity=0.8))

        assert report.is_high_quality is True
        assert report.issues == []

    def test_weak_context_should_list_issues_and_recommendations(self) -> None:
        """Should flag low similarity, few results and slow retrieval."""
        report = validate_retrieval_quality(
            _context([_result("only one")], average_similarity=0.5, processing_time_ms=6000)
        )

        assert report.is_high_quality is False
        assert report.issues == [
            "Low average similarity score",
            "Low number of relevant results found",
            "Slow retrieval performance",
        ]
        assert len(report.recommendations) == 3

    def test_single_source_with_many_results_should_be_flagged(self) -> None:
        """Should flag limited sources when more than five results come from one document."""
        results = [_result(f"text {i}") for i in range(6)]

        report = validate_retrieval_quality(_context(results))

        assert report.issues == ["Results from limited sources"]
