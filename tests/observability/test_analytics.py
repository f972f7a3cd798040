"""
Tests for retrieval analytics sinks and logging helpers.
"""

import logging

import pytest

from context_pipeline.boundary.db.CRUD.retrieval_session_crud import retrieval_session_crud
from context_pipeline.models.retrieval import RetrievalSessionRecord
from context_pipeline.observability.analytics import LoggingRetrievalAnalytics, SqlRetrievalAnalytics
from context_pipeline.observability.log_utils import log_exception_with_context, safe_log_value


def _record(organization_id: str = "org-1", results_count: int = 3) -> RetrievalSessionRecord:
    return RetrievalSessionRecord(
        organization_id=organization_id,
        query_text="What is our mission?",
        results_count=results_count,
        average_similarity=0.82,
        processing_time_ms=12.5,
    )


class TestSqlRetrievalAnalytics:
    """Test suite for SqlRetrievalAnalytics."""

    @pytest.mark.asyncio
    async def test_record_should_persist_session(self, session_factory) -> None:
        """Should store one row per record, scoped by organization."""
        analytics = SqlRetrievalAnalytics(session_factory)

        await analytics.record(_record(results_count=3))
        await analytics.record(_record(organization_id="org-2", results_count=0))

        async with session_factory() as session:
            rows = await retrieval_session_crud.get_recent_for_organization(session, "org-1")
            total = await retrieval_session_crud.count(session)

        assert total == 2
        assert len(rows) == 1
        assert rows[0].results_count == 3
        assert rows[0].query_text == "What is our mission?"


class TestLoggingRetrievalAnalytics:
    """Test suite for LoggingRetrievalAnalytics."""

    @pytest.mark.asyncio
    async def test_record_should_log_without_query_text(self, caplog) -> None:
        """Should log counts and timing but not the query text."""
        with caplog.at_level(logging.INFO, logger="context_pipeline.observability.analytics"):
            await LoggingRetrievalAnalytics().record(_record())

        log_record = caplog.records[-1]
        assert "Retrieval returned 3 results" in log_record.getMessage()
        assert log_record.organization_id == "org-1"
        assert not hasattr(log_record, "query_text")


class TestLogUtils:
    """Test suite for logging helpers."""

    def test_safe_log_value_should_summarize_collections(self) -> None:
        """Should log sizes instead of contents for lists and dicts."""
        assert safe_log_value([0.1] * 1536) == "list(1536 items)"
        assert safe_log_value({"a": 1, "b": 2}) == "dict(2 keys)"
        assert safe_log_value(None) == "None"

    def test_safe_log_value_should_truncate_long_text(self) -> None:
        """Should cut long strings and note the original length."""
        value = safe_log_value("x" * 600, max_length=100)

        assert value.startswith("x" * 100)
        assert value.endswith("(truncated, 600 total)")

    def test_log_exception_should_attach_error_context(self, caplog) -> None:
        """Should log at error level with the exception type and context."""
        logger = logging.getLogger("tests.log_utils")

        with caplog.at_level(logging.ERROR, logger="tests.log_utils"):
            log_exception_with_context(logger, "operation failed", ValueError("bad"), chunk_id="c1")

        log_record = caplog.records[-1]
        assert log_record.levelno == logging.ERROR
        assert log_record.error_type == "ValueError"
        assert log_record.chunk_id == "c1"
