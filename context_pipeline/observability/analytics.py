"""
Retrieval analytics sinks.

Every retrieval emits one RetrievalSessionRecord. Sinks are invoked from
background tasks, so they must never be relied upon for the retrieval
result itself.

Dependencies: logging, sqlalchemy, context_pipeline.boundary.db
System role: Retrieval analytics recording
"""

import logging
from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import async_sessionmaker

from context_pipeline.boundary.db.CRUD.retrieval_session_crud import retrieval_session_crud
from context_pipeline.models.retrieval import RetrievalSessionRecord

logger = logging.getLogger(__name__)


class RetrievalAnalytics(ABC):
    """Destination for retrieval session records."""

    @abstractmethod
    async def record(self, session_record: RetrievalSessionRecord) -> None:
        """Persist or emit one retrieval session record."""


class LoggingRetrievalAnalytics(RetrievalAnalytics):
    """Emit retrieval sessions as structured log lines."""

    async def record(self, session_record: RetrievalSessionRecord) -> None:
        logger.info(
            f"{__name__}:record - Retrieval returned {session_record.results_count} results "
            f"in {session_record.processing_time_ms:.1f}ms",
            extra=session_record.model_dump(mode="json", exclude={"query_text"}),
        )


class SqlRetrievalAnalytics(RetrievalAnalytics):
    """Store retrieval sessions in the retrieval_sessions table."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def record(self, session_record: RetrievalSessionRecord) -> None:
        async with self._session_factory() as session:
            await retrieval_session_crud.create(session, **session_record.model_dump())
            await session.commit()
