"""
Retrieval session ORM model.

Dependencies: sqlalchemy
System role: Retrieval analytics table
"""

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from context_pipeline.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class RetrievalSessionModel(UUIDMixin, CreatedAtMixin, Base):
    """One row per retrieval call."""

    __tablename__ = "retrieval_sessions"

    organization_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    query_text: Mapped[str] = mapped_column(Text, nullable=False)
    results_count: Mapped[int] = mapped_column(Integer, nullable=False)
    average_similarity: Mapped[float] = mapped_column(Float, nullable=False)
    processing_time_ms: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<RetrievalSession(organization_id={self.organization_id}, results={self.results_count})>"
