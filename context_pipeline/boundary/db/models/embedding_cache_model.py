"""
Embedding cache ORM model.

One row per distinct trimmed content, keyed by its SHA-256 hex digest.

Dependencies: sqlalchemy
System role: Persistent embedding cache table
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from context_pipeline.boundary.db.base import Base, CreatedAtMixin, UUIDMixin, utcnow


class EmbeddingCacheModel(UUIDMixin, CreatedAtMixin, Base):
    """
    Cached embedding row.

    Attributes:
        content_hash: SHA-256 hex digest of the trimmed text (unique)
        embedding: Vector stored as a JSON array
        token_count: Token estimate of the cached text
        content_preview: First characters of the text, for inspection
        usage_count: Number of times the entry was produced or served
        last_used_at: Last time the entry was served (drives TTL purge)
    """

    __tablename__ = "embedding_cache"

    content_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False)
    token_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    content_preview: Mapped[str] = mapped_column(Text, nullable=False, default="")
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    last_used_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<EmbeddingCache(content_hash={self.content_hash[:12]}, usage_count={self.usage_count})>"
