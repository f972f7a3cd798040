"""
Document chunk ORM model with a pgvector embedding column.

Dependencies: sqlalchemy, pgvector
System role: Vector search corpus for the pgvector backend
"""

from pgvector.sqlalchemy import Vector
from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from context_pipeline.boundary.db.base import Base, CreatedAtMixin

EMBEDDING_DIMENSIONS = 1536


class DocChunkModel(CreatedAtMixin, Base):
    """
    Stored chunk with its embedding and document attributes.

    Attributes:
        chunk_id: Deterministic chunk identifier (primary key)
        organization_id: Organization scope used to isolate searches
        document_id: Owning document
        document_title: Title used in source attributions
        document_category: Document type used by category filters
        chunk_index: Position within the document
        chunk_type: paragraph, section, table, list or heading
        metadata_json: Serialized ChunkMetadata
        embedding: pgvector column (cosine distance search)
    """

    __tablename__ = "doc_chunks"
    __table_args__ = (UniqueConstraint("document_id", "chunk_index", name="uq_doc_chunks_document_index"),)

    chunk_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    organization_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    document_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    document_title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    document_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    chunk_type: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    token_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    metadata_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    embedding: Mapped[list[float]] = mapped_column(Vector(EMBEDDING_DIMENSIONS), nullable=False)

    def __repr__(self) -> str:
        return f"<DocChunk(chunk_id={self.chunk_id}, document_id={self.document_id}, index={self.chunk_index})>"
