"""
Chunk domain models.

Represents documents, chunking options and the chunks produced from them.
Chunk metadata is a structured record where every field may be absent.

Dependencies: pydantic
System role: Data structures for the chunking stage
"""

import hashlib
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChunkType(str, Enum):
    """Kind of document region a chunk was cut from."""

    PARAGRAPH = "paragraph"
    SECTION = "section"
    TABLE = "table"
    LIST = "list"
    HEADING = "heading"


class Document(BaseModel):
    """Source document handed over by the external document store."""

    id: str = Field(description="Document identifier")
    organization_id: str = Field(description="Organization scope for retrieval isolation")
    content: str = Field(description="Raw extracted document text")
    filename: str = Field(description="Original filename")
    title: str | None = Field(default=None, description="Display title (filename when absent)")
    category: str | None = Field(default=None, description="Document type used by category filters")

    @property
    def display_title(self) -> str:
        """Title used in source attributions."""
        return self.title or self.filename


class ChunkingOptions(BaseModel):
    """Per-call chunking options."""

    max_tokens: int = Field(default=800, ge=1, description="Token budget per chunk (heuristic)")
    overlap_tokens: int = Field(default=100, ge=0, description="Overlap carried between chunks")
    preserve_structure: bool = Field(default=True, description="Use heading-based splitting")
    split_on_sentences: bool = Field(default=True, description="Split long sections by sentences")
    question_types: list[str] | None = Field(
        default=None,
        description="Question types to tag chunks with (mission, budget, ...)",
    )


class ChunkMetadata(BaseModel):
    """Optional positional and content metadata attached to a chunk."""

    model_config = ConfigDict(frozen=True)

    start_position: int | None = None
    end_position: int | None = None
    page_number: int | None = None
    section_title: str | None = None
    heading_level: int | None = None
    has_numbers: bool | None = None
    has_financial_data: bool | None = None
    relevant_question_types: list[str] | None = None


class Chunk(BaseModel):
    """Bounded unit of document text. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(description="Owning document identifier")
    chunk_index: int = Field(ge=0, description="Dense 0-based position within the document")
    content: str = Field(description="Chunk text content")
    chunk_type: ChunkType = Field(default=ChunkType.PARAGRAPH, description="Region kind")
    metadata: ChunkMetadata = Field(default_factory=ChunkMetadata, description="Chunk metadata")
    token_count: int = Field(ge=0, description="Heuristic token estimate")

    @property
    def chunk_id(self) -> str:
        """
        Deterministic chunk identifier.

        Returns:
            str: SHA-256 of document id, index and content (first 16 hex chars)
        """
        hash_input = f"{self.document_id}:{self.chunk_index}:{self.content}"
        return hashlib.sha256(hash_input.encode()).hexdigest()[:16]
