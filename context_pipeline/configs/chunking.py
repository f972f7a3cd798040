"""
Chunking configuration settings.

Defaults for structure-aware document chunking.

Dependencies: pydantic, pydantic_settings
System role: Chunker configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChunkingSettings(BaseSettings):
    """Chunker defaults (overridable per call via ChunkingOptions)."""

    model_config = SettingsConfigDict(
        env_prefix="CHUNKING_",
        case_sensitive=False,
        extra="ignore",
    )

    max_tokens: int = Field(default=800, ge=1, description="Token budget per chunk (heuristic)")
    overlap_tokens: int = Field(
        default=100,
        ge=0,
        description="Maximum tokens carried forward between consecutive chunks",
    )
    preserve_structure: bool = Field(
        default=True,
        description="Split on detected headings when the document has structure",
    )
    split_on_sentences: bool = Field(
        default=True,
        description="Split long sections by sentence groups (paragraphs otherwise)",
    )
    min_chunk_chars: int = Field(
        default=50,
        description="Chunks at or below this length are dropped in post-processing",
    )
