"""
Structure-aware document chunker.

Splits normalized document text into bounded, overlapping chunks that
respect headings, paragraphs and sentences. Chunking is a pure function of
its input: the same document and options always yield the same chunks.

Dependencies: context_pipeline.core.chunking, context_pipeline.models
System role: First stage of document ingestion
"""

import logging
import re
from dataclasses import dataclass

from context_pipeline.core.chunking.question_types import identify_relevant_question_types
from context_pipeline.core.chunking.structure import (
    DocumentStructure,
    SectionSpan,
    detect_structure,
    normalize_content,
)
from context_pipeline.core.chunking.tokens import estimate_token_count
from context_pipeline.models.chunk import Chunk, ChunkingOptions, ChunkMetadata, ChunkType

logger = logging.getLogger(__name__)

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
_NUMBERS = re.compile(r"\d+")
_FINANCIAL = re.compile(r"\$|budget|cost|fund|grant", re.IGNORECASE)

_PARAGRAPH_JOINER = "\n\n"
_SENTENCE_JOINER = " "
_PARAGRAPH_OVERLAP_SENTENCES = 2
_SENTENCE_OVERLAP_SENTENCES = 1


@dataclass(frozen=True)
class _Unit:
    """Paragraph or sentence with its offsets in the normalized text."""

    text: str
    start: int
    end: int


@dataclass
class _Draft:
    """Chunk before filtering and index assignment."""

    content: str
    chunk_type: ChunkType
    start: int
    end: int
    section_title: str | None = None
    heading_level: int | None = None


def _split_units(text: str, offset: int, pattern: re.Pattern[str]) -> list[_Unit]:
    """Split text on pattern, dropping blank pieces and keeping absolute offsets."""
    units = []
    cursor = 0
    boundaries = [(match.start(), match.end()) for match in pattern.finditer(text)]
    for piece_end, next_start in boundaries + [(len(text), len(text))]:
        piece = text[cursor:piece_end]
        stripped = piece.strip()
        if stripped:
            start = offset + cursor + len(piece) - len(piece.lstrip())
            units.append(_Unit(stripped, start, start + len(stripped)))
        cursor = next_start
    return units


def _split_sentences(text: str) -> list[str]:
    return [sentence.strip() for sentence in _SENTENCE_BREAK.split(text) if sentence.strip()]


class DocumentChunker:
    """
    Split documents into retrievable chunks.

    Structured documents are split per heading section and long sections
    are split further on sentences (or paragraphs). Unstructured text is
    packed paragraph by paragraph. Every chunk stays within the token budget
    unless a single paragraph or sentence alone exceeds it, in which case
    that unit is emitted whole.
    """

    def __init__(self, min_chunk_chars: int = 50) -> None:
        """
        Initialize chunker.

        Args:
            min_chunk_chars: Chunks with this many characters or fewer are dropped
        """
        self.min_chunk_chars = min_chunk_chars

    def chunk_document(
        self,
        document_id: str,
        content: str,
        options: ChunkingOptions | None = None,
    ) -> list[Chunk]:
        """
        Chunk a document.

        Args:
            document_id: Owning document identifier
            content: Raw document text
            options: Chunking options (defaults when None)

        Returns:
            list[Chunk]: Chunks with dense 0-based indexes (empty for blank input)
        """
        options = options or ChunkingOptions()
        text = normalize_content(content)
        if not text:
            return []

        structure = detect_structure(text)
        if options.preserve_structure and structure.has_structure:
            drafts = self._structure_chunks(text, structure, options)
        else:
            drafts = self._semantic_chunks(text, 0, structure, options)

        chunks = self._post_process(document_id, drafts, options)
        logger.debug(
            f"{__name__}:chunk_document - Chunked document",
            extra={
                "document_id": document_id,
                "draft_count": len(drafts),
                "chunk_count": len(chunks),
                "has_structure": structure.has_structure,
            },
        )
        return chunks

    def _structure_chunks(
        self,
        text: str,
        structure: DocumentStructure,
        options: ChunkingOptions,
    ) -> list[_Draft]:
        if not structure.has_sections:
            return self._semantic_chunks(text, 0, structure, options)

        drafts: list[_Draft] = []
        preamble_end = structure.sections[0].start
        if text[:preamble_end].strip():
            drafts.extend(self._semantic_chunks(text[:preamble_end], 0, structure, options))

        for section in structure.sections:
            drafts.extend(self._section_chunks(text, section, options))
        return drafts

    def _section_chunks(
        self,
        text: str,
        section: SectionSpan,
        options: ChunkingOptions,
    ) -> list[_Draft]:
        section_text = text[section.start : section.end]
        if options.split_on_sentences:
            units = [
                _Unit(sentence, section.start, section.end)
                for sentence in _split_sentences(section_text)
            ]
            packed = self._pack(units, _SENTENCE_JOINER, _SENTENCE_OVERLAP_SENTENCES, options)
        else:
            units = _split_units(section_text, section.start, _PARAGRAPH_BREAK)
            packed = self._pack(units, _PARAGRAPH_JOINER, _PARAGRAPH_OVERLAP_SENTENCES, options)

        return [
            _Draft(
                content=content,
                chunk_type=ChunkType.SECTION,
                start=section.start,
                end=section.end,
                section_title=section.title,
                heading_level=section.level,
            )
            for content, _ in packed
        ]

    def _semantic_chunks(
        self,
        text: str,
        offset: int,
        structure: DocumentStructure,
        options: ChunkingOptions,
    ) -> list[_Draft]:
        units = _split_units(text, offset, _PARAGRAPH_BREAK)
        packed = self._pack(units, _PARAGRAPH_JOINER, _PARAGRAPH_OVERLAP_SENTENCES, options)
        return [
            _Draft(
                content=content,
                chunk_type=self._classify(members, structure),
                start=members[0].start,
                end=members[-1].end,
            )
            for content, members in packed
        ]

    def _pack(
        self,
        units: list[_Unit],
        joiner: str,
        overlap_sentences: int,
        options: ChunkingOptions,
    ) -> list[tuple[str, list[_Unit]]]:
        """
        Greedily pack units into chunks within the token budget.

        A chunk is flushed when adding the next unit would exceed max_tokens.
        The next chunk is seeded with the trailing sentences of the flushed
        one, unless that seed plus the incoming unit would not fit.

        Returns:
            list[tuple[str, list[_Unit]]]: Chunk text with the units it took in
        """
        packed: list[tuple[str, list[_Unit]]] = []
        current_text = ""
        members: list[_Unit] = []

        for unit in units:
            candidate = f"{current_text}{joiner}{unit.text}" if current_text else unit.text
            if members and estimate_token_count(candidate) > options.max_tokens:
                packed.append((current_text, members))
                members = []
                seed = self._overlap(current_text, overlap_sentences, options.overlap_tokens)
                candidate = f"{seed}{joiner}{unit.text}" if seed else unit.text
                if seed and estimate_token_count(candidate) > options.max_tokens:
                    candidate = unit.text
            current_text = candidate
            members.append(unit)

        if members:
            packed.append((current_text, members))
        return packed

    @staticmethod
    def _overlap(text: str, sentence_count: int, overlap_tokens: int) -> str:
        """Trailing sentences of text, trimmed from the front to fit overlap_tokens."""
        if overlap_tokens <= 0:
            return ""
        tail = _split_sentences(text)[-sentence_count:]
        while tail and estimate_token_count(" ".join(tail)) > overlap_tokens:
            tail = tail[1:]
        return " ".join(tail)

    @staticmethod
    def _classify(members: list[_Unit], structure: DocumentStructure) -> ChunkType:
        def inside(spans) -> bool:
            return bool(spans) and all(
                any(span.contains(unit.start, unit.end) for span in spans) for unit in members
            )

        if inside(structure.tables):
            return ChunkType.TABLE
        if inside(structure.lists):
            return ChunkType.LIST
        return ChunkType.PARAGRAPH

    def _post_process(
        self,
        document_id: str,
        drafts: list[_Draft],
        options: ChunkingOptions,
    ) -> list[Chunk]:
        kept = [draft for draft in drafts if len(draft.content.strip()) > self.min_chunk_chars]
        chunks = []
        for index, draft in enumerate(kept):
            question_types = None
            if options.question_types is not None:
                question_types = identify_relevant_question_types(draft.content, options.question_types)
            chunks.append(
                Chunk(
                    document_id=document_id,
                    chunk_index=index,
                    content=draft.content,
                    chunk_type=draft.chunk_type,
                    metadata=ChunkMetadata(
                        start_position=draft.start,
                        end_position=draft.end,
                        section_title=draft.section_title,
                        heading_level=draft.heading_level,
                        has_numbers=bool(_NUMBERS.search(draft.content)),
                        has_financial_data=bool(_FINANCIAL.search(draft.content)),
                        relevant_question_types=question_types,
                    ),
                    token_count=estimate_token_count(draft.content),
                )
            )
        return chunks
