"""
Text normalization and document structure detection.

First stage of chunking: produces normalized text plus an explicit
DocumentStructure (headings, table runs, numbered-list runs) that the
splitter consumes.

Dependencies: re, dataclasses (stdlib)
System role: Structure analysis for the document chunker
"""

import re
from dataclasses import dataclass, field

_LINE_ENDINGS = re.compile(r"\r\n?")
_HORIZONTAL_WHITESPACE = re.compile(r"[ \t\f\v]+")
_LINE_EDGE_SPACES = re.compile(r" *\n *")
_HEADING = re.compile(r"^(#+)\s+(.+)$", re.MULTILINE)
_TABLE_ROW = re.compile(r"\|.+\|")
_LIST_ITEM = re.compile(r"^\d+\.\s+")

# Fewer matches than this are treated as incidental pipes or numbering
_MIN_STRUCTURED_LINES = 3


@dataclass(frozen=True)
class Span:
    """Half-open character range [start, end) in normalized text."""

    start: int
    end: int

    def contains(self, start: int, end: int) -> bool:
        return self.start <= start and end <= self.end


@dataclass(frozen=True)
class SectionSpan:
    """Heading-delimited section. Runs from its heading to the next one."""

    title: str
    level: int
    start: int
    end: int


@dataclass(frozen=True)
class DocumentStructure:
    """Structural features detected in normalized text."""

    sections: list[SectionSpan] = field(default_factory=list)
    tables: list[Span] = field(default_factory=list)
    lists: list[Span] = field(default_factory=list)

    @property
    def has_sections(self) -> bool:
        return bool(self.sections)

    @property
    def has_tables(self) -> bool:
        return bool(self.tables)

    @property
    def has_lists(self) -> bool:
        return bool(self.lists)

    @property
    def has_structure(self) -> bool:
        return self.has_sections or self.has_tables or self.has_lists


def normalize_content(content: str) -> str:
    """
    Normalize raw document text.

    Unifies line endings, turns tabs into spaces, collapses runs of
    horizontal whitespace and trims every line. Newlines are preserved so
    line-anchored markers (headings, table rows, list items) survive.

    Args:
        content: Raw document text

    Returns:
        str: Normalized text (empty string for blank input)
    """
    if not content:
        return ""
    text = _LINE_ENDINGS.sub("\n", content)
    text = _HORIZONTAL_WHITESPACE.sub(" ", text)
    text = _LINE_EDGE_SPACES.sub("\n", text)
    return text.strip()


def _line_runs(text: str, pattern: re.Pattern[str], anchored: bool) -> tuple[int, list[Span]]:
    """Count matching lines and group contiguous ones into spans."""
    matches = 0
    spans: list[Span] = []
    run_start: int | None = None
    run_end = 0
    offset = 0

    for line in text.split("\n"):
        line_end = offset + len(line)
        hit = pattern.match(line) if anchored else pattern.search(line)
        if hit:
            matches += 1
            if run_start is None:
                run_start = offset
            run_end = line_end
        elif run_start is not None:
            spans.append(Span(run_start, run_end))
            run_start = None
        offset = line_end + 1

    if run_start is not None:
        spans.append(Span(run_start, run_end))
    return matches, spans


def detect_structure(text: str) -> DocumentStructure:
    """
    Detect headings, tables and numbered lists in normalized text.

    Args:
        text: Normalized document text

    Returns:
        DocumentStructure: Sections ordered by position; table and list spans
            only when more than two matching lines were found
    """
    headings = list(_HEADING.finditer(text))
    sections = []
    for i, match in enumerate(headings):
        end = headings[i + 1].start() if i + 1 < len(headings) else len(text)
        sections.append(
            SectionSpan(
                title=match.group(2).strip(),
                level=len(match.group(1)),
                start=match.start(),
                end=end,
            )
        )

    table_rows, table_spans = _line_runs(text, _TABLE_ROW, anchored=False)
    list_items, list_spans = _line_runs(text, _LIST_ITEM, anchored=True)

    return DocumentStructure(
        sections=sections,
        tables=table_spans if table_rows >= _MIN_STRUCTURED_LINES else [],
        lists=list_spans if list_items >= _MIN_STRUCTURED_LINES else [],
    )
