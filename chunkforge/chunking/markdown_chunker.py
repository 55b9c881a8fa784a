"""Markdown boundary segmenter.

Line-oriented state machine that splits Markdown into heading, list,
paragraph and fenced code sections. Each section keeps its character span
in the source so that ``text[section.start:section.end] == section.content``.

Rules, applied per line:
- A line starting with ``` flushes the open section and opens or closes
  a code section. Lines inside a fence never start another section.
- ``#`` to ``######`` followed by whitespace and text opens a heading.
- ``-``, ``*``, ``+`` or ``1.`` bullets continue an open list or open one.
- Blank lines are appended to whichever section is open.
- Other lines continue a heading or paragraph, else open a paragraph.

Sections longer than the maximum chunk size are re-split with the
sliding window and keep their section tag.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from chunkforge.chunking.models import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    BoundaryChunk,
    BoundaryInfo,
    validate_chunk_settings,
)
from chunkforge.chunking.sliding_window import split_oversized

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
LIST_PATTERN = re.compile(r"^(?:[-*+]\s+|\d+\.\s+)")
FENCE_MARKER = "```"


@dataclass
class MarkdownSection:
    """A run of lines belonging to one Markdown construct."""

    type: str  # heading, list, paragraph, code
    start: int
    end: int
    level: Optional[int] = None
    title: Optional[str] = None

    def content(self, text: str) -> str:
        return text[self.start : self.end]

    def boundary(self) -> BoundaryInfo:
        return BoundaryInfo(type=self.type, level=self.level, title=self.title)


class _SectionBuilder:
    """Accumulates sections while scanning lines."""

    def __init__(self) -> None:
        self.sections: List[MarkdownSection] = []
        self.current: Optional[MarkdownSection] = None

    def open(
        self,
        section_type: str,
        start: int,
        end: int,
        level: Optional[int] = None,
        title: Optional[str] = None,
    ) -> None:
        self.flush()
        self.current = MarkdownSection(section_type, start, end, level, title)

    def extend(self, end: int) -> None:
        if self.current is not None:
            self.current.end = end

    def flush(self) -> None:
        if self.current is not None:
            self.sections.append(self.current)
            self.current = None

    @property
    def current_type(self) -> Optional[str]:
        return self.current.type if self.current is not None else None


def parse_sections(text: str) -> List[MarkdownSection]:
    """Split Markdown text into ordered sections.

    An unterminated fence at the end of input is kept as a code section.
    """
    builder = _SectionBuilder()
    in_code = False
    position = 0

    for line in text.split("\n"):
        line_start = position
        line_end = position + len(line)
        position = line_end + 1  # +1 for newline

        if in_code:
            builder.extend(line_end)
            if line.startswith(FENCE_MARKER):
                builder.flush()
                in_code = False
            continue

        if line.startswith(FENCE_MARKER):
            builder.open("code", line_start, line_end)
            in_code = True
            continue

        heading = HEADING_PATTERN.match(line)
        if heading:
            builder.open(
                "heading",
                line_start,
                line_end,
                level=len(heading.group(1)),
                title=heading.group(2).strip(),
            )
            continue

        if LIST_PATTERN.match(line):
            if builder.current_type == "list":
                builder.extend(line_end)
            else:
                builder.open("list", line_start, line_end)
            continue

        if not line.strip():
            builder.extend(line_end)
            continue

        if builder.current_type in ("heading", "paragraph"):
            builder.extend(line_end)
        else:
            builder.open("paragraph", line_start, line_end)

    builder.flush()
    return builder.sections


class MarkdownChunker:
    """Chunk Markdown along section boundaries.

    Sections never merge; a short paragraph stays its own chunk. Trailing
    blank lines are not part of a chunk's content.
    """

    def __init__(
        self,
        max_chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        validate_chunk_settings(max_chunk_size, overlap)
        self.max_chunk_size = max_chunk_size
        self.overlap = overlap

    def chunk(self, text: str) -> List[BoundaryChunk]:
        chunks: List[BoundaryChunk] = []
        for section in parse_sections(text):
            content = section.content(text).rstrip()
            if not content.strip():
                continue
            for piece in split_oversized(
                content,
                section.start,
                section.boundary(),
                self.max_chunk_size,
                self.overlap,
            ):
                chunks.append(piece.with_index(len(chunks)))
        return chunks

    def get_strategy_name(self) -> str:
        return "markdown"
