"""
Sliding-Window Chunker.

Fixed-size, overlapping windows over raw text. This is the last
strategy in the fallback chain and the splitter every boundary strategy
uses for oversized segments, so it must succeed on any input once the
size/overlap settings are valid.

Window walk
-----------
    start ──────── size ────────┐
    |<--------- window -------->|
                     |<--- overlap --->|
    start + step ─────────────── size ──────────┐

- step = size - overlap
- With preserve_words, a window that does not reach the end of the text
  is pulled back to the last space or newline at or before its raw end,
  provided that keeps it non-empty.
- Window content is trimmed. Offsets locate the trimmed content, so
  ``text[chunk.start:chunk.end] == chunk.content``.
- Windows that trim to nothing are dropped; the walk still advances.
"""

from __future__ import annotations

import math
from typing import List

from chunkforge.chunking.models import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    BoundaryChunk,
    BoundaryInfo,
    Chunk,
    ChunkOptions,
    validate_chunk_settings,
)


def _word_break(text: str, start: int, end: int) -> int:
    """Last space/newline at or before end, if it lies after start."""
    cut = max(text.rfind(" ", 0, end + 1), text.rfind("\n", 0, end + 1))
    if cut > start:
        return cut
    return end


def chunk_text(
    text: str,
    size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
    preserve_words: bool = True,
) -> List[Chunk]:
    """Split text into overlapping fixed-size windows.

    Args:
        text: Source text.
        size: Maximum window length in characters.
        overlap: Characters shared by consecutive raw windows.
        preserve_words: Avoid cutting words at window ends.

    Returns:
        Chunks with sequential indices. Input no longer than size is
        returned whole and untrimmed.

    Raises:
        ChunkConfigurationError: size <= 0, overlap < 0 or overlap >= size.
    """
    validate_chunk_settings(size, overlap)

    length = len(text)
    if length <= size:
        return [Chunk(content=text, index=0, start=0, end=length)]

    chunks: List[Chunk] = []
    step = size - overlap
    start = 0

    while start < length:
        end = min(start + size, length)
        if preserve_words and end < length:
            end = _word_break(text, start, end)

        window = text[start:end]
        content = window.strip()
        if content:
            lead = len(window) - len(window.lstrip())
            content_start = start + lead
            chunks.append(
                Chunk(
                    content=content,
                    index=len(chunks),
                    start=content_start,
                    end=content_start + len(content),
                )
            )

        if end >= length:
            break
        start += step

    return chunks


def estimate_chunk_count(length: int, size: int, overlap: int) -> int:
    """Estimate how many windows chunk_text produces for a text length.

    Accurate to within one chunk; word preservation and dropped blank
    windows shift the real count slightly.
    """
    validate_chunk_settings(size, overlap)
    if length <= size:
        return 1
    return math.ceil((length - overlap) / (size - overlap))


def split_oversized(
    content: str,
    start: int,
    boundary: BoundaryInfo,
    max_size: int,
    overlap: int,
) -> List[BoundaryChunk]:
    """Re-split one boundary segment that may exceed max_size.

    Every piece keeps the parent's boundary tag and is located inside the
    parent's span. Indices are left at 0 for the caller to renumber.
    """
    if len(content) <= max_size:
        return [
            BoundaryChunk(
                content=content,
                index=0,
                start=start,
                end=start + len(content),
                boundary=boundary,
            )
        ]

    return [
        BoundaryChunk(
            content=piece.content,
            index=0,
            start=start + piece.start,
            end=start + piece.end,
            boundary=boundary,
        )
        for piece in chunk_text(content, max_size, overlap, preserve_words=True)
    ]


class SlidingWindowChunker:
    """Class form of chunk_text bound to a set of options."""

    def __init__(self, options: ChunkOptions | None = None) -> None:
        self.options = (options or ChunkOptions()).validate()

    def chunk(self, text: str) -> List[Chunk]:
        return chunk_text(
            text,
            size=self.options.size,
            overlap=self.options.overlap,
            preserve_words=self.options.preserve_words,
        )

    def estimate(self, text: str) -> int:
        return estimate_chunk_count(len(text), self.options.size, self.options.overlap)

    def get_strategy_name(self) -> str:
        return "sliding_window"
