"""
Shared data model for the chunking engine.

Chunks are immutable outputs. Offsets are character positions in the
original source, with the end offset exclusive. Every strategy locates
the emitted content itself, so ``text[chunk.start:chunk.end] ==
chunk.content`` holds for all chunks.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from chunkforge.core.exceptions import ChunkConfigurationError

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 100


def validate_chunk_settings(size: int, overlap: int) -> None:
    """Raise ChunkConfigurationError unless 0 <= overlap < size.

    Settings are never clamped.
    """
    if size <= 0:
        raise ChunkConfigurationError(
            "Chunk size must be greater than 0", field="size", value=size
        )
    if overlap < 0:
        raise ChunkConfigurationError(
            "Overlap cannot be negative", field="overlap", value=overlap
        )
    if overlap >= size:
        raise ChunkConfigurationError(
            "Overlap must be less than chunk size", field="overlap", value=overlap
        )


@dataclass(frozen=True)
class Chunk:
    """One contiguous segment of source text."""

    content: str
    index: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return len(self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "index": self.index,
            "start": self.start,
            "end": self.end,
        }


@dataclass(frozen=True)
class BoundaryInfo:
    """Semantic tag attached to a boundary chunk.

    type is the segment kind: a Markdown section type (heading, list,
    paragraph, code), a regex boundary kind (imports, function, class,
    interface, type, statement) or a grammar node kind such as
    ``function_declaration``. category is only set for syntax-tree
    boundaries and names the node-type table group (functions, classes...).
    """

    type: str
    name: Optional[str] = None
    level: Optional[int] = None
    title: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        for key in ("name", "level", "title", "category"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class BoundaryChunk(Chunk):
    """A chunk that came from a recognized boundary segment."""

    boundary: BoundaryInfo = field(default_factory=lambda: BoundaryInfo("text"))

    @property
    def start_offset(self) -> int:
        return self.start

    @property
    def end_offset(self) -> int:
        return self.end

    def with_index(self, index: int) -> "BoundaryChunk":
        return replace(self, index=index)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["boundary"] = self.boundary.to_dict()
        return data


@dataclass(frozen=True)
class ChunkOptions:
    """Options for one chunking run.

    file_path is only used to infer the language and the strategy;
    the file itself is never read by the engine.
    """

    size: int = DEFAULT_CHUNK_SIZE
    overlap: int = DEFAULT_CHUNK_OVERLAP
    preserve_words: bool = True
    preserve_boundaries: bool = False
    file_path: Optional[str] = None

    def validate(self) -> "ChunkOptions":
        validate_chunk_settings(self.size, self.overlap)
        return self
