"""
Original-content reconstruction.

Given a search hit on one chunk, recover the full text of the source it
came from. Two paths:

1. The record with chunk_index 0 carries original_content: return it.
2. Otherwise stitch the stored chunks back together in chunk_index
   order. When the next chunk starts with the last ``overlap``
   characters of the text accumulated so far, only the remainder is
   appended; otherwise the chunk is joined with a newline.

Stitching is an approximation. Word preservation and trimming make
consecutive chunks overlap by less than the nominal overlap, and those
joins fall back to a newline. Exact recovery is only guaranteed for
fixed-size windows where the overlap matches the chunking overlap.

Architecture Context
--------------------
The chunk store is an external collaborator reached through the
ChunkLookup interface:

    ┌─────────────────────┐      ┌─────────────────────┐
    │ ContentReconstructor│─────→│     ChunkLookup     │
    └─────────────────────┘      │ (vector store side) │
                                 └─────────────────────┘
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from chunkforge.core.exceptions import ReconstructionError

DEFAULT_RECONSTRUCTION_OVERLAP = 200


class _Logger:
    """Lazy logger holder.

    Rule #6: Encapsulates logger state in smallest scope.
    """

    _instance = None

    @classmethod
    def get(cls) -> Any:
        if cls._instance is None:
            from chunkforge.core.logging import get_logger

            cls._instance = get_logger(__name__)
        return cls._instance


@dataclass
class StoredChunk:
    """A chunk as returned by the chunk store."""

    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def chunk_index(self) -> int:
        return int(self.metadata.get("chunk_index", 0))


@dataclass
class SearchResult:
    """A search hit handed to the reconstructor."""

    content: str
    score: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    @property
    def source_id(self) -> Optional[str]:
        return self.metadata.get("source_id")


class ChunkLookup(ABC):
    """Read access to stored chunks grouped by source."""

    @abstractmethod
    def list_chunks_by_source_id(self, source_id: str) -> List[StoredChunk]:
        """Every stored chunk sharing source_id, in any order."""


class InMemoryChunkLookup(ChunkLookup):
    """ChunkLookup over records held in memory."""

    def __init__(self, chunks: Optional[Iterable[StoredChunk]] = None) -> None:
        self._by_source: Dict[str, List[StoredChunk]] = {}
        for chunk in chunks or []:
            self.add(chunk)

    def add(self, chunk: StoredChunk) -> None:
        source_id = chunk.metadata.get("source_id")
        if not source_id:
            raise ReconstructionError("Stored chunk has no source_id")
        self._by_source.setdefault(source_id, []).append(chunk)

    def add_records(self, records: Iterable[Any]) -> None:
        """Store ChunkRecord objects (anything with content/to_metadata)."""
        for record in records:
            self.add(StoredChunk(content=record.content, metadata=record.to_metadata()))

    def list_chunks_by_source_id(self, source_id: str) -> List[StoredChunk]:
        return list(self._by_source.get(source_id, []))


def stitch_chunks(contents: Sequence[str], overlap: int = DEFAULT_RECONSTRUCTION_OVERLAP) -> str:
    """Join ordered chunk contents, removing the overlapping prefixes.

    Args:
        contents: Chunk contents in chunk_index order.
        overlap: Number of trailing characters compared against the
            next chunk's prefix.
    """
    if not contents:
        return ""

    result = contents[0]
    for content in contents[1:]:
        tail = result[-overlap:] if overlap > 0 else ""
        if tail and content.startswith(tail):
            result += content[len(tail) :]
        else:
            result += "\n" + content
    return result


class ContentReconstructor:
    """Rebuild source text from a search hit and the chunk store."""

    def __init__(
        self, lookup: ChunkLookup, overlap: int = DEFAULT_RECONSTRUCTION_OVERLAP
    ) -> None:
        self.lookup = lookup
        self.overlap = overlap

    def get_original_content(self, result: SearchResult) -> str:
        """Full source text for a hit, or the hit's own content.

        Lookup failures are logged and never raised.
        """
        source_id = result.source_id
        if not source_id:
            return result.content

        try:
            chunks = self.lookup.list_chunks_by_source_id(source_id)
        except Exception as e:
            _Logger.get().error(
                "Failed to list chunks for reconstruction",
                source_id=source_id,
                error=str(e),
            )
            return result.content

        if not chunks:
            return result.content

        for chunk in chunks:
            original = chunk.metadata.get("original_content")
            if chunk.chunk_index == 0 and original:
                return original

        ordered = sorted(chunks, key=lambda chunk: chunk.chunk_index)
        return stitch_chunks([chunk.content for chunk in ordered], self.overlap)


def get_original_content(
    result: SearchResult,
    lookup: ChunkLookup,
    overlap: int = DEFAULT_RECONSTRUCTION_OVERLAP,
) -> str:
    """Function form of ContentReconstructor.get_original_content."""
    return ContentReconstructor(lookup, overlap).get_original_content(result)
