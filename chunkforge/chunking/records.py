"""
Persisted chunk records.

Pairs the chunks of one source with the metadata the vector store keeps
alongside each embedding, and which the reconstructor later relies on:

    source_id        shared by every chunk of one source (uuid4)
    chunk_index      position of the chunk in the source, from 0
    total_chunks     identical on every record of the source
    original_content full source text, only on chunk_index 0
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from chunkforge.chunking.models import BoundaryChunk, Chunk, ChunkOptions
from chunkforge.chunking.orchestrator import ChunkOrchestrator


@dataclass
class ChunkRecord:
    """One chunk ready for embedding and storage."""

    content: str
    source_id: str
    chunk_index: int
    total_chunks: int
    start: int = 0
    end: int = 0
    file_path: Optional[str] = None
    original_content: Optional[str] = None
    boundary: Optional[Dict[str, Any]] = field(default=None)

    def to_metadata(self) -> Dict[str, Any]:
        """Metadata stored next to the embedding (content excluded)."""
        metadata: Dict[str, Any] = {
            "source_id": self.source_id,
            "chunk_index": self.chunk_index,
            "total_chunks": self.total_chunks,
            "start": self.start,
            "end": self.end,
        }
        if self.file_path is not None:
            metadata["file_path"] = self.file_path
        if self.original_content is not None:
            metadata["original_content"] = self.original_content
        if self.boundary is not None:
            metadata["boundary"] = self.boundary
        return metadata

    def to_dict(self) -> Dict[str, Any]:
        """Convert ChunkRecord to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChunkRecord":
        """Create ChunkRecord from dictionary."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in known_fields}
        return cls(**filtered)


def build_chunk_records(
    original: str,
    chunks: Sequence[Chunk],
    file_path: Optional[str] = None,
    source_id: Optional[str] = None,
) -> List[ChunkRecord]:
    """Attach source metadata to the chunks of one source.

    Args:
        original: Full source text, stored on the first record.
        chunks: Chunks in index order.
        file_path: Optional path recorded on every record.
        source_id: Identifier to reuse; a new uuid4 when omitted.
    """
    source_id = source_id or str(uuid.uuid4())
    total = len(chunks)
    return [
        ChunkRecord(
            content=chunk.content,
            source_id=source_id,
            chunk_index=index,
            total_chunks=total,
            start=chunk.start,
            end=chunk.end,
            file_path=file_path,
            original_content=original if index == 0 else None,
            boundary=(
                chunk.boundary.to_dict() if isinstance(chunk, BoundaryChunk) else None
            ),
        )
        for index, chunk in enumerate(chunks)
    ]


def chunk_to_records(
    text: str,
    options: Optional[ChunkOptions] = None,
    orchestrator: Optional[ChunkOrchestrator] = None,
) -> List[ChunkRecord]:
    """Chunk text and wrap the result in records sharing one source_id."""
    options = options or ChunkOptions()
    orchestrator = orchestrator or ChunkOrchestrator()
    chunks = orchestrator.chunk(text, options)
    return build_chunk_records(text, chunks, file_path=options.file_path)
