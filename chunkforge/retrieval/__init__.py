"""
Retrieval-side helpers.

ContentReconstructor turns a search hit on one chunk back into the full
source text, using the source_id/chunk_index metadata written by
chunkforge.chunking.records.
"""

from chunkforge.retrieval.reconstruction import (
    ChunkLookup,
    ContentReconstructor,
    InMemoryChunkLookup,
    SearchResult,
    StoredChunk,
    get_original_content,
    stitch_chunks,
)

__all__ = [
    "ChunkLookup",
    "ContentReconstructor",
    "InMemoryChunkLookup",
    "SearchResult",
    "StoredChunk",
    "get_original_content",
    "stitch_chunks",
]
