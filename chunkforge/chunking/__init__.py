"""
Chunking Module for Retrieval Indexing.

Splits source material into bounded, overlapping chunks suitable for
embedding, following syntactic boundaries when the content allows it.

Architecture Position
---------------------
    CLI (outermost)
      └── **Chunking** (you are here)
            └── Core (logging, exceptions, config)

    ┌─────────────────┐     ┌─────────────────┐     ┌─────────────────┐
    │  Source text    │────→│  Orchestrator   │────→│  ChunkRecords   │
    │  + file path    │     │  (strategy)     │     │  (source_id)    │
    └─────────────────┘     └─────────────────┘     └─────────────────┘

Chunking Strategies
-------------------
**CST** (CSTBoundaryExtractor)
    tree-sitter grammars for 13 languages. Functions, classes, imports
    and other declarations become boundaries.

**Regex** (RegexCodeChunker)
    Line-based declaration detection. Fallback when no grammar loads.

**Markdown** (MarkdownChunker)
    Heading, list, paragraph and fenced-code sections.

**Sliding window** (chunk_text)
    Fixed-size overlapping windows. Used for plain text and for
    re-splitting oversized boundary segments.

Usage Example
-------------
    from chunkforge.chunking import ChunkOrchestrator, resolve_chunk_options

    options = resolve_chunk_options("src/app.py")
    chunks = ChunkOrchestrator().chunk(source, options)
"""

from chunkforge.chunking.code_chunker import RegexCodeChunker, parse_code_boundaries
from chunkforge.chunking.languages import (
    SUPPORTED_LANGUAGES,
    SupportedLanguage,
    get_language_from_extension,
    is_code_file,
    is_markdown_file,
    is_text_file,
    is_tree_sitter_supported,
)
from chunkforge.chunking.markdown_chunker import MarkdownChunker, parse_sections
from chunkforge.chunking.models import BoundaryChunk, BoundaryInfo, Chunk, ChunkOptions
from chunkforge.chunking.node_types import LANGUAGE_NODE_TYPES, get_boundary_node_types
from chunkforge.chunking.orchestrator import (
    ChunkOrchestrator,
    ChunkStrategy,
    StageResult,
    chunk_content,
    select_strategy,
)
from chunkforge.chunking.parser_runtime import GRAMMAR_SOURCES, ParserRuntime
from chunkforge.chunking.records import ChunkRecord, build_chunk_records, chunk_to_records
from chunkforge.chunking.size_optimizer import (
    ChunkSettings,
    get_optimal_chunk_settings,
    resolve_chunk_options,
)
from chunkforge.chunking.sliding_window import (
    SlidingWindowChunker,
    chunk_text,
    estimate_chunk_count,
    split_oversized,
)
from chunkforge.chunking.tree_sitter_chunker import (
    CSTBoundary,
    CSTBoundaryExtractor,
    boundaries_to_chunks,
)

__all__ = [
    # Data model
    "Chunk",
    "BoundaryChunk",
    "BoundaryInfo",
    "ChunkOptions",
    "ChunkRecord",
    # Strategies
    "chunk_text",
    "estimate_chunk_count",
    "split_oversized",
    "SlidingWindowChunker",
    "MarkdownChunker",
    "parse_sections",
    "RegexCodeChunker",
    "parse_code_boundaries",
    "CSTBoundary",
    "CSTBoundaryExtractor",
    "boundaries_to_chunks",
    # Orchestration
    "ChunkOrchestrator",
    "ChunkStrategy",
    "StageResult",
    "chunk_content",
    "select_strategy",
    "build_chunk_records",
    "chunk_to_records",
    # Runtime and tables
    "ParserRuntime",
    "GRAMMAR_SOURCES",
    "LANGUAGE_NODE_TYPES",
    "get_boundary_node_types",
    "SupportedLanguage",
    "SUPPORTED_LANGUAGES",
    "get_language_from_extension",
    "is_code_file",
    "is_markdown_file",
    "is_text_file",
    "is_tree_sitter_supported",
    # Sizing
    "ChunkSettings",
    "get_optimal_chunk_settings",
    "resolve_chunk_options",
]
