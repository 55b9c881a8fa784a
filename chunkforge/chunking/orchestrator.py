"""
Chunk orchestrator.

Chooses a chunking strategy for one input and runs the fallback chain:

    ┌──────────┐  fail   ┌──────────┐
    │   CST    │───────→ │  regex   │   (never fails)
    └──────────┘         └──────────┘
    ┌──────────┐
    │ markdown │                        (never fails)
    └──────────┘
    ┌────────────────┐
    │ sliding window │                  (only fails on bad settings)
    └────────────────┘

Strategy choice is a pure function of the options (select_strategy).
Each stage reports a StageResult instead of raising, so a failing
syntax-tree stage is an ordinary value the orchestrator reacts to.

Only ChunkConfigurationError escapes chunk(); grammar and parse
problems are logged and absorbed by the fallback.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, List, Optional

from chunkforge.chunking.code_chunker import RegexCodeChunker
from chunkforge.chunking.languages import (
    CODE_EXTENSIONS,
    MARKDOWN_EXTENSIONS,
    TREE_SITTER_SUPPORTED,
    get_language_from_extension,
    get_regex_language,
    normalize_extension,
)
from chunkforge.chunking.markdown_chunker import MarkdownChunker
from chunkforge.chunking.models import BoundaryChunk, BoundaryInfo, Chunk, ChunkOptions
from chunkforge.chunking.parser_runtime import ParserRuntime
from chunkforge.chunking.sliding_window import chunk_text, split_oversized
from chunkforge.chunking.tree_sitter_chunker import CSTBoundary, CSTBoundaryExtractor
from chunkforge.core.logging import ChunkRunLogger


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


class ChunkStrategy(str, Enum):
    """Chunking strategies, strongest first."""

    MARKDOWN = "markdown"
    CST = "cst"
    REGEX = "regex"
    SLIDING_WINDOW = "sliding_window"


@dataclass
class StageResult:
    """Outcome of one strategy attempt."""

    strategy: ChunkStrategy
    chunks: List[Chunk] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, strategy: ChunkStrategy, error: BaseException) -> "StageResult":
        return cls(strategy=strategy, error=str(error))


def select_strategy(options: ChunkOptions, cst_enabled: bool = True) -> ChunkStrategy:
    """Pick the first strategy to try for these options.

    Boundary strategies apply only when preserve_boundaries is set and
    the file path has an extension.
    """
    if not options.preserve_boundaries:
        return ChunkStrategy.SLIDING_WINDOW

    ext = normalize_extension(options.file_path)
    if not ext:
        return ChunkStrategy.SLIDING_WINDOW
    if ext in MARKDOWN_EXTENSIONS:
        return ChunkStrategy.MARKDOWN
    if cst_enabled and ext in TREE_SITTER_SUPPORTED:
        return ChunkStrategy.CST
    if ext in CODE_EXTENSIONS or ext in TREE_SITTER_SUPPORTED:
        return ChunkStrategy.REGEX
    return ChunkStrategy.SLIDING_WINDOW


class ChunkOrchestrator:
    """Run the chunking fallback chain for one input at a time.

    Args:
        runtime: Shared parser runtime. The caller owns it and it is never
            disposed here. Without one, a runtime is created for each
            syntax-tree attempt and disposed afterwards.
        cst_enabled: Try syntax-tree chunking for files with a grammar.
        include_nested: Report boundaries nested in other boundaries.
        warn_on_fallback: Log the first syntax-tree failure at WARNING.
    """

    def __init__(
        self,
        runtime: Optional[ParserRuntime] = None,
        cst_enabled: bool = True,
        include_nested: bool = True,
        warn_on_fallback: bool = True,
    ) -> None:
        self.runtime = runtime
        self.cst_enabled = cst_enabled
        self.include_nested = include_nested
        self.warn_on_fallback = warn_on_fallback
        self._reported_failure = False

    def chunk(self, text: str, options: Optional[ChunkOptions] = None) -> List[Chunk]:
        """Chunk text according to options.

        Returns:
            Chunks with sequential indices. Boundary strategies yield
            BoundaryChunk instances.

        Raises:
            ChunkConfigurationError: Invalid size/overlap settings.
        """
        options = (options or ChunkOptions()).validate()
        strategy = select_strategy(options, self.cst_enabled)
        run = ChunkRunLogger(options.file_path or "<text>")

        run.attempt(strategy.value)
        result = self._run_stage(strategy, text, options)
        if not result.success:
            run.fallback(strategy.value, ChunkStrategy.REGEX.value, result.error or "")
            self._report_fallback(result, options)
            run.attempt(ChunkStrategy.REGEX.value)
            result = self._run_stage(ChunkStrategy.REGEX, text, options)

        chunks = _finalize(result.chunks)
        run.finish(len(chunks))
        return chunks

    def _run_stage(
        self, strategy: ChunkStrategy, text: str, options: ChunkOptions
    ) -> StageResult:
        if strategy is ChunkStrategy.CST:
            return self._chunk_cst(text, options)

        if strategy is ChunkStrategy.MARKDOWN:
            chunker = MarkdownChunker(options.size, options.overlap)
            return StageResult(strategy, list(chunker.chunk(text)))

        if strategy is ChunkStrategy.REGEX:
            code_chunker = RegexCodeChunker(options.size, options.overlap)
            language = get_regex_language(options.file_path or "")
            return StageResult(strategy, list(code_chunker.chunk(text, language)))

        return StageResult(
            strategy,
            chunk_text(text, options.size, options.overlap, options.preserve_words),
        )

    def _chunk_cst(self, text: str, options: ChunkOptions) -> StageResult:
        """Syntax-tree stage; grammar problems become a failed result."""
        language = get_language_from_extension(options.file_path or "")
        if language is None:
            return StageResult.failed(
                ChunkStrategy.CST, ValueError("No grammar for file extension")
            )

        owned = self.runtime is None
        runtime = ParserRuntime() if owned else self.runtime
        try:
            extractor = CSTBoundaryExtractor(runtime, self.include_nested)
            boundaries = extractor.extract_boundaries(text, language.value)
        except Exception as e:
            # Grammar packages and parsers raise their own error types
            return StageResult.failed(ChunkStrategy.CST, e)
        finally:
            if owned:
                runtime.dispose()

        if not boundaries and text.strip():
            return StageResult.failed(
                ChunkStrategy.CST, ValueError("No boundary nodes found")
            )

        chunks: List[Chunk] = []
        for boundary in boundaries:
            chunks.extend(
                split_oversized(
                    boundary.text,
                    boundary.start_index,
                    _cst_boundary_info(boundary),
                    options.size,
                    options.overlap,
                )
            )
        # Pieces of a re-split parent can extend past its nested boundaries
        chunks.sort(key=lambda chunk: chunk.start)
        return StageResult(ChunkStrategy.CST, chunks)

    def _report_fallback(self, result: StageResult, options: ChunkOptions) -> None:
        language = get_language_from_extension(options.file_path or "")
        name = language.value if language is not None else "unknown"
        if self.warn_on_fallback and not self._reported_failure:
            self._reported_failure = True
            _Logger.get().warning(
                f"Syntax-tree parser not available for {name} files, "
                "falling back to regex boundary chunking",
                error=result.error,
            )
            return
        _Logger.get().debug(
            "Syntax-tree chunking failed",
            file=options.file_path,
            error=result.error,
        )


def _cst_boundary_info(boundary: CSTBoundary) -> BoundaryInfo:
    return BoundaryInfo(
        type=boundary.type, name=boundary.name, category=boundary.category
    )


def _finalize(chunks: List[Chunk]) -> List[Chunk]:
    """Drop whitespace-only boundary chunks and renumber."""
    kept = [
        chunk
        for chunk in chunks
        if not (isinstance(chunk, BoundaryChunk) and not chunk.content.strip())
    ]
    return [replace(chunk, index=index) for index, chunk in enumerate(kept)]


def chunk_content(
    text: str,
    options: Optional[ChunkOptions] = None,
    runtime: Optional[ParserRuntime] = None,
) -> List[Chunk]:
    """Chunk text with a one-off orchestrator."""
    return ChunkOrchestrator(runtime=runtime).chunk(text, options)
