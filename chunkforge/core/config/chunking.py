"""
Chunking and parser configuration.

Provides configuration for chunk sizing and for the syntax-tree stage
that precedes the regex and sliding-window fallbacks.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from chunkforge.core.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from chunkforge.chunking.models import ChunkOptions


@dataclass
class ChunkingConfig:
    """Chunking configuration.

    size and overlap left as None mean "use the recommended preset for
    the file type" when auto_optimize is on. preserve_boundaries left as
    None lets auto_optimize enable it for Markdown and mainstream code.
    """

    size: Optional[int] = None  # characters
    overlap: Optional[int] = None
    preserve_words: bool = True
    preserve_boundaries: Optional[bool] = None
    auto_optimize: bool = True

    def __post_init__(self) -> None:
        if self.size is not None and self.size <= 0:
            raise ConfigValidationError(
                "chunking.size must be greater than 0",
                field="chunking.size",
                value=self.size,
            )
        if self.overlap is not None and self.overlap < 0:
            raise ConfigValidationError(
                "chunking.overlap cannot be negative",
                field="chunking.overlap",
                value=self.overlap,
            )
        if (
            self.size is not None
            and self.overlap is not None
            and self.overlap >= self.size
        ):
            raise ConfigValidationError(
                "chunking.overlap must be less than chunking.size",
                field="chunking.overlap",
                value=self.overlap,
            )

    def to_options(self, file_path: Optional[str] = None) -> "ChunkOptions":
        """Resolve the effective ChunkOptions for one file."""
        # Lazy import keeps core free of chunking imports at load time
        from chunkforge.chunking.size_optimizer import resolve_chunk_options

        return resolve_chunk_options(
            file_path,
            size=self.size,
            overlap=self.overlap,
            preserve_words=self.preserve_words,
            preserve_boundaries=self.preserve_boundaries,
            auto_optimize=self.auto_optimize,
        )


@dataclass
class ParserConfig:
    """Syntax-tree parser configuration.

    Disabling the parser makes code files go straight to regex boundary
    detection, which needs no grammar assets.
    """

    enabled: bool = True
    include_nested: bool = True
    warn_on_fallback: bool = True
