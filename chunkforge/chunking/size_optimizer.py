"""
Chunk size optimization.

Recommends a chunk size and overlap per file type and resolves the
effective ChunkOptions for a file from explicit settings and presets.

Presets (characters):

    code           650 / 125   source, stylesheets, shell, config, markup
    documentation 1250 / 250   Markdown and HTML
    article       1750 / 350   plain text
    default       1000 / 200   everything else
"""

from __future__ import annotations

from typing import Dict, NamedTuple, Optional

from chunkforge.chunking.languages import (
    CODE_EXTENSIONS,
    CONFIG_EXTENSIONS,
    MARKDOWN_EXTENSIONS,
    normalize_extension,
)
from chunkforge.chunking.models import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    ChunkOptions,
)


class ChunkSettings(NamedTuple):
    """Recommended size/overlap pair."""

    size: int
    overlap: int


CODE_SETTINGS = ChunkSettings(size=650, overlap=125)
DOCUMENTATION_SETTINGS = ChunkSettings(size=1250, overlap=250)
ARTICLE_SETTINGS = ChunkSettings(size=1750, overlap=350)
DEFAULT_SETTINGS = ChunkSettings(size=1000, overlap=200)


def _build_extension_settings() -> Dict[str, ChunkSettings]:
    settings: Dict[str, ChunkSettings] = {}
    for ext in CODE_EXTENSIONS:
        settings[ext] = CODE_SETTINGS
    for ext in (".css", ".scss", ".sass", ".sh", ".bash"):
        settings[ext] = CODE_SETTINGS
    for ext in CONFIG_EXTENSIONS:
        settings[ext] = CODE_SETTINGS
    for ext in (".xml", ".xmlx", ".vue", ".svelte"):
        settings[ext] = CODE_SETTINGS
    for ext in MARKDOWN_EXTENSIONS:
        settings[ext] = DOCUMENTATION_SETTINGS
    settings[".html"] = DOCUMENTATION_SETTINGS
    settings[".txt"] = ARTICLE_SETTINGS
    settings[".example"] = DEFAULT_SETTINGS
    return settings


EXTENSION_SETTINGS: Dict[str, ChunkSettings] = _build_extension_settings()

# Extensions where boundary-aware chunking is switched on automatically
AUTO_BOUNDARY_EXTENSIONS = frozenset(
    [".md", ".mdx", ".markdown", ".js", ".ts", ".jsx", ".tsx", ".py", ".java", ".rs", ".go"]
)


def get_optimal_chunk_settings(file_path: Optional[str]) -> ChunkSettings:
    """Recommended chunk settings for a file, by extension.

    Matching is case-insensitive. Missing or unknown extensions get
    the default preset.
    """
    return EXTENSION_SETTINGS.get(normalize_extension(file_path), DEFAULT_SETTINGS)


def resolve_chunk_options(
    file_path: Optional[str] = None,
    size: Optional[int] = None,
    overlap: Optional[int] = None,
    preserve_words: bool = True,
    preserve_boundaries: Optional[bool] = None,
    auto_optimize: bool = True,
) -> ChunkOptions:
    """Effective options for chunking one file.

    With auto_optimize, the extension preset replaces size and overlap
    only when neither was given explicitly, and preserve_boundaries is
    enabled for Markdown and mainstream code files when left unset.

    Raises:
        ChunkConfigurationError: The resulting size/overlap are invalid.
    """
    if auto_optimize and size is None and overlap is None:
        preset = get_optimal_chunk_settings(file_path)
        size, overlap = preset.size, preset.overlap

    if preserve_boundaries is None:
        preserve_boundaries = (
            auto_optimize and normalize_extension(file_path) in AUTO_BOUNDARY_EXTENSIONS
        )

    return ChunkOptions(
        size=size if size is not None else DEFAULT_CHUNK_SIZE,
        overlap=overlap if overlap is not None else DEFAULT_CHUNK_OVERLAP,
        preserve_words=preserve_words,
        preserve_boundaries=preserve_boundaries,
        file_path=file_path,
    ).validate()
