"""
Language and file-extension registry.

Single source of truth for which extensions are text, code, Markdown or
configuration, and which languages have a syntax-tree grammar. Every
lookup is case-insensitive; helpers accept either an extension (".py")
or a file name ("app.PY").
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, FrozenSet, Mapping, Optional


class SupportedLanguage(str, Enum):
    """Languages with a syntax-tree grammar."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    JAVA = "java"
    RUBY = "ruby"
    C = "c"
    CPP = "cpp"
    HTML = "html"
    CSS = "css"
    BASH = "bash"


SUPPORTED_LANGUAGES = tuple(language.value for language in SupportedLanguage)

TEXT_EXTENSIONS: FrozenSet[str] = frozenset(
    [
        # Documentation
        ".txt",
        ".md",
        ".mdx",
        ".markdown",
        # JavaScript/TypeScript ecosystem
        ".js",
        ".jsx",
        ".ts",
        ".tsx",
        ".mjs",
        ".mts",
        ".cjs",
        # Major programming languages
        ".py",
        ".go",
        ".rs",
        ".java",
        ".rb",
        ".c",
        ".cpp",
        ".h",
        # Web technologies
        ".html",
        ".css",
        ".sass",
        ".scss",
        ".json",
        ".xml",
        ".xmlx",
        # Configuration files
        ".yaml",
        ".yml",
        ".toml",
        # Shell scripts
        ".sh",
        ".bash",
        # Frontend frameworks
        ".vue",
        ".svelte",
        # Sample files such as .env.example
        ".example",
    ]
)

LANGUAGE_PARSERS: Dict[str, SupportedLanguage] = {
    ".js": SupportedLanguage.JAVASCRIPT,
    ".jsx": SupportedLanguage.JAVASCRIPT,
    ".mjs": SupportedLanguage.JAVASCRIPT,
    ".cjs": SupportedLanguage.JAVASCRIPT,
    ".ts": SupportedLanguage.TYPESCRIPT,
    ".mts": SupportedLanguage.TYPESCRIPT,
    ".tsx": SupportedLanguage.TSX,
    ".py": SupportedLanguage.PYTHON,
    ".go": SupportedLanguage.GO,
    ".rs": SupportedLanguage.RUST,
    ".java": SupportedLanguage.JAVA,
    ".rb": SupportedLanguage.RUBY,
    ".c": SupportedLanguage.C,
    ".h": SupportedLanguage.C,
    ".cpp": SupportedLanguage.CPP,
    ".html": SupportedLanguage.HTML,
    ".css": SupportedLanguage.CSS,
    ".scss": SupportedLanguage.CSS,
    ".sass": SupportedLanguage.CSS,
    ".sh": SupportedLanguage.BASH,
    ".bash": SupportedLanguage.BASH,
}

TREE_SITTER_SUPPORTED: FrozenSet[str] = frozenset(LANGUAGE_PARSERS)

# Extensions that get regex boundary detection when no grammar is usable
CODE_EXTENSIONS: FrozenSet[str] = frozenset(
    [
        ".js",
        ".jsx",
        ".ts",
        ".tsx",
        ".py",
        ".java",
        ".cs",
        ".rb",
        ".go",
        ".rs",
        ".cpp",
        ".c",
        ".h",
    ]
)

MARKDOWN_EXTENSIONS: FrozenSet[str] = frozenset([".md", ".mdx", ".markdown"])

CONFIG_EXTENSIONS: FrozenSet[str] = frozenset([".json", ".yaml", ".yml", ".toml"])


def normalize_extension(filename_or_ext: Optional[str]) -> str:
    """Return the lower-cased extension of a file name or extension.

    ".PY" -> ".py", "src/App.tsx" -> ".tsx", "Makefile" -> "".
    """
    if not filename_or_ext:
        return ""
    if filename_or_ext.startswith(".") and "/" not in filename_or_ext:
        if filename_or_ext.count(".") == 1:
            return filename_or_ext.lower()
    return PurePath(filename_or_ext).suffix.lower()


def is_supported_language(language: str) -> bool:
    return language in SUPPORTED_LANGUAGES


def get_language_from_extension(filename_or_ext: str) -> Optional[SupportedLanguage]:
    """Grammar language for an extension, or None."""
    return LANGUAGE_PARSERS.get(normalize_extension(filename_or_ext))


def get_regex_language(filename_or_ext: str) -> str:
    """Language name handed to the regex boundary segmenter.

    Code files without a grammar entry (such as .cs) are treated as
    JavaScript, which only disables TypeScript interface/type detection.
    """
    language = get_language_from_extension(filename_or_ext)
    if language is not None:
        return language.value
    return SupportedLanguage.JAVASCRIPT.value


def is_tree_sitter_supported(filename_or_ext: str) -> bool:
    return normalize_extension(filename_or_ext) in TREE_SITTER_SUPPORTED


def is_code_file(filename_or_ext: str) -> bool:
    return normalize_extension(filename_or_ext) in CODE_EXTENSIONS


def is_markdown_file(filename_or_ext: str) -> bool:
    return normalize_extension(filename_or_ext) in MARKDOWN_EXTENSIONS


def is_config_file(filename_or_ext: str) -> bool:
    return normalize_extension(filename_or_ext) in CONFIG_EXTENSIONS


def is_text_file(filename_or_ext: str) -> bool:
    """Check whether a file name or extension is a supported text file."""
    return normalize_extension(filename_or_ext) in TEXT_EXTENSIONS


def require_all_languages(
    table: Mapping[SupportedLanguage, Any], table_name: str
) -> None:
    """Raise unless table has an entry for every SupportedLanguage.

    Called at import time by modules holding per-language tables.
    """
    missing = set(SupportedLanguage) - set(table)
    if missing:
        names = sorted(language.value for language in missing)
        raise RuntimeError(f"{table_name} missing entries for {names}")
