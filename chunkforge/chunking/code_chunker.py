"""
Regex-based code boundary detection.

Fallback for code files when no syntax-tree parser is available. Works
line by line on unindented declarations only, so methods stay inside
the class that declares them:

- Consecutive ``import x`` / ``from x import y`` lines form one
  ``imports`` boundary (blank lines inside the run are kept).
- ``function``/``def``/``async def`` lines open a ``function`` boundary.
- ``class`` lines open a ``class`` boundary.
- For TypeScript, ``interface`` and ``type`` lines open ``interface`` and
  ``type`` boundaries.
- Anything else continues the open boundary or opens a ``statement``.

Never raises on any input text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from chunkforge.chunking.models import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    BoundaryChunk,
    BoundaryInfo,
    validate_chunk_settings,
)
from chunkforge.chunking.sliding_window import split_oversized

IMPORT_PATTERNS = [
    re.compile(r"^import\s+"),
    re.compile(r"^from\s+.+\s+import"),
]

FUNCTION_PATTERNS = [
    re.compile(r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s+(\w+)"),
    re.compile(r"^def\s+(\w+)"),
    re.compile(r"^async\s+def\s+(\w+)"),
]
FUNCTION_NAME = re.compile(r"(?:function|def)\s+(\w+)")

CLASS_PATTERN = re.compile(r"^(?:export\s+)?(?:default\s+)?class\s+(\w+)")

# Only languages with TypeScript syntax get interface/type boundaries
TYPE_DECLARATION_PATTERNS = [
    ("interface", re.compile(r"^(?:export\s+)?interface\s+(\w+)")),
    ("type", re.compile(r"^(?:export\s+)?type\s+(\w+)")),
]
TYPESCRIPT_LANGUAGES = frozenset({"typescript", "tsx"})


@dataclass
class CodeBoundary:
    """A run of source lines recognized as one declaration."""

    type: str  # imports, function, class, interface, type, statement
    start: int
    end: int
    name: Optional[str] = None

    def content(self, code: str) -> str:
        return code[self.start : self.end]

    def boundary(self) -> BoundaryInfo:
        return BoundaryInfo(type=self.type, name=self.name)


def _is_import(line: str) -> bool:
    return any(pattern.match(line) for pattern in IMPORT_PATTERNS)


def _match_declaration(line: str, language: str) -> Optional[Tuple[str, Optional[str]]]:
    """Return (boundary type, name) when the line opens a declaration."""
    if any(pattern.match(line) for pattern in FUNCTION_PATTERNS):
        match = FUNCTION_NAME.search(line)
        return "function", match.group(1) if match else None

    match = CLASS_PATTERN.match(line)
    if match:
        return "class", match.group(1)

    if language in TYPESCRIPT_LANGUAGES:
        for boundary_type, pattern in TYPE_DECLARATION_PATTERNS:
            match = pattern.match(line)
            if match:
                return boundary_type, match.group(1)

    return None


def parse_code_boundaries(code: str, language: str) -> List[CodeBoundary]:
    """Split code into ordered declaration boundaries.

    Args:
        code: Source text.
        language: Language name, e.g. "python" or "typescript".

    Returns:
        Boundaries covering every line of the input, in source order.
    """
    boundaries: List[CodeBoundary] = []
    current: Optional[CodeBoundary] = None
    in_imports = False
    position = 0

    def flush() -> None:
        nonlocal current
        if current is not None:
            boundaries.append(current)
            current = None

    for line in code.split("\n"):
        line_start = position
        line_end = position + len(line)
        position = line_end + 1  # +1 for newline

        if _is_import(line):
            if in_imports and current is not None:
                current.end = line_end
            else:
                flush()
                current = CodeBoundary("imports", line_start, line_end)
                in_imports = True
            continue

        if in_imports and not line.strip():
            current.end = line_end
            continue

        if in_imports:
            flush()
            in_imports = False

        declaration = _match_declaration(line, language)
        if declaration is not None:
            flush()
            boundary_type, name = declaration
            current = CodeBoundary(boundary_type, line_start, line_end, name)
        elif current is not None:
            current.end = line_end
        else:
            current = CodeBoundary("statement", line_start, line_end)

    flush()
    return boundaries


class RegexCodeChunker:
    """Chunk code along regex-detected declaration boundaries."""

    def __init__(
        self,
        max_chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        validate_chunk_settings(max_chunk_size, overlap)
        self.max_chunk_size = max_chunk_size
        self.overlap = overlap

    def chunk(self, code: str, language: str) -> List[BoundaryChunk]:
        chunks: List[BoundaryChunk] = []
        for boundary in parse_code_boundaries(code, language):
            content = boundary.content(code).rstrip()
            if not content.strip():
                continue
            for piece in split_oversized(
                content,
                boundary.start,
                boundary.boundary(),
                self.max_chunk_size,
                self.overlap,
            ):
                chunks.append(piece.with_index(len(chunks)))
        return chunks

    def get_strategy_name(self) -> str:
        return "regex"
