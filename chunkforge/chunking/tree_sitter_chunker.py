"""
Tree-sitter based boundary extraction.

Parses source with a grammar from the ParserRuntime and walks the
concrete syntax tree, reporting every node whose kind appears in the
language's boundary node-type table.

Traversal
---------
Pre-order, iterative (Rule #1: no recursion, deep trees cannot overflow
the stack). The walk continues into matched nodes, so a method inside a
class is reported as its own boundary after the class. Sizes are not
enforced here; the orchestrator re-splits oversized boundaries.

Offsets
-------
tree-sitter reports UTF-8 byte offsets. Boundaries carry character
offsets into the Python string, so ``code[b.start_index:b.end_index] ==
b.text`` for any input, ASCII or not.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from chunkforge.chunking.models import BoundaryChunk, BoundaryInfo
from chunkforge.chunking.node_types import (
    get_boundary_node_types,
    get_node_category,
)
from chunkforge.chunking.parser_runtime import ParserRuntime
from chunkforge.core.exceptions import ParserUnavailableError

_JS_LANGUAGES = frozenset({"javascript", "typescript", "tsx"})
_ENCODING = "utf-8"
_ERRORS = "surrogatepass"


@dataclass
class CSTBoundary:
    """A syntax-tree node recognized as a chunk boundary."""

    type: str  # grammar node kind, e.g. function_declaration
    name: Optional[str]
    start_index: int
    end_index: int
    text: str
    category: Optional[str] = None


def _byte_to_char_offsets(code: str, source: bytes) -> Optional[List[int]]:
    """Map each byte offset to a character offset.

    Returns None for pure-ASCII input, where the offsets coincide.
    """
    if len(source) == len(code):
        return None

    offsets = [0] * (len(source) + 1)
    position = 0
    for index, char in enumerate(code):
        width = len(char.encode(_ENCODING, _ERRORS))
        for k in range(width):
            offsets[position + k] = index
        position += width
    offsets[position] = len(code)
    return offsets


def _node_source(node: Any, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode(_ENCODING, "replace")


def _extract_name(node: Any, language: str, source: bytes) -> Optional[str]:
    """Best-effort identifier for a boundary node."""
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        return _node_source(name_node, source)

    if language in _JS_LANGUAGES:
        parent = node.parent
        if (
            node.type in ("arrow_function", "function_expression")
            and parent is not None
            and parent.type == "variable_declarator"
        ):
            declared = parent.child_by_field_name("name")
            if declared is not None:
                return _node_source(declared, source)
        if node.type == "method_definition":
            key = node.child_by_field_name("key")
            if key is not None:
                return _node_source(key, source)

    for child in node.children:
        if child.type == "identifier":
            return _node_source(child, source)
    return None


class CSTBoundaryExtractor:
    """Extract boundary nodes from a syntax tree."""

    def __init__(self, runtime: ParserRuntime, include_nested: bool = True) -> None:
        self.runtime = runtime
        # False reports only outermost boundaries
        self.include_nested = include_nested

    def extract_boundaries(self, code: str, language: str) -> List[CSTBoundary]:
        """Parse code and return boundary nodes in traversal order.

        Raises:
            ParserUnavailableError: No parser could be produced for language.
        """
        language = getattr(language, "value", language)
        parser = self.runtime.create_parser(language)
        if parser is None:
            raise ParserUnavailableError(language)

        source = code.encode(_ENCODING, _ERRORS)
        tree = parser.parse(source)
        char_offsets = _byte_to_char_offsets(code, source)
        boundary_types = get_boundary_node_types(language)

        boundaries: List[CSTBoundary] = []
        stack = [(tree.root_node, False)]
        while stack:
            node, inside = stack.pop()
            matched = node.type in boundary_types
            if matched and (self.include_nested or not inside):
                start, end = node.start_byte, node.end_byte
                if char_offsets is not None:
                    start, end = char_offsets[start], char_offsets[end]
                boundaries.append(
                    CSTBoundary(
                        type=node.type,
                        name=_extract_name(node, language, source),
                        start_index=start,
                        end_index=end,
                        text=code[start:end],
                        category=get_node_category(language, node.type),
                    )
                )
            inside = inside or matched
            stack.extend((child, inside) for child in reversed(node.children))

        return boundaries


def boundaries_to_chunks(boundaries: List[CSTBoundary]) -> List[BoundaryChunk]:
    """One chunk per boundary, text verbatim, indices in order."""
    return [
        BoundaryChunk(
            content=boundary.text,
            index=index,
            start=boundary.start_index,
            end=boundary.end_index,
            boundary=BoundaryInfo(
                type=boundary.type,
                name=boundary.name,
                category=boundary.category,
            ),
        )
        for index, boundary in enumerate(boundaries)
    ]
