"""
Tests for regex-based code boundary detection.

Test Strategy
-------------
- Python and TypeScript samples with hand-checked boundary kinds and names
- Indented declarations stay inside the enclosing boundary
- Arbitrary input never raises

Organization
------------
- TestParseCodeBoundaries: boundary kinds, names and grouping
- TestRegexCodeChunker: chunk output and re-splitting
"""

import pytest

from chunkforge.chunking.code_chunker import RegexCodeChunker, parse_code_boundaries
from chunkforge.core.exceptions import ChunkConfigurationError


class TestParseCodeBoundaries:
    """Tests for parse_code_boundaries."""

    def test_python_boundaries(self, sample_python):
        boundaries = parse_code_boundaries(sample_python, "python")
        assert [b.type for b in boundaries] == ["imports", "function", "class"]
        assert [b.name for b in boundaries] == [None, "foo", "Bar"]

    def test_methods_stay_in_class(self, sample_python):
        boundaries = parse_code_boundaries(sample_python, "python")
        class_text = boundaries[-1].content(sample_python)
        assert "def method(self):" in class_text

    def test_import_run_includes_blank_lines(self):
        code = "import a\n\nfrom b import c\nx = 1"
        boundaries = parse_code_boundaries(code, "python")
        assert [b.type for b in boundaries] == ["imports", "statement"]
        assert boundaries[0].content(code) == "import a\n\nfrom b import c"

    def test_leading_statement(self):
        code = "const a = 1;\nfunction f() {}\n"
        boundaries = parse_code_boundaries(code, "javascript")
        assert [b.type for b in boundaries] == ["statement", "function"]
        assert boundaries[1].name == "f"

    def test_export_default_async_function(self):
        code = "export default async function handler(req) {\n}\n"
        boundaries = parse_code_boundaries(code, "javascript")
        assert boundaries[0].type == "function"
        assert boundaries[0].name == "handler"

    def test_async_def(self):
        boundaries = parse_code_boundaries("async def fetch():\n    pass", "python")
        assert (boundaries[0].type, boundaries[0].name) == ("function", "fetch")

    def test_exported_class(self):
        boundaries = parse_code_boundaries("export class Widget {}\n", "typescript")
        assert (boundaries[0].type, boundaries[0].name) == ("class", "Widget")

    def test_typescript_declarations(self, sample_typescript):
        boundaries = parse_code_boundaries(sample_typescript, "typescript")
        assert [b.type for b in boundaries] == ["interface", "type", "function"]
        assert [b.name for b in boundaries] == ["Props", "Id", "render"]

    def test_tsx_gets_typescript_declarations(self, sample_typescript):
        boundaries = parse_code_boundaries(sample_typescript, "tsx")
        assert boundaries[0].type == "interface"

    def test_javascript_ignores_interface(self, sample_typescript):
        boundaries = parse_code_boundaries(sample_typescript, "javascript")
        assert [b.type for b in boundaries] == ["statement", "function"]

    def test_boundaries_cover_source_in_order(self, sample_python):
        boundaries = parse_code_boundaries(sample_python, "python")
        starts = [b.start for b in boundaries]
        assert starts == sorted(starts)
        for boundary in boundaries:
            assert boundary.content(sample_python) == sample_python[boundary.start : boundary.end]

    def test_garbage_input(self):
        boundaries = parse_code_boundaries("}}}{{{\n\x00\n\t\t)", "rust")
        assert len(boundaries) == 1
        assert boundaries[0].type == "statement"


class TestRegexCodeChunker:
    """Tests for RegexCodeChunker.chunk."""

    def test_chunk_contents(self, sample_python):
        chunks = RegexCodeChunker(1000, 100).chunk(sample_python, "python")
        assert [c.content for c in chunks] == [
            "import os\nimport sys",
            "def foo():\n    return 1",
            "class Bar:\n    def method(self):\n        pass",
        ]
        assert [c.index for c in chunks] == [0, 1, 2]

    def test_offsets(self, sample_python):
        chunks = RegexCodeChunker().chunk(sample_python, "python")
        assert [c.start for c in chunks] == [0, 22, 47]
        for chunk in chunks:
            assert sample_python[chunk.start : chunk.end] == chunk.content

    def test_boundary_tags(self, sample_python):
        chunks = RegexCodeChunker().chunk(sample_python, "python")
        assert chunks[1].boundary.type == "function"
        assert chunks[1].boundary.name == "foo"
        assert chunks[1].boundary.category is None

    def test_oversized_function_resplit(self):
        body = "\n".join(f"    value_{i} = compute({i})" for i in range(30))
        code = f"def big():\n{body}\n\ndef small():\n    pass\n"
        chunks = RegexCodeChunker(max_chunk_size=120, overlap=20).chunk(code, "python")
        big = [c for c in chunks if c.boundary.name == "big"]
        assert len(big) > 1
        assert all(c.length <= 120 for c in big)
        assert chunks[-1].boundary.name == "small"
        assert [c.index for c in chunks] == list(range(len(chunks)))
        for chunk in chunks:
            assert code[chunk.start : chunk.end] == chunk.content

    def test_empty_input(self):
        assert RegexCodeChunker().chunk("", "python") == []

    def test_invalid_settings(self):
        with pytest.raises(ChunkConfigurationError):
            RegexCodeChunker(max_chunk_size=0, overlap=0)

    def test_strategy_name(self):
        assert RegexCodeChunker().get_strategy_name() == "regex"
