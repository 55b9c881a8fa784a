"""
Tests for chunk size presets and option resolution.

Organization
------------
- TestOptimalChunkSettings: preset per extension
- TestResolveChunkOptions: explicit values, presets and boundary defaults
"""

import pytest

from chunkforge.chunking.size_optimizer import (
    ARTICLE_SETTINGS,
    CODE_SETTINGS,
    DEFAULT_SETTINGS,
    DOCUMENTATION_SETTINGS,
    ChunkSettings,
    get_optimal_chunk_settings,
    resolve_chunk_options,
)
from chunkforge.core.exceptions import ChunkConfigurationError


class TestOptimalChunkSettings:
    """Tests for get_optimal_chunk_settings."""

    @pytest.mark.parametrize(
        "file_path,expected",
        [
            ("main.py", CODE_SETTINGS),
            ("App.TSX", CODE_SETTINGS),
            ("theme.scss", CODE_SETTINGS),
            ("config.yaml", CODE_SETTINGS),
            ("README.MD", DOCUMENTATION_SETTINGS),
            ("index.html", DOCUMENTATION_SETTINGS),
            ("notes.txt", ARTICLE_SETTINGS),
            ("file.js", CODE_SETTINGS),
            ("unknown.xyz", DEFAULT_SETTINGS),
            ("data.bin", DEFAULT_SETTINGS),
            ("Makefile", DEFAULT_SETTINGS),
            (None, DEFAULT_SETTINGS),
        ],
    )
    def test_presets(self, file_path, expected):
        assert get_optimal_chunk_settings(file_path) == expected

    def test_preset_values(self):
        assert CODE_SETTINGS == ChunkSettings(650, 125)
        assert DOCUMENTATION_SETTINGS == ChunkSettings(1250, 250)
        assert ARTICLE_SETTINGS == ChunkSettings(1750, 350)
        assert DEFAULT_SETTINGS == ChunkSettings(1000, 200)

    def test_every_preset_is_valid(self):
        for preset in (CODE_SETTINGS, DOCUMENTATION_SETTINGS, ARTICLE_SETTINGS):
            assert 0 <= preset.overlap < preset.size


class TestResolveChunkOptions:
    """Tests for resolve_chunk_options."""

    def test_code_file_uses_preset(self):
        options = resolve_chunk_options("src/app.py")
        assert (options.size, options.overlap) == (650, 125)
        assert options.preserve_boundaries is True
        assert options.file_path == "src/app.py"

    def test_markdown_enables_boundaries(self):
        assert resolve_chunk_options("README.md").preserve_boundaries is True

    def test_text_file_keeps_sliding_window(self):
        options = resolve_chunk_options("notes.txt")
        assert (options.size, options.overlap) == (1750, 350)
        assert options.preserve_boundaries is False

    def test_explicit_size_disables_preset(self):
        options = resolve_chunk_options("app.py", size=300)
        assert (options.size, options.overlap) == (300, 100)

    def test_explicit_values_win(self):
        options = resolve_chunk_options("app.py", size=400, overlap=40)
        assert (options.size, options.overlap) == (400, 40)

    def test_explicit_boundaries_respected(self):
        options = resolve_chunk_options("README.md", preserve_boundaries=False)
        assert options.preserve_boundaries is False

    def test_auto_optimize_off(self):
        options = resolve_chunk_options("app.py", auto_optimize=False)
        assert (options.size, options.overlap) == (1000, 100)
        assert options.preserve_boundaries is False

    def test_no_file(self):
        options = resolve_chunk_options()
        assert (options.size, options.overlap) == (1000, 200)
        assert options.preserve_boundaries is False

    def test_invalid_result_raises(self):
        with pytest.raises(ChunkConfigurationError, match="Overlap must be less"):
            resolve_chunk_options("app.py", size=50)

    def test_preserve_words_passed_through(self):
        assert resolve_chunk_options("a.txt", preserve_words=False).preserve_words is False
