"""
Tests for the grammar/parser runtime.

Test Strategy
-------------
- Inject a fake grammar loader and parser factory so no grammar assets
  are needed
- Simulate a missing tree-sitter engine by failing its import

Organization
------------
- TestInitialization: one-time engine setup
- TestCreateParser: caching, unknown languages, load failures
- TestDispose: cache release and context manager
- TestLanguagePackLoader: load_language_pack_grammar error mapping
"""

import importlib
import sys
import types

import pytest

from chunkforge.chunking import parser_runtime
from chunkforge.chunking.languages import SupportedLanguage
from chunkforge.chunking.parser_runtime import (
    GRAMMAR_SOURCES,
    ParserRuntime,
    load_language_pack_grammar,
)
from chunkforge.core.exceptions import GrammarLoadError


# ============================================================================
# Test Helpers
# ============================================================================


class FakeParser:
    def __init__(self, grammar):
        self.grammar = grammar


class RecordingLoader:
    """Grammar loader that records requested names."""

    def __init__(self, fail_for=()):
        self.calls = []
        self.fail_for = set(fail_for)

    def __call__(self, name):
        self.calls.append(name)
        if name in self.fail_for:
            raise GrammarLoadError(f"Grammar not available: {name}")
        return f"grammar:{name}"


def make_runtime(loader=None):
    return ParserRuntime(grammar_loader=loader or RecordingLoader(), parser_factory=FakeParser)


@pytest.fixture
def no_tree_sitter(monkeypatch):
    """Make importing tree_sitter fail."""
    real_import = importlib.import_module

    def fake_import(name, *args, **kwargs):
        if name == "tree_sitter":
            raise ImportError("No module named 'tree_sitter'")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(parser_runtime.importlib, "import_module", fake_import)


# ============================================================================
# Test Classes
# ============================================================================


class TestInitialization:
    """Tests for ParserRuntime.initialize."""

    def test_not_initialized_before_use(self):
        runtime = make_runtime()
        assert not runtime.is_initialized
        assert runtime.loaded_languages == []

    def test_initialize_with_factory(self):
        runtime = make_runtime()
        assert runtime.initialize() is True
        assert runtime.is_initialized
        assert runtime.is_available

    def test_initialize_is_idempotent(self):
        runtime = make_runtime()
        assert runtime.initialize() is True
        assert runtime.initialize() is True

    def test_missing_engine(self, no_tree_sitter):
        runtime = ParserRuntime(grammar_loader=RecordingLoader())
        assert runtime.initialize() is False
        assert runtime.is_initialized
        assert not runtime.is_available

    def test_missing_engine_yields_no_parser(self, no_tree_sitter):
        loader = RecordingLoader()
        runtime = ParserRuntime(grammar_loader=loader)
        assert runtime.create_parser("python") is None
        assert loader.calls == []

    def test_every_language_has_grammar_source(self):
        assert set(GRAMMAR_SOURCES) == set(SupportedLanguage)


class TestCreateParser:
    """Tests for ParserRuntime.create_parser."""

    def test_builds_parser_from_grammar(self):
        parser = make_runtime().create_parser("python")
        assert isinstance(parser, FakeParser)
        assert parser.grammar == "grammar:python"

    def test_parser_cached_per_language(self):
        loader = RecordingLoader()
        runtime = make_runtime(loader)
        first = runtime.create_parser("python")
        second = runtime.create_parser("python")
        assert first is second
        assert loader.calls == ["python"]
        assert runtime.loaded_languages == [SupportedLanguage.PYTHON]

    def test_accepts_enum_value(self):
        runtime = make_runtime()
        assert runtime.create_parser(SupportedLanguage.TSX) is not None
        assert runtime.loaded_languages == [SupportedLanguage.TSX]

    def test_unknown_language(self):
        loader = RecordingLoader()
        runtime = make_runtime(loader)
        assert runtime.create_parser("cobol") is None
        assert loader.calls == []

    def test_load_failure_returns_none(self):
        runtime = make_runtime(RecordingLoader(fail_for={"rust"}))
        assert runtime.create_parser("rust") is None
        assert runtime.loaded_languages == []

    def test_load_failure_not_cached(self):
        loader = RecordingLoader(fail_for={"rust"})
        runtime = make_runtime(loader)
        runtime.create_parser("rust")
        runtime.create_parser("rust")
        assert loader.calls == ["rust", "rust"]

    def test_loader_runtime_error_returns_none(self):
        def loader(name):
            raise RuntimeError("Failed to fetch grammar manifest")

        runtime = ParserRuntime(grammar_loader=loader, parser_factory=lambda g: g)
        assert runtime.create_parser("python") is None
        assert runtime.loaded_languages == []

    def test_factory_type_error_returns_none(self):
        def incompatible(grammar):
            raise TypeError("Incompatible Language version")

        runtime = ParserRuntime(grammar_loader=RecordingLoader(), parser_factory=incompatible)
        assert runtime.create_parser("go") is None

    def test_failure_does_not_affect_other_languages(self):
        runtime = make_runtime(RecordingLoader(fail_for={"rust"}))
        assert runtime.create_parser("rust") is None
        assert runtime.create_parser("go") is not None


class TestDispose:
    """Tests for ParserRuntime.dispose."""

    def test_dispose_clears_cache(self):
        loader = RecordingLoader()
        runtime = make_runtime(loader)
        runtime.create_parser("python")
        runtime.dispose()
        assert runtime.loaded_languages == []
        runtime.create_parser("python")
        assert loader.calls == ["python", "python"]

    def test_dispose_twice(self):
        runtime = make_runtime()
        runtime.dispose()
        runtime.dispose()
        assert runtime.loaded_languages == []

    def test_context_manager(self):
        with make_runtime() as runtime:
            runtime.create_parser("c")
            assert runtime.loaded_languages == [SupportedLanguage.C]
        assert runtime.loaded_languages == []


class TestLanguagePackLoader:
    """Tests for load_language_pack_grammar."""

    def test_unknown_grammar_raises(self, monkeypatch):
        def get_language(name):
            raise LookupError(name)

        fake_pack = types.SimpleNamespace(get_language=get_language)
        monkeypatch.setitem(sys.modules, "tree_sitter_language_pack", fake_pack)
        with pytest.raises(GrammarLoadError, match="Grammar not available: klingon"):
            load_language_pack_grammar("klingon")

    def test_pack_error_wrapped(self, monkeypatch):
        class DownloadError(Exception):
            pass

        def get_language(name):
            raise DownloadError("Failed to fetch manifest")

        fake_pack = types.SimpleNamespace(get_language=get_language)
        monkeypatch.setitem(sys.modules, "tree_sitter_language_pack", fake_pack)
        with pytest.raises(GrammarLoadError, match="Grammar not available: python"):
            load_language_pack_grammar("python")

    def test_returns_pack_grammar(self, monkeypatch):
        fake_pack = types.SimpleNamespace(get_language=lambda name: ("lang", name))
        monkeypatch.setitem(sys.modules, "tree_sitter_language_pack", fake_pack)
        assert load_language_pack_grammar("python") == ("lang", "python")

    def test_missing_pack(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "tree_sitter_language_pack", None)
        with pytest.raises(GrammarLoadError, match="not installed"):
            load_language_pack_grammar("python")
