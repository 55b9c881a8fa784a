"""
Grammar/parser runtime for syntax-tree chunking.

Wraps py-tree-sitter and the grammars bundled in tree-sitter-language-pack
behind an explicit, disposable object instead of module-level state:

    with ParserRuntime() as runtime:
        parser = runtime.create_parser("python")
        if parser is not None:
            tree = parser.parse(code.encode("utf-8"))

- The tree-sitter engine is imported once per runtime, on first use.
- Parsers are cached per language (insert-if-absent).
- Any failure to produce a parser is logged at debug level and reported
  as None; callers decide whether that is fatal.

Grammar loading is synchronous. py-tree-sitter loads the compiled grammar
from the installed language pack in-process, so there is no asynchronous
suspension point between checking the cache and filling it.
"""

from __future__ import annotations

import importlib
from typing import Any, Callable, Dict, Optional, Type
from types import TracebackType

from chunkforge.chunking.languages import SupportedLanguage, require_all_languages
from chunkforge.core.exceptions import GrammarLoadError

GrammarLoader = Callable[[str], Any]
ParserFactory = Callable[[Any], Any]

# Grammar names inside tree-sitter-language-pack
GRAMMAR_SOURCES: Dict[SupportedLanguage, str] = {
    SupportedLanguage.JAVASCRIPT: "javascript",
    SupportedLanguage.TYPESCRIPT: "typescript",
    SupportedLanguage.TSX: "tsx",
    SupportedLanguage.PYTHON: "python",
    SupportedLanguage.GO: "go",
    SupportedLanguage.RUST: "rust",
    SupportedLanguage.JAVA: "java",
    SupportedLanguage.RUBY: "ruby",
    SupportedLanguage.C: "c",
    SupportedLanguage.CPP: "cpp",
    SupportedLanguage.HTML: "html",
    SupportedLanguage.CSS: "css",
    SupportedLanguage.BASH: "bash",
}

require_all_languages(GRAMMAR_SOURCES, "GRAMMAR_SOURCES")


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


def load_language_pack_grammar(name: str) -> Any:
    """Load a compiled grammar from tree-sitter-language-pack.

    Raises:
        GrammarLoadError: The pack is not installed or lacks the grammar.
    """
    try:
        from tree_sitter_language_pack import get_language
    except ImportError as e:
        raise GrammarLoadError(
            "tree-sitter-language-pack is not installed"
        ) from e

    try:
        return get_language(name)
    except Exception as e:
        # The pack raises its own error types, including download failures
        raise GrammarLoadError(f"Grammar not available: {name}") from e


class ParserRuntime:
    """Lazily initialized tree-sitter runtime with a per-language parser cache.

    Args:
        grammar_loader: Maps a grammar name to a tree_sitter.Language.
            Defaults to tree-sitter-language-pack.
        parser_factory: Builds a parser from a loaded grammar. Defaults to
            tree_sitter.Parser; when given, the engine import is skipped.
    """

    def __init__(
        self,
        grammar_loader: Optional[GrammarLoader] = None,
        parser_factory: Optional[ParserFactory] = None,
    ) -> None:
        self._grammar_loader = grammar_loader or load_language_pack_grammar
        self._parser_factory = parser_factory
        self._initialized = False
        self._parsers: Dict[SupportedLanguage, Any] = {}

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_available(self) -> bool:
        """True once the engine is initialized and able to build parsers."""
        return self._initialized and self._parser_factory is not None

    @property
    def loaded_languages(self) -> list[SupportedLanguage]:
        return list(self._parsers)

    def initialize(self) -> bool:
        """Initialize the tree-sitter engine once.

        Returns:
            True when parsers can be created.
        """
        if self._initialized:
            return self._parser_factory is not None

        self._initialized = True
        if self._parser_factory is not None:
            return True

        try:
            engine = importlib.import_module("tree_sitter")
        except ImportError as e:
            _Logger.get().debug("tree-sitter engine unavailable", error=str(e))
            return False

        self._parser_factory = engine.Parser
        return True

    def create_parser(self, language: str) -> Optional[Any]:
        """Return a cached or newly built parser for a language.

        Returns:
            A parser, or None when the language is unknown, the engine is
            missing, or the grammar fails to load.
        """
        try:
            supported = SupportedLanguage(language)
        except ValueError:
            _Logger.get().debug("No grammar registered", language=language)
            return None

        cached = self._parsers.get(supported)
        if cached is not None:
            return cached

        if not self.initialize():
            return None

        grammar_name = GRAMMAR_SOURCES[supported]
        try:
            grammar = self._grammar_loader(grammar_name)
            parser = self._parser_factory(grammar)
        except Exception as e:
            # Grammar loaders and py-tree-sitter raise unrelated error types
            _Logger.get().debug(
                "Failed to load grammar", language=supported.value, error=str(e)
            )
            return None

        self._parsers[supported] = parser
        return parser

    def dispose(self) -> None:
        """Release every cached parser. Safe to call repeatedly."""
        if self._parsers:
            _Logger.get().debug("Disposing parsers", count=len(self._parsers))
        self._parsers.clear()

    def __enter__(self) -> "ParserRuntime":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.dispose()
