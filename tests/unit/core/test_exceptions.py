"""Tests for the exception hierarchy and error info helpers."""

import pytest

from chunkforge.core.exceptions import (
    ChunkConfigurationError,
    ChunkForgeError,
    ChunkingError,
    ConfigValidationError,
    GrammarError,
    GrammarLoadError,
    ParserUnavailableError,
    ReconstructionError,
    ValidationError,
    get_error_info,
    sanitize_message,
    sanitize_path,
)


class TestSanitization:
    """Tests for sanitize_path and sanitize_message."""

    def test_unix_home(self):
        assert sanitize_path("/home/alice/project/a.py") == "<user-home>/project/a.py"

    def test_windows_home(self):
        assert sanitize_path("C:\\Users\\bob\\notes.md") == "<user-home>\\notes.md"

    def test_home_path_in_message(self):
        message = sanitize_message("cannot read /Users/carol/docs/guide.md")
        assert message == "cannot read <user-home>/docs/guide.md"

    def test_text_without_paths_unchanged(self):
        message = "Overlap must be less than chunk size"
        assert sanitize_message(message) == message

    def test_empty(self):
        assert sanitize_message("") == ""
        assert sanitize_path("") == ""

    def test_messages_sanitized_on_raise(self):
        error = ChunkForgeError("failed for /home/dave/secret.py")
        assert "dave" not in str(error)


class TestHierarchy:
    """Tests for exception classes."""

    @pytest.mark.parametrize(
        "error,parent",
        [
            (ChunkConfigurationError("bad"), ChunkingError),
            (ChunkConfigurationError("bad"), ValueError),
            (GrammarLoadError("missing"), GrammarError),
            (ParserUnavailableError("go"), GrammarError),
            (ReconstructionError("store down"), ChunkForgeError),
            (ConfigValidationError("bad"), ValidationError),
        ],
    )
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, ChunkForgeError)

    def test_class_defaults(self):
        error = ChunkConfigurationError("Overlap cannot be negative", "overlap", -1)
        assert error.error_code == "CF-CHUNK-001"
        assert error.how_to_fix
        assert (error.field, error.value) == ("overlap", -1)

    def test_instance_overrides(self):
        error = ChunkForgeError(
            "custom", error_code="CF-X-1", why_it_happened="because", how_to_fix=["fix"]
        )
        assert error.error_code == "CF-X-1"
        assert error.why_it_happened == "because"
        assert error.how_to_fix == ["fix"]
        assert error.user_message == "custom"

    def test_parser_unavailable_message(self):
        error = ParserUnavailableError("cobol")
        assert str(error) == "No parser available for language: cobol"
        assert error.language == "cobol"


class TestErrorInfo:
    """Tests for get_error_info."""

    def test_chunkforge_error(self):
        info = get_error_info(ParserUnavailableError("go"))
        assert info["error_code"] == "CF-GRAM-002"

    def test_unicode_decode_error(self):
        error = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        assert get_error_info(error)["error_code"] == "CF-ENC-001"

    def test_subclass_lookup(self):
        assert get_error_info(FileNotFoundError("x"))["error_code"] == "CF-SYS-001"

    def test_unknown(self):
        assert get_error_info(KeyError("x"))["error_code"] == "CF-ERR-999"
