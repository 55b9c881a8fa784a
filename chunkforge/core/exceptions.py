"""
Centralized Exception Hierarchy for ChunkForge.

This module defines all custom exceptions used throughout ChunkForge.
All exceptions inherit from ChunkForgeError for easy catching.

Helpful Error Messages
----------------------
Each exception includes:
- user_message: Human-readable description of what went wrong
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue
- error_code: Unique identifier for documentation lookup (e.g., "CF-CHUNK-001")

Usage
-----
    from chunkforge.core.exceptions import (
        ChunkForgeError,
        ChunkConfigurationError,
    )

    try:
        chunks = chunk_text(text, size=100, overlap=150)
    except ChunkConfigurationError as e:
        print(f"Bad chunk settings: {e}")

Exception Hierarchy
-------------------
    ChunkForgeError (base)
    ├── ChunkingError
    │   └── ChunkConfigurationError
    ├── GrammarError
    │   ├── GrammarLoadError
    │   └── ParserUnavailableError
    ├── ReconstructionError
    └── ValidationError
        └── ConfigValidationError

Only configuration errors are meant to reach callers of the chunking
entry points. Grammar errors are recoverable: the orchestrator logs them
and falls through to a weaker strategy. Reconstruction errors are caught
by the reconstructor, which returns the chunk content instead.
"""

from typing import Any, List, Optional
import re


def sanitize_path(path: str) -> str:
    """Sanitize a file path to avoid leaking sensitive info.

    Replaces user home directories with a placeholder.

    Args:
        path: Original file path

    Returns:
        Sanitized path with sensitive components replaced
    """
    if not path:
        return path

    patterns = [
        # Windows user paths: C:\Users\username -> <user-home>
        (r"[A-Za-z]:\\Users\\[^\\]+", r"<user-home>"),
        # Unix/Mac home paths: /home/username or /Users/username -> <user-home>
        (r"/(?:home|Users)/[^/]+", r"<user-home>"),
    ]

    result = path
    for pattern, replacement in patterns:
        result = re.sub(pattern, replacement, result)

    return result


def sanitize_message(message: str) -> str:
    """Sanitize an error message to avoid leaking sensitive info.

    Masks home directory paths, which appear in file-related errors.
    Chunk content is never placed in messages, only sizes and
    language names.

    Args:
        message: Original error message

    Returns:
        Sanitized message with sensitive info replaced
    """
    if not message:
        return message

    return re.sub(
        r"/(?:home|Users)/[^\s\"']+", lambda m: sanitize_path(m.group(0)), message
    )


class ChunkForgeError(Exception):
    """
    Base exception for all ChunkForge errors.

    Includes helpful error information:
    - error_code: Unique code for documentation lookup
    - why_it_happened: Explanation of the root cause
    - how_to_fix: List of actionable suggestions

    Example
    -------
        try:
            chunk_content(text, options)
        except ChunkForgeError as e:
            logger.error(f"Chunking failed: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    error_code: str = "CF-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize ChunkForgeError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "CF-CHUNK-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(sanitize_message(message))

        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)


# ============================================================================
# Chunking Exceptions
# ============================================================================


class ChunkingError(ChunkForgeError):
    """
    Raised when text chunking fails.

    This can occur when:
    - Chunk size constraints cannot be satisfied
    - A chunking strategy encounters invalid input
    """

    error_code = "CF-CHUNK-000"
    why_it_happened = (
        "Could not split the content into chunks. The chunking parameters "
        "may be incompatible"
    )
    how_to_fix = [
        "Adjust size in configuration if chunks are too large/small",
        "Check that overlap is smaller than size",
    ]


class ChunkConfigurationError(ChunkingError, ValueError):
    """
    Raised when chunk size or overlap settings are invalid.

    Settings are never clamped. The message states the violated rule:
    "Chunk size must be greater than 0", "Overlap cannot be negative" or
    "Overlap must be less than chunk size".
    """

    error_code = "CF-CHUNK-001"
    why_it_happened = (
        "Chunk size must be positive and the overlap must be a non-negative "
        "value smaller than the chunk size"
    )
    how_to_fix = [
        "Use a chunk size greater than 0",
        "Use an overlap between 0 and size - 1",
        "Omit size and overlap to use the recommended preset for the file type",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


# ============================================================================
# Grammar / Parser Exceptions
# ============================================================================


class GrammarError(ChunkForgeError):
    """
    Base exception for syntax-tree parsing problems.

    These are soft failures: the orchestrator treats them as a signal to
    fall back to regex or sliding-window chunking.
    """

    error_code = "CF-GRAM-000"
    why_it_happened = "The syntax-tree parser could not process the content"
    how_to_fix = [
        "Install tree-sitter and tree-sitter-language-pack",
        "Chunking still succeeds with the regex fallback",
    ]


class GrammarLoadError(GrammarError):
    """Raised when a language grammar cannot be loaded."""

    error_code = "CF-GRAM-001"
    why_it_happened = (
        "The grammar for this language is missing from the installed "
        "language pack or failed to load"
    )
    how_to_fix = [
        "Upgrade tree-sitter-language-pack",
        "Check that the language name is one of the supported languages",
    ]


class ParserUnavailableError(GrammarError):
    """
    Raised when no parser can be produced for a language.

    Example
    -------
        extractor.extract_boundaries(code, "cobol")
        # Raises: ParserUnavailableError("No parser available for language: cobol")
    """

    error_code = "CF-GRAM-002"
    why_it_happened = (
        "The tree-sitter runtime is not installed or has no grammar "
        "for the requested language"
    )
    how_to_fix = [
        "pip install tree-sitter tree-sitter-language-pack",
        "Use a file extension with a registered grammar",
    ]

    def __init__(self, language: str) -> None:
        super().__init__(f"No parser available for language: {language}")
        self.language = language


# ============================================================================
# Reconstruction Exceptions
# ============================================================================


class ReconstructionError(ChunkForgeError):
    """Raised when stored chunks cannot be fetched or stitched."""

    error_code = "CF-RECON-001"
    why_it_happened = (
        "The chunk store failed while listing the chunks of a source document"
    )
    how_to_fix = [
        "Check that the chunk store is reachable",
        "Verify the chunks were indexed with source_id and chunk_index",
    ]


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(ChunkForgeError):
    """Raised when configuration or input validation fails."""

    error_code = "CF-VAL-000"
    why_it_happened = "Validation failed for input data or configuration"
    how_to_fix = [
        "Check the error message for specific validation failures",
        "Review the expected format or value constraints",
    ]


class ConfigValidationError(ValidationError):
    """
    Raised when configuration validation fails.

    Attributes
    ----------
    field : str
        The configuration field that failed validation
    value : any
        The invalid value
    """

    error_code = "CF-VAL-001"
    why_it_happened = (
        "A configuration value is invalid. "
        "The chunkforge.yaml file may have incorrect settings"
    )
    how_to_fix = [
        "Check chunkforge.yaml for syntax errors",
        "Verify the value type matches what's expected",
        "Check CHUNKFORGE_* environment variables",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            why_it_happened=why_it_happened,
            how_to_fix=how_to_fix,
        )
        self.field = field
        self.value = value


# ============================================================================
# Error Info Lookup
# ============================================================================


STANDARD_ERROR_INFO: dict[type, dict[str, Any]] = {
    UnicodeDecodeError: {
        "error_code": "CF-ENC-001",
        "why_it_happened": "The file is not valid UTF-8 text",
        "how_to_fix": [
            "Convert the file to UTF-8",
            "Binary files cannot be chunked",
        ],
    },
    ValueError: {
        "error_code": "CF-VAL-002",
        "why_it_happened": "An invalid value was provided",
        "how_to_fix": [
            "Check the input values against the expected format",
        ],
    },
    OSError: {
        "error_code": "CF-SYS-001",
        "why_it_happened": "A system-level error occurred",
        "how_to_fix": [
            "Check that the file exists and is readable",
            "Check disk space and permissions",
        ],
    },
}


def get_error_info(exc: BaseException) -> dict[str, Any]:
    """Get helpful error information for any exception.

    Looks up the exception type in STANDARD_ERROR_INFO or extracts
    info from ChunkForgeError subclasses.

    Args:
        exc: Exception to get info for

    Returns:
        Dict with error_code, why_it_happened, how_to_fix
    """
    if isinstance(exc, ChunkForgeError):
        return {
            "error_code": exc.error_code,
            "why_it_happened": exc.why_it_happened,
            "how_to_fix": exc.how_to_fix,
        }

    exc_type = type(exc)
    if exc_type in STANDARD_ERROR_INFO:
        return STANDARD_ERROR_INFO[exc_type]

    for parent_type, info in STANDARD_ERROR_INFO.items():
        if isinstance(exc, parent_type):
            return info

    return {
        "error_code": "CF-ERR-999",
        "why_it_happened": "An unexpected error occurred",
        "how_to_fix": [
            "Check the error message for details",
            "Report the issue if it persists",
        ],
    }
