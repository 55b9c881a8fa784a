"""
Shared pytest fixtures and configuration for ChunkForge tests.

This file is automatically discovered by pytest and provides fixtures
that can be used across all test files.

Fixture Organization
--------------------
- **temp_dir**: Temporary directory for file operations
- **clean_env**: Environment without CHUNKFORGE_* overrides
- **sample_markdown / sample_python / sample_typescript**: Source texts
- **reset_logging**: Restores the default logging configuration
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from chunkforge.core.logging import configure_logging


# ============================================================================
# Path and Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory (cleaned up after test)

    Example:
        def test_file_creation(temp_dir):
            test_file = temp_dir / "test.txt"
            test_file.write_text("content")
            assert test_file.exists()
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ============================================================================
# Environment Fixtures
# ============================================================================


ENV_OVERRIDES = (
    "CHUNKFORGE_CHUNK_SIZE",
    "CHUNKFORGE_CHUNK_OVERLAP",
    "CHUNKFORGE_PRESERVE_BOUNDARIES",
    "CHUNKFORGE_AUTO_OPTIMIZE",
    "CHUNKFORGE_CST_ENABLED",
    "CHUNKFORGE_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every CHUNKFORGE_* override for the duration of a test."""
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def reset_logging() -> Generator[None, None, None]:
    """Restore default logging after tests that reconfigure it."""
    yield
    configure_logging(level="INFO")


# ============================================================================
# Sample Sources
# ============================================================================


@pytest.fixture
def sample_markdown() -> str:
    """Markdown covering every section type."""
    return (
        "# Title\n"
        "Intro line\n"
        "\n"
        "- one\n"
        "- two\n"
        "\n"
        "Paragraph text\n"
        "```\n"
        "code\n"
        "```\n"
    )


@pytest.fixture
def sample_python() -> str:
    """Python module with imports, a function and a class."""
    return (
        "import os\n"
        "import sys\n"
        "\n"
        "def foo():\n"
        "    return 1\n"
        "\n"
        "class Bar:\n"
        "    def method(self):\n"
        "        pass\n"
    )


@pytest.fixture
def sample_typescript() -> str:
    """TypeScript with an interface, a type alias and a function."""
    return (
        "interface Props {\n"
        "  name: string;\n"
        "}\n"
        "\n"
        "export type Id = string;\n"
        "\n"
        "export function render(props: Props) {\n"
        "  return props.name;\n"
        "}\n"
    )
