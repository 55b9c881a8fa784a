"""
Structured Logging for ChunkForge.

This module provides a logging infrastructure that supports context binding
and consistent formatting across the chunking engine.

Architecture Context
--------------------
Logging is a Core layer service used by every module in the system. All modules
should import get_logger() from here rather than using Python's logging directly:

    # Good - uses ChunkForge's structured logging
    from chunkforge.core.logging import get_logger
    logger = get_logger(__name__)

    # Avoid - bypasses our structure
    import logging
    logger = logging.getLogger(__name__)

Logger Types
------------
**StructuredLogger**
    Base logger with context binding support. Allows attaching key-value pairs
    that appear in all subsequent log messages:

        logger = get_logger(__name__)
        logger.bind(source_id="3f2a...")
        logger.info("Chunking started")  # includes source_id

**ChunkRunLogger**
    Tracks the strategies attempted for one input, with timing:

        run = ChunkRunLogger("src/app.py")
        run.attempt("cst")
        run.fallback("cst", "regex", error="No parser available")
        run.finish(chunks=12)

Module-Level Factory
--------------------
The get_logger() function provides cached logger instances. Loggers are
cached by name, so multiple calls return the same instance.

Design Decisions
----------------
1. **Context binding**: Avoids repetitive passing of IDs to every log call.
2. **Rich console output**: RichHandler keeps log lines readable next to
   the CLI's tables.
3. **Lazy initialization**: Loggers configured on first use, not import.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from rich.logging import RichHandler


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_path: Optional[Path] = None
    console: bool = True


class StructuredLogger:
    """
    Structured logger with context support.

    Provides consistent logging across the engine with
    support for structured fields and context tracking.
    """

    def __init__(self, name: str, config: Optional[LogConfig] = None) -> None:
        self.logger = logging.getLogger(name)
        self.config = config or _ConfigHolder.get_config()
        self._context: dict[str, Any] = {}
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure the logger."""
        level = getattr(logging, self.config.level.upper(), logging.INFO)
        self.logger.setLevel(level)

        # Remove existing handlers
        self.logger.handlers.clear()

        if self.config.console:
            console_handler = RichHandler(
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            console_handler.setLevel(level)
            self.logger.addHandler(console_handler)

        if self.config.file_path:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.config.file_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(
                logging.Formatter(
                    self.config.format,
                    datefmt=self.config.date_format,
                )
            )
            self.logger.addHandler(file_handler)

    def bind(self, **context: Any) -> "StructuredLogger":
        """Attach context fields to every subsequent message."""
        self._context.update(context)
        return self

    def unbind(self, *keys: str) -> None:
        """Remove previously bound context fields."""
        for key in keys:
            self._context.pop(key, None)

    def _format_message(self, message: str, **kwargs: Any) -> str:
        """Format message with context and extra fields."""
        fields = {**self._context, **kwargs}
        if fields:
            field_str = " | ".join(f"{k}={v}" for k, v in fields.items())
            return f"{message} | {field_str}"
        return message

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message, **kwargs))


# Module-level logger factory
_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str, config: Optional[LogConfig] = None) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name (typically __name__).
        config: Optional logging configuration.

    Returns:
        Configured StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, config)
    return _loggers[name]


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """
    Configure global logging settings.

    Already-created loggers are reconfigured so that a level chosen on the
    command line applies to modules imported before the call.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for log output.
        console: Whether to log to console.
    """
    config = LogConfig(
        level=level,
        file_path=log_file,
        console=console,
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _ConfigHolder.set_config(config)

    for structured in _loggers.values():
        structured.config = config
        structured._setup_logger()


class _ConfigHolder:
    """Holds default logging configuration.

    Rule #6: Encapsulates singleton state in smallest scope.
    """

    _config: LogConfig = LogConfig()

    @classmethod
    def get_config(cls) -> LogConfig:
        """Get the default config."""
        return cls._config

    @classmethod
    def set_config(cls, config: LogConfig) -> None:
        """Set the default config."""
        cls._config = config


class ChunkRunLogger:
    """
    Specialized logger for one chunking run.

    Records which strategies were tried for an input and how long
    the run took.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.logger = get_logger("chunkforge.run")
        self._started = datetime.now()
        self._strategies: list[str] = []

    @property
    def strategies(self) -> list[str]:
        """Strategies attempted so far, in order."""
        return list(self._strategies)

    def attempt(self, strategy: str) -> None:
        """Record the start of a strategy attempt."""
        self._strategies.append(strategy)
        self.logger.debug("Trying strategy", source=self.source, strategy=strategy)

    def fallback(self, failed: str, next_strategy: str, error: str) -> None:
        """Record a strategy failure and the strategy tried next."""
        self.logger.debug(
            "Strategy failed, falling back",
            source=self.source,
            failed=failed,
            next=next_strategy,
            error=error,
        )

    def finish(self, chunks: int) -> None:
        """Log completion of the run."""
        duration = (datetime.now() - self._started).total_seconds()
        self.logger.debug(
            "Chunking completed",
            source=self.source,
            strategy=self._strategies[-1] if self._strategies else None,
            chunks=chunks,
            duration_sec=f"{duration:.3f}",
        )
