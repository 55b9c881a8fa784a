"""
Main configuration class for ChunkForge.

This module provides the Config dataclass that aggregates all sub-configs
and handles initialization, validation and dictionary parsing.

Configuration Hierarchy
-----------------------
    Config
    ├── ChunkingConfig     # size, overlap, word/boundary preservation
    ├── ParserConfig       # syntax-tree stage on/off
    └── RetrievalConfig    # reconstruction overlap

Environment Variables
---------------------
Deployment-specific values use ${VAR_NAME} syntax:

    chunking:
      size: ${CHUNK_SIZE:1000}

The expand_env_vars() function recursively processes all string values.
YAML keeps "${...}" as a string, so integer fields are coerced after
expansion.

Usage Example
-------------
    config = load_config()
    options = config.chunking.to_options("src/app.py")
"""

from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional

from chunkforge.core.config.chunking import ChunkingConfig, ParserConfig
from chunkforge.core.config.retrieval import RetrievalConfig
from chunkforge.core.exceptions import ConfigValidationError

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Config:
    """Main ChunkForge configuration."""

    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    retrieval: RetrievalConfig = field(default_factory=RetrievalConfig)
    log_level: str = "INFO"

    # Runtime paths (set after loading)
    _base_path: Path = field(default_factory=Path.cwd, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        assert isinstance(
            self.chunking, ChunkingConfig
        ), "chunking must be ChunkingConfig"
        assert isinstance(self.parser, ParserConfig), "parser must be ParserConfig"
        assert isinstance(
            self.retrieval, RetrievalConfig
        ), "retrieval must be RetrievalConfig"

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, "
                f"got: {self.log_level}",
                field="log_level",
                value=self.log_level,
            )
        self.log_level = self.log_level.upper()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if key.startswith("_"):
                continue
            result[key] = value
        return result

    @staticmethod
    def _filter_fields(cls_type: Any, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Filter dict to only keys that match dataclass fields, handling None."""
        if not data:
            return {}
        valid_keys = {f.name for f in fields(cls_type)}
        return {k: v for k, v in data.items() if k in valid_keys}

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], base_path: Optional[Path] = None
    ) -> "Config":
        """Create Config from dictionary."""
        # Import here to avoid circular dependency
        from chunkforge.core.config_loaders import coerce_scalar, expand_env_vars

        data = coerce_scalar(expand_env_vars(data))

        config = cls(
            chunking=ChunkingConfig(
                **cls._filter_fields(ChunkingConfig, data.get("chunking"))
            ),
            parser=ParserConfig(**cls._filter_fields(ParserConfig, data.get("parser"))),
            retrieval=RetrievalConfig(
                **cls._filter_fields(RetrievalConfig, data.get("retrieval"))
            ),
            log_level=data.get("log_level", "INFO"),
        )

        if base_path:
            config._base_path = base_path

        return config
