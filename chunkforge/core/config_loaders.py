"""
Configuration Loading and Management Functions.

Handles loading, saving, and applying environment overrides to ChunkForge
configuration.

Configuration precedence: 1. Env vars, 2. YAML file, 3. Defaults

Environment overrides
---------------------
    CHUNKFORGE_CHUNK_SIZE            chunking.size (1 to 100000)
    CHUNKFORGE_CHUNK_OVERLAP         chunking.overlap (0 to 50000)
    CHUNKFORGE_PRESERVE_BOUNDARIES   chunking.preserve_boundaries
    CHUNKFORGE_AUTO_OPTIMIZE         chunking.auto_optimize
    CHUNKFORGE_CST_ENABLED           parser.enabled
    CHUNKFORGE_LOG_LEVEL             log_level
"""

import os
import re
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import yaml

from chunkforge.core.env import (
    LOG_LEVELS,
    get_env_bool,
    get_env_int,
    get_env_whitelist,
)
from chunkforge.core.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from chunkforge.core.config import Config

CONFIG_FILENAMES = ("chunkforge.yaml", "config.yaml")

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")
_SCALAR_PATTERN = re.compile(r"^(?:-?\d+|true|false)$", re.IGNORECASE)


class _Logger:
    """Lazy logger holder.

    Rule #6: Encapsulates logger state in smallest scope.
    Avoids slow startup from rich library import.
    """

    _instance = None

    @classmethod
    def get(cls) -> Any:
        """Get logger (lazy-loaded)."""
        if cls._instance is None:
            from chunkforge.core.logging import get_logger

            cls._instance = get_logger(__name__)
        return cls._instance


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Handles nested structures including:
    - Strings with ${VAR_NAME} or ${VAR_NAME:default} syntax
    - Nested dictionaries
    - Nested lists

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all environment variables expanded
    """
    if isinstance(value, str):

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return _ENV_PATTERN.sub(replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def coerce_scalar(value: Any) -> Any:
    """Turn integer and boolean strings back into YAML scalars.

    "${CHUNK_SIZE:1000}" is a string in YAML even after expansion.
    Empty strings become None so that an unset variable without a
    default leaves the field at its dataclass default.
    """
    if isinstance(value, str):
        if value == "":
            return None
        if _SCALAR_PATTERN.match(value):
            return yaml.safe_load(value)
        return value
    elif isinstance(value, dict):
        coerced = {k: coerce_scalar(v) for k, v in value.items()}
        return {k: v for k, v in coerced.items() if v is not None}
    elif isinstance(value, list):
        return [coerce_scalar(item) for item in value]
    return value


def _apply_env_overrides(config: "Config") -> "Config":
    """
    Apply environment variable overrides to configuration.

    Environment variables take precedence over config file values.
    Overrides are re-validated by rebuilding the chunking section.
    """
    _apply_chunking_overrides(config)
    _apply_parser_overrides(config)

    log_level = get_env_whitelist("CHUNKFORGE_LOG_LEVEL", LOG_LEVELS)
    if log_level:
        config.log_level = log_level
    return config


def _apply_chunking_overrides(config: "Config") -> None:
    """Apply chunk size and boundary overrides.

    Security:
        Uses get_env_int with bounds; out-of-range values raise
        ConfigValidationError instead of being clamped.
    """
    from chunkforge.core.config.chunking import ChunkingConfig

    chunking = config.chunking
    size = get_env_int("CHUNKFORGE_CHUNK_SIZE", min_value=1, max_value=100000)
    overlap = get_env_int("CHUNKFORGE_CHUNK_OVERLAP", min_value=0, max_value=50000)

    preserve_boundaries = chunking.preserve_boundaries
    if "CHUNKFORGE_PRESERVE_BOUNDARIES" in os.environ:
        preserve_boundaries = get_env_bool("CHUNKFORGE_PRESERVE_BOUNDARIES")

    config.chunking = ChunkingConfig(
        size=size if size is not None else chunking.size,
        overlap=overlap if overlap is not None else chunking.overlap,
        preserve_words=chunking.preserve_words,
        preserve_boundaries=preserve_boundaries,
        auto_optimize=get_env_bool(
            "CHUNKFORGE_AUTO_OPTIMIZE", default=chunking.auto_optimize
        ),
    )


def _apply_parser_overrides(config: "Config") -> None:
    """Apply syntax-tree stage overrides."""
    config.parser.enabled = get_env_bool(
        "CHUNKFORGE_CST_ENABLED", default=config.parser.enabled
    )


def _find_config_file(base_path: Path) -> Optional[Path]:
    """Return the first config file present in base_path."""
    for filename in CONFIG_FILENAMES:
        candidate = base_path / filename
        if candidate.exists():
            return candidate
    return None


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> "Config":
    """
    Load configuration from YAML file with environment variable overrides.

    A missing or unreadable file falls back to defaults with a warning.
    Invalid values (for example overlap >= size) raise
    ConfigValidationError instead of being silently replaced.

    Args:
        config_path: Path to config file. Defaults to chunkforge.yaml
            or config.yaml in base_path.
        base_path: Base path for the project. Defaults to current directory.

    Returns:
        Config object with all settings.
    """
    from chunkforge.core.config import Config

    base_path = base_path or Path.cwd()

    if config_path is None:
        config_path = _find_config_file(base_path)
    if config_path is None or not config_path.exists():
        return _create_default_config(base_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        _Logger.get().warning(
            "Could not load config, using defaults",
            path=str(config_path),
            error=str(e),
        )
        return _create_default_config(base_path)

    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Config file must contain a mapping, got {type(data).__name__}",
            field="<root>",
            value=data,
        )

    config = Config.from_dict(data, base_path)
    return _apply_env_overrides(config)


def _create_default_config(base_path: Path) -> "Config":
    """Create default configuration with environment overrides."""
    from chunkforge.core.config import Config

    config = Config()
    config._base_path = base_path
    return _apply_env_overrides(config)


def save_config(config: "Config", config_path: Optional[Path] = None) -> None:
    """Save configuration to YAML file."""
    if config_path is None:
        config_path = config._base_path / CONFIG_FILENAMES[0]

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
