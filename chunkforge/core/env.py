"""
Safe environment variable parsing with validation.

Provides type-safe functions for reading environment variables with
bounds checking and whitelist validation.

Usage Pattern
-------------
Instead of unsafe direct environment access:

    # DANGEROUS - no validation
    size = int(os.environ.get("CHUNKFORGE_CHUNK_SIZE", "1000"))

Use safe getters:

    # SAFE - bounds checked, out-of-range values raise
    from chunkforge.core.env import get_env_int
    size = get_env_int("CHUNKFORGE_CHUNK_SIZE", default=1000, min_value=1)
"""

from __future__ import annotations

import os
from typing import FrozenSet, Optional

from chunkforge.core.exceptions import ConfigValidationError


LOG_LEVELS: FrozenSet[str] = frozenset(
    ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
)


def get_env_int(
    name: str,
    default: Optional[int] = None,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> Optional[int]:
    """
    Get integer from environment variable with bounds validation.

    Values are never clamped: a non-integer or out-of-range value is a
    configuration error, reported with the variable name.

    Args:
        name: Environment variable name.
        default: Default value if not set.
        min_value: Minimum allowed value.
        max_value: Maximum allowed value.

    Returns:
        Validated integer or default.

    Raises:
        ConfigValidationError: The value is not an integer or out of bounds.

    Example:
        >>> get_env_int("CHUNKFORGE_CHUNK_SIZE", default=1000, min_value=1)
        1000  # If CHUNKFORGE_CHUNK_SIZE not set
    """
    value = os.environ.get(name)
    if value is None:
        return default

    try:
        int_value = int(value)
    except ValueError as e:
        raise ConfigValidationError(
            f"{name} must be an integer, got: {value}", field=name, value=value
        ) from e

    if min_value is not None and int_value < min_value:
        raise ConfigValidationError(
            f"{name} must be at least {min_value}, got: {int_value}",
            field=name,
            value=int_value,
        )
    if max_value is not None and int_value > max_value:
        raise ConfigValidationError(
            f"{name} must be at most {max_value}, got: {int_value}",
            field=name,
            value=int_value,
        )

    return int_value


def get_env_whitelist(
    name: str,
    allowed: FrozenSet[str],
    default: Optional[str] = None,
    case_sensitive: bool = False,
) -> Optional[str]:
    """
    Get string from environment variable with whitelist validation.

    Only returns value if it matches one of the allowed values.

    Example:
        >>> # With CHUNKFORGE_LOG_LEVEL="debug"
        >>> get_env_whitelist("CHUNKFORGE_LOG_LEVEL", LOG_LEVELS, default="INFO")
        'DEBUG'
    """
    value = os.environ.get(name)
    if value is None:
        return default

    if case_sensitive:
        if value in allowed:
            return value
    else:
        normalized = value.lower()
        for allowed_value in allowed:
            if normalized == allowed_value.lower():
                return allowed_value

    return default


def get_env_bool(
    name: str,
    default: bool = False,
) -> bool:
    """
    Get boolean from environment variable.

    Recognizes common truthy/falsy values:
    - True: "true", "yes", "1", "on"
    - False: "false", "no", "0", "off", ""

    Args:
        name: Environment variable name.
        default: Default value if not set or unrecognized.

    Returns:
        Boolean value.
    """
    value = os.environ.get(name)
    if value is None:
        return default

    normalized = value.lower().strip()

    if normalized in ("true", "yes", "1", "on"):
        return True
    if normalized in ("false", "no", "0", "off", ""):
        return False

    return default
