"""Tests for safe environment variable parsing."""

import pytest

from chunkforge.core.env import (
    LOG_LEVELS,
    get_env_bool,
    get_env_int,
    get_env_whitelist,
)
from chunkforge.core.exceptions import ConfigValidationError

VAR = "CHUNKFORGE_TEST_VALUE"


class TestGetEnvInt:
    """Tests for get_env_int."""

    def test_unset(self, monkeypatch):
        monkeypatch.delenv(VAR, raising=False)
        assert get_env_int(VAR, default=7) == 7

    def test_parsed(self, monkeypatch):
        monkeypatch.setenv(VAR, "42")
        assert get_env_int(VAR) == 42

    def test_within_bounds(self, monkeypatch):
        monkeypatch.setenv(VAR, "10")
        assert get_env_int(VAR, min_value=1, max_value=10) == 10

    def test_below_minimum_raises(self, monkeypatch):
        monkeypatch.setenv(VAR, "0")
        with pytest.raises(ConfigValidationError, match="at least 1") as exc_info:
            get_env_int(VAR, min_value=1, max_value=10)
        assert exc_info.value.field == VAR
        assert exc_info.value.value == 0

    def test_above_maximum_raises(self, monkeypatch):
        monkeypatch.setenv(VAR, "99")
        with pytest.raises(ConfigValidationError, match="must be at most 10"):
            get_env_int(VAR, min_value=1, max_value=10)

    def test_non_integer_raises(self, monkeypatch):
        monkeypatch.setenv(VAR, "lots")
        with pytest.raises(ConfigValidationError, match="must be an integer"):
            get_env_int(VAR, default=5)


class TestGetEnvWhitelist:
    """Tests for get_env_whitelist."""

    def test_case_insensitive(self, monkeypatch):
        monkeypatch.setenv(VAR, "warning")
        assert get_env_whitelist(VAR, LOG_LEVELS) == "WARNING"

    def test_case_sensitive(self, monkeypatch):
        monkeypatch.setenv(VAR, "warning")
        assert get_env_whitelist(VAR, LOG_LEVELS, case_sensitive=True) is None

    def test_rejected(self, monkeypatch):
        monkeypatch.setenv(VAR, "verbose")
        assert get_env_whitelist(VAR, LOG_LEVELS, default="INFO") == "INFO"


class TestGetEnvBool:
    """Tests for get_env_bool."""

    def test_truthy(self, monkeypatch):
        for value in ("true", "YES", "1", "on"):
            monkeypatch.setenv(VAR, value)
            assert get_env_bool(VAR) is True

    def test_falsy(self, monkeypatch):
        for value in ("false", "No", "0", "off", ""):
            monkeypatch.setenv(VAR, value)
            assert get_env_bool(VAR, default=True) is False

    def test_unrecognized(self, monkeypatch):
        monkeypatch.setenv(VAR, "maybe")
        assert get_env_bool(VAR, default=True) is True
