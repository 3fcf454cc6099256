"""Reading settings from the process environment and ``.env`` files."""

from __future__ import annotations

import errno
import os
import re
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_ENV_FILE_NAME = ".env"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_TRUE_WORDS = frozenset({"1", "t", "true"})
_FALSE_WORDS = frozenset({"0", "f", "false"})


class EnvironmentVariableError(RuntimeError):
    """A required environment variable is missing or malformed."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


def load_env(filename: str = "") -> None:
    """Load variables from a dotenv file without overriding existing ones.

    Raises FileNotFoundError when the file does not exist.
    """
    path = Path(filename or DEFAULT_ENV_FILE_NAME)
    if not path.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
    load_dotenv(path, override=False)


def _parse_int(text: str) -> int:
    """Parse a signed decimal integer that fits in 64 bits."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _required(key: str) -> str:
    value = os.environ.get(key, "")
    if not value:
        raise EnvironmentVariableError(key, f"environment variable {key} is required")
    return value


def env_string(key: str, default: str) -> str:
    """Return the variable's value, or ``default`` when unset or empty."""
    return os.environ.get(key, "") or default


def env_int(key: str, default: int) -> int:
    """Return the variable as an integer, or ``default`` when unset or invalid."""
    value = os.environ.get(key, "")
    if not value:
        return default
    try:
        return _parse_int(value)
    except ValueError:
        return default


def must_env_string(key: str) -> str:
    """Return the variable's value; raise if it is unset or empty."""
    return _required(key)


def must_env_int(key: str) -> int:
    """Return the variable as an integer; raise if missing or not an integer."""
    value = _required(key)
    try:
        return _parse_int(value)
    except ValueError:
        raise EnvironmentVariableError(
            key, f"environment variable {key} must be an integer, got: {value}"
        ) from None


def must_env_int64(key: str) -> int:
    """Return the variable as a 64-bit integer; raise if missing or invalid."""
    value = _required(key)
    try:
        return _parse_int(value)
    except ValueError:
        raise EnvironmentVariableError(
            key, f"environment variable {key} must be an int64, got: {value}"
        ) from None


def must_env_bool(key: str) -> bool:
    """Return the variable as a boolean; raise if missing or not a boolean."""
    value = os.environ.get(key, "").lower()
    if not value:
        raise EnvironmentVariableError(key, f"environment variable {key} is required")
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    raise EnvironmentVariableError(
        key, f"environment variable {key} must be a boolean, got: {value}"
    )