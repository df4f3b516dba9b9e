"""Errors in what the caller asked for: the repository path and settings."""

from pathlib import Path
from typing import Any, Union

from .base import DocugitAnalyzerError


class ConfigurationError(DocugitAnalyzerError):
    """Missing or malformed configuration file, or an unknown setting."""


class InvalidPathError(ConfigurationError):
    """The repository root handed to the scanner is unusable."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"Cannot analyze {path}: {reason}", details={"path": str(path)})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """A setting (file, environment variable or override) failed validation."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid value for '{key}': {reason}",
            details={"value": repr(value)},
        )
        self.key = key
        self.value = value
        self.reason = reason
