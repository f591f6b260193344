"""Configuration exceptions: root paths and settings."""

from pathlib import Path
from typing import Any, Union

from .base import ArchmapError


class ConfigurationError(ArchmapError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when the analysis root is empty, missing or not a directory."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"Invalid path: {path!s}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
