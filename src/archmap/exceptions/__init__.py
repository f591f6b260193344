"""Exception hierarchy for archmap."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ScanCancelledError,
    ScanTimeoutError,
)
from .base import ArchmapError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "ArchmapError",
    "AnalysisError",
    "FileAccessError",
    "ScanCancelledError",
    "ScanTimeoutError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
