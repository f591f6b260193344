"""Analysis-related exceptions: file access and aborted scans."""

from pathlib import Path
from typing import Optional

from .base import ArchmapError


class AnalysisError(ArchmapError):
    """Base class for analysis-related errors."""

    pass


class FileAccessError(AnalysisError):
    """Raised when a file or directory cannot be listed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access path: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ScanCancelledError(AnalysisError):
    """Raised when the caller cancels a scan in progress."""

    def __init__(self, last_path: Optional[Path] = None):
        details = {"last_path": str(last_path)} if last_path is not None else None
        super().__init__("Scan cancelled by caller", details=details)
        self.last_path = last_path


class ScanTimeoutError(AnalysisError):
    """Raised when a scan exceeds the configured deadline."""

    def __init__(self, timeout_seconds: float, last_path: Optional[Path] = None):
        details = {"timeout_seconds": str(timeout_seconds)}
        if last_path is not None:
            details["last_path"] = str(last_path)
        super().__init__(f"Scan exceeded {timeout_seconds}s", details=details)
        self.timeout_seconds = timeout_seconds
        self.last_path = last_path
