"""Filesystem scanner, the only component of archmap that performs I/O.

Walks the root recursively, honouring exclusion prefixes and the depth
bound, and turns every relevant file into a FileInfo. A directory or file
that cannot be read is recorded as a ScanWarning and skipped; the scan
always returns as much of the tree as was readable.
"""

import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from ..config import AnalyzerConfig
from ..exceptions import FileAccessError, ScanCancelledError, ScanTimeoutError
from ..logging_config import get_logger
from .classifier import FileClassifier
from .extractor import extract_exports, extract_imports
from .models import DirectoryStructure, FileInfo, ScanResult, ScanWarning

logger = get_logger(__name__)

# Root-level names that indicate source control; they are excluded from the
# tree but reported so the orchestration level can show the repository.
VCS_MARKERS = frozenset(
    {
        ".git",
        ".gitignore",
        ".gitattributes",
        ".gitmodules",
        ".hg",
        ".hgignore",
        ".svn",
    }
)


class _ScanState:
    """Per-call bookkeeping, so one scanner can serve concurrent scans."""

    def __init__(self, cancel_event: Optional[threading.Event], deadline: Optional[float]):
        self.cancel_event = cancel_event
        self.deadline = deadline
        self.warnings: list[ScanWarning] = []
        self.files_scanned = 0
        self.files_skipped = 0
        self._lock = threading.Lock()

    def warn(self, path: str, reason: str) -> None:
        with self._lock:
            self.warnings.append(ScanWarning(path=path, reason=reason))

    def record(self, scanned: bool) -> None:
        with self._lock:
            if scanned:
                self.files_scanned += 1
            else:
                self.files_skipped += 1


class FileScanner:
    """Recursive, partial-failure-tolerant directory scanner."""

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        classifier: Optional[FileClassifier] = None,
    ):
        self.config = config or AnalyzerConfig()
        self.classifier = classifier or FileClassifier()
        self._extensions = frozenset(self.config.allowed_extensions)

    # ── Public API ─────────────────────────────────────────────

    def scan(
        self,
        root_path: Union[str, Path],
        cancel_event: Optional[threading.Event] = None,
    ) -> ScanResult:
        """Scan ``root_path`` and return the directory tree.

        Args:
            root_path: Directory to scan
            cancel_event: Optional event; setting it aborts the scan

        Returns:
            ScanResult with the tree, warnings for unreadable paths and the
            root-level source-control markers

        Raises:
            ScanCancelledError: If ``cancel_event`` is set during the scan
            ScanTimeoutError: If ``timeout_seconds`` elapses during the scan
        """
        root = Path(os.path.abspath(root_path))
        deadline = None
        if self.config.timeout_seconds is not None:
            deadline = time.monotonic() + self.config.timeout_seconds
        state = _ScanState(cancel_event, deadline)

        workers = self.config.effective_workers
        executor = ThreadPoolExecutor(max_workers=workers) if workers > 1 else None
        try:
            structure = self._scan_directory(root, root, 0, state, executor)
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        logger.info(
            f"Scan complete: {state.files_scanned} analyzed, {state.files_skipped} skipped, "
            f"{len(state.warnings)} warnings"
        )
        return ScanResult(
            structure=structure,
            warnings=state.warnings,
            vcs_markers=self._find_vcs_markers(root),
        )

    # ── Traversal ──────────────────────────────────────────────

    def _scan_directory(
        self,
        root: Path,
        dir_path: Path,
        depth: int,
        state: _ScanState,
        executor: Optional[ThreadPoolExecutor],
    ) -> DirectoryStructure:
        self._check_abort(state, dir_path)
        relative = self._relative(root, dir_path)
        name = dir_path.name or str(dir_path)

        try:
            entries = self._list_entries(dir_path)
        except FileAccessError as e:
            logger.warning(f"Could not scan directory {dir_path}: {e.reason}")
            state.warn(relative, e.reason)
            return DirectoryStructure.build(name, relative, [], [])

        file_entries: list[os.DirEntry] = []
        subdirectories: list[DirectoryStructure] = []

        for entry in entries:
            try:
                is_symlink = entry.is_symlink()
                if is_symlink and not self.config.follow_symlinks:
                    logger.debug(f"Skipped (symlink): {entry.path}")
                    continue
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                logger.warning(f"Cannot stat {entry.path}: {e}")
                state.warn(self._relative(root, Path(entry.path)), str(e))
                continue

            if is_dir:
                if self._is_excluded(entry.name):
                    logger.debug(f"Skipped (excluded): {entry.path}")
                    continue
                if depth >= self.config.max_depth:
                    logger.debug(f"Skipped (depth {depth + 1}): {entry.path}")
                    continue
                subdirectories.append(
                    self._scan_directory(root, Path(entry.path), depth + 1, state, executor)
                )
            elif is_file:
                file_entries.append(entry)

        def analyze(entry: os.DirEntry) -> Optional[FileInfo]:
            return self._analyze_file(root, Path(entry.path), state)

        # executor.map yields in submission order, so threads never reorder files
        if executor is not None and len(file_entries) > 1:
            analyzed = list(executor.map(analyze, file_entries))
        else:
            analyzed = [analyze(entry) for entry in file_entries]

        files = [info for info in analyzed if info is not None]
        return DirectoryStructure.build(name, relative, files, subdirectories)

    @staticmethod
    def _list_entries(dir_path: Path) -> list[os.DirEntry]:
        """List a directory sorted by name, for a stable traversal order."""
        try:
            with os.scandir(dir_path) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise FileAccessError(dir_path, str(e))

    # ── File analysis ──────────────────────────────────────────

    def _is_relevant(self, name: str, extension: str) -> bool:
        if extension in self._extensions:
            return True
        return any(marker in name for marker in self.config.name_markers)

    def _analyze_file(self, root: Path, filepath: Path, state: _ScanState) -> Optional[FileInfo]:
        name = filepath.name
        extension = filepath.suffix
        relative = self._relative(root, filepath)

        if not self._is_relevant(name, extension):
            state.record(scanned=False)
            return None

        try:
            size = filepath.stat().st_size
            if size > self.config.max_file_size_bytes:
                state.record(scanned=False)
                logger.debug(f"Skipped (size): {filepath} ({size} bytes)")
                return None
            with open(filepath, encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            logger.warning(f"Could not analyze file {filepath}: {e}")
            state.warn(relative, str(e))
            return None

        state.record(scanned=True)
        logger.debug(f"Analyzed: {relative}")
        return FileInfo(
            path=relative,
            name=name,
            extension=extension,
            size=size,
            category=self.classifier.classify(relative, content),
            imports=extract_imports(content, self.config.alias_prefixes),
            exports=extract_exports(content),
        )

    # ── Helpers ────────────────────────────────────────────────

    def _is_excluded(self, name: str) -> bool:
        return any(name.startswith(prefix) for prefix in self.config.exclude_paths)

    def _check_abort(self, state: _ScanState, current: Path) -> None:
        if state.cancel_event is not None and state.cancel_event.is_set():
            raise ScanCancelledError(current)
        if state.deadline is not None and time.monotonic() > state.deadline:
            raise ScanTimeoutError(self.config.timeout_seconds, current)

    @staticmethod
    def _relative(root: Path, path: Path) -> str:
        if path == root:
            return "."
        return path.relative_to(root).as_posix()

    @staticmethod
    def _find_vcs_markers(root: Path) -> tuple[str, ...]:
        try:
            names = os.listdir(root)
        except OSError:
            return ()
        return tuple(sorted(name for name in names if name in VCS_MARKERS))
