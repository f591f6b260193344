"""Data models for the scanning layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass(frozen=True)
class FileInfo:
    """One scanned source file. Immutable once the scanner creates it."""

    path: str  # root-relative POSIX path, unique within a scan
    name: str
    extension: str
    size: int
    category: str
    imports: tuple[str, ...] = ()
    exports: tuple[str, ...] = ()

    @property
    def connectivity(self) -> int:
        return len(self.imports) + len(self.exports)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "extension": self.extension,
            "size": self.size,
            "category": self.category,
            "imports": list(self.imports),
            "exports": list(self.exports),
        }


@dataclass(frozen=True)
class DirectoryStructure:
    """One directory node of the scanned tree.

    ``total_files`` always equals ``len(files)`` plus the ``total_files``
    of every subdirectory. Build nodes with :meth:`build` so the count is
    derived rather than supplied.
    """

    name: str
    path: str  # root-relative, "." for the root
    files: tuple[FileInfo, ...] = ()
    subdirectories: tuple[DirectoryStructure, ...] = ()
    total_files: int = 0

    @classmethod
    def build(
        cls,
        name: str,
        path: str,
        files: list[FileInfo],
        subdirectories: list[DirectoryStructure],
    ) -> DirectoryStructure:
        total = len(files) + sum(sub.total_files for sub in subdirectories)
        return cls(
            name=name,
            path=path,
            files=tuple(files),
            subdirectories=tuple(subdirectories),
            total_files=total,
        )

    def iter_files(self) -> Iterator[FileInfo]:
        """Yield every file depth-first: own files, then each subdirectory."""
        yield from self.files
        for sub in self.subdirectories:
            yield from sub.iter_files()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "files": [f.to_dict() for f in self.files],
            "subdirectories": [d.to_dict() for d in self.subdirectories],
            "totalFiles": self.total_files,
        }


@dataclass(frozen=True)
class ScanWarning:
    """A path the scanner could not read, and why."""

    path: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "reason": self.reason}


@dataclass
class ScanResult:
    """Scanner output: the tree plus everything skipped along the way."""

    structure: DirectoryStructure
    warnings: list[ScanWarning] = field(default_factory=list)
    # Root-level source-control entries (.git, .gitignore, ...) seen in the listing
    vcs_markers: tuple[str, ...] = ()
