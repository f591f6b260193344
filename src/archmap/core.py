"""Codebase analyzer: scan, build graph levels, aggregate stats.

Example:
    >>> from archmap import analyze_codebase
    >>> result = analyze_codebase("/path/to/repo")
    >>> [level.level for level in result.levels]
    [-1, 0, 1, 2]
    >>> payload = result.to_dict()   # JSON-serializable
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from .architecture.metrics import architecture_grade, file_load_bucket, health_score
from .config import AnalyzerConfig
from .exceptions import InvalidPathError
from .graph.algorithms import build_import_graph, find_cycles
from .graph.builder import GraphLevelBuilder, group_by_category
from .graph.models import GraphLevel
from .graph.tables import DEFAULT_TABLES, ArchitectureTables
from .logging_config import get_logger
from .scanning.classifier import FileClassifier
from .scanning.models import DirectoryStructure, ScanWarning
from .scanning.scanner import FileScanner

logger = get_logger(__name__)


@dataclass
class AnalysisStats:
    """Whole-codebase aggregates.

    ``total_dependencies`` sums dependency ids over every vertex of every
    level, so one logical dependency shown on two levels counts twice.
    """

    total_files: int = 0
    total_dependencies: int = 0
    circular_dependencies: int = 0
    dependency_cycles: list[list[str]] = field(default_factory=list)
    architecture_grade: str = "N/A"
    quality_score: int = 0
    categories: dict[str, int] = field(default_factory=dict)
    healthy_components: int = 0
    monitor_components: int = 0
    refactor_components: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalDependencies": self.total_dependencies,
            "circularDependencies": self.circular_dependencies,
            "dependencyCycles": [list(c) for c in self.dependency_cycles],
            "architectureGrade": self.architecture_grade,
            "qualityScore": self.quality_score,
            "categories": dict(self.categories),
            "healthyComponents": self.healthy_components,
            "monitorComponents": self.monitor_components,
            "refactorComponents": self.refactor_components,
        }


@dataclass
class AnalysisResult:
    """One analysis snapshot. Owned by the caller; nothing is cached."""

    root: str
    structure: DirectoryStructure
    levels: list[GraphLevel]
    stats: AnalysisStats
    warnings: list[ScanWarning] = field(default_factory=list)

    def level(self, level_id: int) -> GraphLevel:
        for lvl in self.levels:
            if lvl.level == level_id:
                return lvl
        raise KeyError(level_id)

    def to_dict(self, include_structure: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "root": self.root,
            "levels": [lvl.to_dict() for lvl in self.levels],
            "stats": self.stats.to_dict(),
            "warnings": [w.to_dict() for w in self.warnings],
        }
        if include_structure:
            data["structure"] = self.structure.to_dict()
        return data


def compute_stats(
    structure: DirectoryStructure,
    levels: Sequence[GraphLevel],
    cycles: Optional[list[list[str]]] = None,
    config: Optional[AnalyzerConfig] = None,
) -> AnalysisStats:
    """Aggregate whole-codebase stats from the tree and the built levels.

    Args:
        structure: Scanned tree
        levels: The four graph levels
        cycles: Import cycles, or None when cycle detection was skipped
        config: Supplies the per-file load thresholds
    """
    config = config or AnalyzerConfig()
    vertices = [v for lvl in levels for v in lvl.vertices]
    healths = [v.health for v in vertices if v.health is not None]
    score = health_score(healths)

    buckets = {"healthy": 0, "monitor": 0, "refactor": 0}
    for info in structure.iter_files():
        buckets[file_load_bucket(len(info.imports), config.thresholds)] += 1

    cycles = cycles or []
    return AnalysisStats(
        total_files=structure.total_files,
        total_dependencies=sum(len(v.dependencies) for v in vertices),
        circular_dependencies=len(cycles),
        dependency_cycles=cycles,
        architecture_grade=architecture_grade(score, has_components=bool(healths)),
        quality_score=score,
        categories={name: len(files) for name, files in group_by_category(structure).items()},
        healthy_components=buckets["healthy"],
        monitor_components=buckets["monitor"],
        refactor_components=buckets["refactor"],
    )


class CodebaseAnalyzer:
    """Composes scanner, level builder and stats into one call.

    Holds only immutable configuration, so one instance may serve
    concurrent ``analyze_codebase()`` calls.
    """

    def __init__(
        self,
        root_path: Union[str, Path],
        exclude_paths: Optional[Sequence[str]] = None,
        config: Optional[AnalyzerConfig] = None,
        classifier: Optional[FileClassifier] = None,
        tables: ArchitectureTables = DEFAULT_TABLES,
    ):
        if root_path is None or not str(root_path).strip():
            raise InvalidPathError(str(root_path or ""), "root path is empty")

        config = config or AnalyzerConfig()
        if exclude_paths is not None:
            config = replace(config, exclude_paths=tuple(exclude_paths))

        self.root_path = Path(root_path)
        self.config = config
        self.scanner = FileScanner(config, classifier or FileClassifier())
        self.builder = GraphLevelBuilder(tables, config.thresholds)

    def analyze_codebase(self, cancel_event: Optional[threading.Event] = None) -> AnalysisResult:
        """Run a full analysis of the root path.

        Args:
            cancel_event: Optional event; setting it aborts the scan

        Returns:
            AnalysisResult with structure, levels, stats and scan warnings

        Raises:
            InvalidPathError: If the root does not exist or is not a directory
            ScanCancelledError: If cancelled through ``cancel_event``
            ScanTimeoutError: If the configured timeout elapses
        """
        root = self.root_path
        if not root.exists():
            raise InvalidPathError(root, "does not exist")
        if not root.is_dir():
            raise InvalidPathError(root, "is not a directory")

        logger.info(f"Starting codebase analysis of {root}")
        scan = self.scanner.scan(root, cancel_event=cancel_event)
        for warning in scan.warnings:
            logger.debug(f"Scan warning: {warning.path}: {warning.reason}")

        levels = self.builder.build_levels(scan.structure, scan.vcs_markers)

        cycles: Optional[list[list[str]]] = None
        if self.config.detect_cycles:
            graph = build_import_graph(
                scan.structure.iter_files(),
                self.config.alias_roots,
                self.config.resolve_extensions,
            )
            cycles = find_cycles(graph)
            if cycles:
                logger.info(f"Found {len(cycles)} import cycles")

        stats = compute_stats(scan.structure, levels, cycles, self.config)
        logger.info(f"Analysis complete: {stats.total_files} files analyzed")

        return AnalysisResult(
            root=str(root),
            structure=scan.structure,
            levels=levels,
            stats=stats,
            warnings=scan.warnings,
        )


def analyze_codebase(
    root_path: Union[str, Path] = ".",
    exclude_paths: Optional[Sequence[str]] = None,
    config: Optional[AnalyzerConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> AnalysisResult:
    """Analyze ``root_path`` with a fresh analyzer and return the snapshot."""
    analyzer = CodebaseAnalyzer(root_path, exclude_paths=exclude_paths, config=config)
    return analyzer.analyze_codebase(cancel_event=cancel_event)
