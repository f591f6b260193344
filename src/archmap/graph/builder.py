"""Four-level graph construction from a scanned directory tree.

Levels, coarse to fine:
    -1  Root Orchestration      root files grouped into conceptual buckets
     0  Master Architecture     one vertex per file category
     1  Component Sub-Graphs    detailed vertices for large critical categories
     2  Implementation Detail   the most connected individual files

The builder always returns all four levels in that order. A level with no
vertices is still present, with zeroed stats.
"""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Collection, Optional, Sequence

from ..architecture.metrics import (
    afferent_coupling,
    assess_health,
    complexity_for,
    efferent_coupling,
    health_score,
    instability,
)
from ..config import DEFAULT_THRESHOLDS, MetricThresholds
from ..logging_config import get_logger
from ..scanning.models import DirectoryStructure, FileInfo
from .layout import (
    ARCHITECTURE_GRID,
    COMPONENT_GRID,
    IMPLEMENTATION_GRID,
    ROOT_GRID,
    grid_position,
)
from .models import (
    Complexity,
    GraphLevel,
    GraphVertex,
    Health,
    Importance,
    LevelStats,
    VertexMetrics,
)
from .tables import DEFAULT_TABLES, ArchitectureTables, slugify

logger = get_logger(__name__)


def group_by_category(structure: DirectoryStructure) -> dict[str, list[FileInfo]]:
    """Group every file of the tree by category, in first-seen order."""
    groups: dict[str, list[FileInfo]] = {}
    for info in structure.iter_files():
        groups.setdefault(info.category, []).append(info)
    return groups


def level_stats(
    vertices: Sequence[GraphVertex], scanned: Optional[Collection[str]] = None
) -> LevelStats:
    """Aggregate a level: distinct evidence files, edges and health score.

    When ``scanned`` is given, only evidence paths in it count as files, so
    source-control markers listed as evidence are left out of the total.
    """
    evidence = {path for v in vertices for path in v.files}
    if scanned is not None:
        evidence &= set(scanned)
    return LevelStats(
        total_files=len(evidence),
        total_dependencies=sum(len(v.dependencies) for v in vertices),
        quality_score=health_score(v.health for v in vertices if v.health is not None),
    )


@dataclass(frozen=True)
class _RootBucket:
    id: str
    name: str
    category: str
    icon: str
    importance: Importance
    depends_on: tuple[str, ...]
    describe: Callable[[int, int], str]  # (bucket size, tree total) -> text


# Listed in build order; each bucket depends only on buckets before it
_ROOT_BUCKETS = (
    _RootBucket(
        id="git-repository",
        name="Git Repository",
        category="Source Control",
        icon="GitBranch",
        importance=Importance.CRITICAL,
        depends_on=(),
        describe=lambda n, total: f"Source control with {total} tracked files",
    ),
    _RootBucket(
        id="package-system",
        name="Package System",
        category="Dependencies",
        icon="Package",
        importance=Importance.CRITICAL,
        depends_on=("git-repository",),
        describe=lambda n, total: f"Dependency management with {n} manifest files",
    ),
    _RootBucket(
        id="build-pipeline",
        name="Build Pipeline",
        category="Build",
        icon="Zap",
        importance=Importance.HIGH,
        depends_on=("package-system",),
        describe=lambda n, total: f"Build system with {n} configuration files",
    ),
    _RootBucket(
        id="documentation-system",
        name="Documentation System",
        category="Documentation",
        icon="FileText",
        importance=Importance.MEDIUM,
        depends_on=("git-repository",),
        describe=lambda n, total: f"Project documentation with {n} markdown files",
    ),
)


class GraphLevelBuilder:
    """Builds the four graph levels for one scanned tree."""

    def __init__(
        self,
        tables: ArchitectureTables = DEFAULT_TABLES,
        thresholds: MetricThresholds = DEFAULT_THRESHOLDS,
    ):
        self.tables = tables
        self.thresholds = thresholds

    def build_levels(
        self, structure: DirectoryStructure, vcs_markers: Sequence[str] = ()
    ) -> list[GraphLevel]:
        """Return levels -1, 0, 1 and 2, in that order."""
        categories = group_by_category(structure)
        levels = [
            self._root_orchestration(structure, vcs_markers),
            self._master_architecture(structure, categories),
            self._component_subgraphs(categories),
            self._implementation_detail(structure),
        ]
        logger.debug(
            "Built levels: "
            + ", ".join(f"{lvl.level}={len(lvl.vertices)}" for lvl in levels)
        )
        return levels

    # ── Shared vertex helpers ──────────────────────────────────

    def _group_metrics(self, files: Sequence[FileInfo], importance: Importance) -> VertexMetrics:
        ca = afferent_coupling(files)
        ce = efferent_coupling(files)
        return VertexMetrics(
            afferent_coupling=ca,
            efferent_coupling=ce,
            instability=instability(ca, ce),
            importance=importance,
        )

    # ── Level -1 ───────────────────────────────────────────────

    def _root_orchestration(
        self, structure: DirectoryStructure, vcs_markers: Sequence[str]
    ) -> GraphLevel:
        root_files = list(structure.files)
        members: dict[str, list[FileInfo]] = {
            "git-repository": [],
            "package-system": [
                f for f in root_files if "package" in f.name or "build" in f.name
            ],
            "build-pipeline": [f for f in root_files if f.category == "Configuration"],
            "documentation-system": [f for f in root_files if f.extension == ".md"],
        }

        emitted: set[str] = set()
        vertices: list[GraphVertex] = []
        for bucket in _ROOT_BUCKETS:
            files = members[bucket.id]
            if bucket.id == "git-repository":
                evidence = list(vcs_markers)
            else:
                evidence = [f.path for f in files]
            if not evidence:
                continue

            vertices.append(
                GraphVertex(
                    id=bucket.id,
                    name=bucket.name,
                    description=bucket.describe(len(evidence), structure.total_files),
                    category=bucket.category,
                    icon=bucket.icon,
                    level=-1,
                    position=grid_position(len(vertices), ROOT_GRID),
                    dependencies=[d for d in bucket.depends_on if d in emitted],
                    complexity=complexity_for(len(evidence), self.thresholds),
                    files=evidence,
                    metrics=self._group_metrics(files, bucket.importance),
                    health=assess_health(files, self.thresholds),
                )
            )
            emitted.add(bucket.id)

        return GraphLevel(
            level=-1,
            title="Root Orchestration",
            description=(
                f"Live codebase analysis: {structure.total_files} files across project structure"
            ),
            color="from-red-500 to-red-600",
            vertices=vertices,
            stats=level_stats(vertices, scanned={f.path for f in root_files}),
        )

    # ── Level 0 ────────────────────────────────────────────────

    def _master_architecture(
        self, structure: DirectoryStructure, categories: dict[str, list[FileInfo]]
    ) -> GraphLevel:
        vertices: list[GraphVertex] = []
        for category, files in categories.items():
            if not files:
                continue
            importance = self.tables.importance_for(category)
            metrics = self._group_metrics(files, importance)
            vertices.append(
                GraphVertex(
                    id=slugify(category),
                    name=f"{category} ({len(files)} files)",
                    description=(
                        f"{category} module with {len(files)} files "
                        f"and {metrics.afferent_coupling} imports"
                    ),
                    category=category,
                    icon=self.tables.icon_for(category),
                    level=0,
                    position=grid_position(len(vertices), ARCHITECTURE_GRID),
                    dependencies=self.tables.dependencies_for(category),
                    complexity=complexity_for(len(files), self.thresholds),
                    files=[f.path for f in files],
                    metrics=metrics,
                    health=assess_health(files, self.thresholds),
                )
            )

        return GraphLevel(
            level=0,
            title="Master Architecture",
            description=(
                f"Real-time analysis: {structure.total_files} files across "
                f"{len(vertices)} architectural modules"
            ),
            color="from-blue-500 to-blue-600",
            vertices=vertices,
            stats=level_stats(vertices),
        )

    # ── Level 1 ────────────────────────────────────────────────

    def _component_subgraphs(self, categories: dict[str, list[FileInfo]]) -> GraphLevel:
        limit = self.thresholds.category_evidence_limit
        vertices: list[GraphVertex] = []
        for category in self.tables.critical_categories:
            files = categories.get(category, [])
            if len(files) <= self.thresholds.critical_category_min_files:
                continue
            slug = slugify(category)
            metrics = self._group_metrics(files, self.tables.importance_for(category))
            vertices.append(
                GraphVertex(
                    id=f"{slug}-detailed",
                    name=f"{category} Internal",
                    description=(
                        f"Detailed analysis: {len(files)} files with "
                        f"{metrics.afferent_coupling} internal imports"
                    ),
                    category=category,
                    icon=self.tables.icon_for(category),
                    level=1,
                    position=grid_position(len(vertices), COMPONENT_GRID),
                    dependencies=[slug],
                    complexity=Complexity.HIGH,
                    files=[f.path for f in files[:limit]],
                    metrics=metrics,
                    health=assess_health(files, self.thresholds),
                )
            )

        return GraphLevel(
            level=1,
            title="Component Sub-Graphs",
            description=f"Critical component analysis: {len(vertices)} high-priority modules",
            color="from-green-500 to-green-600",
            vertices=vertices,
            stats=level_stats(vertices),
        )

    # ── Level 2 ────────────────────────────────────────────────

    def hot_files(self, structure: DirectoryStructure) -> list[FileInfo]:
        """Most connected files, highest first; ties keep traversal order."""
        t = self.thresholds
        candidates = [
            f
            for f in structure.iter_files()
            if len(f.imports) > t.hot_file_min_imports or len(f.exports) > t.hot_file_min_exports
        ]
        # sorted() is stable
        ranked = sorted(candidates, key=lambda f: f.connectivity, reverse=True)
        return ranked[: t.hot_file_limit]

    def _implementation_detail(self, structure: DirectoryStructure) -> GraphLevel:
        t = self.thresholds
        used_ids: set[str] = set()
        vertices: list[GraphVertex] = []
        for info in self.hot_files(structure):
            vertex_id = self._unique_id(f"impl-{PurePosixPath(info.name).stem}", used_ids)
            n_imports = len(info.imports)
            vertices.append(
                GraphVertex(
                    id=vertex_id,
                    name=f"{info.name} Implementation",
                    description=f"Critical file: {n_imports} imports, {len(info.exports)} exports",
                    category="Implementation",
                    icon="Code2",
                    level=2,
                    position=grid_position(len(vertices), IMPLEMENTATION_GRID),
                    dependencies=list(info.imports[: t.hot_file_dependency_limit]),
                    complexity=Complexity.HIGH,
                    files=[info.path],
                    metrics=VertexMetrics(
                        afferent_coupling=n_imports,
                        efferent_coupling=len(info.exports),
                        instability=instability(n_imports, len(info.exports)),
                        importance=(
                            Importance.CRITICAL
                            if n_imports > t.hot_file_critical_imports
                            else Importance.HIGH
                        ),
                    ),
                    health=(
                        Health.MONITOR if n_imports > t.hot_file_monitor_imports else Health.GOOD
                    ),
                )
            )

        return GraphLevel(
            level=2,
            title="Implementation Detail",
            description=f"High-complexity files: {len(vertices)} critical implementations",
            color="from-purple-500 to-purple-600",
            vertices=vertices,
            stats=level_stats(vertices),
        )

    @staticmethod
    def _unique_id(base: str, used: set[str]) -> str:
        candidate, suffix = base, 1
        while candidate in used:
            suffix += 1
            candidate = f"{base}-{suffix}"
        used.add(candidate)
        return candidate


def find_vertex(levels: Sequence[GraphLevel], vertex_id: str) -> Optional[GraphVertex]:
    """Cross-level lookup; dangling ids resolve to None rather than raising."""
    for level in levels:
        for vertex in level.vertices:
            if vertex.id == vertex_id:
                return vertex
    return None
