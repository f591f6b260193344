"""Derived views over an analysis: health summary and critical components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .architecture.metrics import health_score
from .config import DEFAULT_THRESHOLDS, MetricThresholds
from .core import AnalysisResult
from .graph.models import GraphLevel, GraphVertex, Health, Importance

# Above this many dependency ids the summary recommends a coupling review
_DEPENDENCY_REVIEW_LIMIT = 150
# More monitored components than this triggers a split recommendation
_MONITOR_LIMIT = 5


@dataclass
class HealthSummary:
    overall: Health
    score: int
    components: dict[str, int] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall.value,
            "score": self.score,
            "components": dict(self.components),
            "recommendations": list(self.recommendations),
        }


@dataclass
class CriticalComponent:
    name: str
    category: str
    health: str
    imports: int
    exports: int
    files: list[str]
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "health": self.health,
            "imports": self.imports,
            "exports": self.exports,
            "files": list(self.files),
            "reason": self.reason,
        }


def _overall(score: int) -> Health:
    if score >= 90:
        return Health.EXCELLENT
    if score >= 80:
        return Health.GOOD
    if score >= 60:
        return Health.MONITOR
    return Health.REFACTOR


def summarize_health(result: AnalysisResult) -> HealthSummary:
    """Count vertex health tiers across all levels and recommend actions."""
    healths = [v.health for lvl in result.levels for v in lvl.vertices if v.health is not None]
    components = {h.value.lower(): 0 for h in Health}
    for h in healths:
        components[h.value.lower()] += 1

    score = health_score(healths)
    recommendations: list[str] = []
    if components["refactor"] > 0:
        recommendations.append(f"{components['refactor']} components need refactoring")
    if components["monitor"] > _MONITOR_LIMIT:
        recommendations.append(
            f"{components['monitor']} components require monitoring - "
            "consider splitting large modules"
        )
    if result.stats.total_dependencies > _DEPENDENCY_REVIEW_LIMIT:
        recommendations.append("High dependency count - review coupling between modules")
    if result.stats.circular_dependencies > 0:
        recommendations.append(
            f"{result.stats.circular_dependencies} import cycles - break them at the weakest edge"
        )

    # No components at all is reported as a perfect, empty codebase
    overall = _overall(score) if healths else Health.EXCELLENT
    return HealthSummary(
        overall=overall,
        score=score,
        components=components,
        recommendations=recommendations,
    )


def _critical_reason(vertex: GraphVertex, thresholds: MetricThresholds) -> Optional[str]:
    metrics = vertex.metrics
    if vertex.health == Health.REFACTOR:
        return "Requires refactoring"
    if vertex.health == Health.MONITOR:
        return "High complexity - monitor closely"
    if metrics is not None and metrics.importance == Importance.CRITICAL:
        return "Critical system component"
    if metrics is not None and metrics.afferent_coupling > thresholds.critical_coupling:
        return "High coupling - many dependencies"
    return None


def find_critical_components(
    levels: Sequence[GraphLevel], thresholds: MetricThresholds = DEFAULT_THRESHOLDS
) -> list[CriticalComponent]:
    """Vertices needing attention, most imports first."""
    found: list[CriticalComponent] = []
    for level in levels:
        for vertex in level.vertices:
            reason = _critical_reason(vertex, thresholds)
            if reason is None:
                continue
            metrics = vertex.metrics
            found.append(
                CriticalComponent(
                    name=vertex.name,
                    category=vertex.category,
                    health=vertex.health.value if vertex.health is not None else "Unknown",
                    imports=metrics.afferent_coupling if metrics is not None else 0,
                    exports=metrics.efferent_coupling if metrics is not None else 0,
                    files=list(vertex.files),
                    reason=reason,
                )
            )
    return sorted(found, key=lambda c: c.imports, reverse=True)
