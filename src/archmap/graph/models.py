"""Graph-level models handed to the visualization layer.

Everything here serializes to plain JSON through ``to_dict()``. Vertex
dependencies are flat id strings, never object references, and may point
at a vertex on another level or at no vertex at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Complexity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Status(str, Enum):
    ACTIVE = "Active"
    DEVELOPMENT = "Development"
    PLANNED = "Planned"
    CRITICAL = "Critical"


class Health(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    MONITOR = "Monitor"
    REFACTOR = "Refactor"


class Importance(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# The four hierarchy tiers, coarse to fine
LEVEL_IDS = (-1, 0, 1, 2)


@dataclass(frozen=True)
class Position:
    """Layout coordinates as percentages of the canvas (0-100)."""

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class VertexMetrics:
    afferent_coupling: int
    efferent_coupling: int
    instability: float  # in [0, 1)
    importance: Importance

    def to_dict(self) -> dict[str, Any]:
        return {
            "afferentCoupling": self.afferent_coupling,
            "efferentCoupling": self.efferent_coupling,
            "instability": self.instability,
            "importance": self.importance.value,
        }


@dataclass
class GraphVertex:
    """One node of a graph level: a bucket, a category or a single file."""

    id: str
    name: str
    description: str
    category: str
    icon: str
    level: int
    position: Position
    dependencies: list[str] = field(default_factory=list)
    complexity: Complexity = Complexity.LOW
    status: Status = Status.ACTIVE
    files: list[str] = field(default_factory=list)
    metrics: Optional[VertexMetrics] = None
    health: Optional[Health] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "level": self.level,
            "category": self.category,
            "dependencies": list(self.dependencies),
            "complexity": self.complexity.value,
            "status": self.status.value,
            "icon": self.icon,
            "position": self.position.to_dict(),
            "files": list(self.files),
        }
        if self.metrics is not None:
            data["metrics"] = self.metrics.to_dict()
        if self.health is not None:
            data["health"] = self.health.value
        return data


@dataclass(frozen=True)
class LevelStats:
    total_files: int = 0
    total_dependencies: int = 0
    quality_score: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalFiles": self.total_files,
            "totalDependencies": self.total_dependencies,
            "qualityScore": self.quality_score,
        }


@dataclass
class GraphLevel:
    """One of the four fixed tiers (-1, 0, 1, 2)."""

    level: int
    title: str
    description: str
    color: str
    vertices: list[GraphVertex] = field(default_factory=list)
    stats: LevelStats = field(default_factory=LevelStats)

    def vertex_ids(self) -> set[str]:
        return {v.id for v in self.vertices}

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "title": self.title,
            "description": self.description,
            "color": self.color,
            "stats": self.stats.to_dict(),
            "vertices": [v.to_dict() for v in self.vertices],
        }
