"""Graph levels, layout and import-graph algorithms.

The level builder lives in ``archmap.graph.builder``; it is not imported
here because it depends on ``archmap.architecture``, which in turn uses
these models.
"""

from .algorithms import build_import_graph, find_cycles, resolve_import, tarjan_scc
from .layout import GridSpec, grid_position
from .models import (
    LEVEL_IDS,
    Complexity,
    GraphLevel,
    GraphVertex,
    Health,
    Importance,
    LevelStats,
    Position,
    Status,
    VertexMetrics,
)

__all__ = [
    "LEVEL_IDS",
    "Complexity",
    "GraphLevel",
    "GraphVertex",
    "Health",
    "Importance",
    "LevelStats",
    "Position",
    "Status",
    "VertexMetrics",
    "GridSpec",
    "grid_position",
    "build_import_graph",
    "find_cycles",
    "resolve_import",
    "tarjan_scc",
]
