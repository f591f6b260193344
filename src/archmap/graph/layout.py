"""Deterministic grid layout for graph vertices.

Positions depend only on a vertex's insertion index within its level, so
an unchanged tree always yields identical coordinates.
"""

from dataclasses import dataclass

from .models import Position


@dataclass(frozen=True)
class GridSpec:
    """Row-wrapping grid: step right from the origin, wrap past ``max_x``."""

    origin_x: float
    origin_y: float
    step_x: float
    step_y: float
    max_x: float = 80

    @property
    def per_row(self) -> int:
        return max(1, int((self.max_x - self.origin_x) // self.step_x) + 1)


ROOT_GRID = GridSpec(origin_x=10, origin_y=15, step_x=20, step_y=20)
ARCHITECTURE_GRID = GridSpec(origin_x=10, origin_y=15, step_x=20, step_y=20)
COMPONENT_GRID = GridSpec(origin_x=15, origin_y=20, step_x=25, step_y=25)
IMPLEMENTATION_GRID = GridSpec(origin_x=20, origin_y=30, step_x=25, step_y=25)


def grid_position(index: int, grid: GridSpec) -> Position:
    """Return the position of the ``index``-th vertex (0-based) on ``grid``."""
    row, col = divmod(index, grid.per_row)
    return Position(
        x=grid.origin_x + col * grid.step_x,
        y=grid.origin_y + row * grid.step_y,
    )
