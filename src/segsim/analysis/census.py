"""
Census: slot counts and unhappiness for a grid.

Read-only. Nothing here feeds back into the engine.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from segsim.core.grid import Grid, Kind, Boundary
from segsim.core.happiness import is_unhappy
from segsim.core.neighbors import get_neighbors


@dataclass(frozen=True)
class CellCensus:
    """Slot counts of one grid."""

    total: int
    empty: int
    kind_a: int
    kind_b: int

    @property
    def occupied(self) -> int:
        return self.kind_a + self.kind_b

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "kind_a": self.kind_a,
            "kind_b": self.kind_b,
            "empty": self.empty,
        }


def census(grid: Grid) -> CellCensus:
    """Count EMPTY, A and B slots."""
    counts = np.bincount(np.asarray(grid, dtype=np.int64), minlength=len(Kind))
    return CellCensus(
        total=int(len(grid)),
        empty=int(counts[Kind.EMPTY]),
        kind_a=int(counts[Kind.A]),
        kind_b=int(counts[Kind.B]),
    )


def unhappy_mask(
    grid: Grid,
    grid_width: int,
    tolerance: float,
    boundary: Boundary = "clipped",
) -> np.ndarray:
    """Boolean array, True where an agent would relocate on the next tick."""
    mask = np.zeros(len(grid), dtype=bool)
    for index in np.flatnonzero(grid != Kind.EMPTY):
        neighbors = get_neighbors(int(index), grid, grid_width, boundary)
        mask[index] = is_unhappy(int(grid[index]), neighbors, tolerance)
    return mask


def count_unhappy(
    grid: Grid,
    grid_width: int,
    tolerance: float,
    boundary: Boundary = "clipped",
) -> int:
    """Number of agents that would relocate on the next tick."""
    return int(unhappy_mask(grid, grid_width, tolerance, boundary).sum())


def unhappy_fraction(unhappy_count: int, total: int) -> float:
    """Unhappy agents as a share of all slots (0.0 for an empty grid)."""
    if total <= 0:
        return 0.0
    return unhappy_count / total
