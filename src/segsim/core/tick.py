"""
Tick: one discrete simulation step.

Each tick:
1. Copy the grid (the input is never touched)
2. Visit every occupied slot of the ORIGINAL grid in ascending index order
3. Evaluate happiness against the ORIGINAL grid's neighbours
4. Move each unhappy agent to a random empty slot of the COPY

Relocation targets come from the copy as it is being mutated, so a slot
vacated earlier in the same tick is a valid target for a later agent.
The only ordering guarantee beyond the random source is the ascending
visit order.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from segsim.core.errors import NoEmptySlotAvailable
from segsim.core.grid import (
    Grid,
    Kind,
    Boundary,
    check_boundary,
    check_ratio,
    grid_equals,
    validate_grid,
)
from segsim.core.happiness import is_unhappy
from segsim.core.neighbors import get_neighbors


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick."""

    new_grid: Grid
    unhappy_count: int  # Agents that relocated this tick
    moved: bool = False  # new_grid differs from the input


def pick_random_empty_index(grid: Grid, rng: np.random.Generator) -> int | None:
    """Uniformly random EMPTY index of `grid`, or None if there is none."""
    empty = np.flatnonzero(grid == Kind.EMPTY)
    if empty.size == 0:
        return None
    return int(empty[rng.integers(empty.size)])


def tick(
    grid: Grid,
    tolerance: float,
    grid_width: int,
    rng: np.random.Generator | None = None,
    boundary: Boundary = "clipped",
) -> TickResult:
    """
    Run one tick and return the new grid plus the number of unhappy agents.

    Args:
        grid: Current grid (not modified)
        tolerance: Max acceptable share of differing neighbours
        grid_width: Row length; len(grid) must equal grid_width²
        rng: Random source for relocation targets
        boundary: Neighbour boundary mode

    Raises:
        InvalidGrid: grid does not match grid_width
        InvalidParameter: tolerance is not in [0, 1]
        NoEmptySlotAvailable: an unhappy agent has nowhere to go
    """
    validate_grid(grid, grid_width)
    check_ratio("tolerance", tolerance)
    check_boundary(boundary)
    if rng is None:
        rng = np.random.default_rng()

    copy = grid.copy()
    unhappy = 0

    for index in np.flatnonzero(grid != Kind.EMPTY):
        index = int(index)
        kind = int(grid[index])
        neighbors = get_neighbors(index, grid, grid_width, boundary)
        if not is_unhappy(kind, neighbors, tolerance):
            continue

        unhappy += 1
        new_home = pick_random_empty_index(copy, rng)
        if new_home is None:
            raise NoEmptySlotAvailable(index)
        copy[new_home] = copy[index]
        copy[index] = Kind.EMPTY

    return TickResult(
        new_grid=copy,
        unhappy_count=unhappy,
        moved=not grid_equals(grid, copy),
    )
