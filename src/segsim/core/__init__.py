"""
Core engine primitives.

This layer knows NOTHING about scheduling, counters or display.
It only knows:
- Grids of EMPTY / A / B slots in a flat array
- Neighbour sampling by index arithmetic
- Whether an agent is unhappy with its neighbours
- One tick: relocate unhappy agents, count them
- Generating a random initial grid
"""

from segsim.core.errors import (
    SimulationError,
    InvalidParameter,
    InvalidGrid,
    NoEmptySlotAvailable,
)
from segsim.core.grid import (
    Kind,
    Grid,
    SimulationParameters,
    generate_initial_state,
    make_grid,
    validate_grid,
    grid_equals,
    kind_at,
    as_matrix,
    DEFAULT_GRID_WIDTH,
    DEFAULT_TOLERANCE,
    DEFAULT_EMPTY_RATIO,
    DEFAULT_KIND_A_RATIO,
)
from segsim.core.neighbors import neighbor_indices, get_neighbors
from segsim.core.happiness import count_different, different_fraction, is_unhappy
from segsim.core.tick import TickResult, tick, pick_random_empty_index

__all__ = [
    "SimulationError",
    "InvalidParameter",
    "InvalidGrid",
    "NoEmptySlotAvailable",
    "Kind",
    "Grid",
    "SimulationParameters",
    "generate_initial_state",
    "make_grid",
    "validate_grid",
    "grid_equals",
    "kind_at",
    "as_matrix",
    "DEFAULT_GRID_WIDTH",
    "DEFAULT_TOLERANCE",
    "DEFAULT_EMPTY_RATIO",
    "DEFAULT_KIND_A_RATIO",
    "neighbor_indices",
    "get_neighbors",
    "count_different",
    "different_fraction",
    "is_unhappy",
    "TickResult",
    "tick",
    "pick_random_empty_index",
]
