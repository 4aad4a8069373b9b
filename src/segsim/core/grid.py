"""
Grid: the flat array of cell slots the engine works on.

A grid of width w holds w² slots, index = row * w + col. There is no
row/col struct; 2D position lives entirely in index arithmetic.

Each slot is one of:
- Kind.EMPTY
- Kind.A
- Kind.B

Grids are never mutated by the engine. A tick returns a new array, so
equilibrium is a plain equality check between consecutive grids.
"""

from __future__ import annotations
from dataclasses import dataclass, replace as dc_replace
from enum import IntEnum
from numbers import Integral, Real
from typing import Literal

import numpy as np

from segsim.core.errors import InvalidGrid, InvalidParameter


class Kind(IntEnum):
    """Slot values."""

    EMPTY = 0
    A = 1
    B = 2


GRID_DTYPE = np.int8

# Grid is a 1D int8 array of Kind values
Grid = np.ndarray

Boundary = Literal["clipped", "row_bounded"]
BOUNDARIES = ("clipped", "row_bounded")

# Defaults of the reference application
DEFAULT_GRID_WIDTH = 50
DEFAULT_TOLERANCE = 0.7
DEFAULT_EMPTY_RATIO = 0.1
DEFAULT_KIND_A_RATIO = 0.2


def check_ratio(name: str, value) -> None:
    """Reject anything that is not a real number in [0, 1]."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameter(f"{name} must be a number, got {value!r}")
    # NaN fails both comparisons
    if not 0.0 <= value <= 1.0:
        raise InvalidParameter(f"{name} must be in [0, 1], got {value!r}")


def _check_width(value) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidParameter(f"grid_width must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidParameter(f"grid_width must be positive, got {value!r}")


def check_boundary(value) -> None:
    if value not in BOUNDARIES:
        raise InvalidParameter(
            f"boundary must be one of {BOUNDARIES}, got {value!r}"
        )


@dataclass(frozen=True)
class SimulationParameters:
    """Parameters for one run. Immutable; use replace() to derive new ones."""

    grid_width: int = DEFAULT_GRID_WIDTH
    tolerance: float = DEFAULT_TOLERANCE  # Max acceptable share of differing neighbours
    empty_ratio: float = DEFAULT_EMPTY_RATIO  # Target share of empty slots
    kind_a_ratio: float = DEFAULT_KIND_A_RATIO  # Target share of A among occupied slots

    # "clipped" keeps the reference neighbour rule (edge cells see the
    # neighbouring row's far end); "row_bounded" drops those wrapped cells.
    boundary: Boundary = "clipped"

    def __post_init__(self):
        _check_width(self.grid_width)
        check_ratio("tolerance", self.tolerance)
        check_ratio("empty_ratio", self.empty_ratio)
        check_ratio("kind_a_ratio", self.kind_a_ratio)
        check_boundary(self.boundary)

    @property
    def area(self) -> int:
        """Number of slots in the grid."""
        return self.grid_width * self.grid_width

    def replace(self, **changes) -> SimulationParameters:
        """Return a validated copy with the given fields changed."""
        try:
            return dc_replace(self, **changes)
        except TypeError as exc:
            raise InvalidParameter(str(exc)) from exc


def generate_initial_state(
    params: SimulationParameters,
    rng: np.random.Generator | None = None,
) -> Grid:
    """
    Populate a fresh grid by independent per-cell sampling.

    For each slot draw x ~ U[0, 1):
        x <= empty                          → EMPTY
        x <= empty + (1 - empty) * a_ratio  → A
        otherwise                           → B

    Counts are binomially distributed around the targets, not exact.

    Args:
        params: Validated run parameters
        rng: Random source (unseeded default_rng() if None)

    Returns:
        New grid of length grid_width²
    """
    if not isinstance(params, SimulationParameters):
        raise InvalidParameter(f"Expected SimulationParameters, got {type(params).__name__}")
    if rng is None:
        rng = np.random.default_rng()

    x = rng.random(params.area)
    a_threshold = params.empty_ratio + (1.0 - params.empty_ratio) * params.kind_a_ratio

    grid = np.full(params.area, Kind.B, dtype=GRID_DTYPE)
    grid[x <= a_threshold] = Kind.A
    grid[x <= params.empty_ratio] = Kind.EMPTY
    return grid


def make_grid(slots) -> Grid:
    """Build a grid from a sequence of Kind values (or their ints)."""
    values = list(slots)
    for s in values:
        if isinstance(s, bool) or not isinstance(s, Integral) or s not in (Kind.EMPTY, Kind.A, Kind.B):
            raise InvalidGrid(f"Grid slots must be EMPTY, A or B, got {s!r}")
    return np.asarray([int(s) for s in values], dtype=GRID_DTYPE)


def validate_grid(grid: Grid, grid_width: int) -> None:
    """Check length == width² and that every slot is a legal Kind."""
    _check_width(grid_width)
    if np.ndim(grid) != 1:
        raise InvalidGrid(f"Grid must be one-dimensional, got shape {np.shape(grid)}")
    if len(grid) != grid_width * grid_width:
        raise InvalidGrid(
            f"Grid has {len(grid)} slots, expected {grid_width * grid_width} for width {grid_width}"
        )
    if not np.isin(grid, (Kind.EMPTY, Kind.A, Kind.B)).all():
        raise InvalidGrid("Grid slots must be EMPTY, A or B")


def grid_equals(a: Grid, b: Grid) -> bool:
    """Slot-wise equality. Grids of different length are never equal."""
    return bool(np.array_equal(a, b))


def kind_at(grid: Grid, index: int) -> Kind:
    """Kind of a single slot. Negative indices are not counted from the end."""
    if not 0 <= index < len(grid):
        raise IndexError(f"Slot index {index} out of range for grid of {len(grid)} slots")
    return Kind(int(grid[index]))


def as_matrix(grid: Grid, grid_width: int) -> np.ndarray:
    """Read-only [rows, cols] view of a flat grid."""
    view = np.asarray(grid).reshape(grid_width, grid_width)
    view.flags.writeable = False
    return view
