"""
Neighbour sampling by flat-index arithmetic.

The 8 candidate neighbours of index i on a grid of width w are, in order:

    left, right, bottom-left, bottom, bottom-right, top-left, top, top-right
    i-1,  i+1,   i+w-1,       i+w,    i+w+1,        i-w-1,    i-w, i-w+1

Two boundary modes:
- "clipped": drop candidates outside [0, len(grid)) only. A cell on the
  left or right edge then sees cells at the far end of the adjacent rows.
  This is the reference behaviour and the default. On a 1-wide grid the
  diagonals land on the cell itself, which is kept too.
- "row_bounded": additionally drop candidates whose column falls off the
  row, so edges behave like a true non-wrapping grid.
"""

from __future__ import annotations

from segsim.core.grid import Grid, Boundary, check_boundary

# (row delta, col delta) per direction, in enumeration order
NEIGHBOR_OFFSETS = (
    ("left", 0, -1),
    ("right", 0, 1),
    ("bottom_left", 1, -1),
    ("bottom", 1, 0),
    ("bottom_right", 1, 1),
    ("top_left", -1, -1),
    ("top", -1, 0),
    ("top_right", -1, 1),
)


def neighbor_indices(
    index: int,
    size: int,
    grid_width: int,
    boundary: Boundary = "clipped",
) -> list[int]:
    """
    Indices of the neighbours of `index`, in enumeration order.

    Args:
        index: Subject slot
        size: Number of slots in the grid
        grid_width: Row length
        boundary: "clipped" or "row_bounded"

    Returns:
        0-8 indices, all within [0, size)
    """
    check_boundary(boundary)
    col = index % grid_width
    result = []
    for _, d_row, d_col in NEIGHBOR_OFFSETS:
        candidate = index + d_row * grid_width + d_col
        # Python would index negative values from the end
        if candidate < 0 or candidate >= size:
            continue
        if boundary == "row_bounded" and not 0 <= col + d_col < grid_width:
            continue
        result.append(candidate)
    return result


def get_neighbors(
    index: int,
    grid: Grid,
    grid_width: int,
    boundary: Boundary = "clipped",
) -> list[int]:
    """Slot values (not indices) of the neighbours of `index`."""
    return [int(grid[i]) for i in neighbor_indices(index, len(grid), grid_width, boundary)]
