"""
Segregation measures for a grid.

- similarity_index: how alike an agent's occupied neighbours are, on average
- cluster_sizes: sizes of 8-connected same-kind patches

Patches are found with scipy.ndimage.label on the 2D view of the grid,
so they never wrap across rows whatever the engine's boundary mode.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np
from scipy.ndimage import label

from segsim.core.grid import Grid, Kind, Boundary
from segsim.core.neighbors import get_neighbors

# 8-connectivity
MOORE_STRUCTURE = np.ones((3, 3), dtype=int)


@dataclass
class SegregationSummary:
    """Segregation measures of one grid."""

    similarity: float  # Mean share of same-kind occupied neighbours
    n_clusters_a: int
    n_clusters_b: int
    largest_cluster_a: int
    largest_cluster_b: int
    mean_cluster_size: float  # Over clusters of both kinds


def similarity_index(
    grid: Grid,
    grid_width: int,
    boundary: Boundary = "clipped",
) -> float:
    """
    Mean over agents of (same-kind neighbours / occupied neighbours).

    Agents with no occupied neighbour are skipped. Returns nan if no
    agent has one.
    """
    shares = []
    for index in np.flatnonzero(grid != Kind.EMPTY):
        kind = int(grid[index])
        occupied = [n for n in get_neighbors(int(index), grid, grid_width, boundary) if n != Kind.EMPTY]
        if occupied:
            shares.append(sum(1 for n in occupied if n == kind) / len(occupied))
    if not shares:
        return float("nan")
    return float(np.mean(shares))


def cluster_sizes(grid: Grid, grid_width: int, kind: Kind) -> np.ndarray:
    """Sizes of the 8-connected patches of `kind`, largest first."""
    mask = np.asarray(grid).reshape(grid_width, grid_width) == kind
    labels, n = label(mask, structure=MOORE_STRUCTURE)
    if n == 0:
        return np.zeros(0, dtype=np.int64)
    sizes = np.bincount(labels.ravel())[1:]
    return np.sort(sizes)[::-1]


def segregation_summary(
    grid: Grid,
    grid_width: int,
    boundary: Boundary = "clipped",
) -> SegregationSummary:
    """Compute all segregation measures at once."""
    sizes_a = cluster_sizes(grid, grid_width, Kind.A)
    sizes_b = cluster_sizes(grid, grid_width, Kind.B)
    all_sizes = np.concatenate([sizes_a, sizes_b])

    return SegregationSummary(
        similarity=similarity_index(grid, grid_width, boundary),
        n_clusters_a=int(sizes_a.size),
        n_clusters_b=int(sizes_b.size),
        largest_cluster_a=int(sizes_a[0]) if sizes_a.size else 0,
        largest_cluster_b=int(sizes_b[0]) if sizes_b.size else 0,
        mean_cluster_size=float(all_sizes.mean()) if all_sizes.size else 0.0,
    )
