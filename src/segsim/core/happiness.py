"""
Happiness: does an agent want to move?

    different = occupied neighbours whose kind differs from the agent
    fraction  = different / (all sampled neighbours, empty ones included)
    unhappy   ⇔ fraction > tolerance

A cell with no neighbours at all has an undefined fraction (0/0). It is
never unhappy, matching IEEE semantics where NaN > x is false.
"""

from __future__ import annotations
from typing import Sequence

from segsim.core.grid import Kind


def count_different(kind: int, neighbors: Sequence[int]) -> int:
    """Number of occupied neighbours of a different kind."""
    return sum(1 for n in neighbors if n != Kind.EMPTY and n != kind)


def different_fraction(kind: int, neighbors: Sequence[int]) -> float:
    """Share of differing neighbours; nan when there are no neighbours."""
    if len(neighbors) == 0:
        return float("nan")
    return count_different(kind, neighbors) / len(neighbors)


def is_unhappy(kind: int, neighbors: Sequence[int], tolerance: float) -> bool:
    """True if the agent's share of differing neighbours exceeds tolerance."""
    if len(neighbors) == 0:
        return False
    return different_fraction(kind, neighbors) > tolerance
