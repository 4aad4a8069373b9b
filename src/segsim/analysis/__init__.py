"""
Analysis layer: derived quantities for display and comparison.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- census: slot counts per kind, unhappy agents
- segregation: similarity index and same-kind cluster sizes
"""

from segsim.analysis.census import (
    CellCensus,
    census,
    unhappy_mask,
    count_unhappy,
    unhappy_fraction,
)
from segsim.analysis.segregation import (
    SegregationSummary,
    similarity_index,
    cluster_sizes,
    segregation_summary,
)

__all__ = [
    "CellCensus",
    "census",
    "unhappy_mask",
    "count_unhappy",
    "unhappy_fraction",
    "SegregationSummary",
    "similarity_index",
    "cluster_sizes",
    "segregation_summary",
]
