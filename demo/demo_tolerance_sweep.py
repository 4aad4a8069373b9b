"""
Demo: How tolerance shapes the final segregation.

For each tolerance in a sweep, run the same seeded grid to equilibrium
(or a tick budget) and record:
- ticks taken
- final similarity index
- largest same-kind cluster

Lower tolerance means agents move for fewer differing neighbours, which
should drive similarity up.
"""

import numpy as np

from segsim import SimulationDriver, SimulationParameters
from segsim.analysis import segregation_summary


def main():
    """Run the tolerance sweep."""
    print("=" * 60)
    print("Tolerance Sweep")
    print("=" * 60)

    width = 30
    max_ticks = 300
    tolerances = np.round(np.arange(0.2, 1.01, 0.1), 2)

    print(f"\n   Grid: {width}x{width}, empty 20%, A 50%, budget {max_ticks} ticks\n")
    print(f"   {'tol':>5} {'ticks':>6} {'equil':>6} {'similarity':>11} {'largest':>8}")
    print("   " + "-" * 40)

    for tol in tolerances:
        params = SimulationParameters(
            grid_width=width,
            tolerance=float(tol),
            empty_ratio=0.2,
            kind_a_ratio=0.5,
        )
        driver = SimulationDriver(params=params, seed=7)
        stats = driver.run(max_ticks)
        summary = segregation_summary(driver.grid, width, params.boundary)
        largest = max(summary.largest_cluster_a, summary.largest_cluster_b)

        print(
            f"   {tol:5.1f} {stats['tick_count']:6d} {str(stats['at_equilibrium']):>6} "
            f"{summary.similarity:11.4f} {largest:8d}"
        )


if __name__ == "__main__":
    main()
