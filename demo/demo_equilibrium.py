"""
Demo: Run Schelling's model from a random grid to equilibrium.

The demo:
1. Sets up a driver with the reference parameters (50x50, tolerance 0.7)
2. Ticks until no agent moves, or a tick budget runs out
3. Reports unhappy agents per tick
4. Compares segregation before and after
"""

import logging

from segsim import SimulationDriver, SimulationParameters
from segsim.analysis import segregation_summary


def print_summary(label, summary):
    print(f"   {label}:")
    print(f"     Similarity index:    {summary.similarity:.4f}")
    print(f"     Clusters (A / B):    {summary.n_clusters_a} / {summary.n_clusters_b}")
    print(f"     Largest (A / B):     {summary.largest_cluster_a} / {summary.largest_cluster_b}")
    print(f"     Mean cluster size:   {summary.mean_cluster_size:.2f}")


def main():
    """Run the equilibrium demo."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Schelling's Model of Segregation")
    print("=" * 60)

    print("\n1. Setting up driver...")
    params = SimulationParameters(
        grid_width=50,
        tolerance=0.7,
        empty_ratio=0.1,
        kind_a_ratio=0.2,
    )
    driver = SimulationDriver(params=params, seed=42)
    width = params.grid_width

    print(f"   Grid size: {width}x{width}")
    print(f"   Tolerance: {params.tolerance}")
    print(f"   Empty: {params.empty_ratio:.0%}, A among occupied: {params.kind_a_ratio:.0%}")

    before = segregation_summary(driver.grid, width, params.boundary)

    print("\n2. Running to equilibrium...")
    max_ticks = 500
    driver.start()
    while driver.running and driver.tick_count < max_ticks:
        driver.step()
        if driver.running:
            print(
                f"   Tick {driver.tick_count:4d}: "
                f"{driver.unhappy_count:5d} unhappy ({driver.unhappy_fraction:.1%})"
            )

    if driver.at_equilibrium:
        print(f"\n   Equilibrium after {driver.tick_count} ticks")
    else:
        driver.stop()
        print(f"\n   No equilibrium within {max_ticks} ticks")

    print("\n3. Segregation before and after:")
    after = segregation_summary(driver.grid, width, params.boundary)
    print_summary("Initial", before)
    print_summary("Final", after)


if __name__ == "__main__":
    main()
