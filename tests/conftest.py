"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def small_params():
    """Parameters for a small 10x10 grid with plenty of empty cells."""
    from segsim.core import SimulationParameters
    return SimulationParameters(
        grid_width=10,
        tolerance=0.3,
        empty_ratio=0.3,
        kind_a_ratio=0.5,
    )


@pytest.fixture
def default_params():
    """Reference configuration: 50x50, tolerance 0.7."""
    from segsim.core import SimulationParameters
    return SimulationParameters()


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
