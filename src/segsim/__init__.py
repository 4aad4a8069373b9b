"""
segsim: Schelling's Model of Segregation

A grid of agents of two kinds (plus empty cells). Every tick, agents
whose share of differing neighbours exceeds a tolerance move to a random
empty cell. Runs until nobody moves (equilibrium) or until stopped.

Core concepts:
- Grid is a flat array of slots, index = row * width + col
- Neighbours are sampled by index arithmetic, clipped to the grid
- Unhappy: different / neighbours > tolerance
- Equilibrium: a tick returns a grid equal to its input
"""

from segsim.core import (
    Kind,
    SimulationParameters,
    TickResult,
    generate_initial_state,
    grid_equals,
    tick,
    SimulationError,
    InvalidParameter,
    InvalidGrid,
    NoEmptySlotAvailable,
)
from segsim.driver import SimulationDriver, TickScheduler

__version__ = "0.1.0"

__all__ = [
    "Kind",
    "SimulationParameters",
    "TickResult",
    "generate_initial_state",
    "grid_equals",
    "tick",
    "SimulationError",
    "InvalidParameter",
    "InvalidGrid",
    "NoEmptySlotAvailable",
    "SimulationDriver",
    "TickScheduler",
]
