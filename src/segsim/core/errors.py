"""Errors raised by the simulation engine."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for all engine errors."""


class InvalidParameter(SimulationError, ValueError):
    """A parameter is out of range or unknown. Never clamped."""


class InvalidGrid(InvalidParameter):
    """A grid does not match its width or holds an illegal slot value."""


class NoEmptySlotAvailable(SimulationError, RuntimeError):
    """An unhappy agent has nowhere to move."""

    def __init__(self, index: int):
        super().__init__(f"No empty slot available to relocate agent at index {index}")
        self.index = index
