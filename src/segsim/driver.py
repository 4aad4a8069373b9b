"""
Driver: owns the grid between ticks.

SimulationDriver holds the current grid, its parameters, a running flag
and the tick/unhappy counters. Callers decide when to tick; the driver
decides what a tick means for its state:

- reset(): new random grid, counters zeroed, stopped
- step(): one tick while running; stops by itself at equilibrium
- set_parameter(): tolerance applies live, population changes reset

TickScheduler is an optional timer that calls step() after a fixed delay,
one tick at a time, and cancels the pending tick on stop().
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import threading
from typing import Any, Callable

import numpy as np

from segsim.analysis.census import CellCensus, census, unhappy_fraction
from segsim.core.errors import InvalidParameter, NoEmptySlotAvailable
from segsim.core.grid import (
    Grid,
    Kind,
    SimulationParameters,
    as_matrix,
    generate_initial_state,
    grid_equals,
    kind_at,
)
from segsim.core.tick import TickResult, tick

logger = logging.getLogger(__name__)

DEFAULT_TICK_DELAY = 0.3  # seconds between the end of one tick and the next

LIVE_PARAMETERS = ("tolerance",)
POPULATION_PARAMETERS = ("empty_ratio", "kind_a_ratio", "grid_width")


@dataclass(eq=False)
class SimulationDriver:
    """
    Single owner of a running simulation.

    Randomness comes from `rng` if given, else from default_rng(seed);
    passing both is an error.
    The same generator feeds both grid generation and relocation, so a
    seeded driver replays identically.
    """

    params: SimulationParameters = field(default_factory=SimulationParameters)
    seed: int | None = None
    rng: np.random.Generator | None = None

    # Simulation state
    running: bool = field(default=False, init=False)
    tick_count: int = field(default=0, init=False)
    unhappy_count: int = field(default=0, init=False)
    at_equilibrium: bool = field(default=False, init=False)
    _grid: Grid = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.params, SimulationParameters):
            raise InvalidParameter(
                f"Expected SimulationParameters, got {type(self.params).__name__}"
            )
        if self.seed is not None and self.rng is not None:
            raise InvalidParameter("Pass either seed or rng, not both")
        if self.rng is None:
            self.rng = np.random.default_rng(self.seed)
        self.reset()

    # ─── lifecycle ────────────────────────────────────────────────────

    def reset(self) -> None:
        """Stop, regenerate the grid and zero the counters."""
        self.running = False
        self._grid = generate_initial_state(self.params, self.rng)
        self.tick_count = 0
        self.unhappy_count = 0
        self.at_equilibrium = False

        c = census(self._grid)
        logger.info(
            "Reset grid: total=%d A=%d B=%d empty=%d",
            c.total, c.kind_a, c.kind_b, c.empty,
        )

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        self.running = False

    def step(self) -> TickResult | None:
        """
        Advance one tick if running.

        Returns None (and touches nothing) when stopped. At equilibrium the
        driver stops itself and leaves the counters as they were.

        Raises:
            NoEmptySlotAvailable: the driver is stopped and its state kept
        """
        if not self.running:
            return None

        try:
            result = tick(
                self._grid,
                self.params.tolerance,
                self.params.grid_width,
                rng=self.rng,
                boundary=self.params.boundary,
            )
        except NoEmptySlotAvailable:
            self.running = False
            raise

        if grid_equals(self._grid, result.new_grid):
            self.running = False
            self.at_equilibrium = True
            logger.info("Equilibrium reached after %d ticks", self.tick_count)
            return result

        self._grid = result.new_grid
        self.at_equilibrium = False
        self.tick_count += 1
        self.unhappy_count = result.unhappy_count
        logger.debug("Tick %d: %d unhappy", self.tick_count, self.unhappy_count)
        return result

    def run(self, max_ticks: int) -> dict:
        """
        Start and step until equilibrium or `max_ticks` steps.

        Returns:
            Statistics dictionary
        """
        if max_ticks < 0:
            raise InvalidParameter(f"max_ticks must be non-negative, got {max_ticks}")

        self.start()
        n_steps = 0
        while self.running and n_steps < max_ticks:
            self.step()
            n_steps += 1
        self.stop()

        return {
            "n_steps": n_steps,
            "tick_count": self.tick_count,
            "unhappy_count": self.unhappy_count,
            "unhappy_fraction": self.unhappy_fraction,
            "at_equilibrium": self.at_equilibrium,
        }

    # ─── parameters ───────────────────────────────────────────────────

    def set_parameter(self, name: str, value: Any) -> None:
        """
        Change one parameter.

        Tolerance applies to the next tick. empty_ratio, kind_a_ratio and
        grid_width stop the simulation and regenerate the grid.
        Invalid names or values raise InvalidParameter and change nothing.
        """
        if name not in LIVE_PARAMETERS + POPULATION_PARAMETERS:
            raise InvalidParameter(f"Unknown parameter: {name!r}")

        new_params = self.params.replace(**{name: value})
        if name in LIVE_PARAMETERS:
            self.params = new_params
            return

        if self.running:
            logger.warning("Changing %s while running; simulation stopped and reset", name)
        self.params = new_params
        self.reset()

    def set_tolerance(self, value: float) -> None:
        self.set_parameter("tolerance", value)

    def set_empty_ratio(self, value: float) -> None:
        self.set_parameter("empty_ratio", value)

    def set_kind_a_ratio(self, value: float) -> None:
        self.set_parameter("kind_a_ratio", value)

    # ─── read accessors ───────────────────────────────────────────────

    @property
    def grid(self) -> Grid:
        """Copy of the current grid."""
        return self._grid.copy()

    def kind_at(self, index: int) -> Kind:
        return kind_at(self._grid, index)

    def as_matrix(self) -> np.ndarray:
        """Read-only [rows, cols] view of the current grid, for colouring."""
        return as_matrix(self._grid, self.params.grid_width)

    @property
    def unhappy_fraction(self) -> float:
        """Agents that moved on the last tick, as a share of all slots."""
        return unhappy_fraction(self.unhappy_count, len(self._grid))

    def census(self) -> CellCensus:
        return census(self._grid)


class TickScheduler:
    """
    Runs a driver's ticks on a timer.

    One tick is pending at most. Each tick is scheduled `delay` seconds
    after the previous one completed. All driver access from here happens
    under one lock, so the driver never sees two ticks at once.

    stop() cancels the pending timer and bumps an epoch; a timer that
    fired but had not yet acquired the lock sees the old epoch and
    returns without touching the driver.
    """

    def __init__(
        self,
        driver: SimulationDriver,
        delay: float = DEFAULT_TICK_DELAY,
        on_tick: Callable[[SimulationDriver, TickResult], None] | None = None,
    ):
        if delay < 0:
            raise InvalidParameter(f"delay must be non-negative, got {delay}")
        self.driver = driver
        self.delay = delay
        self.on_tick = on_tick
        self.last_error: BaseException | None = None

        self._lock = threading.RLock()
        self._timer: threading.Timer | None = None
        self._epoch = 0
        self._idle = threading.Event()
        self._idle.set()

    @property
    def active(self) -> bool:
        """True while a tick is pending or running."""
        return not self._idle.is_set()

    def start(self) -> None:
        """Start the driver and schedule the first tick."""
        with self._lock:
            if self._timer is not None:
                return
            self.last_error = None
            self.driver.start()
            self._schedule()

    def stop(self) -> None:
        """Stop the driver; the pending tick, if any, never runs."""
        with self._lock:
            self._epoch += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self.driver.stop()
            self._idle.set()

    def reset(self) -> None:
        with self._lock:
            self.stop()
            self.driver.reset()

    def set_parameter(self, name: str, value: Any) -> None:
        """Driver.set_parameter under the lock; stops scheduling on reset."""
        with self._lock:
            self.driver.set_parameter(name, value)
            if not self.driver.running:
                self.stop()

    def join(self, timeout: float | None = None) -> bool:
        """Wait until no tick is pending. Returns False on timeout."""
        return self._idle.wait(timeout)

    def _schedule(self) -> None:
        # Caller holds the lock
        timer = threading.Timer(self.delay, self._fire, args=(self._epoch,))
        timer.daemon = True
        self._timer = timer
        self._idle.clear()
        timer.start()

    def _fire(self, epoch: int) -> None:
        with self._lock:
            if epoch != self._epoch:
                return
            self._timer = None

            try:
                result = self.driver.step()
                if result is not None and self.on_tick is not None:
                    self.on_tick(self.driver, result)
            except Exception as exc:
                logger.exception("Scheduled tick failed")
                self.last_error = exc
                self.driver.stop()
                self._idle.set()
                return

            # on_tick may already have restarted us through start()
            if self.driver.running and self._timer is None:
                self._schedule()
            else:
                self._idle.set()
