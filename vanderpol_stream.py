"""
Streaming Van der Pol integration for live views.

A TrajectoryStream is stepped once per animation tick and keeps the most
recent states in a bounded history used to draw the trail.
"""

import logging
from collections import deque
from numbers import Integral
from typing import Deque, NamedTuple, Sequence, Tuple

import numpy

from vanderpol_rk4 import State, as_state, check_step_size, rk4_step

logger = logging.getLogger(__name__)

DEFAULT_DT = 0.05
DEFAULT_CAPACITY = 500


class Sample(NamedTuple):
    """A state tagged with the stream time it was produced at."""

    t: float
    x: float
    y: float

    @property
    def state(self) -> State:
        return State(self.x, self.y)


class TrajectoryStream:
    """
    Fixed-step RK4 integration driven by an external clock.

    Args:
        state: Starting point (x, y)
        mu: Damping coefficient
        h: Step size used by every call to advance
        capacity: Maximum number of samples kept in the history
    """

    def __init__(
        self,
        state: Sequence[float],
        mu: float = 1.0,
        h: float = DEFAULT_DT,
        capacity: int = DEFAULT_CAPACITY,
    ):
        check_step_size(h)
        if isinstance(capacity, bool) or not isinstance(capacity, Integral) or capacity <= 0:
            raise ValueError(f"Invalid capacity: {capacity}. Must be a positive integer")

        self._state = as_state(state)
        self._mu = float(mu)
        self._h = float(h)
        self._t = 0.0
        self._history: Deque[Sample] = deque(maxlen=int(capacity))

    @property
    def state(self) -> State:
        return self._state

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def h(self) -> float:
        return self._h

    @property
    def time(self) -> float:
        return self._t

    @property
    def capacity(self) -> int:
        return self._history.maxlen

    @property
    def history(self) -> Tuple[Sample, ...]:
        """Snapshot of the history, oldest sample first."""
        return tuple(self._history)

    def history_array(self) -> numpy.ndarray:
        """History as an (n, 3) array with columns t, x, y."""
        if not self._history:
            return numpy.empty((0, 3))
        return numpy.array(self._history, dtype=float)

    def __len__(self) -> int:
        return len(self._history)

    def advance(self, n_steps: int = 1) -> State:
        """
        Take n_steps RK4 steps of size h, recording each new state.

        Once the history is full, every new sample evicts the oldest one.
        """
        if isinstance(n_steps, bool) or not isinstance(n_steps, Integral) or n_steps < 0:
            raise ValueError(f"Invalid step count: {n_steps}. Must be a non-negative integer")

        for _ in range(n_steps):
            state = rk4_step(self._state, self._mu, self._h)
            self._t += self._h
            self._state = state
            self._history.append(Sample(self._t, state.x, state.y))

        return self._state

    def reseed(self, state: Sequence[float], clear_history: bool = True) -> None:
        """Restart from a new state at t=0, optionally dropping the trail."""
        self._state = as_state(state)
        self._t = 0.0
        if clear_history:
            self._history.clear()
        logger.debug(f"Reseeded at {self._state} (clear_history={clear_history})")

    def set_parameter(self, mu: float) -> None:
        """Use a new damping coefficient for subsequent steps."""
        self._mu = float(mu)

    def clear_history(self) -> None:
        self._history.clear()
