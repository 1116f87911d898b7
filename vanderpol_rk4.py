import logging
import math
from typing import Iterator, NamedTuple, Sequence, Tuple

import numpy

logger = logging.getLogger(__name__)

# Absolute slack (scaled by max(1, t_end)) under which a remaining interval
# slightly larger than h is still taken as the final step.
_TIME_SLACK = 1e-12


class State(NamedTuple):
    """Oscillator state: position x and velocity y."""

    x: float
    y: float

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


def as_state(value: Sequence[float]) -> State:
    """Coerce any pair of numbers into a State."""
    if isinstance(value, State):
        return value
    if len(value) != 2:
        raise ValueError(f"State must have exactly 2 components, got {len(value)}")
    x, y = value
    return State(float(x), float(y))


def vdp(state: Sequence[float], mu: float) -> Tuple[float, float]:
    """
    Van der Pol vector field.

    dx/dt = y, dy/dt = mu * (1 - x^2) * y - x
    """
    x, y = state
    dxdt = y
    dydt = mu * (1 - x * x) * y - x
    return dxdt, dydt


def rk4_step(state: State, mu: float, h: float) -> State:
    """Advance state by exactly h using the classical Runge-Kutta scheme."""
    x, y = state

    k1x, k1y = vdp((x, y), mu)
    k2x, k2y = vdp((x + h / 2 * k1x, y + h / 2 * k1y), mu)
    k3x, k3y = vdp((x + h / 2 * k2x, y + h / 2 * k2y), mu)
    k4x, k4y = vdp((x + h * k3x, y + h * k3y), mu)

    return State(
        x + h / 6 * (k1x + 2 * k2x + 2 * k3x + k4x),
        y + h / 6 * (k1y + 2 * k2y + 2 * k3y + k4y),
    )


def check_step_size(h: float) -> None:
    if not math.isfinite(h) or h <= 0:
        raise ValueError(f"Invalid step size: {h}. Must be a finite number > 0")


def check_end_time(t_end: float) -> None:
    if not math.isfinite(t_end) or t_end < 0:
        raise ValueError(f"Invalid end time: {t_end}. Must be a finite number >= 0")


def _steps(state: State, mu: float, t_end: float, h: float) -> Iterator[Tuple[float, State]]:
    """
    Yield (t, state) after every step from t=0 up to exactly t_end.

    The last step is shortened to the remaining interval so the run never
    overshoots t_end.
    """
    slack = _TIME_SLACK * max(1.0, t_end)
    t = 0.0
    while True:
        remaining = t_end - t
        if remaining <= 0:
            return
        if remaining <= h + slack:
            state = rk4_step(state, mu, remaining)
            yield t_end, state
            return
        state = rk4_step(state, mu, h)
        t += h
        yield t, state


def integrate(v0: Sequence[float], mu: float, t_end: float, h: float = 0.01) -> State:
    """
    Integrate the Van der Pol system from t=0 to t_end and return the final state.

    Args:
        v0: Initial condition (x0, y0)
        mu: Damping coefficient
        t_end: End time, >= 0
        h: Step size, > 0

    Raises:
        ValueError: If h or t_end is out of range
    """
    check_step_size(h)
    check_end_time(t_end)
    state = as_state(v0)

    n_steps = 0
    for _, state in _steps(state, mu, t_end, h):
        n_steps += 1

    logger.debug(f"Integrated mu={mu} to t={t_end} in {n_steps} steps (h={h})")
    return state


def integrate_trajectory(
    v0: Sequence[float], mu: float, t_end: float, h: float = 0.01
) -> Tuple[numpy.ndarray, numpy.ndarray]:
    """
    Integrate like `integrate`, but record every visited state.

    Returns:
        times: array of shape (n+1,), starting at 0 and ending at t_end
        states: array of shape (n+1, 2) with columns x, y
    """
    check_step_size(h)
    check_end_time(t_end)
    state = as_state(v0)

    times: list = [0.0]
    states: list = [state]
    for t, state in _steps(state, mu, t_end, h):
        times.append(t)
        states.append(state)

    logger.debug(f"Recorded {len(times)} samples for mu={mu} up to t={t_end}")
    return numpy.array(times), numpy.array(states, dtype=float).reshape(-1, 2)
