"""Second-order Gauss-Markov pseudorange error process.

Each satellite carries two states. The inner state ``prns1`` is a first-order
Gauss-Markov (AR(1)) process with decay ``exp(-betas2 * dt)`` driven by white
Gaussian noise of scale ``w``. The outer state ``prns`` accumulates its own
previous value scaled by ``betas1`` plus the previous inner state, and is the
additive pseudorange error seen by every receiver.

See J. Rankin, "An error model for sensor simulation GPS and differential GPS,"
IEEE Position Location and Navigation Symposium, 1994, pp. 260-266.
"""

from __future__ import annotations

import numpy as np

MAX_SPINUP_STEPS = 1000


def gauss_markov_step(
    prns: np.ndarray,
    prns1: np.ndarray,
    betas1: np.ndarray,
    betas2: np.ndarray,
    w: np.ndarray,
    dt: float,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Advance the outer and inner noise states by one step of ``dt`` seconds."""

    # The outer state is driven by the inner state of the previous step.
    prns_new = prns * betas1 + prns1
    prns1_new = prns1 * np.exp(-betas2 * dt) + w * rng.standard_normal(prns1.shape[0])
    return prns_new, prns1_new


def draw_spinup_steps(rng: np.random.Generator) -> int:
    """Draw a spin-up length uniformly from ``{1, ..., MAX_SPINUP_STEPS}``."""

    return int(rng.integers(1, MAX_SPINUP_STEPS + 1))


def spin_up(
    prns: np.ndarray,
    prns1: np.ndarray,
    betas1: np.ndarray,
    betas2: np.ndarray,
    w: np.ndarray,
    dt: float,
    rng: np.random.Generator,
    steps: int | None = None,
) -> tuple[np.ndarray, np.ndarray, int]:
    """Run the recursion a random number of times so the states approach stationarity.

    Returns the final states and the number of steps performed.
    """

    if steps is None:
        steps = draw_spinup_steps(rng)
    steps = int(steps)
    if not 1 <= steps <= MAX_SPINUP_STEPS:
        raise ValueError(f"spin-up steps must be in [1, {MAX_SPINUP_STEPS}], got {steps}.")
    for _ in range(steps):
        prns, prns1 = gauss_markov_step(prns, prns1, betas1, betas2, w, dt, rng)
    return prns, prns1, steps


def stationary_variance(w: float | np.ndarray, betas2: float | np.ndarray, dt: float) -> float | np.ndarray:
    """Long-run variance of the inner state ``prns1``."""

    variance = np.asarray(w, dtype=float) ** 2 / (1.0 - np.exp(-2.0 * np.asarray(betas2, dtype=float) * dt))
    return float(variance) if variance.ndim == 0 else variance


def spinup_variance(w: float, betas2: float, dt: float, steps: int) -> float:
    """Variance of ``prns1`` after ``steps`` recursions from a zero state."""

    decay_sq = float(np.exp(-2.0 * betas2 * dt))
    return float(w**2 * (1.0 - decay_sq**steps) / (1.0 - decay_sq))
