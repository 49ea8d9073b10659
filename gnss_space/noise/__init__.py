"""Pseudorange noise models."""

from gnss_space.noise.gauss_markov import (
    MAX_SPINUP_STEPS,
    draw_spinup_steps,
    gauss_markov_step,
    spin_up,
    spinup_variance,
    stationary_variance,
)

__all__ = [
    "MAX_SPINUP_STEPS",
    "draw_spinup_steps",
    "gauss_markov_step",
    "spin_up",
    "spinup_variance",
    "stationary_variance",
]
