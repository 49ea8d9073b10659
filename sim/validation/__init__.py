"""Validation helpers for space segment simulations."""

from sim.validation.stationarity import StationarityReport, expected_reset_variance, run_stationarity_check

__all__ = [
    "StationarityReport",
    "expected_reset_variance",
    "run_stationarity_check",
]
