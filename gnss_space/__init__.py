"""GPS space segment with shared Gauss-Markov pseudorange noise."""

from gnss_space.config import SimConfig, SpaceSegmentConfig
from gnss_space.exceptions import (
    InvalidParameter,
    MissingParameter,
    NotInitialized,
    OrbitFileError,
    SpaceSegmentError,
    TimeOutOfBounds,
)
from gnss_space.segment import GpsSpaceSegmentGM2
from gnss_space.state import SharedNoiseState, SimState

__all__ = [
    "GpsSpaceSegmentGM2",
    "InvalidParameter",
    "MissingParameter",
    "NotInitialized",
    "OrbitFileError",
    "SharedNoiseState",
    "SimConfig",
    "SimState",
    "SpaceSegmentConfig",
    "SpaceSegmentError",
    "TimeOutOfBounds",
    "noise",
    "runtime",
    "sat",
    "utils",
]
