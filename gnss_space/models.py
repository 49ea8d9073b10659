"""Core data models and interfaces for the GPS space segment."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Hashable, Sequence

import numpy as np

if TYPE_CHECKING:
    from gnss_space.sat.orbit import OrbitTable

SvId = Hashable


@dataclass(frozen=True)
class SegmentEpoch:
    """Snapshot of the shared noise and geometry state at one epoch."""

    t: float
    gps_time: float
    svs: tuple[SvId, ...]
    prns: np.ndarray
    prns1: np.ndarray
    svspos: np.ndarray


class OrbitProvider(ABC):
    """Interface for interpolated satellite orbit sources."""

    @abstractmethod
    def prepare(self, svs: Sequence[SvId]) -> "OrbitTable":
        """Build the interpolation structure for the given satellites."""

    @abstractmethod
    def valid_interval(self) -> tuple[float, float]:
        """Return the ``(begin, end)`` GPS times the provider can serve."""

    @abstractmethod
    def position_at(self, sv: SvId, t: float) -> np.ndarray:
        """Return the ECEF position (m) of ``sv`` at GPS time ``t``."""
