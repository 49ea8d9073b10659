"""Simplified GPS-like constellation used to synthesise orbit tables."""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil

import numpy as np

from gnss_space.sat.orbit import OrbitTable

MU_EARTH = 3.986004418e14
OMEGA_EARTH = 7.2921159e-5

# SP3 precise orbit products are tabulated every 15 minutes.
SP3_INTERVAL_S = 900.0


@dataclass(frozen=True)
class SimpleGpsConfig:
    """Configuration for the simplified GPS constellation."""

    num_sats: int = 32
    num_planes: int = 6
    radius_m: float = 26_560_000.0
    inclination_deg: float = 55.0
    seed: int | None = 0


def _rot_z(angle_rad: float) -> np.ndarray:
    cos_a = np.cos(angle_rad)
    sin_a = np.sin(angle_rad)
    return np.array(
        [
            [cos_a, -sin_a, 0.0],
            [sin_a, cos_a, 0.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=float,
    )


def _rot_x(angle_rad: float) -> np.ndarray:
    cos_a = np.cos(angle_rad)
    sin_a = np.sin(angle_rad)
    return np.array(
        [
            [1.0, 0.0, 0.0],
            [0.0, cos_a, -sin_a],
            [0.0, sin_a, cos_a],
        ],
        dtype=float,
    )


class SimpleGpsConstellation:
    """Deterministic GPS-like constellation with circular orbits, PRNs 1..num_sats."""

    def __init__(self, config: SimpleGpsConfig | None = None) -> None:
        self.config = config or SimpleGpsConfig()
        if self.config.num_sats <= 0:
            raise ValueError("num_sats must be > 0.")
        rng = np.random.default_rng(self.config.seed)
        self._num_sats = self.config.num_sats
        self._num_planes = max(1, min(self.config.num_planes, self._num_sats))
        self._radius_m = self.config.radius_m
        self._mean_motion = float(np.sqrt(MU_EARTH / self._radius_m**3))

        plane_raan = np.linspace(0.0, 2.0 * np.pi, self._num_planes, endpoint=False)
        plane_offsets = rng.uniform(0.0, 2.0 * np.pi, size=self._num_planes)
        sats_per_plane = ceil(self._num_sats / self._num_planes)
        inclination = _rot_x(np.deg2rad(self.config.inclination_deg))
        self._rot_plane = np.array(
            [_rot_z(plane_raan[i % self._num_planes]) @ inclination for i in range(self._num_sats)],
            dtype=float,
        )
        self._mean_anom = np.array(
            [
                (2.0 * np.pi * (i // self._num_planes) / sats_per_plane) + plane_offsets[i % self._num_planes]
                for i in range(self._num_sats)
            ],
            dtype=float,
        )

    @property
    def prns(self) -> tuple[int, ...]:
        return tuple(range(1, self._num_sats + 1))

    def positions(self, t: float) -> np.ndarray:
        """Return ECEF positions (num_sats x 3) at GPS time ``t``."""

        theta = self._mean_motion * t + self._mean_anom
        r_orb = np.stack(
            [self._radius_m * np.cos(theta), self._radius_m * np.sin(theta), np.zeros_like(theta)],
            axis=1,
        )
        r_eci = np.einsum("nij,nj->ni", self._rot_plane, r_orb)
        return r_eci @ _rot_z(OMEGA_EARTH * t).T


def build_synthetic_orbit_table(
    config: SimpleGpsConfig | None = None,
    *,
    t_begin: float = 1_400_000_000.0,
    duration_s: float = 86_400.0,
    interval_s: float = SP3_INTERVAL_S,
) -> OrbitTable:
    """Sample the simplified constellation on an SP3-like grid."""

    if duration_s <= 0.0 or interval_s <= 0.0:
        raise ValueError("duration_s and interval_s must be > 0.")
    constellation = SimpleGpsConstellation(config)
    num_epochs = int(np.floor(duration_s / interval_s)) + 1
    times = t_begin + interval_s * np.arange(num_epochs, dtype=float)
    positions = np.stack([constellation.positions(float(t)) for t in times], axis=0)
    return OrbitTable(times=times, svs=constellation.prns, positions=positions)
