"""GPS space segment with second-order Gauss-Markov pseudorange noise.

The running assumption is that all receivers of a run are approximately
co-located, so pseudorange errors to the same satellite are strongly correlated
between receivers. The segment therefore owns a single ``SharedNoiseState`` that
it attaches to the run's ``SimState``; every receiver reads the same noise
vectors and satellite positions from there.

At each epoch the satellite positions are interpolated from a tabulated orbit
and the additive pseudorange errors are advanced by one step of the
``gnss_space.noise.gauss_markov`` recursion.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

import numpy as np

from gnss_space.config import SpaceSegmentConfig
from gnss_space.exceptions import NotInitialized, TimeOutOfBounds
from gnss_space.models import OrbitProvider, SegmentEpoch
from gnss_space.runtime.steppable import Steppable
from gnss_space.sat.orbit import OrbitTable, load_orbit_provider
from gnss_space.state import SharedNoiseState, SimState
from gnss_space.utils.logging import get_logger

logger = get_logger(__name__)


class SegmentStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class GpsSpaceSegmentGM2(Steppable):
    """Space segment whose pseudorange errors follow a second-order Gauss-Markov process.

    Example:

        state = SimState.from_seed(0)
        segment = GpsSpaceSegmentGM2(
            {
                "dt": 0.2,
                "on": True,
                "tStart": 0,
                "PR_BETA2": 4,
                "PR_BETA1": 1.005,
                "PR_SIGMA": 0.003,
                "orbitfile": "orbits.npz",
                "svs": [3, 5, 6, 7, 13],
            },
            state,
        )
        segment.reset()
        state.gps_space_segment.prns  # shared pseudorange errors
    """

    def __init__(self, params: Mapping[str, Any] | SpaceSegmentConfig, state: SimState) -> None:
        config = params if isinstance(params, SpaceSegmentConfig) else SpaceSegmentConfig.from_params(params)
        super().__init__(state, config.dt, active=config.on)
        self.config = config
        self.t_start = config.t_start
        self.random_t_start = config.random_t_start
        self.status = SegmentStatus.UNINITIALIZED

        self.orbits: OrbitProvider = load_orbit_provider(config.orbitfile)
        self.orbit_table: OrbitTable = self.orbits.prepare(config.svs)

        if state.gps_space_segment is not None:
            logger.debug("replacing the existing shared space segment state")
        self.shared = SharedNoiseState(
            config.svs,
            beta1=config.pr_beta1,
            beta2=config.pr_beta2,
            sigma=config.pr_sigma,
        )
        state.gps_space_segment = self.shared
        logger.info(
            "GPS space segment: %d satellites, PR_BETA1=%g PR_BETA2=%g PR_SIGMA=%g, dt=%g, tStart=%s",
            self.shared.nsv,
            config.pr_beta1,
            config.pr_beta2,
            config.pr_sigma,
            config.dt,
            "random" if self.random_t_start else f"{config.t_start:.1f}",
        )

    @property
    def gps_time(self) -> float:
        """Absolute GPS time of the current simulation epoch."""
        return self.t_start + self.state.t

    def reset(self) -> None:
        """Pick the time origin, spin up the noise model and compute initial positions."""

        self.status = SegmentStatus.UNINITIALIZED
        begin, end = self.orbits.valid_interval()
        if self.random_t_start:
            self.t_start = begin + float(self.state.rng.random()) * (end - begin)
        if self.t_start < begin or self.t_start > end:
            raise TimeOutOfBounds(self.t_start, begin, end, what="GPS start time")

        svspos = self._positions_at(self.gps_time)
        self.shared.zero_noise()
        steps = self.shared.spin_up(self.dt, self.state.rng)
        self.shared.set_positions(svspos)

        self.status = SegmentStatus.READY
        self._mark_updated()
        logger.debug("space segment reset at GPS time %.3f after %d spin-up steps", self.gps_time, steps)

    def update(self) -> None:
        """Propagate the noise state one step and refresh satellite positions.

        Called by ``step()`` once per ``dt`` of simulation time while the segment
        is on; not meant to be called directly by receivers. A failure leaves
        the shared state untouched and the segment uninitialized.
        """

        if self.status is not SegmentStatus.READY:
            raise NotInitialized("GPS space segment")
        try:
            svspos = self._positions_at(self.gps_time)
        except TimeOutOfBounds:
            self.status = SegmentStatus.UNINITIALIZED
            raise
        self.shared.advance(self.dt, self.state.rng)
        self.shared.set_positions(svspos)

    def snapshot(self) -> SegmentEpoch:
        return self.shared.snapshot(self.state.t, self.gps_time)

    def _positions_at(self, gps_time: float) -> np.ndarray:
        svspos = np.empty((3, self.shared.nsv), dtype=float)
        for idx, sv in enumerate(self.shared.svs):
            svspos[:, idx] = self.orbits.position_at(sv, gps_time)
        return svspos
