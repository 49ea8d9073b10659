"""Simulation run state and the noise state shared by every receiver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from gnss_space.models import SegmentEpoch, SvId
from gnss_space.noise.gauss_markov import gauss_markov_step, spin_up


def _readonly(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class SharedNoiseState:
    """Per-satellite pseudorange noise states and positions for the current epoch.

    One instance exists per simulation run. Receivers read it through the
    read-only array properties; only the space segment's ``reset``/``update``
    write to it, always in place so that the arrays never change size or order.
    """

    def __init__(
        self,
        svs: Sequence[SvId],
        beta1: float,
        beta2: float,
        sigma: float,
    ) -> None:
        self._svs = tuple(svs)
        nsv = len(self._svs)
        self._index = {sv: idx for idx, sv in enumerate(self._svs)}
        self._betas1 = np.full(nsv, 1.0 / beta1, dtype=float)
        self._betas2 = np.full(nsv, 1.0 / beta2, dtype=float)
        self._w = np.full(nsv, float(sigma), dtype=float)
        self._prns = np.zeros(nsv, dtype=float)
        self._prns1 = np.zeros(nsv, dtype=float)
        self._svspos = np.zeros((3, nsv), dtype=float)
        self.last_spinup_steps = 0

    @property
    def svs(self) -> tuple[SvId, ...]:
        return self._svs

    @property
    def nsv(self) -> int:
        return len(self._svs)

    @property
    def betas1(self) -> np.ndarray:
        return _readonly(self._betas1)

    @property
    def betas2(self) -> np.ndarray:
        return _readonly(self._betas2)

    @property
    def w(self) -> np.ndarray:
        return _readonly(self._w)

    @property
    def prns(self) -> np.ndarray:
        """Outer noise state: additive pseudorange error (m) per satellite."""
        return _readonly(self._prns)

    @property
    def prns1(self) -> np.ndarray:
        return _readonly(self._prns1)

    @property
    def svspos(self) -> np.ndarray:
        """Satellite ECEF positions (3 x nsv), columns ordered as ``svs``."""
        return _readonly(self._svspos)

    def sv_index(self, sv: SvId) -> int:
        try:
            return self._index[sv]
        except KeyError:
            raise KeyError(f"satellite {sv!r} is not in the active set {list(self._svs)}") from None

    def pseudorange_error(self, sv: SvId) -> float:
        return float(self._prns[self.sv_index(sv)])

    def position(self, sv: SvId) -> np.ndarray:
        return self._svspos[:, self.sv_index(sv)].copy()

    def snapshot(self, t: float, gps_time: float) -> SegmentEpoch:
        return SegmentEpoch(
            t=float(t),
            gps_time=float(gps_time),
            svs=self._svs,
            prns=self._prns.copy(),
            prns1=self._prns1.copy(),
            svspos=self._svspos.copy(),
        )

    def zero_noise(self) -> None:
        self._prns[:] = 0.0
        self._prns1[:] = 0.0

    def advance(self, dt: float, rng: np.random.Generator) -> None:
        prns, prns1 = gauss_markov_step(self._prns, self._prns1, self._betas1, self._betas2, self._w, dt, rng)
        self._prns[:] = prns
        self._prns1[:] = prns1

    def spin_up(self, dt: float, rng: np.random.Generator, steps: int | None = None) -> int:
        prns, prns1, steps = spin_up(
            self._prns, self._prns1, self._betas1, self._betas2, self._w, dt, rng, steps=steps
        )
        self._prns[:] = prns
        self._prns1[:] = prns1
        self.last_spinup_steps = steps
        return steps

    def set_positions(self, svspos: np.ndarray) -> None:
        svspos = np.asarray(svspos, dtype=float)
        if svspos.shape != self._svspos.shape:
            raise ValueError(f"svspos must have shape {self._svspos.shape}, got {svspos.shape}.")
        self._svspos[:, :] = svspos


@dataclass
class SimState:
    """State of one simulation run: clock, shared random stream and shared segment state."""

    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    t: float = 0.0
    gps_space_segment: SharedNoiseState | None = None

    @classmethod
    def from_seed(cls, seed: int | None) -> "SimState":
        return cls(rng=np.random.default_rng(seed))
