"""Configuration objects for GPS space segment simulations."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Hashable, Mapping

from gnss_space.exceptions import InvalidParameter, MissingParameter

# Keys of the task parameter block, in the order they are checked.
REQUIRED_PARAMS = ("dt", "on", "tStart", "PR_BETA2", "PR_BETA1", "PR_SIGMA", "orbitfile", "svs")

DEFAULT_SVS = (3, 5, 6, 7, 13, 16, 18, 19, 20, 22, 24, 29, 31)


@dataclass(frozen=True)
class SpaceSegmentConfig:
    """Validated parameters of a GPS space segment with Gauss-Markov pseudorange noise."""

    dt: float
    on: bool
    pr_beta2: float
    pr_beta1: float
    pr_sigma: float
    t_start: float
    orbitfile: Any
    svs: tuple[Hashable, ...]

    def __post_init__(self) -> None:
        _require_positive("dt", self.dt)
        _require_positive("PR_BETA2", self.pr_beta2)
        _require_positive("PR_BETA1", self.pr_beta1)
        _require_positive("PR_SIGMA", self.pr_sigma)
        if not _is_number(self.t_start) or not math.isfinite(self.t_start) or self.t_start < 0.0:
            raise InvalidParameter("tStart", f"must be a GPS time >= 0 (0 for random), got {self.t_start!r}")
        if self.orbitfile is None or (isinstance(self.orbitfile, (str, Path)) and str(self.orbitfile) == ""):
            raise InvalidParameter("orbitfile", "must name an orbit table or be an orbit provider")
        if len(self.svs) == 0:
            raise InvalidParameter("svs", "at least one satellite is required")
        if len(set(self.svs)) != len(self.svs):
            raise InvalidParameter("svs", f"satellite ids must be unique, got {list(self.svs)}")

    @property
    def random_t_start(self) -> bool:
        return self.t_start == 0.0

    @property
    def num_svs(self) -> int:
        return len(self.svs)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "SpaceSegmentConfig":
        """Build a config from a task parameter block.

        Every key in ``REQUIRED_PARAMS`` must be present; a missing key raises
        ``MissingParameter`` and a value outside its domain raises ``InvalidParameter``.
        """

        for key in REQUIRED_PARAMS:
            if key not in params:
                raise MissingParameter(key)
        svs = params["svs"]
        if isinstance(svs, (str, bytes)) or not hasattr(svs, "__iter__"):
            raise InvalidParameter("svs", f"must be an ordered collection of satellite ids, got {svs!r}")
        return cls(
            dt=_as_float("dt", params["dt"]),
            on=_as_flag("on", params["on"]),
            pr_beta2=_as_float("PR_BETA2", params["PR_BETA2"]),
            pr_beta1=_as_float("PR_BETA1", params["PR_BETA1"]),
            pr_sigma=_as_float("PR_SIGMA", params["PR_SIGMA"]),
            t_start=_as_float("tStart", params["tStart"]),
            orbitfile=params["orbitfile"],
            svs=tuple(_as_sv_id(sv) for sv in svs),
        )

    def to_params(self) -> dict[str, Any]:
        orbitfile = str(self.orbitfile) if isinstance(self.orbitfile, Path) else self.orbitfile
        return {
            "dt": self.dt,
            "on": self.on,
            "tStart": self.t_start,
            "PR_BETA2": self.pr_beta2,
            "PR_BETA1": self.pr_beta1,
            "PR_SIGMA": self.pr_sigma,
            "orbitfile": orbitfile,
            "svs": list(self.svs),
        }


@dataclass(frozen=True)
class SimConfig:
    """Simulation configuration defaults."""

    rng_seed: int = 42
    dt: float = 0.2
    duration: float = 10.0
    on: bool = True
    pr_beta2: float = 4.0
    pr_beta1: float = 1.005
    pr_sigma: float = 0.003
    t_start: float = 0.0
    orbitfile: str | None = None
    svs: tuple[int, ...] = field(default=DEFAULT_SVS)

    def segment_params(self, orbitfile: Any | None = None) -> dict[str, Any]:
        """Return the task parameter block for the space segment."""

        return {
            "dt": self.dt,
            "on": self.on,
            "tStart": self.t_start,
            "PR_BETA2": self.pr_beta2,
            "PR_BETA1": self.pr_beta1,
            "PR_SIGMA": self.pr_sigma,
            "orbitfile": orbitfile if orbitfile is not None else self.orbitfile,
            "svs": list(self.svs),
        }


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidParameter(name, f"must be numeric, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(name, f"must be numeric, got {value!r}") from exc


def _as_flag(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if (_is_number(value) or hasattr(value, "__index__")) and value in (0, 1):
        return bool(value)
    raise InvalidParameter(name, f"must be a boolean or 0/1, got {value!r}")


def _as_sv_id(value: Any) -> Hashable:
    if isinstance(value, bool):
        raise InvalidParameter("svs", f"satellite id must not be a boolean, got {value!r}")
    # PRNs read from JSON or numpy arrays arrive as floats / numpy ints.
    if _is_number(value) or hasattr(value, "__index__"):
        as_float = float(value)
        if as_float.is_integer():
            return int(as_float)
    if not isinstance(value, Hashable):
        raise InvalidParameter("svs", f"satellite id {value!r} is not hashable")
    return value


def _require_positive(name: str, value: float) -> None:
    if not _is_number(value) or not math.isfinite(value) or value <= 0.0:
        raise InvalidParameter(name, f"must be > 0, got {value!r}")
