"""Tabulated satellite orbits with spline interpolation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import numpy as np
from scipy.interpolate import BSpline, make_interp_spline

from gnss_space.exceptions import OrbitFileError, TimeOutOfBounds
from gnss_space.models import OrbitProvider, SvId
from gnss_space.utils.logging import get_logger

MIN_ORBIT_SAMPLES = 4
# Odd degree of the interpolating spline, lowered for short tables.
ORBIT_SPLINE_DEGREE = 7

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class OrbitTable:
    """Satellite ECEF positions sampled on a common time grid.

    ``positions`` has shape ``(len(times), len(svs), 3)`` in metres.
    """

    times: np.ndarray
    svs: tuple[SvId, ...]
    positions: np.ndarray

    def __post_init__(self) -> None:
        times = np.asarray(self.times, dtype=float)
        positions = np.asarray(self.positions, dtype=float)
        svs = tuple(self.svs)
        if times.ndim != 1 or times.size < MIN_ORBIT_SAMPLES:
            raise OrbitFileError(
                f"orbit table needs at least {MIN_ORBIT_SAMPLES} epochs, got shape {times.shape}"
            )
        if np.any(np.diff(times) <= 0.0):
            raise OrbitFileError("orbit table epochs must be strictly increasing")
        if positions.shape != (times.size, len(svs), 3):
            raise OrbitFileError(
                f"orbit table positions must have shape {(times.size, len(svs), 3)}, got {positions.shape}"
            )
        if len(set(svs)) != len(svs):
            raise OrbitFileError("orbit table lists a satellite more than once")
        if not (np.all(np.isfinite(times)) and np.all(np.isfinite(positions))):
            raise OrbitFileError("orbit table contains non-finite values")
        object.__setattr__(self, "times", times)
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "svs", svs)

    @property
    def begin(self) -> float:
        return float(self.times[0])

    @property
    def end(self) -> float:
        return float(self.times[-1])

    def subset(self, svs: Sequence[SvId]) -> "OrbitTable":
        """Return the table restricted to ``svs`` in the requested order."""

        index = {sv: idx for idx, sv in enumerate(self.svs)}
        missing = [sv for sv in svs if sv not in index]
        if missing:
            raise OrbitFileError(f"satellites {missing} are not in the orbit table")
        columns = [index[sv] for sv in svs]
        return OrbitTable(times=self.times, svs=tuple(svs), positions=self.positions[:, columns, :])


class TabulatedOrbitProvider(OrbitProvider):
    """Serve continuous-time positions by spline interpolation of an orbit table."""

    def __init__(self, table: OrbitTable) -> None:
        self.table = table
        self._splines: dict[SvId, BSpline] = {}

    def prepare(self, svs: Sequence[SvId]) -> OrbitTable:
        prepared = self.table.subset(list(svs))
        degree = _spline_degree(prepared.times.size)
        self._splines = {
            sv: make_interp_spline(prepared.times, prepared.positions[:, idx, :], k=degree, axis=0)
            for idx, sv in enumerate(prepared.svs)
        }
        logger.debug(
            "prepared splines for %d satellites over [%.1f, %.1f]",
            len(self._splines),
            prepared.begin,
            prepared.end,
        )
        return prepared

    def valid_interval(self) -> tuple[float, float]:
        return self.table.begin, self.table.end

    def position_at(self, sv: SvId, t: float) -> np.ndarray:
        spline = self._splines.get(sv)
        if spline is None:
            raise OrbitFileError(f"satellite {sv!r} has not been prepared for interpolation")
        begin, end = self.valid_interval()
        t = float(t)
        if t < begin or t > end:
            raise TimeOutOfBounds(t, begin, end)
        return np.asarray(spline(t), dtype=float)


def load_orbit_table_npz(path: str | Path) -> OrbitTable:
    """Load an orbit table saved by ``save_orbit_table_npz``."""

    target = Path(path)
    try:
        with np.load(target, allow_pickle=False) as data:
            times = np.array(data["times"], dtype=float)
            svs = tuple(_plain_sv(sv) for sv in data["svs"].tolist())
            positions = np.array(data["positions"], dtype=float)
    except (OSError, KeyError, ValueError) as exc:
        raise OrbitFileError(f"cannot read orbit table {target}: {exc}") from exc
    return OrbitTable(times=times, svs=svs, positions=positions)


def save_orbit_table_npz(path: str | Path, table: OrbitTable) -> Path:
    """Save an orbit table to a compressed NPZ file."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    np.savez_compressed(target, times=table.times, svs=np.array(table.svs), positions=table.positions)
    return target


def load_orbit_table_csv(path: str | Path) -> OrbitTable:
    """Load a long-format CSV orbit table with columns ``t, sv, x, y, z``."""

    import pandas as pd

    target = Path(path)
    try:
        frame = pd.read_csv(target)
    except (OSError, ValueError) as exc:
        raise OrbitFileError(f"cannot read orbit table {target}: {exc}") from exc
    missing = {"t", "sv", "x", "y", "z"} - set(frame.columns)
    if missing:
        raise OrbitFileError(f"orbit table {target} missing columns: {sorted(missing)}")

    times = np.array(sorted(frame["t"].astype(float).unique()), dtype=float)
    svs = tuple(_plain_sv(sv) for sv in frame["sv"].drop_duplicates().tolist())
    positions = np.empty((times.size, len(svs), 3), dtype=float)
    for idx, (sv, rows) in enumerate(frame.groupby("sv", sort=False)):
        rows = rows.sort_values("t")
        if rows["t"].size != times.size or not np.allclose(rows["t"].to_numpy(dtype=float), times):
            raise OrbitFileError(f"satellite {sv!r} is not sampled on the common time grid")
        positions[:, idx, :] = rows[["x", "y", "z"]].to_numpy(dtype=float)
    return OrbitTable(times=times, svs=svs, positions=positions)


def load_orbit_provider(source: Any) -> OrbitProvider:
    """Resolve an orbit source descriptor into an orbit provider."""

    if isinstance(source, OrbitProvider):
        return source
    if isinstance(source, OrbitTable):
        return TabulatedOrbitProvider(source)
    if not isinstance(source, (str, Path)):
        raise OrbitFileError(f"unsupported orbit source {source!r}")
    path = Path(source)
    if not path.exists():
        raise OrbitFileError(f"orbit file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".npz":
        table = load_orbit_table_npz(path)
    elif suffix == ".csv":
        table = load_orbit_table_csv(path)
    else:
        raise OrbitFileError(f"unsupported orbit file format '{suffix}' for {path}")
    logger.info("loaded orbit table %s (%d satellites, %d epochs)", path, len(table.svs), table.times.size)
    return TabulatedOrbitProvider(table)


def _spline_degree(num_samples: int) -> int:
    degree = min(ORBIT_SPLINE_DEGREE, num_samples - 1)
    return degree if degree % 2 == 1 else degree - 1


def _plain_sv(value: Any) -> SvId:
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return int(value)
    if isinstance(value, (bytes, np.bytes_)):
        return value.decode()
    return str(value) if isinstance(value, np.str_) else value
