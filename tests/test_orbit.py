from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from gnss_space.exceptions import OrbitFileError, TimeOutOfBounds
from gnss_space.sat.orbit import (
    OrbitTable,
    TabulatedOrbitProvider,
    load_orbit_provider,
    load_orbit_table_csv,
    load_orbit_table_npz,
    save_orbit_table_npz,
)
from gnss_space.sat.simple_gps import SimpleGpsConfig, SimpleGpsConstellation


def test_synthetic_table_is_gps_like(orbit_table: OrbitTable) -> None:
    assert orbit_table.svs == (1, 2, 3, 4)
    assert orbit_table.begin == 100_000.0
    assert orbit_table.end == 200_000.0
    radii = np.linalg.norm(orbit_table.positions, axis=2)
    np.testing.assert_allclose(radii, 26_560_000.0, rtol=1e-9)


def test_constellation_positions_match_table_samples(orbit_table: OrbitTable) -> None:
    constellation = SimpleGpsConstellation(SimpleGpsConfig(num_sats=4, num_planes=2, seed=1))
    np.testing.assert_allclose(constellation.positions(orbit_table.times[3]), orbit_table.positions[3])


def test_provider_interpolates_through_samples(orbit_table: OrbitTable) -> None:
    provider = TabulatedOrbitProvider(orbit_table)
    prepared = provider.prepare([3, 1])

    assert prepared.svs == (3, 1)
    assert provider.valid_interval() == (100_000.0, 200_000.0)
    np.testing.assert_allclose(provider.position_at(3, orbit_table.times[10]), orbit_table.positions[10, 2], atol=1e-2)
    np.testing.assert_allclose(provider.position_at(1, orbit_table.times[-1]), orbit_table.positions[-1, 0], atol=1e-2)


def test_interpolation_tracks_the_true_orbit(orbit_table: OrbitTable) -> None:
    provider = TabulatedOrbitProvider(orbit_table)
    provider.prepare([1, 2, 3, 4])
    constellation = SimpleGpsConstellation(SimpleGpsConfig(num_sats=4, num_planes=2, seed=1))
    t = 150_123.4
    truth = constellation.positions(t)
    for idx, sv in enumerate((1, 2, 3, 4)):
        assert np.linalg.norm(provider.position_at(sv, t) - truth[idx]) < 100.0


def test_position_outside_interval_fails(orbit_table: OrbitTable) -> None:
    provider = TabulatedOrbitProvider(orbit_table)
    provider.prepare([1])
    with pytest.raises(TimeOutOfBounds):
        provider.position_at(1, 99_999.0)
    with pytest.raises(TimeOutOfBounds):
        provider.position_at(1, 200_000.5)


def test_unprepared_or_unknown_satellite_fails(orbit_table: OrbitTable) -> None:
    provider = TabulatedOrbitProvider(orbit_table)
    with pytest.raises(OrbitFileError):
        provider.position_at(1, 150_000.0)
    with pytest.raises(OrbitFileError):
        provider.prepare([1, 17])


@pytest.mark.parametrize(
    ("times", "positions"),
    [
        (np.arange(3.0), np.zeros((3, 1, 3))),
        (np.array([0.0, 2.0, 1.0, 3.0]), np.zeros((4, 1, 3))),
        (np.arange(4.0), np.zeros((4, 2, 3))),
        (np.arange(4.0), np.full((4, 1, 3), np.nan)),
    ],
)
def test_malformed_tables_are_rejected(times: np.ndarray, positions: np.ndarray) -> None:
    with pytest.raises(OrbitFileError):
        OrbitTable(times=times, svs=(1,), positions=positions)


def test_npz_table_reload(tmp_path: Path, orbit_table: OrbitTable) -> None:
    path = save_orbit_table_npz(tmp_path / "orbits.npz", orbit_table)
    loaded = load_orbit_table_npz(path)

    assert loaded.svs == orbit_table.svs
    np.testing.assert_array_equal(loaded.times, orbit_table.times)
    np.testing.assert_array_equal(loaded.positions, orbit_table.positions)
    assert isinstance(load_orbit_provider(path), TabulatedOrbitProvider)


def test_csv_table_load(tmp_path: Path, orbit_table: OrbitTable) -> None:
    pytest.importorskip("pandas")
    lines = ["t,sv,x,y,z"]
    for k, t in enumerate(orbit_table.times[:6]):
        for idx, sv in enumerate(orbit_table.svs):
            x, y, z = orbit_table.positions[k, idx]
            lines.append(f"{t!r},{sv},{x!r},{y!r},{z!r}")
    path = tmp_path / "orbits.csv"
    path.write_text("\n".join(lines) + "\n")

    loaded = load_orbit_table_csv(path)
    assert loaded.svs == orbit_table.svs
    np.testing.assert_allclose(loaded.positions, orbit_table.positions[:6])


def test_csv_table_with_missing_columns(tmp_path: Path) -> None:
    pytest.importorskip("pandas")
    path = tmp_path / "bad.csv"
    path.write_text("t,sv,x\n0,1,2\n")
    with pytest.raises(OrbitFileError):
        load_orbit_table_csv(path)


def test_orbit_source_resolution_errors(tmp_path: Path) -> None:
    with pytest.raises(OrbitFileError):
        load_orbit_provider(tmp_path / "missing.npz")
    sp3 = tmp_path / "igs12345.sp3"
    sp3.write_text("#cP2010 ...\n")
    with pytest.raises(OrbitFileError):
        load_orbit_provider(sp3)
    with pytest.raises(OrbitFileError):
        load_orbit_provider(42)
