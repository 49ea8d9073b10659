from __future__ import annotations

"""Pytest configuration.

This file is imported during *collection*, so it's the right place to set
process-wide environment variables needed for stable imports.
"""

import os
import tempfile

# Force a non-interactive backend in test environments.
os.environ.setdefault("MPLBACKEND", "Agg")

# Isolate matplotlib cache to avoid flaky font-cache locking.
os.environ.setdefault("MPLCONFIGDIR", tempfile.mkdtemp(prefix="mplconfig-"))

import pytest  # noqa: E402

from gnss_space.sat.orbit import OrbitTable  # noqa: E402
from gnss_space.sat.simple_gps import SimpleGpsConfig, build_synthetic_orbit_table  # noqa: E402


@pytest.fixture(scope="session")
def orbit_table() -> OrbitTable:
    """Four satellites tabulated every 1000 s over GPS time [100000, 200000]."""

    return build_synthetic_orbit_table(
        SimpleGpsConfig(num_sats=4, num_planes=2, seed=1),
        t_begin=100_000.0,
        duration_s=100_000.0,
        interval_s=1_000.0,
    )


@pytest.fixture
def segment_params(orbit_table: OrbitTable) -> dict:
    return {
        "dt": 0.2,
        "on": True,
        "tStart": 0,
        "PR_BETA2": 200.0,
        "PR_BETA1": 2000.0,
        "PR_SIGMA": 0.1,
        "orbitfile": orbit_table,
        "svs": [1, 2, 3],
    }
