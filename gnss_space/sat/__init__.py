"""Satellite orbit models."""

from gnss_space.sat.orbit import (
    OrbitTable,
    TabulatedOrbitProvider,
    load_orbit_provider,
    load_orbit_table_csv,
    load_orbit_table_npz,
    save_orbit_table_npz,
)
from gnss_space.sat.simple_gps import SimpleGpsConfig, SimpleGpsConstellation, build_synthetic_orbit_table

__all__ = [
    "OrbitTable",
    "SimpleGpsConfig",
    "SimpleGpsConstellation",
    "TabulatedOrbitProvider",
    "build_synthetic_orbit_table",
    "load_orbit_provider",
    "load_orbit_table_csv",
    "load_orbit_table_npz",
    "save_orbit_table_npz",
]
