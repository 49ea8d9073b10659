from __future__ import annotations

import json
from pathlib import Path

import pytest

from gnss_space.sat.orbit import save_orbit_table_npz
from sim.scenario_runner import build_sim_config, load_scenario, run_scenarios


def _write_scenario(path: Path, payload: dict) -> Path:
    path.write_text(json.dumps(payload))
    return path


def test_scenario_runner_outputs(tmp_path: Path, orbit_table) -> None:
    scenarios_dir = tmp_path / "scenarios"
    scenarios_dir.mkdir()
    save_orbit_table_npz(scenarios_dir / "orbits.npz", orbit_table)
    segment = {
        "dt": 0.2,
        "on": True,
        "tStart": 150000,
        "PR_BETA2": 4,
        "PR_BETA1": 1.005,
        "PR_SIGMA": 0.003,
        "orbitfile": "orbits.npz",
        "svs": [1, 2, 3, 4],
    }
    quiet = _write_scenario(
        scenarios_dir / "quiet.json",
        {"name": "quiet", "duration_s": 2, "rng_seed": 1, "gpsspacesegment": segment},
    )
    noisy = _write_scenario(
        scenarios_dir / "noisy.json",
        {"name": "noisy", "duration_s": 2, "rng_seed": 1, "gpsspacesegment": {**segment, "PR_SIGMA": 3.0}},
    )
    run_root = tmp_path / "runs"
    summaries = run_scenarios([quiet, noisy], run_root=run_root, save_figs=False)

    assert len(summaries) == 2
    assert all((Path(summary["run_dir"]) / "summary.json").exists() for summary in summaries)
    assert (run_root / "summary.csv").exists()
    quiet_summary, noisy_summary = summaries
    assert quiet_summary["num_epochs"] == 11
    assert quiet_summary["num_svs"] == 4
    assert quiet_summary["gps_time_start"] == 150_000.0
    assert noisy_summary["prns1_std_m"] > quiet_summary["prns1_std_m"]


def test_scenario_missing_keys(tmp_path: Path) -> None:
    path = _write_scenario(tmp_path / "bad.json", {"name": "bad", "duration_s": 1})
    with pytest.raises(ValueError, match="missing required keys"):
        load_scenario(path)


def test_scenario_unknown_segment_parameter() -> None:
    scenario = {"name": "x", "duration_s": 1, "rng_seed": 0, "gpsspacesegment": {"PR_GAMMA": 1.0}}
    with pytest.raises(ValueError, match="PR_GAMMA"):
        build_sim_config(scenario)


def test_scenario_maps_segment_parameters(tmp_path: Path) -> None:
    scenario = {
        "name": "x",
        "duration_s": 3,
        "rng_seed": 7,
        "gpsspacesegment": {"tStart": 123.0, "svs": [5, 6], "orbitfile": "o.npz"},
    }
    cfg = build_sim_config(scenario, base_dir=tmp_path)

    assert cfg.duration == 3.0
    assert cfg.rng_seed == 7
    assert cfg.t_start == 123.0
    assert cfg.svs == (5, 6)
    assert cfg.orbitfile == str(tmp_path / "o.npz")
