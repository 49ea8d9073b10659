"""Scenario runner for GPS space segment experiments."""

from __future__ import annotations

import csv
import json
import re
from dataclasses import fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from gnss_space.config import SimConfig
from gnss_space.logger import load_epochs_npz
from sim.run_segment_demo import run_segment_demo

_REQUIRED_KEYS = {"name", "duration_s", "rng_seed", "gpsspacesegment"}

# Task parameter names mapped onto SimConfig fields.
_SEGMENT_KEYS = {
    "dt": "dt",
    "on": "on",
    "tStart": "t_start",
    "PR_BETA2": "pr_beta2",
    "PR_BETA1": "pr_beta1",
    "PR_SIGMA": "pr_sigma",
    "orbitfile": "orbitfile",
    "svs": "svs",
}


def run_scenarios(
    scenario_paths: list[Path],
    *,
    run_root: Path = Path("runs"),
    save_figs: bool = True,
) -> list[dict[str, Any]]:
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    summaries: list[dict[str, Any]] = []
    run_root.mkdir(parents=True, exist_ok=True)

    for path in scenario_paths:
        scenario = load_scenario(path)
        scenario_name = str(scenario["name"])
        run_dir = run_root / f"{timestamp}_{_slugify(scenario_name)}"
        cfg = build_sim_config(scenario, base_dir=path.parent)
        epoch_log_path = run_segment_demo(cfg, run_dir, save_figs=save_figs)
        summary = {
            "scenario": scenario_name,
            "run_dir": str(run_dir),
            **_summary_from_epoch_logs(epoch_log_path.with_suffix(".npz")),
        }
        (run_dir / "summary.json").write_text(json.dumps(summary, indent=2))
        summaries.append(summary)
        _append_summary_csv(run_root / "summary.csv", summary)

    return summaries


def load_scenario(path: Path) -> dict[str, Any]:
    scenario = json.loads(path.read_text())
    if not isinstance(scenario, dict):
        raise ValueError(f"Scenario {path} must be a JSON object")
    missing = _REQUIRED_KEYS - scenario.keys()
    if missing:
        raise ValueError(f"Scenario {path} missing required keys: {sorted(missing)}")
    return scenario


def build_sim_config(scenario: dict[str, Any], *, base_dir: Path | None = None) -> SimConfig:
    fields_by_name = {field.name for field in fields(SimConfig)}
    cfg_kwargs: dict[str, Any] = {
        "duration": float(scenario["duration_s"]),
        "rng_seed": int(scenario["rng_seed"]),
    }
    for key, value in scenario.items():
        if key in _REQUIRED_KEYS:
            continue
        if key not in fields_by_name:
            raise ValueError(f"Unknown SimConfig override '{key}' in scenario '{scenario['name']}'")
        cfg_kwargs[key] = value

    segment = scenario["gpsspacesegment"]
    if not isinstance(segment, dict):
        raise ValueError(f"Scenario '{scenario['name']}': gpsspacesegment must be an object")
    for key, value in segment.items():
        if key not in _SEGMENT_KEYS:
            raise ValueError(f"Unknown gpsspacesegment parameter '{key}' in scenario '{scenario['name']}'")
        cfg_kwargs[_SEGMENT_KEYS[key]] = value

    if "svs" in cfg_kwargs:
        cfg_kwargs["svs"] = tuple(cfg_kwargs["svs"])
    orbitfile = cfg_kwargs.get("orbitfile")
    if orbitfile and base_dir is not None and not Path(orbitfile).is_absolute():
        cfg_kwargs["orbitfile"] = str(base_dir / orbitfile)
    return SimConfig(**cfg_kwargs)


def _summary_from_epoch_logs(npz_path: Path) -> dict[str, Any]:
    epochs = load_epochs_npz(npz_path)
    prns = np.array([epoch["prns"] for epoch in epochs], dtype=float)
    prns1 = np.array([epoch["prns1"] for epoch in epochs], dtype=float)
    return {
        "num_epochs": len(epochs),
        "num_svs": int(prns.shape[1]) if prns.ndim == 2 else 0,
        "prns_std_m": _safe_std(prns),
        "prns_max_abs_m": _safe_max_abs(prns),
        "prns1_std_m": _safe_std(prns1),
        "gps_time_start": float(epochs[0]["gps_time"]) if epochs else float("nan"),
    }


def _safe_std(values: np.ndarray) -> float:
    return float(np.std(values)) if values.size else float("nan")


def _safe_max_abs(values: np.ndarray) -> float:
    return float(np.max(np.abs(values))) if values.size else float("nan")


def _append_summary_csv(path: Path, summary: dict[str, Any]) -> None:
    write_header = not path.exists()
    with path.open("a", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(summary.keys()))
        if write_header:
            writer.writeheader()
        writer.writerow(summary)


def _slugify(value: str) -> str:
    slug = re.sub(r"[^a-zA-Z0-9]+", "_", value.strip().lower())
    return slug.strip("_") or "scenario"
