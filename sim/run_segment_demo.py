"""Run a minimal GPS space segment demo."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from gnss_space.config import SimConfig
from gnss_space.logger import save_epochs_csv, save_epochs_npz
from gnss_space.runtime import SimulationEngine
from gnss_space.sat.orbit import OrbitTable
from gnss_space.sat.simple_gps import SimpleGpsConfig, build_synthetic_orbit_table
from gnss_space.segment import GpsSpaceSegmentGM2
from gnss_space.state import SimState
from gnss_space.utils.logging import get_logger

logger = get_logger("gnss_space.sim")


def build_engine(
    cfg: SimConfig,
    orbit_source: Any | None = None,
) -> tuple[SimulationEngine, GpsSpaceSegmentGM2]:
    """Return a wired engine and its space segment for ``cfg``."""

    state = SimState.from_seed(int(cfg.rng_seed))
    source = orbit_source if orbit_source is not None else cfg.orbitfile
    if source is None:
        source = _default_orbit_table(cfg)
    segment = GpsSpaceSegmentGM2(cfg.segment_params(source), state)
    engine = SimulationEngine(state, [segment], cfg.dt)
    return engine, segment


def run_segment_demo(
    cfg: SimConfig,
    run_dir: Path,
    *,
    save_figs: bool = True,
    orbit_source: Any | None = None,
) -> Path:
    """Run one scenario and write epoch logs (and plots) into ``run_dir``."""

    run_dir.mkdir(parents=True, exist_ok=True)
    engine, segment = build_engine(cfg, orbit_source)
    epochs = engine.run(cfg.duration)

    epoch_log_path = run_dir / "epoch_logs.csv"
    save_epochs_csv(epoch_log_path, epochs)
    save_epochs_npz(run_dir / "epoch_logs.npz", epochs)
    metadata = {
        "created_utc": datetime.now(timezone.utc).isoformat(),
        "config": _jsonable_config(cfg),
        "t_start": segment.t_start,
        "spinup_steps": segment.shared.last_spinup_steps,
        "num_epochs": len(epochs),
    }
    (run_dir / "run_metadata.json").write_text(json.dumps(metadata, indent=2), encoding="utf-8")
    if save_figs:
        from gnss_space.plots import save_run_plots

        save_run_plots(epochs, out_dir=run_dir)
    logger.info("wrote %d epochs to %s", len(epochs), run_dir)
    return epoch_log_path


def _default_orbit_table(cfg: SimConfig) -> OrbitTable:
    num_sats = max([32, *(sv for sv in cfg.svs if isinstance(sv, int))])
    return build_synthetic_orbit_table(SimpleGpsConfig(num_sats=num_sats, seed=cfg.rng_seed))


def _jsonable_config(cfg: SimConfig) -> dict[str, Any]:
    payload = asdict(cfg)
    payload["svs"] = list(cfg.svs)
    if payload["orbitfile"] is not None:
        payload["orbitfile"] = str(payload["orbitfile"])
    return payload


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the GPS space segment demo.")
    parser.add_argument("--orbitfile", type=str, default=None, help="NPZ/CSV orbit table (synthetic if omitted).")
    parser.add_argument("--duration-s", type=float, default=10.0, help="Simulation duration in seconds.")
    parser.add_argument("--dt", type=float, default=0.2, help="Segment time step in seconds.")
    parser.add_argument("--rng-seed", type=int, default=None, help="Seed of the shared random stream.")
    parser.add_argument("--t-start", type=float, default=0.0, help="GPS start time (0 picks one at random).")
    parser.add_argument("--svs", type=int, nargs="+", default=None, help="Active satellite PRNs.")
    parser.add_argument("--out-dir", type=str, default="out", help="Output root directory.")
    parser.add_argument("--run-name", type=str, default=None, help="Run folder name (default: timestamp).")
    parser.add_argument("--no-plots", action="store_true", help="Disable saving run plots.")
    parser.add_argument("--verbose", action="store_true", help="Print debug info.")
    args = parser.parse_args()
    get_logger("gnss_space", logging.DEBUG if args.verbose else logging.INFO)

    overrides: dict[str, Any] = {}
    if args.svs:
        overrides["svs"] = tuple(args.svs)
    cfg = SimConfig(
        rng_seed=args.rng_seed if args.rng_seed is not None else 42,
        dt=args.dt,
        duration=args.duration_s,
        t_start=args.t_start,
        orbitfile=args.orbitfile,
        **overrides,
    )
    run_name = args.run_name or datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    run_dir = Path(args.out_dir) / run_name
    epoch_log_path = run_segment_demo(cfg, run_dir, save_figs=not args.no_plots)
    print(f"Saved outputs to {epoch_log_path.parent}")


if __name__ == "__main__":
    main()
