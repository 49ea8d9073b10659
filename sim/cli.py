"""Unified CLI entrypoint.

Run modes:
  1) orbits       write a synthetic orbit table (NPZ)
  2) run          single headless run, produces CSV/NPZ + plots
  3) scenario     one or more JSON scenarios
  4) stationarity Monte Carlo check of the noise spin-up
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from gnss_space.utils.logging import get_logger


def _cmd_orbits(args: argparse.Namespace) -> None:
    from gnss_space.sat.orbit import save_orbit_table_npz
    from gnss_space.sat.simple_gps import SimpleGpsConfig, build_synthetic_orbit_table

    table = build_synthetic_orbit_table(
        SimpleGpsConfig(num_sats=args.num_sats, seed=args.seed),
        t_begin=args.t_begin,
        duration_s=args.duration_h * 3600.0,
        interval_s=args.interval_s,
    )
    path = save_orbit_table_npz(Path(args.out), table)
    print(f"Saved orbit table to {path}")


def _cmd_run(args: argparse.Namespace) -> None:
    from gnss_space.config import SimConfig
    from sim.run_segment_demo import run_segment_demo

    overrides = {"svs": tuple(args.svs)} if args.svs else {}
    cfg = SimConfig(
        rng_seed=args.rng_seed,
        dt=args.dt,
        duration=args.duration_s,
        t_start=args.t_start,
        orbitfile=args.orbitfile,
        **overrides,
    )
    run_name = args.run_name or datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    epoch_log_path = run_segment_demo(cfg, Path(args.out_dir) / run_name, save_figs=not args.no_plots)
    print(f"Saved outputs to {epoch_log_path.parent}")


def _cmd_scenario(args: argparse.Namespace) -> None:
    from sim.scenario_runner import run_scenarios

    scenarios = [Path(p) for p in (args.scenario or [])]
    if not scenarios:
        raise SystemExit("No scenarios provided. Use --scenario path.json (repeatable).")

    run_scenarios(
        scenarios,
        run_root=Path(args.run_root),
        save_figs=not args.no_plots,
    )


def _cmd_stationarity(args: argparse.Namespace) -> None:
    from sim.validation.stationarity import run_stationarity_check

    report = run_stationarity_check(n=args.n, beta2=args.beta2, dt=args.dt, seed=args.seed)
    print(json.dumps(asdict(report), indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gnss-space", description="GPS space segment runner")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    orbits = sub.add_parser("orbits", help="Write a synthetic orbit table")
    orbits.add_argument("--out", type=str, required=True, help="Output NPZ path")
    orbits.add_argument("--t-begin", type=float, default=1_400_000_000.0, help="First GPS time [s]")
    orbits.add_argument("--duration-h", type=float, default=24.0, help="Table span [h]")
    orbits.add_argument("--interval-s", type=float, default=900.0, help="Sampling interval [s]")
    orbits.add_argument("--num-sats", type=int, default=32, help="Number of satellites (PRN 1..N)")
    orbits.add_argument("--seed", type=int, default=0, help="Constellation phasing seed")
    orbits.set_defaults(func=_cmd_orbits)

    run = sub.add_parser("run", help="Run the space segment headless")
    run.add_argument("--orbitfile", type=str, default=None, help="NPZ/CSV orbit table (synthetic if omitted)")
    run.add_argument("--duration-s", type=float, default=10.0)
    run.add_argument("--dt", type=float, default=0.2)
    run.add_argument("--rng-seed", type=int, default=42)
    run.add_argument("--t-start", type=float, default=0.0, help="GPS start time (0 picks one at random)")
    run.add_argument("--svs", type=int, nargs="+", default=None, help="Active satellite PRNs")
    run.add_argument("--out-dir", type=str, default="out")
    run.add_argument("--run-name", type=str, default=None)
    run.add_argument("--no-plots", action="store_true", help="Skip saving plot PNGs")
    run.set_defaults(func=_cmd_run)

    scen = sub.add_parser("scenario", help="Run one or more JSON scenarios (headless)")
    scen.add_argument("--scenario", action="append", help="Path to a scenario JSON file (repeatable)")
    scen.add_argument("--run-root", type=str, default="runs", help="Root folder for scenario outputs")
    scen.add_argument("--no-plots", action="store_true", help="Skip saving plot PNGs")
    scen.set_defaults(func=_cmd_scenario)

    stat = sub.add_parser("stationarity", help="Monte Carlo check of the spin-up variance")
    stat.add_argument("--n", type=int, default=1000, help="Number of resets")
    stat.add_argument("--beta2", type=float, default=0.5)
    stat.add_argument("--dt", type=float, default=1.0)
    stat.add_argument("--seed", type=int, default=0)
    stat.set_defaults(func=_cmd_stationarity)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    get_logger("gnss_space", logging.DEBUG if args.verbose else logging.INFO)
    args.func(args)


if __name__ == "__main__":
    main()
