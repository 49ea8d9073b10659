from __future__ import annotations

from pathlib import Path

import numpy as np

from gnss_space.sat.orbit import load_orbit_table_npz
from sim.cli import build_parser, main


def test_cli_orbits_then_run(tmp_path: Path, capsys) -> None:
    orbit_path = tmp_path / "orbits.npz"
    main(["orbits", "--out", str(orbit_path), "--duration-h", "6", "--num-sats", "8"])
    table = load_orbit_table_npz(orbit_path)
    assert table.svs == tuple(range(1, 9))
    assert table.times.size == 25

    main(
        [
            "run",
            "--orbitfile",
            str(orbit_path),
            "--duration-s",
            "1",
            "--svs",
            "1",
            "5",
            "8",
            "--out-dir",
            str(tmp_path / "out"),
            "--run-name",
            "cli",
            "--no-plots",
        ]
    )
    assert "Saved outputs" in capsys.readouterr().out
    assert (tmp_path / "out" / "cli" / "epoch_logs.csv").exists()


def test_cli_parses_stationarity_options() -> None:
    parser = build_parser()
    args = parser.parse_args(["stationarity", "--n", "5"])
    assert args.n == 5
    assert np.isclose(args.dt, 1.0)
