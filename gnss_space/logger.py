"""Simple logging utilities for space segment outputs."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

import numpy as np

from gnss_space.models import SegmentEpoch

EPOCH_CSV_COLUMNS = [
    "t",
    "gps_time",
    "sv",
    "prns",
    "prns1",
    "x",
    "y",
    "z",
]
_CSV_HEADER = ",".join(EPOCH_CSV_COLUMNS) + "\n"


def append_epoch_csv(path: str | Path, epoch: SegmentEpoch) -> None:
    """Append the per-satellite rows of one epoch to a CSV file."""

    target = Path(path)
    if not target.exists():
        target.write_text(_CSV_HEADER)
    with target.open("a", encoding="utf-8") as handle:
        handle.write(_epoch_to_csv_lines(epoch))


def save_epochs_csv(path: str | Path, epochs: list[SegmentEpoch]) -> None:
    """Save all epochs to a CSV file, one row per satellite per epoch."""

    target = Path(path)
    target.write_text(_CSV_HEADER)
    with target.open("a", encoding="utf-8") as handle:
        for epoch in epochs:
            handle.write(_epoch_to_csv_lines(epoch))


def save_epochs_npz(path: str | Path, epochs: list[SegmentEpoch]) -> None:
    """Save epoch logs to a compressed NPZ file."""

    payload = [asdict(epoch) for epoch in epochs]
    np.savez_compressed(path, epochs=np.array(payload, dtype=object))


def load_epochs_npz(path: str | Path) -> list[dict]:
    """Load epoch logs from a compressed NPZ file."""

    data = np.load(path, allow_pickle=True)
    epochs = data["epochs"].tolist()
    return list(epochs)


def _epoch_to_csv_lines(epoch: SegmentEpoch) -> str:
    lines = []
    for idx, sv in enumerate(epoch.svs):
        row = [
            epoch.t,
            epoch.gps_time,
            sv,
            _format_value(epoch.prns[idx]),
            _format_value(epoch.prns1[idx]),
            _format_value(epoch.svspos[0, idx]),
            _format_value(epoch.svspos[1, idx]),
            _format_value(epoch.svspos[2, idx]),
        ]
        lines.append(",".join(str(value) for value in row) + "\n")
    return "".join(lines)


def _format_value(value: float | None) -> str:
    if value is None:
        return ""
    return repr(float(value))
