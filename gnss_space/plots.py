"""Plotting utilities for space segment run outputs."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import numpy as np

from gnss_space.models import SegmentEpoch

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt  # noqa: E402


def save_run_plots(epochs: list[SegmentEpoch], *, out_dir: str | Path) -> Path:
    """Save the noise traces of a run to an output directory."""

    output_dir = Path(out_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    if not epochs:
        return output_dir
    times = np.array([epoch.t for epoch in epochs], dtype=float)
    svs = epochs[0].svs
    prns = np.array([epoch.prns for epoch in epochs], dtype=float)
    prns1 = np.array([epoch.prns1 for epoch in epochs], dtype=float)

    _plot_traces(times, prns, svs, "Pseudorange error", "prns [m]", output_dir / "pseudorange_noise.png")
    _plot_traces(times, prns1, svs, "Inner Gauss-Markov state", "prns1 [m]", output_dir / "inner_noise.png")
    return output_dir


def _plot_traces(
    times: np.ndarray,
    values: np.ndarray,
    svs: tuple,
    title: str,
    ylabel: str,
    path: Path,
) -> None:
    fig, ax = plt.subplots(figsize=(8, 4))
    for idx, sv in enumerate(svs):
        ax.plot(times, values[:, idx], linewidth=1.0, label=f"PRN {sv}")
    ax.set_title(title)
    ax.set_xlabel("Time [s]")
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)
    if len(svs) <= 12:
        ax.legend(fontsize="small", ncol=2)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
