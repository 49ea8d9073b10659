"""Monte Carlo check of the noise spin-up against the stationary variance.

Resets one space segment many times on a shared random stream and compares the
empirical variance of the inner noise state with the theoretical value.

Usage:
  python -m sim.validation.stationarity --n 2000 --beta2 0.5 --dt 1.0
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict, dataclass

import numpy as np

from gnss_space.noise.gauss_markov import MAX_SPINUP_STEPS, spinup_variance, stationary_variance
from gnss_space.sat.simple_gps import SimpleGpsConfig, build_synthetic_orbit_table
from gnss_space.segment import GpsSpaceSegmentGM2
from gnss_space.state import SimState


@dataclass(frozen=True)
class StationarityReport:
    n_resets: int
    num_samples: int
    empirical_var: float
    expected_var: float
    stationary_var: float
    relative_error: float
    min_spinup_steps: int
    max_spinup_steps: int
    all_finite: bool


def expected_reset_variance(w: float, betas2: float, dt: float) -> float:
    """Variance of ``prns1`` after a spin-up of uniformly random length."""

    steps = np.arange(1, MAX_SPINUP_STEPS + 1)
    return float(np.mean([spinup_variance(w, betas2, dt, int(k)) for k in steps]))


def run_stationarity_check(
    *,
    n: int,
    beta1: float = 1.005,
    beta2: float = 0.5,
    sigma: float = 0.003,
    dt: float = 1.0,
    svs: tuple[int, ...] = (1, 2, 3),
    seed: int = 0,
) -> StationarityReport:
    if n <= 0:
        raise ValueError("n must be > 0")
    state = SimState.from_seed(seed)
    table = build_synthetic_orbit_table(SimpleGpsConfig(num_sats=max(svs), seed=seed), duration_s=7_200.0)
    segment = GpsSpaceSegmentGM2(
        {
            "dt": dt,
            "on": True,
            "tStart": 0,
            "PR_BETA2": beta2,
            "PR_BETA1": beta1,
            "PR_SIGMA": sigma,
            "orbitfile": table,
            "svs": list(svs),
        },
        state,
    )
    samples = np.empty((n, len(svs)), dtype=float)
    steps = np.empty(n, dtype=int)
    all_finite = True
    for idx in range(n):
        segment.reset()
        shared = state.gps_space_segment
        samples[idx] = shared.prns1
        steps[idx] = shared.last_spinup_steps
        all_finite = all_finite and bool(np.all(np.isfinite(shared.prns)) and np.all(np.isfinite(shared.prns1)))

    empirical = float(np.var(samples.ravel()))
    expected = expected_reset_variance(sigma, 1.0 / beta2, dt)
    return StationarityReport(
        n_resets=n,
        num_samples=int(samples.size),
        empirical_var=empirical,
        expected_var=expected,
        stationary_var=float(stationary_variance(sigma, 1.0 / beta2, dt)),
        relative_error=abs(empirical - expected) / expected,
        min_spinup_steps=int(steps.min()),
        max_spinup_steps=int(steps.max()),
        all_finite=all_finite,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Monte Carlo check of the noise spin-up variance.")
    parser.add_argument("--n", type=int, default=1000, help="Number of resets.")
    parser.add_argument("--beta1", type=float, default=1.005)
    parser.add_argument("--beta2", type=float, default=0.5)
    parser.add_argument("--sigma", type=float, default=0.003)
    parser.add_argument("--dt", type=float, default=1.0)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()
    report = run_stationarity_check(
        n=args.n,
        beta1=args.beta1,
        beta2=args.beta2,
        sigma=args.sigma,
        dt=args.dt,
        seed=args.seed,
    )
    print(json.dumps(asdict(report), indent=2))


if __name__ == "__main__":
    main()
