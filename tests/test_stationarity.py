import pytest

from sim.validation.stationarity import expected_reset_variance, run_stationarity_check
from gnss_space.noise.gauss_markov import stationary_variance


def test_expected_variance_below_stationary_for_slow_process() -> None:
    slow = expected_reset_variance(0.1, 1 / 200.0, 0.2)
    assert slow < stationary_variance(0.1, 1 / 200.0, 0.2)
    fast = expected_reset_variance(0.1, 2.0, 1.0)
    assert fast == pytest.approx(stationary_variance(0.1, 2.0, 1.0), rel=1e-3)


def test_stationarity_check_report() -> None:
    report = run_stationarity_check(n=400, seed=3)

    assert report.num_samples == 1200
    assert report.all_finite
    assert 1 <= report.min_spinup_steps <= report.max_spinup_steps <= 1000
    assert report.relative_error < 0.2


def test_stationarity_check_rejects_empty_run() -> None:
    with pytest.raises(ValueError):
        run_stationarity_check(n=0)
