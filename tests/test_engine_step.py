"""Tests for the step-wise runtime engine."""

import numpy as np
import pytest

from gnss_space.models import SegmentEpoch
from gnss_space.runtime import SimulationEngine
from gnss_space.segment import GpsSpaceSegmentGM2
from gnss_space.state import SimState


def test_engine_run_records_every_epoch(segment_params: dict) -> None:
    state = SimState.from_seed(4)
    segment = GpsSpaceSegmentGM2(segment_params, state)
    engine = SimulationEngine(state, [segment], dt=0.2)

    epochs = engine.run(1.0)

    assert len(epochs) == 6
    assert all(isinstance(epoch, SegmentEpoch) for epoch in epochs)
    assert [epoch.t for epoch in epochs] == pytest.approx([0.0, 0.2, 0.4, 0.6, 0.8, 1.0])
    gps_times = np.array([epoch.gps_time for epoch in epochs])
    np.testing.assert_allclose(np.diff(gps_times), 0.2)
    assert all(epoch.svspos.shape == (3, 3) for epoch in epochs)
    assert not np.array_equal(epochs[0].prns1, epochs[-1].prns1)


def test_engine_ticks_faster_than_segment(segment_params: dict) -> None:
    segment_params["dt"] = 0.4
    state = SimState.from_seed(4)
    segment = GpsSpaceSegmentGM2(segment_params, state)
    engine = SimulationEngine(state, [segment], dt=0.2)
    engine.reset()

    updated = [engine.step()["updated"][0] for _ in range(4)]
    assert updated == [False, True, False, True]


def test_engine_reset_restarts_clock(segment_params: dict) -> None:
    seen = []
    state = SimState.from_seed(4)
    segment = GpsSpaceSegmentGM2(segment_params, state)
    engine = SimulationEngine(state, [segment], dt=0.2, logger=seen.append)
    engine.run(0.4)
    engine.reset()

    assert state.t == 0.0
    assert len(seen) == 4
    assert seen[-1]["t"] == 0.0


def test_engine_rejects_non_positive_dt() -> None:
    with pytest.raises(ValueError):
        SimulationEngine(SimState(), [], dt=0.0)
