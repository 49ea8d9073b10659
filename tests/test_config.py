from __future__ import annotations

import pytest

from gnss_space.config import REQUIRED_PARAMS, SimConfig, SpaceSegmentConfig
from gnss_space.exceptions import InvalidParameter, MissingParameter


def _params() -> dict:
    return {
        "dt": 0.2,
        "on": True,
        "tStart": 0,
        "PR_BETA2": 4,
        "PR_BETA1": 1.005,
        "PR_SIGMA": 0.003,
        "orbitfile": "orbits.npz",
        "svs": [3, 5, 6],
    }


@pytest.mark.parametrize("missing", REQUIRED_PARAMS)
def test_missing_field_is_reported(missing: str) -> None:
    params = _params()
    del params[missing]
    with pytest.raises(MissingParameter) as excinfo:
        SpaceSegmentConfig.from_params(params)
    assert excinfo.value.field_name == missing
    assert missing in excinfo.value.message


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("dt", 0.0),
        ("dt", -0.2),
        ("PR_BETA2", 0),
        ("PR_BETA1", -1.0),
        ("PR_SIGMA", 0.0),
        ("PR_SIGMA", "loud"),
        ("tStart", -1.0),
        ("svs", []),
        ("svs", [3, 3]),
        ("svs", "G03"),
        ("orbitfile", ""),
        ("on", "false"),
        ("on", 2),
        ("on", None),
        ("svs", [True, 2]),
    ],
)
def test_invalid_values_are_rejected(key: str, value: object) -> None:
    params = _params()
    params[key] = value
    with pytest.raises(InvalidParameter):
        SpaceSegmentConfig.from_params(params)


def test_from_params_normalises_values() -> None:
    params = _params()
    params["svs"] = [3.0, 5, 6.0]
    params["tStart"] = "150000"
    cfg = SpaceSegmentConfig.from_params(params)

    assert cfg.svs == (3, 5, 6)
    assert cfg.t_start == 150_000.0
    assert not cfg.random_t_start
    assert cfg.num_svs == 3
    assert SpaceSegmentConfig.from_params(cfg.to_params()) == cfg


def test_zero_start_time_means_random() -> None:
    assert SpaceSegmentConfig.from_params(_params()).random_t_start


def test_simconfig_segment_defaults() -> None:
    cfg = SimConfig()
    params = cfg.segment_params("orbits.npz")

    assert set(params) == set(REQUIRED_PARAMS)
    assert params["PR_BETA2"] == 4.0
    assert params["orbitfile"] == "orbits.npz"
    assert SpaceSegmentConfig.from_params(params).svs == cfg.svs


@pytest.mark.parametrize(("value", "expected"), [(True, True), (False, False), (1, True), (0, False)])
def test_on_flag_accepts_booleans_and_zero_one(value: object, expected: bool) -> None:
    params = _params()
    params["on"] = value
    assert SpaceSegmentConfig.from_params(params).on is expected
