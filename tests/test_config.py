"""Configuration defaults, validation and the threshold push rule."""

import pytest

from gascaplogic import exceptions
from gascaplogic.config import (
    EvaluatorConfig,
    ScoringConfig,
    ThresholdConfig,
    adjust_thresholds,
    default_config,
)


def test_defaults():
    cfg = default_config()
    assert cfg.policy == "last_reading"
    assert cfg.thresholds.warning_limit == 20
    assert cfg.thresholds.pressure_limit == 50
    assert cfg.scoring.window_days == 3


def test_scoring_window_validated():
    with pytest.raises(exceptions.ConfigError):
        ScoringConfig(window_days=1)
    assert ScoringConfig(window_days=2).window_days == 2


def test_unknown_policy_rejected():
    with pytest.raises(exceptions.ConfigError):
        EvaluatorConfig(policy="weekly")  # type: ignore[arg-type]


def test_raising_warning_pushes_pressure():
    out = adjust_thresholds(ThresholdConfig(20, 50), warning=50)
    assert out.warning_limit == 50
    assert out.pressure_limit == 55


def test_lowering_pressure_pushes_warning():
    out = adjust_thresholds(ThresholdConfig(20, 50), pressure=15)
    assert out.pressure_limit == 15
    assert out.warning_limit == 10


def test_adjust_without_conflict_leaves_other_limit():
    cfg = ThresholdConfig(20, 50)
    out = adjust_thresholds(cfg, warning=30, pressure=60)
    assert (out.warning_limit, out.pressure_limit) == (30, 60)
    # input is not mutated
    assert (cfg.warning_limit, cfg.pressure_limit) == (20, 50)


@pytest.mark.parametrize("window", [2.5, "3"])
def test_scoring_window_must_be_integer(window):
    with pytest.raises(exceptions.ConfigError):
        ScoringConfig(window_days=window)
