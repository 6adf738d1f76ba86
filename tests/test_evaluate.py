"""Violation evaluator tests.

- last-reading policy: worked 5000/30%/4000 example, exclusion rules, zero cap
- consecutive policy: all-or-nothing window, day-specific caps, short history
- action tiers: inclusive upper bounds, inverted thresholds degrade to cutoff
"""

import pytest

from gascaplogic import exceptions
from gascaplogic.config import EvaluatorConfig, ScoringConfig, ThresholdConfig
from gascaplogic.evaluate import (
    action_label,
    classify_action,
    evaluate,
    evaluate_consecutive,
    evaluate_last_reading,
)
from gascaplogic.schema import Restriction


def test_last_reading_violation(flat_restriction):
    res = evaluate_last_reading([3000, 4000, -1], 5000, flat_restriction)
    assert res is not None
    assert res.is_violation
    assert res.day_index == 1
    assert res.limit == pytest.approx(3500)
    assert res.violation_amount == pytest.approx(500)
    assert res.violation_pct == pytest.approx(14.2857, rel=1e-4)
    assert res.action == "warning_notice"


def test_last_reading_compliant(flat_restriction):
    res = evaluate_last_reading([4000, 3400], 5000, flat_restriction)
    assert not res.is_violation
    assert res.violation_amount == 0
    assert res.violation_pct == 0
    assert res.action == "normal"


def test_last_reading_uses_cap_of_that_day(stepped_restriction):
    daily = [-1] * 18
    daily[16] = 3000  # 1404/10/14, 30% -> cap 3500
    res = evaluate_last_reading(daily, 5000, stepped_restriction)
    assert not res.is_violation
    daily[17] = 3000  # 1404/10/15, 50% -> cap 2500
    res = evaluate_last_reading(daily, 5000, stepped_restriction)
    assert res.is_violation
    assert res.limit == pytest.approx(2500)
    assert res.violation_pct == pytest.approx(20.0)


@pytest.mark.parametrize("baseline", [None, 0, -5, float("nan")])
def test_missing_baseline_is_excluded(baseline, flat_restriction):
    assert evaluate_last_reading([4000], baseline, flat_restriction) is None
    assert evaluate_consecutive([4000] * 3, baseline, flat_restriction) is None


def test_no_valid_reading_is_excluded(flat_restriction):
    assert evaluate_last_reading([-1, None], 5000, flat_restriction) is None


def test_no_restriction_caps_at_baseline():
    res = evaluate_last_reading([5200], 5000, None)
    assert res.limit == 5000
    assert res.violation_pct == pytest.approx(4.0)


def test_zero_cap_guards_division():
    full = Restriction.seed("x", 100)
    res = evaluate_last_reading([10], 5000, full)
    assert res.is_violation
    assert res.limit == 0
    assert res.violation_pct == 0
    assert res.action == "warning_notice"


def test_consecutive_requires_every_day(flat_restriction):
    # oldest -> newest: 3000 is under the cap
    res = evaluate_consecutive([3000, 3600, 3600], 5000, flat_restriction, window_days=3)
    assert res is not None
    assert not res.is_violation
    assert res.action == "normal"
    assert res.violation_pct == 0


def test_consecutive_qualifying_window(flat_restriction):
    res = evaluate_consecutive(
        [3550, 3700, 3600], 5000, flat_restriction, window_days=3
    )
    assert res.is_violation
    assert res.value == pytest.approx(3616.667, rel=1e-5)
    assert res.limit == pytest.approx(3500)
    assert res.violation_pct == pytest.approx(3.333, rel=1e-3)
    assert res.action == "warning_notice"
    assert [r.day_index for r in res.readings] == [2, 1, 0]


def test_consecutive_uses_most_recent_valid_readings(flat_restriction):
    # gaps are skipped; the old 1000 is outside the window
    daily = [1000, 3600, -1, 3700, None, 3800]
    res = evaluate_consecutive(daily, 5000, flat_restriction, window_days=3)
    assert res.is_violation
    assert res.day_index == 5
    assert [r.day_index for r in res.readings] == [5, 3, 1]


def test_consecutive_day_specific_caps(stepped_restriction):
    daily = [-1] * 18
    daily[15], daily[16], daily[17] = 3600, 3600, 3000
    res = evaluate_consecutive(daily, 5000, stepped_restriction, window_days=3)
    assert res.caps == [2500.0, 3500.0, 3500.0]
    assert res.is_violation
    assert res.limit == pytest.approx(3166.667, rel=1e-5)


def test_consecutive_insufficient_history(flat_restriction):
    assert evaluate_consecutive([9000, -1, 9000], 5000, flat_restriction, window_days=3) is None


@pytest.mark.parametrize("window", [1, 2.5])
def test_consecutive_window_must_be_integer_of_two_or_more(window, flat_restriction):
    with pytest.raises(exceptions.ConfigError):
        evaluate_consecutive([4000] * 3, 5000, flat_restriction, window_days=window)


def test_evaluate_dispatches_on_policy(flat_restriction):
    daily = [3000, 3600, 3600]
    a = evaluate(daily, 5000, flat_restriction)
    assert a.policy == "last_reading" and a.is_violation
    cfg = EvaluatorConfig(policy="consecutive", scoring=ScoringConfig(window_days=3))
    b = evaluate(daily, 5000, flat_restriction, config=cfg)
    assert b.policy == "consecutive" and not b.is_violation


def test_evaluate_applies_thresholds(flat_restriction):
    cfg = EvaluatorConfig(thresholds=ThresholdConfig(warning_limit=5, pressure_limit=10))
    res = evaluate([4000], 5000, flat_restriction, config=cfg)
    assert res.action == "supply_cutoff"


@pytest.mark.parametrize(
    "pct, expected",
    [
        (0.0, "normal"),
        (-3.0, "normal"),
        (0.1, "warning_notice"),
        (19.9, "warning_notice"),
        (20.0, "warning_notice"),
        (20.1, "pressure_reduction"),
        (50.0, "pressure_reduction"),
        (50.1, "supply_cutoff"),
    ],
)
def test_classify_action(pct, expected):
    assert classify_action(pct, 20, 50) == expected


def test_classify_action_inverted_thresholds():
    assert classify_action(60, 50, 20) == "supply_cutoff"
    assert classify_action(30, 50, 20) == "warning_notice"


def test_classify_action_violated_override():
    assert classify_action(0, 20, 50, violated=True) == "warning_notice"
    assert classify_action(30, 20, 50, violated=False) == "normal"


def test_action_label():
    assert action_label("warning_notice") == "warning notice"
    assert action_label("supply_cutoff", persian=True) == "قطع گاز"
