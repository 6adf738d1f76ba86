from __future__ import annotations
from typing import Optional, Sequence, Union
import numpy as np
import pandas as pd

from . import canon, exceptions, series
from .config import EvaluatorConfig, ThresholdConfig, default_config
from .restrictions import cap_series, compute_cap, has_baseline, resolve_percentage
from .schema import Restriction
from .types import ActionTier, Reading, ViolationResult

Daily = Union[Sequence[Optional[float]], pd.Series]


def classify_action(
    violation_pct: float,
    warning_limit: float = canon.DEFAULT_WARNING_LIMIT,
    pressure_limit: float = canon.DEFAULT_PRESSURE_LIMIT,
    *,
    violated: Optional[bool] = None,
) -> ActionTier:
    """
    Map a violation percentage to an action tier.

      (0, warning]        -> warning_notice
      (warning, pressure] -> pressure_reduction
      > pressure          -> supply_cutoff

    `violated` overrides the pct > 0 test, so a reading over a zero cap
    (percentage forced to 0) still gets a warning. Inverted thresholds do not
    raise; anything above both ends up as supply_cutoff.
    """
    if violated is None:
        violated = violation_pct > 0
    if not violated:
        return "normal"
    if violation_pct <= warning_limit:
        return "warning_notice"
    if violation_pct <= pressure_limit:
        return "pressure_reduction"
    return "supply_cutoff"


def _violation_pct(amount: float, limit: float) -> float:
    return (amount / limit) * 100.0 if limit > 0 else 0.0


def evaluate_last_reading(
    daily: Daily,
    baseline: Optional[float],
    restriction: Optional[Restriction],
    *,
    thresholds: Optional[ThresholdConfig] = None,
    last_record_date: Optional[str] = None,
) -> Optional[ViolationResult]:
    """Instantaneous policy: compare the last valid reading with that day's cap.

    Returns None when the subscriber has no baseline or no valid reading.
    """
    if not has_baseline(baseline):
        return None
    last = series.last_reading(daily, last_record_date=last_record_date)
    if last is None:
        return None
    th = thresholds or ThresholdConfig()
    value, day = last
    cap = compute_cap(baseline, resolve_percentage(restriction, day))

    violated = value > cap
    amount = value - cap if violated else 0.0
    pct = _violation_pct(amount, cap)
    return ViolationResult(
        policy="last_reading",
        day_index=day,
        value=value,
        limit=cap,
        violation_amount=amount,
        violation_pct=pct,
        is_violation=violated,
        action=classify_action(pct, th.warning_limit, th.pressure_limit, violated=violated),
        readings=[Reading(value, day)],
        caps=[cap],
    )


def evaluate_consecutive(
    daily: Daily,
    baseline: Optional[float],
    restriction: Optional[Restriction],
    *,
    window_days: int = canon.DEFAULT_WINDOW_DAYS,
    thresholds: Optional[ThresholdConfig] = None,
) -> Optional[ViolationResult]:
    """Scoring policy: the `window_days` most recent valid readings must each
    exceed their own day-specific cap.

    A single day under its cap clears the subscriber. With fewer valid readings
    than the window the subscriber is not scored and None is returned.
    """
    exceptions.require(
        isinstance(window_days, int) and window_days >= 2,
        f"window_days must be an integer of at least 2, got {window_days}",
        exceptions.ConfigError,
    )
    if not has_baseline(baseline):
        return None
    recent = series.recent_readings(daily, window_days)
    if len(recent) < window_days:
        return None
    th = thresholds or ThresholdConfig()

    values = np.array([v for v, _ in recent], dtype=float)
    days = [d for _, d in recent]
    caps = cap_series(baseline, restriction, days).to_numpy()

    violated = bool((values > caps).all())
    value = float(values.mean())
    limit = float(caps.mean())
    amount = value - limit if violated else 0.0
    pct = _violation_pct(amount, limit)
    return ViolationResult(
        policy="consecutive",
        day_index=days[0],
        value=value,
        limit=limit,
        violation_amount=amount,
        violation_pct=pct,
        is_violation=violated,
        action=classify_action(pct, th.warning_limit, th.pressure_limit, violated=violated),
        readings=[Reading(v, d) for v, d in recent],
        caps=[float(c) for c in caps],
    )


def evaluate(
    daily: Daily,
    baseline: Optional[float],
    restriction: Optional[Restriction],
    *,
    config: Optional[EvaluatorConfig] = None,
    last_record_date: Optional[str] = None,
) -> Optional[ViolationResult]:
    """Run the policy selected in `config`."""
    cfg = config or default_config()
    if cfg.policy == "consecutive":
        return evaluate_consecutive(
            daily,
            baseline,
            restriction,
            window_days=cfg.scoring.window_days,
            thresholds=cfg.thresholds,
        )
    return evaluate_last_reading(
        daily,
        baseline,
        restriction,
        thresholds=cfg.thresholds,
        last_record_date=last_record_date,
    )


def action_label(action: ActionTier, *, persian: bool = False) -> str:
    labels = canon.ACTION_LABELS_FA if persian else canon.ACTION_LABELS
    return labels.get(action, action)
