from __future__ import annotations
import logging
from typing import Iterable, Mapping, Optional, Union
import pandas as pd

from . import canon, dates, series
from .config import EvaluatorConfig, default_config
from .evaluate import evaluate
from .restrictions import cap_series, compute_cap, has_baseline, resolve_percentage
from .schema import Restriction, Subscriber
from .types import BreakdownMetrics, TariffAggregate, ViolationResult

logger = logging.getLogger(__name__)

Restrictions = Union[Mapping[str, Restriction], Iterable[Restriction]]


def index_restrictions(restrictions: Restrictions) -> dict[str, Restriction]:
    """Key restriction schedules by tariff code (last one wins)."""
    if isinstance(restrictions, Mapping):
        return dict(restrictions)
    return {r.tariff_code: r for r in restrictions}


def evaluate_subscriber(
    subscriber: Subscriber,
    restrictions: Restrictions,
    config: Optional[EvaluatorConfig] = None,
) -> Optional[ViolationResult]:
    by_tariff = index_restrictions(restrictions)
    return evaluate(
        subscriber.daily,
        subscriber.baseline,
        by_tariff.get(subscriber.tariff_code),
        config=config,
        last_record_date=subscriber.last_record_date,
    )


def restriction_amount(result: ViolationResult) -> str:
    """Restriction column of the headquarters report."""
    if result.action == "supply_cutoff":
        return canon.FULL_CUTOFF_LABEL
    return f"{result.violation_pct:.1f}%"


def violation_table(
    subscribers: Iterable[Subscriber],
    restrictions: Restrictions,
    config: Optional[EvaluatorConfig] = None,
    *,
    min_violation_pct: float = 0.0,
    action: Optional[str] = None,
    violators_only: bool = True,
) -> pd.DataFrame:
    """
    One row per evaluated subscriber, sorted by violation_pct descending.

    Subscribers without a baseline or without valid readings are left out.
    `min_violation_pct` and `action` filter violators; with
    violators_only=False compliant subscribers are listed as well.
    """
    cfg = config or default_config()
    by_tariff = index_restrictions(restrictions)

    rows = []
    for sub in subscribers:
        res = evaluate_subscriber(sub, by_tariff, cfg)
        if res is None:
            logger.debug("Skipping %s: no baseline or not enough readings", sub.subscription_id)
            continue
        if res.is_violation:
            if res.violation_pct < min_violation_pct:
                continue
            if action is not None and res.action != action:
                continue
        elif violators_only:
            continue
        rows.append(
            {
                "subscription_id": sub.subscription_id,
                "name": sub.name,
                "city": sub.city,
                "tariff_code": sub.tariff_code,
                "policy": res.policy,
                "day_index": res.day_index,
                "date": dates.index_to_date(res.day_index),
                "value": res.value,
                "limit": res.limit,
                "violation_amount": res.violation_amount,
                "violation_pct": res.violation_pct,
                "action": res.action,
                "restriction_amount": restriction_amount(res) if res.is_violation else "",
            }
        )

    out = pd.DataFrame(rows, columns=canon.VIOLATION_COLUMNS)
    if out.empty:
        return out
    out = out.sort_values("violation_pct", ascending=False, kind="stable")
    return out.reset_index(drop=True)


def tariff_compliance(
    subscribers: Iterable[Subscriber],
    restrictions: Restrictions,
) -> pd.DataFrame:
    """
    Per-tariff totals: subscriber count, summed baselines and last readings,
    and the share of subscribers whose last reading is within its cap.

    A subscriber without any reading is counted as compliant.
    """
    by_tariff = index_restrictions(restrictions)
    groups: dict[str, TariffAggregate] = {}

    for sub in subscribers:
        agg = groups.setdefault(
            sub.tariff_code,
            {
                "tariff_code": sub.tariff_code,
                "count": 0,
                "total_baseline": 0.0,
                "total_last": 0.0,
                "compliant": 0,
                "compliance_pct": 0.0,
            },
        )
        agg["count"] += 1
        if has_baseline(sub.baseline):
            agg["total_baseline"] += float(sub.baseline)

        rest = by_tariff.get(sub.tariff_code)
        last = series.last_reading(sub.daily, last_record_date=sub.last_record_date)
        if last is None:
            agg["compliant"] += 1
            continue
        value, day = last
        agg["total_last"] += value
        cap = compute_cap(sub.baseline, resolve_percentage(rest, day))
        if value <= cap:
            agg["compliant"] += 1

    for agg in groups.values():
        agg["compliance_pct"] = (
            agg["compliant"] / agg["count"] * 100.0 if agg["count"] else 0.0
        )

    out = pd.DataFrame(list(groups.values()), columns=canon.TARIFF_COLUMNS)
    return out.sort_values("tariff_code").reset_index(drop=True)


def daily_breakdown(
    subscriber: Subscriber,
    restriction: Optional[Restriction],
    *,
    start: int = 0,
    end: Optional[int] = None,
) -> pd.DataFrame:
    """
    Day-by-day comparison of readings with the cap in force on each day.

    Columns: date, value, cap, excess, is_violation; indexed by day index.
    Days without data keep value NaN and are never violations.
    """
    s = series.to_series(subscriber.daily)
    stop = len(s) - 1 if end is None else min(end, len(s) - 1)
    s = s.loc[start:stop]

    caps = cap_series(subscriber.baseline, restriction, s.index)
    excess = (s - caps).clip(lower=0.0).where(s.notna())
    out = pd.DataFrame(
        {
            "date": [dates.index_to_date(int(i)) for i in s.index],
            "value": s,
            "cap": caps,
            "excess": excess,
            "is_violation": s > caps,
        },
        index=s.index,
    )
    return out


def breakdown_metrics(frame: pd.DataFrame) -> BreakdownMetrics:
    """Compliant vs violating day counts and volumes from daily_breakdown()."""
    # Only days with a positive reading count as recorded days
    recorded = frame[frame["value"] > 0]
    viol = recorded[recorded["is_violation"]]
    ok = recorded[~recorded["is_violation"]]
    return {
        "compliant_days": int(len(ok)),
        "violation_days": int(len(viol)),
        "total_compliant_volume": float(ok["value"].sum()),
        "total_excess_volume": float(viol["excess"].sum()),
        "total_volume": float(recorded["value"].sum()),
    }
