# gascaplogic/restrictions.py
from __future__ import annotations
from typing import Iterable, Optional
import numpy as np
import pandas as pd

from . import canon
from .schema import Restriction


def resolve_percentage(restriction: Optional[Restriction], day_index: int) -> float:
    """
    Restriction percentage in force on `day_index`.

    The value comes from the latest period whose effective date is on or before
    the day. No restriction, no periods, or a day before every period -> 0.
    """
    if restriction is None or not restriction.periods:
        return 0.0
    pct = 0.0
    for p in restriction.sorted_periods():
        if p.day_index <= day_index:
            pct = float(p.percentage)
        else:
            break
    return pct


def has_baseline(baseline: Optional[float]) -> bool:
    """True for a positive baseline; None, NaN and non-positive values are missing."""
    return baseline is not None and not pd.isna(baseline) and float(baseline) > 0


def compute_cap(baseline: Optional[float], percentage: float) -> float:
    """cap = baseline * (1 - percentage / 100); missing baseline gives 0."""
    if not has_baseline(baseline):
        return 0.0
    return float(baseline) * (1.0 - float(percentage) / 100.0)


def percentage_series(
    restriction: Optional[Restriction], day_indices: Iterable[int]
) -> pd.Series:
    """
    Vectorised resolve_percentage over many days.

    Periods are sorted once; each day is mapped to the last period starting
    on or before it with searchsorted (-1 when before the first period).
    """
    idx = pd.Index(np.asarray(list(day_indices), dtype=int), name=canon.INDEX_NAME)
    if restriction is None or not restriction.periods:
        return pd.Series(0.0, index=idx, name="percentage")

    periods = restriction.sorted_periods()
    starts = np.array([p.day_index for p in periods], dtype=int)
    pcts = np.array([p.percentage for p in periods], dtype=float)

    pos = np.searchsorted(starts, idx.to_numpy(), side="right") - 1
    out = np.where(pos >= 0, pcts[np.clip(pos, 0, len(pcts) - 1)], 0.0)
    return pd.Series(out, index=idx, name="percentage")


def cap_series(
    baseline: Optional[float],
    restriction: Optional[Restriction],
    day_indices: Iterable[int],
) -> pd.Series:
    pct = percentage_series(restriction, day_indices)
    if not has_baseline(baseline):
        return pd.Series(0.0, index=pct.index, name="cap")
    return (float(baseline) * (1.0 - pct / 100.0)).rename("cap")
