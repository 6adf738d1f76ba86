from __future__ import annotations
import logging
import math
from typing import Iterable, Optional, Sequence, Tuple
import numpy as np
import pandas as pd

from . import canon, dates

logger = logging.getLogger(__name__)


def _is_valid(v) -> bool:
    if v is None:
        return False
    try:
        f = float(v)
    except (TypeError, ValueError):
        return False
    return not math.isnan(f) and f >= 0


def to_series(daily: Sequence[Optional[float]] | pd.Series) -> pd.Series:
    """
    Daily readings as a float Series indexed by day index.

    Sentinels (negative values, None, NaN) become NaN; a reading of 0 stays 0.
    A Series input is reordered by day index.
    """
    if isinstance(daily, pd.Series):
        s = pd.to_numeric(daily, errors="coerce").astype(float)
        s.index = pd.Index(np.asarray(s.index, dtype=int), name=canon.INDEX_NAME)
        s = s.sort_index()
    else:
        vals = [float(v) if _is_valid(v) else np.nan for v in daily]
        s = pd.Series(
            vals,
            index=pd.RangeIndex(len(vals), name=canon.INDEX_NAME),
            dtype=float,
        )
    return s.where(s >= 0).rename("value")


def valid_readings(daily: Sequence[Optional[float]] | pd.Series) -> pd.Series:
    """Non-sentinel readings in ascending day order."""
    return to_series(daily).dropna().sort_index()


def recent_readings(
    daily: Sequence[Optional[float]] | pd.Series, n: int
) -> list[Tuple[float, int]]:
    """Most recent `n` valid (value, day_index) pairs, newest first."""
    s = valid_readings(daily)
    tail = s.iloc[::-1].iloc[:n]
    return [(float(v), int(i)) for i, v in tail.items()]


def last_reading(
    daily: Sequence[Optional[float]] | pd.Series,
    *,
    last_record_date: Optional[str] = None,
) -> Optional[Tuple[float, int]]:
    """
    Most recent valid (value, day_index), or None when the series has no data.

    When `last_record_date` points at a day inside the series that holds a
    valid reading, that day is used; otherwise the series is scanned backward.
    """
    s = to_series(daily)
    if last_record_date:
        hint = dates.date_to_index(last_record_date)
        if hint >= 0 and hint in s.index and pd.notna(s.loc[hint]):
            return float(s.loc[hint]), int(hint)
        logger.debug("last_record_date %r unusable, scanning series", last_record_date)
    s = s.dropna()
    if s.empty:
        return None
    return float(s.iloc[-1]), int(s.index[-1])


def parse_reading(raw) -> float:
    """
    Clean one imported cell into a reading.

    '17592/4' is a decimal typed with a slash (17592.4); thousands separators
    are dropped. Blank or unparseable cells give the NO_DATA sentinel.
    """
    if raw is None:
        return canon.NO_DATA
    if isinstance(raw, (int, float)):
        return canon.NO_DATA if math.isnan(float(raw)) else float(raw)
    s = str(raw).strip().replace("/", ".", 1).replace(",", "")
    if not s:
        return canon.NO_DATA
    try:
        return float(s)
    except ValueError:
        return canon.NO_DATA


def last_day_with_data(records: Iterable[Sequence[Optional[float]]]) -> int:
    """Highest day index holding a positive reading across records, -1 if none."""
    last = canon.INVALID_INDEX
    for daily in records:
        s = to_series(daily)
        pos = s[s > 0]
        if not pos.empty:
            last = max(last, int(pos.index.max()))
    return last
