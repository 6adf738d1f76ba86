# gascaplogic/dates.py
from __future__ import annotations
import re
from typing import Optional, Tuple, Union

from . import canon

CalendarDate = Union[str, Tuple[int, int, int]]

MAX_INDEX: int = (
    canon.MONTH_LENGTHS[canon.EPOCH_MONTH - 1]
    - canon.EPOCH_DAY
    + 1
    + sum(canon.MONTH_LENGTHS[m - 1] for m in canon.MODELED_MONTHS[1:])
    - 1
)

_DATE_RE = re.compile(canon.DATE_PATTERN)


def month_length(month: int) -> int:
    return canon.MONTH_LENGTHS[month - 1]


def day_of_year(month: int, day: int) -> int:
    """Days from the start of the year up to and including (month, day)."""
    return sum(canon.MONTH_LENGTHS[: max(month - 1, 0)]) + day


def _split(date: CalendarDate) -> Optional[Tuple[int, int, int]]:
    if isinstance(date, tuple):
        if len(date) != 3:
            return None
        try:
            return int(date[0]), int(date[1]), int(date[2])
        except (TypeError, ValueError):
            return None
    if not isinstance(date, str) or not date.strip():
        return None
    s = date.strip()
    for sep in canon.DATE_SEPARATORS:
        s = s.replace(sep, "/")
    parts = s.split("/")
    if len(parts) != 3:
        return None
    try:
        y, m, d = (int(p) for p in parts)
    except ValueError:
        return None
    return y, m, d


def date_to_index(date: CalendarDate) -> int:
    """
    Day offset of a calendar date from the epoch (1404/09/28 -> 0).

    Accepts 'YYYY/MM/DD', 'YYYY-MM-DD', 'YYYY.MM.DD' or a (y, m, d) tuple.
    The year is implied: only month/day take part in the arithmetic.
    Unparseable input returns -1; dates before the epoch also come out
    negative, so callers must treat any negative result as out of range.
    """
    parts = _split(date)
    if parts is None:
        return canon.INVALID_INDEX
    _, m, d = parts
    return day_of_year(m, d) - canon.EPOCH_DOY


def index_to_date(index: int) -> str:
    """
    Canonical 'YYYY/MM/DD' for a day index, walking forward from the epoch
    through the rest of month 9 and then months 10, 11 and 12.

    Negative indices and indices past the last day of month 12 return
    'Out of Range'.
    """
    if index < 0:
        return canon.OUT_OF_RANGE
    rem = int(index)
    first_day = canon.EPOCH_DAY
    for month in canon.MODELED_MONTHS:
        remaining = month_length(month) - first_day + 1
        if rem < remaining:
            return format_date(canon.EPOCH_YEAR, month, first_day + rem)
        rem -= remaining
        first_day = 1
    return canon.OUT_OF_RANGE


def format_date(year: int, month: int, day: int) -> str:
    return f"{year:04d}/{month:02d}/{day:02d}"


def normalise_date(date: CalendarDate) -> Optional[str]:
    """Zero-padded canonical form, or None when the input cannot be parsed."""
    parts = _split(date)
    if parts is None:
        return None
    return format_date(*parts)


def is_canonical_date(text: str) -> bool:
    """Validation rule applied to stored restriction dates."""
    if not isinstance(text, str) or not _DATE_RE.match(text):
        return False
    y, m, d = (int(p) for p in text.split("/"))
    if y != canon.EPOCH_YEAR or not 1 <= m <= 12:
        return False
    return 1 <= d <= month_length(m)


def month_name(date: str) -> str:
    parts = date.split("/") if isinstance(date, str) else []
    if len(parts) < 2:
        return ""
    try:
        return canon.MONTH_NAMES.get(int(parts[1]), "")
    except ValueError:
        return ""


def date_labels(last_index: int) -> list[str]:
    """Date labels for indices 0..last_index (inclusive)."""
    return [index_to_date(i) for i in range(0, last_index + 1)]
