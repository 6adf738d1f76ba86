from __future__ import annotations
from typing import Final, Dict

# Fixed epoch of the day index: 1404/09/28 is day 0
EPOCH_YEAR: Final[int] = 1404
EPOCH_MONTH: Final[int] = 9
EPOCH_DAY: Final[int] = 28
EPOCH_DATE: Final[str] = "1404/09/28"
# day-of-year of the epoch: 6*31 + 2*30 + 28
EPOCH_DOY: Final[int] = 274

# Months 1-6: 31 days, 7-11: 30 days, 12: 29 days (no leap rule)
MONTH_LENGTHS: Final[tuple[int, ...]] = (31, 31, 31, 31, 31, 31, 30, 30, 30, 30, 30, 29)

# Months walked forward from the epoch by index_to_date
MODELED_MONTHS: Final[tuple[int, ...]] = (9, 10, 11, 12)

DATE_SEPARATORS: Final[tuple[str, ...]] = ("-", ".")
DATE_PATTERN: Final[str] = r"^\d{4}/\d{2}/\d{2}$"

# Sentinels
INVALID_INDEX: Final[int] = -1
OUT_OF_RANGE: Final[str] = "Out of Range"
NO_DATA: Final[float] = -1.0

INDEX_NAME: Final[str] = "day_index"

MONTH_NAMES: Dict[int, str] = {
    9: "آذر",
    10: "دی",
    11: "بهمن",
    12: "اسفند",
}

ACTION_LABELS: Dict[str, str] = {
    "normal": "normal",
    "warning_notice": "warning notice",
    "pressure_reduction": "pressure reduction",
    "supply_cutoff": "supply cutoff",
}

# Labels used on the operator-facing Persian reports
ACTION_LABELS_FA: Dict[str, str] = {
    "normal": "نرمال",
    "warning_notice": "اخطار کتبی",
    "pressure_reduction": "اعمال افت فشار",
    "supply_cutoff": "قطع گاز",
}

FULL_CUTOFF_LABEL: Final[str] = "full cutoff"

DEFAULT_WARNING_LIMIT: Final[float] = 20.0
DEFAULT_PRESSURE_LIMIT: Final[float] = 50.0
DEFAULT_WINDOW_DAYS: Final[int] = 3
# Gap kept between the thresholds when one pushes the other
THRESHOLD_STEP: Final[float] = 5.0

VIOLATION_COLUMNS: Final[list[str]] = [
    "subscription_id",
    "name",
    "city",
    "tariff_code",
    "policy",
    "day_index",
    "date",
    "value",
    "limit",
    "violation_amount",
    "violation_pct",
    "action",
    "restriction_amount",
]

TARIFF_COLUMNS: Final[list[str]] = [
    "tariff_code",
    "count",
    "total_baseline",
    "total_last",
    "compliant",
    "compliance_pct",
]
