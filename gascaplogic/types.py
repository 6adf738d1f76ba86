from __future__ import annotations
from typing import Literal, List, TypedDict
from dataclasses import dataclass, field

Policy = Literal["last_reading", "consecutive"]
ActionTier = Literal["normal", "warning_notice", "pressure_reduction", "supply_cutoff"]


@dataclass
class Reading:
    value: float
    day_index: int


@dataclass
class ViolationResult:
    """
    Outcome of evaluating one subscriber under one policy.

    - value: last valid reading (last_reading) or mean of the window (consecutive)
    - limit: cap on that day, or mean of the day-specific caps over the window
    - violation_amount / violation_pct: excess over limit, 0 for compliant results
    - readings: the readings the decision was based on, most recent first
    """

    policy: Policy
    day_index: int
    value: float
    limit: float
    violation_amount: float
    violation_pct: float
    is_violation: bool
    action: ActionTier = "normal"
    readings: List[Reading] = field(default_factory=list)
    caps: List[float] = field(default_factory=list)


class BreakdownMetrics(TypedDict):
    compliant_days: int
    violation_days: int
    total_compliant_volume: float
    total_excess_volume: float
    total_volume: float


class TariffAggregate(TypedDict):
    tariff_code: str
    count: int
    total_baseline: float
    total_last: float
    compliant: int
    compliance_pct: float
