from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from . import canon, exceptions
from .types import Policy


@dataclass
class ThresholdConfig:
    # Violation % up to warning_limit -> warning notice,
    # up to pressure_limit -> pressure reduction, above -> supply cutoff
    warning_limit: float = canon.DEFAULT_WARNING_LIMIT
    pressure_limit: float = canon.DEFAULT_PRESSURE_LIMIT


@dataclass
class ScoringConfig:
    # Number of most recent valid readings that must all exceed their caps
    window_days: int = canon.DEFAULT_WINDOW_DAYS

    def __post_init__(self):
        exceptions.require(
            isinstance(self.window_days, int) and self.window_days >= 2,
            f"window_days must be an integer of at least 2, got {self.window_days}",
            exceptions.ConfigError,
        )


@dataclass
class EvaluatorConfig:
    policy: Policy = "last_reading"
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)

    def __post_init__(self):
        exceptions.require(
            self.policy in ("last_reading", "consecutive"),
            f"Unknown policy '{self.policy}'",
            exceptions.ConfigError,
        )


def adjust_thresholds(
    cfg: ThresholdConfig,
    *,
    warning: Optional[float] = None,
    pressure: Optional[float] = None,
    step: float = canon.THRESHOLD_STEP,
) -> ThresholdConfig:
    """
    Return thresholds with one limit moved, keeping warning < pressure.

    Raising the warning limit to or past the pressure limit pushes pressure
    up by `step`; lowering pressure to or below warning pushes warning down.
    """
    out = cfg
    if warning is not None:
        out = replace(out, warning_limit=float(warning))
        if out.warning_limit >= out.pressure_limit:
            out = replace(out, pressure_limit=out.warning_limit + step)
    if pressure is not None:
        out = replace(out, pressure_limit=float(pressure))
        if out.pressure_limit <= out.warning_limit:
            out = replace(out, warning_limit=out.pressure_limit - step)
    return out


def default_config() -> EvaluatorConfig:
    return EvaluatorConfig()
