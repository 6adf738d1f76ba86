from . import (
    canon,
    exceptions,
    types,
    dates,
    schema,
    restrictions,
    series,
    config,
    evaluate,
    report,
)
from .dates import date_to_index, index_to_date
from .restrictions import resolve_percentage, compute_cap
from .evaluate import evaluate_last_reading, evaluate_consecutive, classify_action
from .schema import Restriction, RestrictionPeriod, Subscriber

__all__ = [
    "canon",
    "exceptions",
    "types",
    "dates",
    "schema",
    "restrictions",
    "series",
    "config",
    "evaluate",
    "report",
    "date_to_index",
    "index_to_date",
    "resolve_percentage",
    "compute_cap",
    "evaluate_last_reading",
    "evaluate_consecutive",
    "classify_action",
    "Restriction",
    "RestrictionPeriod",
    "Subscriber",
]
