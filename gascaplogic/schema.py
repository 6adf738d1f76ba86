from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from . import canon, dates, exceptions

Percentage = float


class RestrictionPeriod(BaseModel):
    effective_from: str  # canonical "YYYY/MM/DD"
    percentage: Percentage = Field(ge=0.0, le=100.0)
    model_config = {"frozen": True}

    @field_validator("effective_from", mode="before")
    @classmethod
    def _canonical_date(cls, v):
        norm = dates.normalise_date(v)
        if norm is None or not dates.is_canonical_date(norm):
            raise ValueError(f"Invalid restriction date '{v}', expected YYYY/MM/DD")
        return norm

    @property
    def day_index(self) -> int:
        return dates.date_to_index(self.effective_from)


class Restriction(BaseModel):
    """
    Restriction schedule for one tariff (usage code).

    Each period sets the cap percentage from its effective date until a later
    period replaces it. Periods are unique per date; when duplicates are
    supplied the last one wins.
    """

    tariff_code: str
    periods: list[RestrictionPeriod] = Field(default_factory=list)
    model_config = {"frozen": True}

    @field_validator("tariff_code", mode="before")
    @classmethod
    def _strip_code(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("periods")
    @classmethod
    def _dedupe_periods(cls, v: list[RestrictionPeriod]) -> list[RestrictionPeriod]:
        by_date: dict[str, RestrictionPeriod] = {}
        for p in v:
            by_date.pop(p.effective_from, None)
            by_date[p.effective_from] = p
        return list(by_date.values())

    @classmethod
    def seed(cls, tariff_code: str, percentage: Percentage = 0.0) -> "Restriction":
        """A schedule holding only the protected period at the epoch date."""
        return cls(
            tariff_code=tariff_code,
            periods=[RestrictionPeriod(effective_from=canon.EPOCH_DATE, percentage=percentage)],
        )

    @classmethod
    def from_legacy(cls, tariff_code: str, percentage: Optional[Percentage]) -> "Restriction":
        """Upgrade a legacy flat-percentage record to a one-period schedule."""
        return cls.seed(tariff_code, float(percentage or 0.0))

    def sorted_periods(self) -> list[RestrictionPeriod]:
        return sorted(self.periods, key=lambda p: p.day_index)

    def upsert_period(self, effective_from: str, percentage: Percentage) -> "Restriction":
        new = RestrictionPeriod(effective_from=effective_from, percentage=percentage)
        kept = [p for p in self.periods if p.effective_from != new.effective_from]
        return self.model_copy(update={"periods": sorted(kept + [new], key=lambda p: p.day_index)})

    def remove_period(self, effective_from: str) -> "Restriction":
        target = dates.normalise_date(effective_from)
        exceptions.require(
            target != canon.EPOCH_DATE,
            f"The seed period at {canon.EPOCH_DATE} cannot be removed.",
            exceptions.RestrictionError,
        )
        kept = [p for p in self.periods if p.effective_from != target]
        return self.model_copy(update={"periods": kept})


class Subscriber(BaseModel):
    """Master record of an industrial subscriber plus its daily readings."""

    subscription_id: str
    name: str = ""
    city: str = ""
    tariff_code: str
    baseline: Optional[float] = None  # reference daily average
    daily: list[Optional[float]] = Field(default_factory=list)
    last_record_date: Optional[str] = None
    phone: Optional[str] = None
    station_capacity: Optional[float] = None

    @field_validator("city", "tariff_code", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v
