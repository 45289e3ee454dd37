"""Pricing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ...schemas.quote import LoadUnloadLocation

STANDARD = "standard"
FLAT_RATE = "flat_rate"

# Order is the presentation order of the breakdown.
BREAKDOWN_KEYS = (
    "base",
    "flat_rate",
    "linehaul",
    "handling_approach",
    "handling_depart",
    "handling_load",
    "handling_unload",
    "handling",
    "km_levy",
    "accessorials",
    "fuel",
    "zone_flat",
    "discount",
)


@dataclass(slots=True, frozen=True)
class HandlingHours:
    approach: float
    depart: float
    load: float
    unload: float

    @property
    def total(self) -> float:
        return self.approach + self.depart + self.load + self.unload


@dataclass(slots=True, frozen=True)
class HandlingCosts:
    approach: float
    depart: float
    load: float
    unload: float

    @property
    def total(self) -> float:
        return self.approach + self.depart + self.load + self.unload


@dataclass(slots=True, frozen=True)
class HandlingResult:
    scenario: LoadUnloadLocation
    rate_per_hour: float
    hours: HandlingHours
    costs: HandlingCosts


@dataclass(slots=True, frozen=True)
class QuoteResult:
    """Outcome of a single rating pass. Amounts are kept at full precision."""

    pricing_mode: str
    derived: Mapping[str, object]
    breakdown: Mapping[str, float]
    total: float
    currency: str
    trailer_type: str
    load_ratio: float
    handling: HandlingResult = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "derived", MappingProxyType(dict(self.derived)))
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown)))
