"""Load ratio (beladingsgraad) resolution."""

from __future__ import annotations

import math
from typing import Optional

from ...schemas.pricing import PricingConfig


def _finite(value: Optional[float]) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def resolve_load_ratio(
    load_grade: Optional[str],
    load_fraction: Optional[float],
    config: PricingConfig,
) -> float:
    """Return the share of trailer capacity used, in [0, 1].

    An explicit numeric fraction wins over a grade label. Unknown grades and
    missing input resolve to 0.
    """
    if _finite(load_fraction):
        return max(0.0, min(1.0, float(load_fraction)))
    if load_grade is not None and load_grade in config.load_grade_ratios:
        return config.load_grade_ratios[load_grade]
    return 0.0


def is_minimal_load(
    load_grade: Optional[str],
    load_fraction: Optional[float],
    config: PricingConfig,
) -> bool:
    """True when the shipment is priced on the one-pallet flat tariff."""
    flat = config.one_pallet_pricing
    if flat is None:
        return False
    if _finite(load_fraction):
        return float(load_fraction) <= flat.max_fraction
    return load_grade == flat.grade
