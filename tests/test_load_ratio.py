import math

import pytest

from freight_quote.schemas.pricing import PricingConfig
from freight_quote.services.pricing.load_ratio import is_minimal_load, resolve_load_ratio


def _config(**overrides) -> PricingConfig:
    raw = {
        "beladingsgraad": {
            "one_pallet": 0.05,
            "quarter": 0.25,
            "half": 0.5,
            "three_quarter": 0.75,
            "full": 1.0,
        },
        "one_pallet_pricing": {"tiers": [[50, 110]], "price_above": 225},
    }
    raw.update(overrides)
    return PricingConfig.model_validate(raw)


@pytest.mark.parametrize(
    "fraction, expected",
    [(-3.0, 0.0), (-0.01, 0.0), (0.0, 0.0), (0.42, 0.42), (1.0, 1.0), (1.7, 1.0), (250, 1.0)],
)
def test_fraction_is_clamped_to_unit_interval(fraction, expected):
    assert resolve_load_ratio(None, fraction, _config()) == pytest.approx(expected)


def test_fraction_takes_precedence_over_grade():
    assert resolve_load_ratio("full", 0.3, _config()) == pytest.approx(0.3)


def test_grade_lookup_when_no_fraction():
    assert resolve_load_ratio("three_quarter", None, _config()) == 0.75


def test_non_finite_fraction_falls_back_to_grade():
    config = _config()
    assert resolve_load_ratio("half", math.nan, config) == 0.5
    assert resolve_load_ratio("half", math.inf, config) == 0.5
    assert resolve_load_ratio(None, -math.inf, config) == 0.0


def test_unknown_grade_and_missing_input_resolve_to_zero():
    config = _config()
    assert resolve_load_ratio("two_trailers", None, config) == 0.0
    assert resolve_load_ratio(None, None, config) == 0.0


def test_minimal_load_by_grade_or_small_fraction():
    config = _config()
    assert is_minimal_load("one_pallet", None, config)
    assert is_minimal_load(None, 0.05, config)
    assert is_minimal_load(None, 0.06, config)
    assert not is_minimal_load(None, 0.07, config)
    assert not is_minimal_load("quarter", None, config)


def test_explicit_fraction_overrides_one_pallet_grade():
    assert not is_minimal_load("one_pallet", 0.5, _config())


def test_no_flat_rate_without_one_pallet_pricing():
    config = _config(one_pallet_pricing=None)
    assert not is_minimal_load("one_pallet", None, config)
    assert not is_minimal_load(None, 0.01, config)
