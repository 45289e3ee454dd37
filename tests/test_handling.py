import pytest
from pydantic import ValidationError

from freight_quote.schemas.pricing import PricingConfig
from freight_quote.schemas.quote import LoadUnloadLocation, QuoteOptions
from freight_quote.services.pricing.handling import compute_handling, resolve_location_scenario


def _config(**handling) -> PricingConfig:
    rates = {
        "approach_min_hours": 0.5,
        "depart_min_hours": 0.5,
        "full_trailer_load_unload_hours": 1.5,
        "rate_per_hour": 92.5,
    }
    rates.update(handling)
    return PricingConfig.model_validate({"handling": rates, "crane_multiplier": 1.2})


def test_internal_location_uses_fixed_hours_and_no_depart():
    options = QuoteOptions(load_unload_location="internal")
    result = compute_handling(_config(), options, ratio=0.5)

    assert result.scenario == LoadUnloadLocation.INTERNAL
    assert result.hours.approach == 0.5
    assert result.hours.depart == 0.0
    assert result.hours.load == 1.0
    assert result.hours.unload == 1.0
    assert result.hours.total == pytest.approx(2.5)
    assert result.costs.total == pytest.approx(2.5 * 92.5)


def test_external_location_uses_fixed_hours_and_depart():
    options = QuoteOptions(load_unload_location="external")
    result = compute_handling(_config(), options, ratio=0.25)

    assert result.hours.depart == 0.5
    assert result.hours.load == 1.5
    assert result.hours.unload == 1.5
    assert result.hours.total == pytest.approx(4.0)


def test_external_wins_when_both_legacy_flags_set():
    options = QuoteOptions.model_validate({"load_unload_internal": True, "load_unload_external": True})
    assert resolve_location_scenario(options) == LoadUnloadLocation.EXTERNAL

    result = compute_handling(_config(), options, ratio=0.5)
    assert result.hours.depart == 0.5
    assert result.hours.load == 1.5


def test_internal_legacy_flag_alone():
    options = QuoteOptions.model_validate({"load_unload_internal": True})
    assert options.load_unload_location == LoadUnloadLocation.INTERNAL


@pytest.mark.parametrize(
    "internal, external, expected",
    [
        ("false", "false", LoadUnloadLocation.NONE),
        ("0", "off", LoadUnloadLocation.NONE),
        (None, None, LoadUnloadLocation.NONE),
        ("true", "false", LoadUnloadLocation.INTERNAL),
        ("false", "true", LoadUnloadLocation.EXTERNAL),
        ("1", "yes", LoadUnloadLocation.EXTERNAL),
    ],
)
def test_legacy_flags_sent_as_form_strings(internal, external, expected):
    options = QuoteOptions.model_validate(
        {"load_unload_internal": internal, "load_unload_external": external}
    )
    assert options.load_unload_location == expected


def test_unparseable_legacy_flag_is_rejected():
    with pytest.raises(ValidationError):
        QuoteOptions.model_validate({"load_unload_external": "sometimes"})


def test_unspecified_location_scales_with_ratio_and_respects_flags():
    config = _config()
    both = compute_handling(config, QuoteOptions(load=True, unload=True), ratio=0.5)
    assert both.hours.load == pytest.approx(0.75)
    assert both.hours.unload == pytest.approx(0.75)
    assert both.hours.depart == 0.5

    load_only = compute_handling(config, QuoteOptions(load=True), ratio=0.5)
    assert load_only.hours.load == pytest.approx(0.75)
    assert load_only.hours.unload == 0.0

    neither = compute_handling(config, QuoteOptions(), ratio=1.0)
    assert neither.hours.load == 0.0
    assert neither.hours.unload == 0.0
    assert neither.hours.total == pytest.approx(1.0)


def test_crane_multiplies_the_hourly_rate():
    result = compute_handling(_config(), QuoteOptions(crane=True), ratio=0.0)
    assert result.rate_per_hour == pytest.approx(92.5 * 1.2)
    assert result.costs.approach == pytest.approx(0.5 * 92.5 * 1.2)


def test_crane_accepts_form_field_name():
    assert QuoteOptions.model_validate({"autolaad_kraan": True}).crane is True


def test_measured_approach_is_floored_at_minimum():
    config = _config()
    short = compute_handling(config, QuoteOptions(approach_hours=0.2), ratio=0.0)
    long = compute_handling(config, QuoteOptions(approach_hours=1.25), ratio=0.0)

    assert short.hours.approach == 0.5
    assert long.hours.approach == 1.25


def test_handling_values_are_not_rounded():
    result = compute_handling(_config(rate_per_hour=33.333), QuoteOptions(load=True), ratio=0.333)
    assert result.costs.load == pytest.approx(1.5 * 0.333 * 33.333, abs=1e-12)
