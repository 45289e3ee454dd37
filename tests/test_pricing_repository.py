import json
from pathlib import Path

import pytest

from freight_quote.data.pricing_repository import (
    load_default_pricing,
    load_pricing_config,
    parse_pricing_config,
)
from freight_quote.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clear_pricing_cache():
    load_pricing_config.cache_clear()
    yield
    load_pricing_config.cache_clear()


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_loads_file_and_accepts_original_key_names(tmp_path: Path):
    source = _write(
        tmp_path / "pricing.json",
        {
            "min_fee": 95,
            "distance_rate": 0.9,
            "beladingsgraad": {"half": 0.5},
            "trailers": {"vlakke": {"multiplier": 1.0}},
            "default_trailer_type": "vlakke",
            "zones": {"BE": 30},
            "one_pallet_pricing": {"tiers": [{"max_km": 50, "price": 110}, [100, 150]], "price_above": 200},
        },
    )
    config = load_pricing_config(source)

    assert config.min_fee == 95
    assert config.eur_per_km_base == 0.9
    assert config.load_grade_ratios == {"half": 0.5}
    assert config.zones["BE"].flat == 30
    assert [tier.price for tier in config.one_pallet_pricing.tiers] == [110, 150]


def test_missing_file_uses_packaged_default(tmp_path: Path):
    config = load_pricing_config(tmp_path / "absent.json", allow_default=True)
    assert config == load_default_pricing()
    assert config.min_fee == 110.0
    assert config.handling.rate_per_hour == 92.5


def test_missing_file_without_fallback_raises(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_pricing_config(tmp_path / "absent.json", allow_default=False)


def test_invalid_json_raises(tmp_path: Path):
    source = tmp_path / "pricing.json"
    source.write_text("{ not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_pricing_config(source)


def test_config_is_cached_per_source(tmp_path: Path):
    source = _write(tmp_path / "pricing.json", {"min_fee": 10})
    assert load_pricing_config(source) is load_pricing_config(source)


@pytest.mark.parametrize(
    "raw, message",
    [
        ({"min_fee": -1}, "min_fee"),
        ({"beladingsgraad": {"full": 1.5}}, "outside"),
        ({"one_pallet_pricing": {"tiers": [[100, 150], [50, 110]]}}, "ascending"),
        ({"trailers": {"mega": {"multiplier": 1.05}}, "default_trailer_type": "tautliner"}, "default_trailer_type"),
        ({"combined_discount_pct": 1.5}, "combined_discount_pct"),
    ],
)
def test_invariants_are_validated(raw, message):
    with pytest.raises(ConfigurationError, match=message):
        parse_pricing_config(raw)


def test_omitted_blocks_use_defaults():
    config = parse_pricing_config({"min_fee": 110})

    assert config.km_levy.eur_per_km == 0.12
    # no handling block means no handling is charged
    assert config.handling.rate_per_hour == 0.0
    assert config.handling.approach_min_hours == 0.0


def test_config_is_immutable():
    config = parse_pricing_config({"min_fee": 10})
    with pytest.raises(Exception):
        config.min_fee = 0


def test_repository_config_file_is_valid():
    source = Path(__file__).resolve().parents[1] / "config" / "pricing.json"
    config = load_pricing_config(source, allow_default=False)
    assert config.one_pallet_pricing is not None
    assert config.default_trailer_type in config.trailers
