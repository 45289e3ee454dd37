"""Rate engine: turns a request, a tariff and route metrics into a quote.

The engine is pure. It never loads configuration, never calls the routing
provider and never rounds; rounding happens when the result is serialized
(see ``services/outputs/formatter.py``).
"""

from __future__ import annotations

import logging
from typing import Dict

from ...exceptions import QuoteValidationError
from ...schemas.pricing import OnePalletPricing, PricingConfig, TrailerSpec
from ...schemas.quote import QuoteOptions, QuoteRequest
from ..routing.models import RouteMetrics
from .handling import compute_handling
from .load_ratio import is_minimal_load, resolve_load_ratio
from .models import BREAKDOWN_KEYS, FLAT_RATE, STANDARD, HandlingResult, QuoteResult

logger = logging.getLogger(__name__)

_NEUTRAL_TRAILER = TrailerSpec(label=None, multiplier=1.0)


def validate_request(request: QuoteRequest) -> None:
    missing = [
        name
        for name, value in (("from", request.origin), ("to", request.destination))
        if value is None or not value.strip()
    ]
    if missing:
        raise QuoteValidationError(f"{' and '.join(missing)} {'is' if len(missing) == 1 else 'are'} required")


def resolve_trailer(trailer_type: str | None, config: PricingConfig) -> tuple[str, TrailerSpec]:
    if trailer_type and trailer_type in config.trailers:
        return trailer_type, config.trailers[trailer_type]
    if trailer_type:
        logger.warning(
            f"Unknown trailer type '{trailer_type}', falling back to '{config.default_trailer_type}'"
        )
    fallback = config.trailers.get(config.default_trailer_type)
    if fallback is None:
        logger.warning("No trailers configured, pricing with multiplier 1.0")
        return config.default_trailer_type, _NEUTRAL_TRAILER
    return config.default_trailer_type, fallback


def resolve_zone_flat(options: QuoteOptions, config: PricingConfig) -> float:
    code = options.zone or config.default_zone
    zone = config.zones.get(code)
    if zone is None:
        if options.zone:
            logger.warning(f"Unknown zone '{code}', no zone fee applied")
        return 0.0
    return zone.flat


def tier_price(distance_km: float, pricing: OnePalletPricing) -> float:
    """First tier whose max_km covers the distance, else ``price_above``."""
    for tier in pricing.tiers:
        if tier.max_km >= distance_km:
            return tier.price
    return pricing.price_above


def _accessorials(options: QuoteOptions, config: PricingConfig, distance_km: int) -> float:
    fees = config.accessorials
    amount = 0.0
    if options.city_delivery:
        amount += fees.city_delivery
    if options.adr:
        amount += fees.adr
    if options.toll:
        amount += fees.toll_per_km * distance_km
    if options.waiting_hours:
        amount += fees.waiting_per_hour * options.waiting_hours
    return amount


def _empty_breakdown() -> Dict[str, float]:
    return {key: 0.0 for key in BREAKDOWN_KEYS}


def _apply_handling(breakdown: Dict[str, float], handling: HandlingResult) -> None:
    breakdown["handling_approach"] = handling.costs.approach
    breakdown["handling_depart"] = handling.costs.depart
    breakdown["handling_load"] = handling.costs.load
    breakdown["handling_unload"] = handling.costs.unload
    breakdown["handling"] = handling.costs.total


def _derived(
    metrics: RouteMetrics,
    ratio: float,
    trailer_type: str,
    trailer: TrailerSpec,
    handling: HandlingResult,
    pricing_mode: str,
) -> dict:
    hours = handling.hours
    return {
        "distance_km": metrics.distance_km,
        "duration_hours": metrics.duration_hours,
        "load_ratio": ratio,
        "pricing_mode": pricing_mode,
        "trailer_type": trailer_type,
        "trailer_multiplier": trailer.multiplier,
        "load_unload_location": handling.scenario.value,
        "handling_rate_per_hour": handling.rate_per_hour,
        "approach_hours": hours.approach,
        "depart_hours": hours.depart,
        "load_hours": hours.load,
        "unload_hours": hours.unload,
        "handling_total_hours": hours.total,
    }


def _flat_rate_quote(
    request: QuoteRequest,
    config: PricingConfig,
    metrics: RouteMetrics,
    ratio: float,
    trailer_type: str,
    trailer: TrailerSpec,
    handling: HandlingResult,
) -> QuoteResult:
    pricing = config.one_pallet_pricing
    include = pricing.include
    options = request.options
    breakdown = _empty_breakdown()

    breakdown["flat_rate"] = tier_price(metrics.distance_km, pricing)
    if include.min_fee:
        breakdown["base"] = config.min_fee
    if include.handling:
        _apply_handling(breakdown, handling)
    if include.km_levy and options.km_levy:
        breakdown["km_levy"] = config.km_levy.eur_per_km * metrics.distance_km
    if include.city_delivery and options.city_delivery:
        breakdown["accessorials"] = config.accessorials.city_delivery

    subtotal = (
        breakdown["base"]
        + breakdown["flat_rate"]
        + breakdown["handling"]
        + breakdown["km_levy"]
        + breakdown["accessorials"]
    )
    if include.fuel:
        breakdown["fuel"] = subtotal * config.fuel_pct
    # min_fee floors every quote, flat rate included
    total = max(config.min_fee, subtotal + breakdown["fuel"])

    return QuoteResult(
        pricing_mode=FLAT_RATE,
        derived=_derived(metrics, ratio, trailer_type, trailer, handling, FLAT_RATE),
        breakdown=breakdown,
        total=total,
        currency=config.currency,
        trailer_type=trailer_type,
        load_ratio=ratio,
        handling=handling,
    )


def quote(request: QuoteRequest, config: PricingConfig, metrics: RouteMetrics) -> QuoteResult:
    """Price one shipment.

    Raises:
        QuoteValidationError: origin or destination missing.
    """
    validate_request(request)
    options = request.options

    trailer_type, trailer = resolve_trailer(request.trailer_type, config)
    ratio = resolve_load_ratio(request.load_grade, request.load_fraction, config)
    handling = compute_handling(config, options, ratio)

    if is_minimal_load(request.load_grade, request.load_fraction, config):
        return _flat_rate_quote(request, config, metrics, ratio, trailer_type, trailer, handling)

    distance_km = metrics.distance_km
    breakdown = _empty_breakdown()
    breakdown["base"] = config.min_fee if config.base_fee_mode == "added_to_subtotal" else 0.0
    breakdown["linehaul"] = distance_km * config.eur_per_km_base * trailer.multiplier * ratio
    _apply_handling(breakdown, handling)
    breakdown["km_levy"] = config.km_levy.eur_per_km * distance_km if options.km_levy else 0.0
    breakdown["accessorials"] = _accessorials(options, config, distance_km)

    subtotal = (
        breakdown["base"]
        + breakdown["linehaul"]
        + breakdown["handling"]
        + breakdown["km_levy"]
        + breakdown["accessorials"]
    )
    breakdown["fuel"] = subtotal * config.fuel_pct
    breakdown["zone_flat"] = resolve_zone_flat(options, config)

    pre_discount_total = subtotal + breakdown["fuel"] + breakdown["zone_flat"]
    breakdown["discount"] = -(pre_discount_total * config.combined_discount_pct) if options.combined else 0.0
    total = max(config.min_fee, pre_discount_total + breakdown["discount"])

    derived = _derived(metrics, ratio, trailer_type, trailer, handling, STANDARD)
    derived["subtotal"] = subtotal
    derived["pre_discount_total"] = pre_discount_total

    return QuoteResult(
        pricing_mode=STANDARD,
        derived=derived,
        breakdown=breakdown,
        total=total,
        currency=config.currency,
        trailer_type=trailer_type,
        load_ratio=ratio,
        handling=handling,
    )
