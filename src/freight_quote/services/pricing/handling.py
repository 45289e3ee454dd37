"""Handling time and cost calculation.

Handling covers four legs of work billed at an hourly rate: driving to the
pickup (approach), driving back (depart), loading and unloading. The hours for
each leg depend on where loading/unloading happens:

* ``internal``: fixed load/unload hours, no depart leg.
* ``external``: fixed (longer) load/unload hours plus the depart leg.
* ``none``: load/unload hours proportional to the load ratio, each one only
  when the request asks for it.
"""

from __future__ import annotations

from ...schemas.pricing import PricingConfig
from ...schemas.quote import LoadUnloadLocation, QuoteOptions
from .models import HandlingCosts, HandlingHours, HandlingResult


def resolve_location_scenario(options: QuoteOptions) -> LoadUnloadLocation:
    # QuoteOptions already collapses the legacy flags; this keeps the
    # external > internal > none priority for options built in code.
    location = options.load_unload_location
    if location == LoadUnloadLocation.EXTERNAL:
        return LoadUnloadLocation.EXTERNAL
    if location == LoadUnloadLocation.INTERNAL:
        return LoadUnloadLocation.INTERNAL
    return LoadUnloadLocation.NONE


def effective_rate(config: PricingConfig, options: QuoteOptions) -> float:
    multiplier = config.crane_multiplier if options.crane else 1.0
    return config.handling.rate_per_hour * multiplier


def compute_handling(config: PricingConfig, options: QuoteOptions, ratio: float) -> HandlingResult:
    scenario = resolve_location_scenario(options)
    rates = config.handling
    rate = effective_rate(config, options)

    approach = rates.approach_min_hours
    if options.approach_hours is not None:
        approach = max(options.approach_hours, rates.approach_min_hours)

    if scenario == LoadUnloadLocation.INTERNAL:
        depart = 0.0
        load = unload = rates.internal_load_unload_hours
    elif scenario == LoadUnloadLocation.EXTERNAL:
        depart = rates.depart_min_hours
        load = unload = rates.external_load_unload_hours
    else:
        depart = rates.depart_min_hours
        per_operation = rates.full_trailer_load_unload_hours * ratio
        load = per_operation if options.load else 0.0
        unload = per_operation if options.unload else 0.0

    hours = HandlingHours(approach=approach, depart=depart, load=load, unload=unload)
    costs = HandlingCosts(
        approach=approach * rate,
        depart=depart * rate,
        load=load * rate,
        unload=unload * rate,
    )
    return HandlingResult(scenario=scenario, rate_per_hour=rate, hours=hours, costs=costs)
