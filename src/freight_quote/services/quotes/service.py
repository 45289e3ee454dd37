"""Quote orchestration service."""

from __future__ import annotations

import logging

from ...config import settings
from ...data.pricing_repository import load_pricing_config
from ...persistence.filesystem import FileStorage
from ...schemas.pricing import PricingConfig
from ...schemas.quote import QuoteRequest, QuoteResponse, QuoteSummaryResponse
from ..outputs.formatter import (
    quote_response_to_csv,
    quote_response_to_json,
    quote_response_to_summary,
    quote_result_to_response,
    safe_reference,
)
from ..pricing.engine import quote, validate_request
from ..routing.directions_client import DirectionsClient

logger = logging.getLogger(__name__)


def _with_measured_approach(payload: QuoteRequest, directions: DirectionsClient) -> QuoteRequest:
    if not settings.depot_address or payload.options.approach_hours is not None:
        return payload
    approach = directions.route_metrics(settings.depot_address, payload.origin.strip())
    logger.debug(f"Measured approach from depot: {approach.duration_hours:.2f}h ({approach.distance_km} km)")
    options = payload.options.model_copy(update={"approach_hours": approach.duration_hours})
    return payload.model_copy(update={"options": options})


def _persist(response: QuoteResponse) -> None:
    storage = FileStorage()
    prefix = f"quote_{safe_reference(response.inputs.get('reference'))}"
    run_dir = storage.make_run_directory(prefix=prefix)
    storage.write_json(run_dir / "quote.json", quote_response_to_json(response))
    storage.write_csv(run_dir / "breakdown.csv", quote_response_to_csv(response))
    logger.info(f"Archived quote to {run_dir}")


def create_quote(payload: QuoteRequest, config: PricingConfig | None = None) -> QuoteResponse:
    """Validate, route, price and serialize one quote request.

    Raises:
        QuoteValidationError: ``from``/``to`` missing; raised before any routing call.
        RoutingError: the directions provider could not produce a route.
        ConfigurationError: the pricing document is missing or invalid.
    """
    validate_request(payload)
    pricing = config or load_pricing_config()

    directions = DirectionsClient()
    metrics = directions.route_metrics(payload.origin.strip(), payload.destination.strip())
    payload = _with_measured_approach(payload, directions)

    result = quote(payload, pricing, metrics)
    response = quote_result_to_response(payload, result)
    logger.info(
        f"Quoted {payload.origin!r} -> {payload.destination!r}: {metrics.distance_km} km, "
        f"{result.pricing_mode}, {response.total:.2f} {response.currency}"
    )

    should_persist = settings.persist_quotes if payload.persist is None else payload.persist
    if should_persist:
        _persist(response)
    return response


def create_quote_summary(payload: QuoteRequest, config: PricingConfig | None = None) -> QuoteSummaryResponse:
    return quote_response_to_summary(create_quote(payload, config=config))
