"""Serialization of quote results.

Amounts stay at full precision inside the engine; this module is the single
place where they are rounded to cents.
"""

from __future__ import annotations

import csv
import io
import re
from typing import Mapping

from ...schemas.quote import QuoteRequest, QuoteResponse, QuoteSummaryResponse, SummaryRow
from ..pricing.models import QuoteResult

# Internal cost lines that are not shown to customers.
HIDDEN_CUSTOMER_LINES = frozenset({"base", "linehaul", "fuel"})

CUSTOMER_LABELS = {
    "flat_rate": "Transport (vast tarief)",
    "km_levy": "Kilometerheffing",
    "accessorials": "Bijkosten",
    "zone_flat": "Zonetoeslag",
    "discount": "Korting gecombineerd transport",
}

_HOUR_KEYS = (
    "duration_hours",
    "approach_hours",
    "depart_hours",
    "load_hours",
    "unload_hours",
    "handling_total_hours",
)
_MONEY_KEYS = ("handling_rate_per_hour", "subtotal", "pre_discount_total")


def round_money(value: float) -> float:
    # + 0.0 turns a rounded -0.0 into 0.0
    return round(value, 2) + 0.0


def _is_zero(value: float) -> bool:
    return abs(value) < 0.005


def build_inputs(request: QuoteRequest, result: QuoteResult) -> dict:
    return {
        "from": request.origin,
        "to": request.destination,
        "trailer_type": request.trailer_type or result.trailer_type,
        "load_grade": request.load_grade,
        "load_fraction": request.load_fraction,
        "options": request.options.model_dump(mode="json"),
        "load_ratio": result.load_ratio,
        "reference": request.reference,
    }


def serialize_derived(derived: Mapping[str, object]) -> dict:
    payload = dict(derived)
    for key in _HOUR_KEYS + _MONEY_KEYS:
        if key in payload:
            payload[key] = round_money(float(payload[key]))
    return payload


def quote_result_to_response(request: QuoteRequest, result: QuoteResult) -> QuoteResponse:
    return QuoteResponse(
        inputs=build_inputs(request, result),
        derived=serialize_derived(result.derived),
        breakdown={key: round_money(value) for key, value in result.breakdown.items()},
        total=round_money(result.total),
        currency=result.currency,
    )


def customer_rows(breakdown: Mapping[str, float]) -> list[SummaryRow]:
    """Cost lines as shown to a customer.

    Load and unload are merged into one line, approach and depart get their own
    line, handling subtotals and internal lines are dropped, zero lines are
    skipped.
    """
    rows: list[SummaryRow] = []

    load_unload = breakdown.get("handling_load", 0.0) + breakdown.get("handling_unload", 0.0)
    if not _is_zero(load_unload):
        rows.append(SummaryRow(key="handling_load_unload", label="Laden/Lossen", amount=round_money(load_unload)))

    approach = breakdown.get("handling_approach", 0.0)
    if not _is_zero(approach):
        rows.append(SummaryRow(key="handling_approach", label="Aanrijden", amount=round_money(approach)))

    depart = breakdown.get("handling_depart", 0.0)
    if not _is_zero(depart):
        rows.append(SummaryRow(key="handling_depart", label="Afrijden", amount=round_money(depart)))

    for key, value in breakdown.items():
        if key in HIDDEN_CUSTOMER_LINES or key.startswith("handling"):
            continue
        if _is_zero(value):
            continue
        rows.append(SummaryRow(key=key, label=CUSTOMER_LABELS.get(key, key), amount=round_money(value)))
    return rows


def quote_response_to_summary(response: QuoteResponse) -> QuoteSummaryResponse:
    return QuoteSummaryResponse(
        reference=response.inputs.get("reference"),
        derived=response.derived,
        rows=customer_rows(response.breakdown),
        total=response.total,
        currency=response.currency,
    )


def quote_response_to_json(response: QuoteResponse) -> dict:
    return response.model_dump()


def quote_response_to_csv(response: QuoteResponse) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=["line", "amount", "currency"])
    writer.writeheader()
    for key, value in response.breakdown.items():
        writer.writerow({"line": key, "amount": f"{value:.2f}", "currency": response.currency})
    writer.writerow({"line": "total", "amount": f"{response.total:.2f}", "currency": response.currency})
    return buffer.getvalue()


def safe_reference(reference: str | None) -> str:
    """Reference reduced to characters that are safe in file names."""
    return re.sub(r"[^\w.-]+", "_", reference or "offerte")
