import pytest

from freight_quote.schemas.quote import QuoteResponse
from freight_quote.services.outputs.formatter import (
    customer_rows,
    quote_response_to_csv,
    round_money,
    safe_reference,
)

BREAKDOWN = {
    "base": 110.0,
    "flat_rate": 0.0,
    "linehaul": 16.0,
    "handling_approach": 46.25,
    "handling_depart": 0.0,
    "handling_load": 92.5,
    "handling_unload": 92.5,
    "handling": 231.25,
    "km_levy": 4.8,
    "accessorials": 0.0,
    "fuel": 64.37,
    "zone_flat": 35.0,
    "discount": -0.001,
}


@pytest.mark.parametrize(
    "value, expected",
    [(167.5649, 167.56), (0.004, 0.0), (-0.004, 0.0), (-40.0, -40.0), (113.6, 113.6)],
)
def test_round_money(value, expected):
    assert round_money(value) == expected


def test_negative_zero_is_normalized():
    assert str(round_money(-0.001)) == "0.0"


def test_customer_rows_merge_handling_and_hide_internal_lines():
    rows = customer_rows(BREAKDOWN)

    assert [row.key for row in rows] == ["handling_load_unload", "handling_approach", "km_levy", "zone_flat"]
    assert rows[0].label == "Laden/Lossen"
    assert rows[0].amount == 185.0
    assert rows[1].label == "Aanrijden"
    assert rows[3].label == "Zonetoeslag"


def test_customer_rows_show_flat_rate_and_depart():
    rows = customer_rows({"flat_rate": 160.0, "handling_depart": 46.25, "fuel": 0.0})
    assert [(row.key, row.label) for row in rows] == [
        ("handling_depart", "Afrijden"),
        ("flat_rate", "Transport (vast tarief)"),
    ]


def test_csv_export_lists_every_line_and_total():
    response = QuoteResponse(
        inputs={},
        derived={},
        breakdown={"base": 110.0, "linehaul": 32.0, "fuel": 25.56},
        total=167.56,
        currency="EUR",
    )
    lines = quote_response_to_csv(response).splitlines()

    assert lines[0] == "line,amount,currency"
    assert lines[1:] == ["base,110.00,EUR", "linehaul,32.00,EUR", "fuel,25.56,EUR", "total,167.56,EUR"]


@pytest.mark.parametrize(
    "reference, expected",
    [(None, "offerte"), ("", "offerte"), ("ORD 7/2", "ORD_7_2"), ("klant-12.a", "klant-12.a")],
)
def test_safe_reference(reference, expected):
    assert safe_reference(reference) == expected
