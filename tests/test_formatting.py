from __future__ import annotations

from decimal import Decimal

from optidist_sdk.formatting import chart_series, format_currency
from optidist_sdk.models_analytics import SalesTrend


def test_format_currency() -> None:
    assert format_currency(Decimal("1234.5")) == "$1,234.50"
    assert format_currency("45") == "$45.00"
    assert format_currency(0.125) == "$0.13"
    assert format_currency(-3) == "-$3.00"
    assert format_currency(None) == "N/A"
    assert format_currency("") == "N/A"
    assert format_currency(Decimal("NaN")) == "N/A"
    assert format_currency("Infinity") == "N/A"


def test_chart_series_from_models_and_dicts() -> None:
    rows = [
        SalesTrend(period="2024-01", sales_count=3, total_revenue=Decimal("120.50")),
        {"period": "2024-02", "sales_count": None, "total_revenue": 10},
    ]
    series = chart_series(rows, "period", ("sales_count", "total_revenue"))
    assert series == {
        "labels": ["2024-01", "2024-02"],
        "sales_count": [3, 0],
        "total_revenue": [120.5, 10],
    }
