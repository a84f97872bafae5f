from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Sequence

MISSING = "N/A"


def to_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


def format_currency(value: Any) -> str:
    amount = to_decimal(value)
    if amount is None:
        return MISSING
    quantized = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    return f"{sign}${abs(quantized):,.2f}"


def chart_series(rows: Iterable[Any], label_field: str, value_fields: Sequence[str]) -> dict[str, list[Any]]:
    """Split dashboard rows into a label axis plus one numeric list per field.

    Rows can be pydantic models or plain dicts. Missing values become 0 so the
    series stay aligned with the labels.
    """
    labels: list[Any] = []
    series: dict[str, list[Any]] = {name: [] for name in value_fields}
    for row in rows:
        labels.append(_read(row, label_field))
        for name in value_fields:
            value = _read(row, name)
            series[name].append(float(value) if isinstance(value, Decimal) else (value or 0))
    return {"labels": labels, **series}


def _read(row: Any, name: str) -> Any:
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)
