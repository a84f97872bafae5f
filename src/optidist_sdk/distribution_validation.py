from __future__ import annotations

from typing import Any, Iterable, Mapping

from .distribution_state import DistributionLineItem, ShopDistributionBatch
from .models_inventory import BulkDistributionRequest, ShopDistributionPayload, StockInRequest, StockLine
from .validation import ClientValidationError, ValidationIssue, coerce_model, raise_issue

NO_VALID_ITEMS_MESSAGE = "Please add at least one valid item to distribute (with selected frame and quantity)"
INCOMPLETE_ITEMS_MESSAGE = "Please fix all errors and ensure all fields are properly filled"
NO_STOCK_IN_ITEMS_MESSAGE = "Please add at least one valid item"


def to_stock_line(item: DistributionLineItem) -> StockLine:
    if item.resolved_frame is None or item.resolved_frame.id is None:
        raise ValueError("line item has no resolved frame")
    return StockLine(
        frame_id=item.resolved_frame.id,
        quantity=item.quantity,
        cost_per_unit=item.resolved_frame.price,
    )


def line_item_issues(item: DistributionLineItem, row_index: int, prefix: str = "") -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if item.resolved_frame is None:
        issues.append(ValidationIssue(row_index=row_index, field=f"{prefix}frame", reason="select a frame from the suggestions"))
    elif item.resolved_frame.id is None:
        issues.append(ValidationIssue(row_index=row_index, field=f"{prefix}frame", reason="frame has no catalog id"))
    if item.quantity <= 0:
        issues.append(ValidationIssue(row_index=row_index, field=f"{prefix}quantity", reason="quantity must be at least 1"))
    return issues


def build_bulk_distribution(batches: Iterable[ShopDistributionBatch]) -> BulkDistributionRequest:
    """Turn the builder's batches into one all-or-nothing submission.

    Shops without lines are dropped silently. Any incomplete line in any
    remaining shop rejects the whole submission with a single message.
    """
    populated = [batch for batch in batches if not batch.is_empty]
    if not populated:
        raise ClientValidationError(
            [ValidationIssue(row_index=None, field="distributions", reason="no line items")],
            summary=NO_VALID_ITEMS_MESSAGE,
        )
    issues: list[ValidationIssue] = []
    for batch in populated:
        for idx, item in enumerate(batch.items):
            issues.extend(line_item_issues(item, idx, prefix=f"shop[{batch.shop_id}]."))
    if issues:
        raise ClientValidationError(issues, summary=INCOMPLETE_ITEMS_MESSAGE)
    return BulkDistributionRequest(
        distributions=[
            ShopDistributionPayload(shop_id=batch.shop_id, items=[to_stock_line(item) for item in batch.items])
            for batch in populated
        ]
    )


def build_stock_in(shop_id: int, batch: ShopDistributionBatch) -> StockInRequest:
    """Manual stock-in keeps only the complete lines of the form."""
    lines = [to_stock_line(item) for item in batch.items if item.is_complete]
    if not lines:
        raise ClientValidationError(
            [ValidationIssue(row_index=None, field="items", reason="no complete line items")],
            summary=NO_STOCK_IN_ITEMS_MESSAGE,
        )
    return StockInRequest(shop_id=shop_id, items=lines)


def validate_bulk_distribution_payload(
    payload: BulkDistributionRequest | Mapping[str, Any],
) -> BulkDistributionRequest:
    data = coerce_model(payload, BulkDistributionRequest)
    if not data.distributions:
        raise_issue(None, "distributions", "distributions must not be empty")
    seen: set[int] = set()
    for dist in data.distributions:
        if dist.shop_id in seen:
            raise_issue(None, "distributions.shop_id", f"shop {dist.shop_id} appears more than once")
        seen.add(dist.shop_id)
        if not dist.items:
            raise_issue(None, f"shop[{dist.shop_id}].items", "items must not be empty")
        for idx, line in enumerate(dist.items):
            validate_stock_line(line, idx, prefix=f"shop[{dist.shop_id}].")
    return data


def validate_stock_in_payload(payload: StockInRequest | Mapping[str, Any]) -> StockInRequest:
    data = coerce_model(payload, StockInRequest)
    if not data.items:
        raise_issue(None, "items", "items must not be empty")
    for idx, line in enumerate(data.items):
        validate_stock_line(line, idx)
    return data


def validate_stock_line(line: StockLine | Mapping[str, Any], row_index: int, prefix: str = "") -> StockLine:
    data = coerce_model(line, StockLine, row_index)
    if data.quantity < 1:
        raise_issue(row_index, f"{prefix}quantity", "quantity must be at least 1")
    if data.cost_per_unit < 0:
        raise_issue(row_index, f"{prefix}cost_per_unit", "cost_per_unit must not be negative")
    return data
