from __future__ import annotations

from decimal import Decimal

import pytest

from optidist_sdk import ClientValidationError, DistributionBuilder, ShopDistributionBatch, build_bulk_distribution, build_stock_in
from optidist_sdk.distribution_validation import (
    INCOMPLETE_ITEMS_MESSAGE,
    NO_STOCK_IN_ITEMS_MESSAGE,
    NO_VALID_ITEMS_MESSAGE,
    validate_bulk_distribution_payload,
)


def _line(builder: DistributionBuilder, shop_id: int, query: str, quantity: int | str) -> None:
    index = builder.add_item(shop_id)
    item = builder.type_frame_query(shop_id, index, query)
    if item.search_results:
        builder.select_frame(shop_id, index, item.search_results[0])
    builder.set_quantity(shop_id, index, quantity)


def test_single_line_maps_to_one_record_priced_from_catalog(catalog) -> None:
    builder = DistributionBuilder(frames=catalog)
    builder.toggle_shop(10)
    _line(builder, 10, "F001", 5)

    request = build_bulk_distribution(builder.batches.values())

    assert request.model_dump(mode="json") == {
        "distributions": [{"shop_id": 10, "items": [{"frame_id": 1, "quantity": 5, "cost_per_unit": 45.0}]}]
    }


def test_empty_shop_is_dropped_silently(catalog) -> None:
    builder = DistributionBuilder(frames=catalog)
    builder.toggle_shop(10)
    builder.toggle_shop(11)
    _line(builder, 11, "F003", 2)

    request = build_bulk_distribution(builder.batches.values())

    assert [dist.shop_id for dist in request.distributions] == [11]
    assert request.total_quantity == 2


def test_no_lines_anywhere_is_rejected(catalog) -> None:
    builder = DistributionBuilder(frames=catalog)
    builder.toggle_shop(10)
    with pytest.raises(ClientValidationError) as excinfo:
        build_bulk_distribution(builder.batches.values())
    assert str(excinfo.value) == NO_VALID_ITEMS_MESSAGE


@pytest.mark.parametrize(("query", "quantity"), [("zzz", 3), ("F002", 0), ("F002", "")])
def test_any_incomplete_line_rejects_whole_batch(catalog, query, quantity) -> None:
    builder = DistributionBuilder(frames=catalog)
    builder.toggle_shop(10)
    builder.toggle_shop(11)
    _line(builder, 10, "F001", 5)
    _line(builder, 11, query, quantity)

    with pytest.raises(ClientValidationError) as excinfo:
        build_bulk_distribution(builder.batches.values())

    assert str(excinfo.value) == INCOMPLETE_ITEMS_MESSAGE
    assert {issue.field.split(".")[0] for issue in excinfo.value.issues} == {"shop[11]"}


def test_stock_in_keeps_complete_lines_only(catalog) -> None:
    batch = ShopDistributionBatch(shop_id=4)
    batch.add_item()
    batch.item(0).select(catalog[3])
    batch.item(0).set_quantity(2)
    batch.add_item()
    batch.item(1).type_query("cat", catalog)

    request = build_stock_in(4, batch)

    assert request.shop_id == 4
    assert [(line.frame_id, line.quantity, line.cost_per_unit) for line in request.items] == [(4, 2, Decimal("60.00"))]


def test_stock_in_without_complete_lines_is_rejected() -> None:
    batch = ShopDistributionBatch(shop_id=4)
    batch.add_item()
    with pytest.raises(ClientValidationError, match=NO_STOCK_IN_ITEMS_MESSAGE):
        build_stock_in(4, batch)


def test_raw_payload_checks() -> None:
    with pytest.raises(ClientValidationError):
        validate_bulk_distribution_payload({"distributions": []})
    with pytest.raises(ClientValidationError):
        validate_bulk_distribution_payload(
            {
                "distributions": [
                    {"shop_id": 1, "items": [{"frame_id": 1, "quantity": 1, "cost_per_unit": 2}]},
                    {"shop_id": 1, "items": [{"frame_id": 2, "quantity": 1, "cost_per_unit": 2}]},
                ]
            }
        )
    with pytest.raises(ClientValidationError, match="quantity"):
        validate_bulk_distribution_payload(
            {"distributions": [{"shop_id": 1, "items": [{"frame_id": 1, "quantity": 0, "cost_per_unit": 2}]}]}
        )
