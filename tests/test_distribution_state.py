from __future__ import annotations

import pytest

from optidist_sdk import BuilderStateError, DistributionBuilder, DistributionLineItem, LineItemStatus


def test_type_query_transitions(catalog) -> None:
    item = DistributionLineItem()
    item.type_query("F0", catalog)
    assert item.status is LineItemStatus.SEARCHING
    assert item.dropdown_open
    assert [f.product_id for f in item.search_results] == ["F001", "F002", "F003"]

    item.type_query("zzz", catalog)
    assert item.status is LineItemStatus.UNMATCHED
    assert not item.dropdown_open

    item.type_query("", catalog)
    assert item.status is LineItemStatus.EMPTY


def test_select_resolves_and_retyping_clears(catalog) -> None:
    item = DistributionLineItem()
    item.type_query("cat", catalog)
    item.select(catalog[2])
    assert item.status is LineItemStatus.RESOLVED
    assert item.frame_query == "F003"
    assert item.search_results == []

    item.type_query("F00", catalog)
    assert item.resolved_frame is None
    assert item.status is LineItemStatus.SEARCHING


def test_blur_closes_dropdown_only_when_open(catalog) -> None:
    item = DistributionLineItem()
    item.type_query("F0", catalog)
    item.blur()
    assert item.status is LineItemStatus.UNMATCHED

    item.select(catalog[0])
    item.blur()
    assert item.status is LineItemStatus.RESOLVED


@pytest.mark.parametrize(("raw", "expected"), [("5", 5), (3, 3), ("", 0), (None, 0), ("abc", 0)])
def test_set_quantity_parsing(raw, expected) -> None:
    item = DistributionLineItem()
    item.set_quantity(raw)
    assert item.quantity == expected


def test_toggling_shop_twice_drops_its_items(catalog) -> None:
    builder = DistributionBuilder(frames=catalog)
    assert builder.toggle_shop(7) is True
    index = builder.add_item(7)
    builder.select_frame(7, index, catalog[0])
    builder.set_quantity(7, index, 4)

    assert builder.toggle_shop(7) is False
    assert builder.selected_shop_ids == []

    builder.toggle_shop(7)
    assert builder.batch(7).items == []


def test_edits_on_unknown_targets_raise(catalog) -> None:
    builder = DistributionBuilder(frames=catalog)
    with pytest.raises(BuilderStateError):
        builder.add_item(99)
    builder.toggle_shop(1)
    with pytest.raises(BuilderStateError):
        builder.set_quantity(1, 0, 3)


def test_remove_item_and_render(catalog) -> None:
    builder = DistributionBuilder(frames=catalog)
    builder.toggle_shop(1)
    first = builder.add_item(1)
    second = builder.add_item(1)
    builder.type_frame_query(1, first, "oak")
    builder.select_frame(1, second, catalog[1])
    builder.remove_item(1, first)

    rendered = builder.render()
    assert len(rendered) == 1
    assert [line["frame_query"] for line in rendered[0]["items"]] == ["F002"]
    assert rendered[0]["items"][0]["status"] == "resolved"


def test_reset_clears_everything(catalog) -> None:
    builder = DistributionBuilder(frames=catalog)
    builder.toggle_shop(1)
    builder.toggle_shop(2)
    builder.reset()
    assert builder.batches == {}
