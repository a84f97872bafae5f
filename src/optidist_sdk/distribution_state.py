from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from .frame_search import DISTRIBUTION_SEARCH_FIELDS, search_frames
from .models_catalog import Frame


class LineItemStatus(str, Enum):
    EMPTY = "empty"
    SEARCHING = "searching"
    UNMATCHED = "unmatched"
    RESOLVED = "resolved"


class BuilderStateError(LookupError):
    """Raised when an edit targets a shop or line that is not in the builder."""


@dataclass
class DistributionLineItem:
    frame_query: str = ""
    quantity: int = 0
    resolved_frame: Frame | None = None
    search_results: list[Frame] = field(default_factory=list)
    status: LineItemStatus = LineItemStatus.EMPTY

    @property
    def dropdown_open(self) -> bool:
        return self.status is LineItemStatus.SEARCHING

    @property
    def is_complete(self) -> bool:
        frame = self.resolved_frame
        return frame is not None and frame.id is not None and self.quantity > 0

    def type_query(self, text: str, frames: Iterable[Frame], fields: Sequence[str] = DISTRIBUTION_SEARCH_FIELDS) -> None:
        self.frame_query = text
        self.resolved_frame = None
        self.search_results = search_frames(text, frames, fields=fields)
        if not text:
            self.status = LineItemStatus.EMPTY
        elif self.search_results:
            self.status = LineItemStatus.SEARCHING
        else:
            self.status = LineItemStatus.UNMATCHED

    def select(self, frame: Frame) -> None:
        self.frame_query = frame.product_id
        self.resolved_frame = frame
        self.search_results = []
        self.status = LineItemStatus.RESOLVED

    def blur(self) -> None:
        # Only an open dropdown changes; a resolved or empty line stays as is.
        if self.status is LineItemStatus.SEARCHING:
            self.status = LineItemStatus.UNMATCHED

    def set_quantity(self, value: int | str | None) -> None:
        try:
            self.quantity = int(value) if value not in (None, "") else 0
        except (TypeError, ValueError):
            self.quantity = 0

    def render(self) -> dict[str, object]:
        return {
            "frame_query": self.frame_query,
            "quantity": self.quantity,
            "status": self.status.value,
            "dropdown_open": self.dropdown_open,
            "frame": self.resolved_frame.model_dump(mode="json") if self.resolved_frame else None,
            "suggestions": [frame.product_id for frame in self.search_results],
        }


@dataclass
class ShopDistributionBatch:
    shop_id: int
    items: list[DistributionLineItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def add_item(self) -> int:
        self.items.append(DistributionLineItem())
        return len(self.items) - 1

    def item(self, index: int) -> DistributionLineItem:
        if index < 0 or index >= len(self.items):
            raise BuilderStateError(f"line {index} does not exist for shop {self.shop_id}")
        return self.items[index]

    def remove_item(self, index: int) -> None:
        self.item(index)
        self.items.pop(index)


@dataclass
class DistributionBuilder:
    """Working set of per-shop batches while the distribution form is open."""

    frames: list[Frame] = field(default_factory=list)
    search_fields: Sequence[str] = DISTRIBUTION_SEARCH_FIELDS
    batches: dict[int, ShopDistributionBatch] = field(default_factory=dict)

    @property
    def selected_shop_ids(self) -> list[int]:
        return list(self.batches)

    def is_selected(self, shop_id: int) -> bool:
        return shop_id in self.batches

    def toggle_shop(self, shop_id: int) -> bool:
        if shop_id in self.batches:
            del self.batches[shop_id]
            return False
        self.batches[shop_id] = ShopDistributionBatch(shop_id=shop_id)
        return True

    def batch(self, shop_id: int) -> ShopDistributionBatch:
        try:
            return self.batches[shop_id]
        except KeyError:
            raise BuilderStateError(f"shop {shop_id} is not selected") from None

    def add_item(self, shop_id: int) -> int:
        return self.batch(shop_id).add_item()

    def type_frame_query(self, shop_id: int, index: int, text: str) -> DistributionLineItem:
        item = self.batch(shop_id).item(index)
        item.type_query(text, self.frames, self.search_fields)
        return item

    def select_frame(self, shop_id: int, index: int, frame: Frame) -> DistributionLineItem:
        item = self.batch(shop_id).item(index)
        item.select(frame)
        return item

    def blur(self, shop_id: int, index: int) -> DistributionLineItem:
        item = self.batch(shop_id).item(index)
        item.blur()
        return item

    def set_quantity(self, shop_id: int, index: int, quantity: int | str | None) -> DistributionLineItem:
        item = self.batch(shop_id).item(index)
        item.set_quantity(quantity)
        return item

    def remove_item(self, shop_id: int, index: int) -> None:
        self.batch(shop_id).remove_item(index)

    def reset(self) -> None:
        self.batches.clear()

    def render(self) -> list[dict[str, object]]:
        return [
            {"shop_id": batch.shop_id, "items": [item.render() for item in batch.items]}
            for batch in self.batches.values()
        ]
