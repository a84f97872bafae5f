from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Sequence

from optidist_sdk.formatting import format_currency
from optidist_sdk.models_inventory import ShopInventoryItem

from ..services.sales_service import SalesService, SalesServiceError
from .shared.view_state import ViewState, resolve_state

LOW_STOCK_LEVEL = 5

INVENTORY_SEARCH_FIELDS: tuple[str, ...] = (
    "frame_name",
    "frame_product_id",
    "frame_brand",
    "frame_type",
    "frame_color",
    "frame_material",
)
SALES_SEARCH_FIELDS: tuple[str, ...] = INVENTORY_SEARCH_FIELDS[:5]

_NUMERIC_SORT_FIELDS = {"frame_price", "cost_per_unit", "total_cost", "total_revenue", "total_profit"}


class StockFilter(str, Enum):
    ALL = "all"
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


def search_inventory(
    rows: Iterable[ShopInventoryItem],
    term: str,
    fields: Sequence[str] = INVENTORY_SEARCH_FIELDS,
) -> list[ShopInventoryItem]:
    if not term:
        return list(rows)
    needle = term.lower()
    return [row for row in rows if any(needle in str(getattr(row, name) or "").lower() for name in fields)]


def matches_stock_filter(row: ShopInventoryItem, stock_filter: StockFilter) -> bool:
    remaining = row.quantity_remaining
    if stock_filter is StockFilter.IN_STOCK:
        return remaining > LOW_STOCK_LEVEL
    if stock_filter is StockFilter.LOW_STOCK:
        return 0 < remaining <= LOW_STOCK_LEVEL
    if stock_filter is StockFilter.OUT_OF_STOCK:
        return remaining == 0
    return True


def _sort_key(sort_by: str):
    def key(row: ShopInventoryItem) -> Any:
        value = getattr(row, sort_by)
        return Decimal(value) if sort_by in _NUMERIC_SORT_FIELDS else value

    return key


@dataclass
class OwnerInventoryView:
    service: SalesService
    rows: list[ShopInventoryItem] = field(default_factory=list)
    search: str = ""
    stock_filter: StockFilter = StockFilter.ALL
    sort_by: str = "frame_name"
    descending: bool = False
    error_message: str | None = None
    trace_id: str | None = None
    is_loading: bool = False

    def load(self) -> dict[str, Any]:
        self.is_loading = True
        try:
            self.rows = self.service.inventory()
        except SalesServiceError as exc:
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        finally:
            self.is_loading = False
        self.error_message = None
        return {"ok": True, "count": len(self.rows)}

    def sort(self, field_name: str) -> None:
        """Sorting the same column twice flips the direction."""
        if field_name == self.sort_by:
            self.descending = not self.descending
        else:
            self.sort_by = field_name
            self.descending = False

    @property
    def visible_rows(self) -> list[ShopInventoryItem]:
        rows = [row for row in search_inventory(self.rows, self.search) if matches_stock_filter(row, self.stock_filter)]
        present = [row for row in rows if getattr(row, self.sort_by, None) is not None]
        missing = [row for row in rows if getattr(row, self.sort_by, None) is None]
        present.sort(key=_sort_key(self.sort_by), reverse=self.descending)
        return present + missing

    def state(self) -> ViewState:
        return resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=bool(self.rows),
            trace_id=self.trace_id,
            empty_message="No inventory items found",
        )

    def render(self) -> dict[str, Any]:
        return {
            "state": self.state().render(),
            "rows": [
                {
                    "id": row.id,
                    "frame_name": row.frame_name,
                    "product_id": row.frame_product_id,
                    "remaining": row.quantity_remaining,
                    "sold": row.quantity_sold,
                    "price": format_currency(row.frame_price),
                    "low_stock": 0 < row.quantity_remaining <= LOW_STOCK_LEVEL,
                }
                for row in self.visible_rows
            ],
        }
