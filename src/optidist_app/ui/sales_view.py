from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from optidist_sdk.formatting import format_currency
from optidist_sdk.models_inventory import LensType, SaleRequest, ShopInventoryItem

from ..services.sales_service import SalesService, SalesServiceError
from .owner_inventory_view import SALES_SEARCH_FIELDS, search_inventory
from .shared.validators import is_valid_amount

SALE_NOTES = "Sale notes"


@dataclass
class SaleDraft:
    item: ShopInventoryItem | None = None
    lens: LensType | None = None
    quantity: int = 1
    custom_price: str = ""

    def select_item(self, item: ShopInventoryItem) -> None:
        self.item = item
        self.lens = None
        self.quantity = 1
        self.custom_price = ""

    @property
    def unit_price(self) -> Decimal:
        if self.item is None or self.lens is None:
            return Decimal("0")
        if self.custom_price:
            return Decimal(self.custom_price) if is_valid_amount(self.custom_price) else Decimal("0")
        return (self.item.frame_price or Decimal("0")) + (self.lens.price_modifier or Decimal("0"))

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity

    def validate(self) -> str | None:
        if self.item is None or self.lens is None:
            return "Please select both an inventory item and lens type"
        if self.custom_price and not is_valid_amount(self.custom_price):
            return "Please enter a valid sale price"
        if self.quantity < 1:
            return "Quantity must be at least 1"
        if self.quantity > self.item.quantity_remaining:
            return f"Not enough stock. Available: {self.item.quantity_remaining}"
        return None

    def to_request(self) -> SaleRequest:
        return SaleRequest(
            shop_inventory_id=self.item.id,
            quantity=self.quantity,
            sale_price=self.unit_price,
            notes=SALE_NOTES,
        )


@dataclass
class SalesView:
    """Shop-owner point of sale: pick a stocked frame, a lens, a quantity."""

    service: SalesService
    inventory: list[ShopInventoryItem] = field(default_factory=list)
    lens_types: list[LensType] = field(default_factory=list)
    search: str = ""
    draft: SaleDraft = field(default_factory=SaleDraft)
    error_message: str | None = None
    success_message: str | None = None
    trace_id: str | None = None
    is_submitting: bool = False

    def load(self, preselect_item_id: int | None = None) -> dict[str, Any]:
        try:
            self.inventory = self.service.inventory()
            self.lens_types = self.service.lens_types()
        except SalesServiceError as exc:
            return self._fail(exc)
        self.error_message = None
        if preselect_item_id is not None:
            self.select_item(preselect_item_id)
        return {"ok": True}

    @property
    def visible_inventory(self) -> list[ShopInventoryItem]:
        return search_inventory(self.inventory, self.search, SALES_SEARCH_FIELDS)

    def select_item(self, item_id: int) -> bool:
        for row in self.inventory:
            if row.id == item_id:
                self.draft.select_item(row)
                return True
        return False

    def select_lens(self, lens_id: int) -> bool:
        for lens in self.lens_types:
            if lens.id == lens_id:
                self.draft.lens = lens
                return True
        return False

    def set_quantity(self, value: int | str) -> None:
        try:
            self.draft.quantity = int(value)
        except (TypeError, ValueError):
            self.draft.quantity = 1

    def set_custom_price(self, value: str) -> None:
        self.draft.custom_price = value.strip()

    def submit(self) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": "Sale already in progress"}
        problem = self.draft.validate()
        if problem:
            self.error_message = problem
            return {"ok": False, "error": problem}
        request = self.draft.to_request()
        total = self.draft.total_price
        summary = {
            "item": self.draft.item.frame_name or "Unknown Frame",
            "lens": self.draft.lens.name,
            "quantity": self.draft.quantity,
            "total": format_currency(total),
        }
        self.is_submitting = True
        try:
            self.service.process_sale(request)
        except SalesServiceError as exc:
            return self._fail(exc)
        finally:
            self.is_submitting = False
        self.error_message = None
        self.success_message = "Sale processed successfully!"
        self.draft = SaleDraft()
        self.load()
        return {"ok": True, **summary}

    def render(self) -> dict[str, Any]:
        return {
            "inventory": [
                {
                    "id": row.id,
                    "frame_name": row.frame_name,
                    "product_id": row.frame_product_id,
                    "remaining": row.quantity_remaining,
                    "price": format_currency(row.frame_price),
                }
                for row in self.visible_inventory
            ],
            "lens_types": [
                {"id": lens.id, "name": lens.name, "price_modifier": format_currency(lens.price_modifier)}
                for lens in self.lens_types
            ],
            "draft": {
                "item_id": self.draft.item.id if self.draft.item else None,
                "lens_id": self.draft.lens.id if self.draft.lens else None,
                "quantity": self.draft.quantity,
                "unit_price": format_currency(self.draft.unit_price),
                "total": format_currency(self.draft.total_price),
            },
            "error": self.error_message,
            "success": self.success_message,
        }

    def _fail(self, exc: SalesServiceError) -> dict[str, Any]:
        self.error_message = exc.message
        self.trace_id = exc.trace_id
        return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
