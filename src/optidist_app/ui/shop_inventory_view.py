from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO

from optidist_sdk import ClientValidationError, ShopDistributionBatch, build_stock_in
from optidist_sdk.frame_search import STOCK_IN_SEARCH_FIELDS
from optidist_sdk.formatting import format_currency
from optidist_sdk.models_catalog import Frame
from optidist_sdk.models_inventory import BillingReport, ShopInventoryDetail

from ..services.catalog_service import CatalogService, CatalogServiceError
from ..services.shops_service import ShopsService, ShopsServiceError
from .shared.view_state import ViewState, resolve_state

INVENTORY_CSV_TEMPLATE = "frame_id,quantity\nF001,10\nF002,5\nF003,15"


@dataclass
class ShopInventoryView:
    """Distributor view of one shop: stock, monthly figures, manual stock-in."""

    shop_id: int
    service: ShopsService
    catalog: CatalogService
    detail: ShopInventoryDetail | None = None
    frames: list[Frame] = field(default_factory=list)
    manual: ShopDistributionBatch | None = None
    error_message: str | None = None
    success_message: str | None = None
    trace_id: str | None = None
    is_loading: bool = False
    is_submitting: bool = False

    def __post_init__(self) -> None:
        if self.manual is None:
            self.manual = ShopDistributionBatch(shop_id=self.shop_id)

    def load(self) -> dict[str, Any]:
        self.is_loading = True
        try:
            self.detail = self.service.inventory_detail(self.shop_id)
            self.frames = self.catalog.list_frames()
        except (ShopsServiceError, CatalogServiceError) as exc:
            return self._fail(exc)
        finally:
            self.is_loading = False
        self.error_message = None
        return {"ok": True}

    def add_manual_item(self) -> int:
        return self.manual.add_item()

    def type_frame_query(self, index: int, text: str) -> None:
        self.manual.item(index).type_query(text, self.frames, STOCK_IN_SEARCH_FIELDS)

    def select_frame(self, index: int, frame: Frame) -> None:
        self.manual.item(index).select(frame)

    def set_quantity(self, index: int, value: int | str | None) -> None:
        self.manual.item(index).set_quantity(value)

    def remove_manual_item(self, index: int) -> None:
        self.manual.remove_item(index)

    def submit_manual(self) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": "Request already in progress"}
        try:
            request = build_stock_in(self.shop_id, self.manual)
        except ClientValidationError as exc:
            self.error_message = str(exc)
            return {"ok": False, "error": self.error_message}
        self.is_submitting = True
        try:
            self.service.stock_in(request)
        except ShopsServiceError as exc:
            return self._fail(exc)
        finally:
            self.is_submitting = False
        self.manual = ShopDistributionBatch(shop_id=self.shop_id)
        self.success_message = "Inventory added successfully!"
        self.load()
        return {"ok": True, "lines": len(request.items)}

    def upload_csv(self, source: str | Path | bytes | BinaryIO | None, filename: str | None = None) -> dict[str, Any]:
        if source is None:
            self.error_message = "Please select a CSV file"
            return {"ok": False, "error": self.error_message}
        if self.is_submitting:
            return {"ok": False, "error": "Request already in progress"}
        self.is_submitting = True
        try:
            result = self.service.upload_inventory_csv(self.shop_id, source, filename)
        except ShopsServiceError as exc:
            return self._fail(exc)
        finally:
            self.is_submitting = False
        self.success_message = "CSV uploaded successfully!"
        self.load()
        return {"ok": True, "result": result}

    @staticmethod
    def csv_template() -> str:
        return INVENTORY_CSV_TEMPLATE

    def billing_report(self) -> BillingReport | None:
        if self.detail is None:
            return None
        return BillingReport.from_inventory_detail(self.detail)

    def state(self) -> ViewState:
        return resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=self.detail is not None,
            trace_id=self.trace_id,
        )

    def render(self) -> dict[str, Any]:
        if self.detail is None:
            return {"state": self.state().render()}
        finance = self.detail.financial_summary
        return {
            "state": self.state().render(),
            "shop": self.detail.shop.model_dump(mode="json"),
            "summary": {
                "total_items": self.detail.summary.total_items,
                "total_value": format_currency(self.detail.summary.total_value),
                "low_stock_count": self.detail.summary.low_stock_count,
            },
            "financial_summary": None
            if finance is None
            else {
                "month": finance.month,
                "total_revenue": format_currency(finance.total_revenue),
                "total_profit": format_currency(finance.total_profit),
                "amount_to_pay_distributor": format_currency(finance.amount_to_pay_distributor),
            },
            "inventory": [
                {
                    "frame_name": row.frame_name,
                    "product_id": row.frame_product_id,
                    "received": row.quantity_received,
                    "sold": row.quantity_sold,
                    "remaining": row.quantity_remaining,
                    "cost_per_unit": format_currency(row.cost_per_unit),
                }
                for row in self.detail.inventory
            ],
            "manual_items": [item.render() for item in self.manual.items],
            "error": self.error_message,
            "success": self.success_message,
        }

    def _fail(self, exc: ShopsServiceError | CatalogServiceError) -> dict[str, Any]:
        self.error_message = exc.message
        self.trace_id = exc.trace_id
        return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
