from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_inventory import LensType, SaleRequest, ShopInventoryItem
from ..validation import coerce_model, raise_issue
from .base import BaseClient, expect_rows


@dataclass
class SalesClient(BaseClient):
    module: str = "sales"

    def list_inventory(self) -> list[ShopInventoryItem]:
        payload = self._request("GET", "/shop-inventory/", operation="inventory")
        return [ShopInventoryItem.model_validate(row) for row in expect_rows(payload, "shop inventory")]

    def list_lens_types(self) -> list[LensType]:
        payload = self._request("GET", "/lens-types/", operation="lens_types")
        return [LensType.model_validate(row) for row in expect_rows(payload, "lens types")]

    def process_sale(self, payload: SaleRequest | Mapping[str, Any]) -> dict[str, Any]:
        request = coerce_model(payload, SaleRequest)
        if request.quantity < 1:
            raise_issue(None, "quantity", "quantity must be at least 1")
        if request.sale_price < 0:
            raise_issue(None, "sale_price", "sale_price must not be negative")
        data = self._request(
            "POST",
            "/process-sale/",
            json_body=request.model_dump(mode="json"),
            operation="process_sale",
        )
        return data if isinstance(data, dict) else {}
