from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_inventory import ShopInventoryDetail
from ..models_shops import Shop, ShopCreateRequest, ShopUpdateRequest
from ..validation import coerce_model
from .base import BaseClient, expect_object, expect_rows


@dataclass
class ShopsClient(BaseClient):
    module: str = "shops"

    def list_shops(self) -> list[Shop]:
        payload = self._request("GET", "/shops/", operation="list")
        return [Shop.model_validate(row) for row in expect_rows(payload, "shops")]

    def create_shop(self, payload: ShopCreateRequest | Mapping[str, Any]) -> Shop:
        request = coerce_model(payload, ShopCreateRequest)
        data = self._request("POST", "/shops/", json_body=request.model_dump(mode="json"), operation="create")
        return Shop.model_validate(expect_object(data, "create shop"))

    def update_shop(self, shop_id: int, payload: ShopUpdateRequest | Mapping[str, Any]) -> Shop:
        request = coerce_model(payload, ShopUpdateRequest)
        data = self._request(
            "PUT",
            f"/shops/{shop_id}/",
            json_body=request.model_dump(mode="json"),
            operation="update",
        )
        return Shop.model_validate(expect_object(data, "update shop"))

    def delete_shop(self, shop_id: int) -> None:
        self._request("DELETE", f"/shops/{shop_id}/", operation="delete")

    def get_inventory(self, shop_id: int) -> ShopInventoryDetail:
        payload = self._request("GET", f"/shops/{shop_id}/inventory/", operation="inventory")
        return ShopInventoryDetail.model_validate(expect_object(payload, "shop inventory"))
