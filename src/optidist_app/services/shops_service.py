from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Mapping

from optidist_sdk import ApiSession
from optidist_sdk.models_inventory import ShopInventoryDetail, StockInRequest
from optidist_sdk.models_shops import Shop, ShopCreateRequest, ShopUpdateRequest

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class ShopsServiceError(ServiceError):
    pass


class ShopsService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def list_shops(self) -> list[Shop]:
        try:
            return self.session.shops_client().list_shops()
        except Exception as exc:
            raise normalize_error(exc, self.session, ShopsServiceError, "Failed to load shops") from exc

    def create_shop(self, payload: ShopCreateRequest | Mapping[str, Any]) -> Shop:
        try:
            shop = self.session.shops_client().create_shop(payload)
        except Exception as exc:
            raise normalize_error(exc, self.session, ShopsServiceError, "Failed to create shop") from exc
        logger.info("shop_created", extra={"shop_id": shop.id})
        return shop

    def update_shop(self, shop_id: int, payload: ShopUpdateRequest | Mapping[str, Any]) -> Shop:
        try:
            shop = self.session.shops_client().update_shop(shop_id, payload)
        except Exception as exc:
            raise normalize_error(exc, self.session, ShopsServiceError, "Failed to update shop") from exc
        logger.info("shop_updated", extra={"shop_id": shop_id})
        return shop

    def delete_shop(self, shop_id: int) -> None:
        try:
            self.session.shops_client().delete_shop(shop_id)
        except Exception as exc:
            raise normalize_error(exc, self.session, ShopsServiceError, "Failed to delete shop") from exc
        logger.info("shop_deleted", extra={"shop_id": shop_id})

    def inventory_detail(self, shop_id: int) -> ShopInventoryDetail:
        try:
            return self.session.shops_client().get_inventory(shop_id)
        except Exception as exc:
            raise normalize_error(exc, self.session, ShopsServiceError, "Failed to load shop inventory details") from exc

    def stock_in(self, request: StockInRequest) -> dict[str, Any]:
        try:
            result = self.session.distribution_client().stock_in(request)
        except Exception as exc:
            raise normalize_error(exc, self.session, ShopsServiceError, "Failed to add inventory. Please try again.") from exc
        logger.info("stock_in_success", extra={"shop_id": request.shop_id, "lines": len(request.items)})
        return result

    def upload_inventory_csv(
        self,
        shop_id: int,
        source: str | Path | bytes | BinaryIO,
        filename: str | None = None,
    ) -> dict[str, Any]:
        try:
            result = self.session.distribution_client().upload_inventory_csv(shop_id, source, filename)
        except Exception as exc:
            raise normalize_error(exc, self.session, ShopsServiceError, "Failed to upload CSV. Please check the file format.") from exc
        logger.info("inventory_csv_uploaded", extra={"shop_id": shop_id})
        return result
