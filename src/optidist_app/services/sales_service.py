from __future__ import annotations

import logging
from typing import Any

from optidist_sdk import ApiSession
from optidist_sdk.models_inventory import LensType, SaleRequest, ShopInventoryItem

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

SALE_FAILURE_MESSAGE = "Failed to process sale. Please try again."


class SalesServiceError(ServiceError):
    pass


class SalesService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def inventory(self) -> list[ShopInventoryItem]:
        try:
            return self.session.sales_client().list_inventory()
        except Exception as exc:
            raise normalize_error(exc, self.session, SalesServiceError, "Failed to load inventory") from exc

    def lens_types(self) -> list[LensType]:
        try:
            return self.session.sales_client().list_lens_types()
        except Exception as exc:
            raise normalize_error(exc, self.session, SalesServiceError, "Failed to load data") from exc

    def process_sale(self, request: SaleRequest) -> dict[str, Any]:
        try:
            result = self.session.sales_client().process_sale(request)
        except Exception as exc:
            raise normalize_error(exc, self.session, SalesServiceError, SALE_FAILURE_MESSAGE) from exc
        logger.info(
            "sale_processed",
            extra={"shop_inventory_id": request.shop_inventory_id, "quantity": request.quantity},
        )
        return result
