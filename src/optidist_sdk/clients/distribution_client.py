from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Mapping

from ..distribution_validation import validate_bulk_distribution_payload, validate_stock_in_payload
from ..models_inventory import (
    BulkDistributionRequest,
    BulkDistributionResponse,
    DistributionOverview,
    StockInRequest,
)
from .base import BaseClient, expect_object
from .frames_client import csv_upload_part


@dataclass
class DistributionClient(BaseClient):
    module: str = "distribution"

    def get_overview(self) -> DistributionOverview:
        payload = self._request("GET", "/distribution/", operation="overview")
        return DistributionOverview.model_validate(expect_object(payload, "distribution"))

    def bulk_distribute(self, payload: BulkDistributionRequest | Mapping[str, Any]) -> BulkDistributionResponse:
        request = validate_bulk_distribution_payload(payload)
        data = self._request(
            "POST",
            "/distribution/bulk/",
            json_body=request.model_dump(mode="json"),
            operation="bulk",
        )
        if data is None:
            return BulkDistributionResponse()
        return BulkDistributionResponse.model_validate(expect_object(data, "bulk distribution"))

    def stock_in(self, payload: StockInRequest | Mapping[str, Any]) -> dict[str, Any]:
        request = validate_stock_in_payload(payload)
        data = self._request("POST", "/stock-in/", json_body=request.model_dump(mode="json"), operation="stock_in")
        return data if isinstance(data, dict) else {}

    def upload_inventory_csv(
        self,
        shop_id: int,
        source: str | Path | bytes | BinaryIO,
        filename: str | None = None,
    ) -> dict[str, Any]:
        files = {"file": csv_upload_part(source, filename)}
        data = self._request(
            "POST",
            "/inventory-csv-upload/",
            files=files,
            data={"shop_id": str(shop_id)},
            operation="inventory_csv_upload",
        )
        return data if isinstance(data, dict) else {}
