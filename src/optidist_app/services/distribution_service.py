from __future__ import annotations

import logging
from typing import Iterable

from optidist_sdk import ApiSession, ShopDistributionBatch, build_bulk_distribution
from optidist_sdk.models_inventory import BulkDistributionRequest, BulkDistributionResponse, DistributionOverview

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

DISTRIBUTION_FAILURE_MESSAGE = "Failed to process distribution. Please try again."


class DistributionServiceError(ServiceError):
    pass


class DistributionService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def overview(self) -> DistributionOverview:
        try:
            return self.session.distribution_client().get_overview()
        except Exception as exc:
            raise normalize_error(exc, self.session, DistributionServiceError, "Failed to load distribution data") from exc

    def prepare(self, batches: Iterable[ShopDistributionBatch]) -> BulkDistributionRequest:
        try:
            return build_bulk_distribution(batches)
        except Exception as exc:
            raise normalize_error(exc, self.session, DistributionServiceError, DISTRIBUTION_FAILURE_MESSAGE) from exc

    def submit(self, batches: Iterable[ShopDistributionBatch]) -> BulkDistributionResponse:
        request = self.prepare(batches)
        logger.info(
            "distribution_submit",
            extra={"shops": len(request.distributions), "units": request.total_quantity},
        )
        try:
            response = self.session.distribution_client().bulk_distribute(request)
        except Exception as exc:
            raise normalize_error(exc, self.session, DistributionServiceError, DISTRIBUTION_FAILURE_MESSAGE) from exc
        logger.info(
            "distribution_success",
            extra={"total_items": response.total_items_distributed, "shops_updated": response.shops_updated},
        )
        return response
