from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from ..models_analytics import (
    LowStockAlertsResponse,
    ReportType,
    RevenueSummaryResponse,
    SalesReportResponse,
    SalesTrendsResponse,
    ShopDashboardSummary,
    ShopPerformanceResponse,
    SlowMovingResponse,
    SummaryPeriod,
    TopCombinationsResponse,
    TopProductsResponse,
    TrendPeriod,
)
from .base import BaseClient, expect_object

DEFAULT_TOP_LIMIT = 10
DEFAULT_SLOW_MOVING_DAYS = 90
DEFAULT_LOW_STOCK_THRESHOLD = 5


@dataclass
class AnalyticsClient(BaseClient):
    """Read-only dashboard series, already aggregated by the backend.

    ``shop_scope`` switches every call to the shop-owner variant under
    ``/dashboard/shop/``; shop performance and revenue summary only exist for
    the distributor.
    """

    module: str = "analytics"
    shop_scope: bool = False

    def sales_trends(self, period: TrendPeriod | str = TrendPeriod.MONTH) -> SalesTrendsResponse:
        data = self._get("sales-trends", period=TrendPeriod(period).value)
        return SalesTrendsResponse.model_validate(data)

    def top_products(self, limit: int = DEFAULT_TOP_LIMIT) -> TopProductsResponse:
        data = self._get("top-products", limit=limit)
        return TopProductsResponse.model_validate(data)

    def top_combinations(self, limit: int = DEFAULT_TOP_LIMIT) -> TopCombinationsResponse:
        data = self._get("top-products-with-lens", limit=limit)
        return TopCombinationsResponse.model_validate(data)

    def slow_moving_inventory(self, days: int = DEFAULT_SLOW_MOVING_DAYS) -> SlowMovingResponse:
        data = self._get("slow-moving-inventory", days=days)
        return SlowMovingResponse.model_validate(data)

    def low_stock_alerts(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> LowStockAlertsResponse:
        data = self._get("low-stock-alerts", threshold=threshold)
        return LowStockAlertsResponse.model_validate(data)

    def sales_report(self, report_type: ReportType | str = ReportType.MONTHLY, year: int | None = None) -> SalesReportResponse:
        data = self._get("sales-report", type=ReportType(report_type).value, year=year or date.today().year)
        return SalesReportResponse.model_validate(data)

    def shop_performance(self, period: SummaryPeriod | str = SummaryPeriod.MONTH) -> ShopPerformanceResponse:
        self._require_distributor("shop-performance")
        data = self._get("shop-performance", period=SummaryPeriod(period).value)
        return ShopPerformanceResponse.model_validate(data)

    def revenue_summary(self, period: SummaryPeriod | str = SummaryPeriod.MONTH) -> RevenueSummaryResponse:
        self._require_distributor("revenue-summary")
        data = self._get("revenue-summary", period=SummaryPeriod(period).value)
        return RevenueSummaryResponse.model_validate(data)

    def shop_summary(self) -> ShopDashboardSummary:
        if not self.shop_scope:
            raise ValueError("summary is only available in shop scope")
        data = self._get("summary")
        return ShopDashboardSummary.model_validate(data)

    def _get(self, series: str, **params: Any) -> dict[str, Any]:
        prefix = "/dashboard/shop/" if self.shop_scope else "/dashboard/"
        payload = self._request("GET", f"{prefix}{series}/", params=params or None, operation=series)
        return expect_object(payload, series)

    def _require_distributor(self, series: str) -> None:
        if self.shop_scope:
            raise ValueError(f"{series} is only available to the distributor")
