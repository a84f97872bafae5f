from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from pydantic import BaseModel

from optidist_sdk import ApiSession
from optidist_sdk.models_analytics import (
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

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

ANALYTICS_FAILURE_MESSAGE = "Failed to load analytics data"
DASHBOARD_FAILURE_MESSAGE = "Failed to load dashboard data"

SERIES_READERS: dict[str, str] = {
    "sales-trends": "sales_trends",
    "top-products": "top_products",
    "top-products-with-lens": "top_combinations",
    "slow-moving-inventory": "slow_moving_inventory",
    "low-stock-alerts": "low_stock_alerts",
    "sales-report": "sales_report",
    "shop-performance": "shop_performance",
    "revenue-summary": "revenue_summary",
    "summary": "shop_summary",
}
DISTRIBUTOR_ONLY_SERIES = frozenset({"shop-performance", "revenue-summary"})
SHOP_ONLY_SERIES = frozenset({"summary"})


class AnalyticsServiceError(ServiceError):
    pass


@dataclass
class AnalyticsFilters:
    trends_period: TrendPeriod = TrendPeriod.MONTH
    performance_period: SummaryPeriod = SummaryPeriod.MONTH
    revenue_period: SummaryPeriod = SummaryPeriod.MONTH
    report_type: ReportType = ReportType.MONTHLY
    report_year: int = field(default_factory=lambda: date.today().year)


@dataclass
class AnalyticsSnapshot:
    sales_trends: SalesTrendsResponse
    top_products: TopProductsResponse
    top_combinations: TopCombinationsResponse
    slow_moving: SlowMovingResponse
    low_stock: LowStockAlertsResponse
    sales_report: SalesReportResponse
    shop_performance: ShopPerformanceResponse | None = None
    revenue_summary: RevenueSummaryResponse | None = None
    shop_scope: bool = False

    @property
    def shop_name(self) -> str | None:
        return self.top_products.shop_name


@dataclass
class OwnerDashboard:
    summary: ShopDashboardSummary
    top_products: TopProductsResponse


class AnalyticsService:
    """Fetches every dashboard series for one set of filters in one go."""

    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load(self, filters: AnalyticsFilters | None = None, *, shop_scope: bool | None = None) -> AnalyticsSnapshot:
        filters = filters or AnalyticsFilters()
        client = self.session.analytics_client(shop_scope=shop_scope)
        try:
            snapshot = AnalyticsSnapshot(
                sales_trends=client.sales_trends(filters.trends_period),
                top_products=client.top_products(),
                top_combinations=client.top_combinations(),
                slow_moving=client.slow_moving_inventory(),
                low_stock=client.low_stock_alerts(),
                sales_report=client.sales_report(filters.report_type, filters.report_year),
                shop_scope=client.shop_scope,
            )
            if not client.shop_scope:
                snapshot.shop_performance = client.shop_performance(filters.performance_period)
                snapshot.revenue_summary = client.revenue_summary(filters.revenue_period)
        except Exception as exc:
            raise normalize_error(exc, self.session, AnalyticsServiceError, ANALYTICS_FAILURE_MESSAGE) from exc
        logger.info("analytics_loaded", extra={"shop_scope": client.shop_scope, "trends": filters.trends_period.value})
        return snapshot

    def owner_dashboard(self) -> OwnerDashboard:
        """Current-month figures plus best sellers for the shop-owner home page."""
        client = self.session.analytics_client(shop_scope=True)
        try:
            dashboard = OwnerDashboard(summary=client.shop_summary(), top_products=client.top_products())
        except Exception as exc:
            raise normalize_error(exc, self.session, AnalyticsServiceError, DASHBOARD_FAILURE_MESSAGE) from exc
        logger.info("owner_dashboard_loaded", extra={"shop_name": dashboard.summary.shop_name})
        return dashboard

    def fetch_series(self, series: str, *args: object, shop_scope: bool | None = None) -> BaseModel:
        """One dashboard series by its endpoint name, e.g. ``"top-products"``."""
        client = self.session.analytics_client(shop_scope=shop_scope)
        reader = getattr(client, SERIES_READERS[series])
        try:
            return reader(*args)
        except Exception as exc:
            raise normalize_error(exc, self.session, AnalyticsServiceError, ANALYTICS_FAILURE_MESSAGE) from exc
