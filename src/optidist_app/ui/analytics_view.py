from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from optidist_sdk.formatting import chart_series, format_currency
from optidist_sdk.models_analytics import ReportType, SummaryPeriod, TrendPeriod

from ..services.analytics_service import AnalyticsFilters, AnalyticsService, AnalyticsServiceError, AnalyticsSnapshot
from .shared.view_state import ViewState, resolve_state


@dataclass
class AnalyticsView:
    """Dashboard for either role; changing a filter reloads every series."""

    service: AnalyticsService
    shop_scope: bool | None = None
    filters: AnalyticsFilters = field(default_factory=AnalyticsFilters)
    snapshot: AnalyticsSnapshot | None = None
    error_message: str | None = None
    trace_id: str | None = None
    is_loading: bool = False

    def load(self) -> dict[str, Any]:
        self.is_loading = True
        try:
            self.snapshot = self.service.load(self.filters, shop_scope=self.shop_scope)
        except AnalyticsServiceError as exc:
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        finally:
            self.is_loading = False
        self.error_message = None
        return {"ok": True}

    def set_trends_period(self, period: str) -> dict[str, Any]:
        self.filters.trends_period = TrendPeriod(period)
        return self.load()

    def set_performance_period(self, period: str) -> dict[str, Any]:
        self.filters.performance_period = SummaryPeriod(period)
        return self.load()

    def set_revenue_period(self, period: str) -> dict[str, Any]:
        self.filters.revenue_period = SummaryPeriod(period)
        return self.load()

    def set_report(self, report_type: str, year: int | None = None) -> dict[str, Any]:
        self.filters.report_type = ReportType(report_type)
        if year is not None:
            self.filters.report_year = year
        return self.load()

    def state(self) -> ViewState:
        return resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=self.snapshot is not None,
            trace_id=self.trace_id,
        )

    def render(self) -> dict[str, Any]:
        snap = self.snapshot
        if snap is None:
            return {"state": self.state().render()}
        rendered: dict[str, Any] = {
            "state": self.state().render(),
            "shop_name": snap.shop_name,
            "sales_trends": chart_series(snap.sales_trends.trends, "period", ("sales_count", "total_revenue")),
            "top_products": [
                {
                    "frame_name": row.frame_name,
                    "product_id": row.product_id,
                    "sales_count": row.sales_count,
                    "total_revenue": format_currency(row.total_revenue),
                }
                for row in snap.top_products.top_products
            ],
            "top_combinations": [
                {
                    "frame_name": row.frame_name,
                    "lens_type": row.lens_type,
                    "sales_count": row.sales_count,
                    "total_revenue": format_currency(row.total_revenue),
                }
                for row in snap.top_combinations.top_combinations
            ],
            "slow_moving": [
                {"frame_name": row.frame_name, "shop_name": row.shop_name, "days_in_stock": row.days_in_stock}
                for row in snap.slow_moving.slow_moving_items
            ],
            "sales_report": chart_series(snap.sales_report.rows, "period", ("total_sales", "total_revenue")),
        }
        if snap.shop_scope:
            rendered["low_stock"] = [
                {"frame_name": row.frame_name, "remaining": row.quantity_remaining}
                for row in snap.low_stock.low_stock_items
            ]
        else:
            rendered["low_stock"] = [
                {
                    "shop_name": alert.shop_name,
                    "items": [{"frame_name": row.frame_name, "remaining": row.quantity_remaining} for row in alert.items],
                }
                for alert in snap.low_stock.shop_alerts
            ]
        if snap.shop_performance is not None:
            rendered["shop_performance"] = chart_series(
                snap.shop_performance.shop_performance, "shop_name", ("total_revenue", "total_sales")
            )
        if snap.revenue_summary is not None:
            overall = snap.revenue_summary.overall_summary
            rendered["revenue_summary"] = {
                "total_sales": overall.total_sales,
                "total_revenue": format_currency(overall.total_revenue),
                "avg_sale_value": format_currency(overall.avg_sale_value),
                "trends": chart_series(snap.revenue_summary.revenue_trends, "month", ("total_revenue",)),
            }
        return rendered
