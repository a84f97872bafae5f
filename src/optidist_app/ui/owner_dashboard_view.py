from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from optidist_sdk.formatting import format_currency

from ..app.state import Route
from ..services.analytics_service import AnalyticsService, AnalyticsServiceError, OwnerDashboard
from .shared.view_state import ViewState, resolve_state

QUICK_ACTIONS: tuple[tuple[str, Route], ...] = (
    ("View Inventory", Route.SHOP_OWNER_INVENTORY),
    ("Record Sale", Route.SHOP_OWNER_SALES),
    ("View Analytics", Route.SHOP_OWNER_ANALYTICS),
)


@dataclass
class OwnerDashboardView:
    """Shop-owner home: this month's sales, revenue and stock, plus best sellers."""

    service: AnalyticsService
    dashboard: OwnerDashboard | None = None
    error_message: str | None = None
    trace_id: str | None = None
    is_loading: bool = False

    def load(self) -> dict[str, Any]:
        self.is_loading = True
        try:
            self.dashboard = self.service.owner_dashboard()
        except AnalyticsServiceError as exc:
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
        finally:
            self.is_loading = False
        self.error_message = None
        return {"ok": True}

    def state(self) -> ViewState:
        return resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=self.dashboard is not None,
            trace_id=self.trace_id,
        )

    def render(self) -> dict[str, Any]:
        user = self.service.session.user
        rendered: dict[str, Any] = {
            "state": self.state().render(),
            "username": user.username if user else None,
            "actions": [{"label": label, "route": route.value} for label, route in QUICK_ACTIONS],
        }
        if self.dashboard is None:
            return rendered
        summary = self.dashboard.summary
        rendered["shop_name"] = summary.shop_name
        rendered["metrics"] = {
            "total_sales": summary.total_sales_current_month,
            "revenue": format_currency(summary.total_revenue_current_month),
            "items_in_stock": summary.items_in_stock,
        }
        rendered["top_products"] = [
            {"frame_name": row.frame_name, "product_id": row.product_id, "sales_count": row.sales_count}
            for row in self.dashboard.top_products.top_products
        ]
        return rendered
