from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TrendPeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class SummaryPeriod(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class ReportType(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


class _Row(BaseModel):
    model_config = ConfigDict(extra="allow")


class SalesTrend(_Row):
    period: str
    sales_count: int = 0
    total_revenue: Decimal = Decimal("0")


class SalesTrendsResponse(_Row):
    trends: list[SalesTrend] = Field(default_factory=list)


class TopProduct(_Row):
    frame_name: str
    product_id: str = ""
    sales_count: int = 0
    total_revenue: Decimal = Decimal("0")


class TopProductsResponse(_Row):
    shop_name: str | None = None
    top_products: list[TopProduct] = Field(default_factory=list)


class TopCombination(_Row):
    frame_name: str
    product_id: str = ""
    lens_type: str = ""
    sales_count: int = 0
    total_revenue: Decimal = Decimal("0")


class TopCombinationsResponse(_Row):
    top_combinations: list[TopCombination] = Field(default_factory=list)


class SlowMovingItem(_Row):
    inventory_item_id: int
    frame_name: str = ""
    product_id: str = ""
    frame_price: Decimal = Decimal("0")
    shop_name: str | None = None
    shop_id: int | None = None
    date_stocked: str | None = None
    days_in_stock: int = 0


class SlowMovingResponse(_Row):
    slow_moving_items: list[SlowMovingItem] = Field(default_factory=list)


class ShopPerformance(_Row):
    shop_id: int
    shop_name: str
    owner_name: str = ""
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0")
    avg_sale_value: Decimal = Decimal("0")
    total_inventory_value: Decimal = Decimal("0")
    total_items_in_stock: int = 0
    low_stock_items: int = 0
    total_profit: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")


class ShopPerformanceResponse(_Row):
    shop_performance: list[ShopPerformance] = Field(default_factory=list)


class RevenueTotals(_Row):
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0")
    avg_sale_value: Decimal = Decimal("0")


class ShopRevenue(RevenueTotals):
    shop_id: int
    shop_name: str


class RevenueTrend(_Row):
    month: str
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0")


class RevenueSummaryResponse(_Row):
    period: str | None = None
    overall_summary: RevenueTotals = Field(default_factory=RevenueTotals)
    shop_revenue: list[ShopRevenue] = Field(default_factory=list)
    revenue_trends: list[RevenueTrend] = Field(default_factory=list)


class LowStockItem(_Row):
    frame_name: str
    product_id: str = ""
    quantity_remaining: int = 0
    quantity_sold: int = 0
    quantity_received: int = 0
    frame_price: Decimal = Decimal("0")
    last_restocked: str | None = None


class ShopLowStock(_Row):
    shop_id: int | None = None
    shop_name: str | None = None
    items: list[LowStockItem] = Field(default_factory=list)


class LowStockAlertsResponse(_Row):
    shop_alerts: list[ShopLowStock] = Field(default_factory=list)
    low_stock_items: list[LowStockItem] = Field(default_factory=list)


class ReportPeriodRow(_Row):
    period: str
    month: int | None = None
    quarter: int | None = None
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0")
    avg_sale_value: Decimal = Decimal("0")


class SalesReportResponse(_Row):
    report_type: str
    year: int
    months: list[ReportPeriodRow] | None = None
    quarters: list[ReportPeriodRow] | None = None

    @property
    def rows(self) -> list[ReportPeriodRow]:
        if self.report_type == ReportType.QUARTERLY.value:
            return self.quarters or []
        return self.months or []


class ShopDashboardSummary(_Row):
    shop_name: str | None = None
    total_sales_current_month: int = 0
    total_revenue_current_month: Decimal = Decimal("0")
    items_in_stock: int = 0
