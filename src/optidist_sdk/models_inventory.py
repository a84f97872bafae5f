from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .models_catalog import Frame
from .models_shops import Shop, ShopInventorySnapshot


class RecentDistribution(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    shop_name: str = ""
    frame_name: str = ""
    product_id: str = ""
    quantity: int = 0
    unit_cost: Decimal | None = None
    created_at: str | None = None
    created_by: str | None = None


class DistributionOverview(BaseModel):
    model_config = ConfigDict(extra="allow")

    shop_inventory_summary: list[ShopInventorySnapshot] = Field(default_factory=list)
    frames: list[Frame] = Field(default_factory=list)
    recent_distributions: list[RecentDistribution] = Field(default_factory=list)


class StockLine(BaseModel):
    """One (frame, quantity, unit cost) line as the backend receives it."""

    model_config = ConfigDict(extra="allow")

    frame_id: int
    quantity: int
    cost_per_unit: Decimal

    @field_serializer("cost_per_unit", when_used="json")
    def _cost_as_number(self, value: Decimal) -> float:
        return float(value)


class ShopDistributionPayload(BaseModel):
    shop_id: int
    items: list[StockLine]


class BulkDistributionRequest(BaseModel):
    distributions: list[ShopDistributionPayload]

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for dist in self.distributions for line in dist.items)


class BulkDistributionResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    total_items_distributed: int = 0
    shops_updated: int = 0


class StockInRequest(BaseModel):
    shop_id: int
    items: list[StockLine]


class ShopInventoryItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    frame: int | None = None
    quantity_received: int = 0
    quantity_sold: int = 0
    quantity_remaining: int = 0
    cost_per_unit: Decimal | None = None
    last_restocked: str | None = None
    total_cost: Decimal | None = None
    total_revenue: Decimal | None = None
    total_profit: Decimal | None = None
    frame_name: str | None = None
    frame_product_id: str | None = None
    frame_price: Decimal | None = None
    frame_brand: str | None = None
    frame_type: str | None = None
    frame_color: str | None = None
    frame_material: str | None = None


class InventorySummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    total_items: int = 0
    total_value: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")
    low_stock_count: int = 0
    low_stock_items: list[ShopInventoryItem] = Field(default_factory=list)


class FinancialSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    month: str | None = None
    total_revenue: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
    amount_to_pay_distributor: Decimal = Decimal("0")
    units_sold: int = 0


class ShopInventoryDetail(BaseModel):
    model_config = ConfigDict(extra="allow")

    shop: Shop
    inventory: list[ShopInventoryItem] = Field(default_factory=list)
    summary: InventorySummary = Field(default_factory=InventorySummary)
    financial_summary: FinancialSummary | None = None


class LensType(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    description: str = ""
    price_modifier: Decimal = Decimal("0")


class SaleRequest(BaseModel):
    shop_inventory_id: int
    quantity: int
    sale_price: Decimal
    notes: str = ""

    @field_serializer("sale_price", when_used="json")
    def _price_as_number(self, value: Decimal) -> float:
        return float(value)


class BillingLine(BaseModel):
    model_config = ConfigDict(extra="allow")

    frame_id: str
    frame_name: str = ""
    quantity_sold: int = 0
    total_cost: Decimal = Decimal("0")


class BillingReport(BaseModel):
    model_config = ConfigDict(extra="allow")

    shop_name: str | None = None
    month: str | None = None
    items: list[BillingLine] = Field(default_factory=list)
    total_amount_due: Decimal = Decimal("0")

    def rows(self) -> list[dict[str, object]]:
        return [
            {
                "frame_id": item.frame_id,
                "frame_name": item.frame_name,
                "quantity_sold": item.quantity_sold,
                "amount_due": item.total_cost,
            }
            for item in self.items
        ]

    @classmethod
    def from_inventory_detail(cls, detail: ShopInventoryDetail) -> "BillingReport":
        """Lines for every frame with sales; amounts come from the backend as-is."""
        month = detail.financial_summary.month if detail.financial_summary else None
        due = detail.financial_summary.amount_to_pay_distributor if detail.financial_summary else Decimal("0")
        items = [
            BillingLine(
                frame_id=row.frame_product_id or str(row.frame or row.id),
                frame_name=row.frame_name or "",
                quantity_sold=row.quantity_sold,
                total_cost=row.total_cost or Decimal("0"),
            )
            for row in detail.inventory
            if row.quantity_sold > 0
        ]
        return cls(shop_name=detail.shop.name, month=month, items=items, total_amount_due=due)
