from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class Shop(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    address: str = ""
    owner_name: str = ""
    phone: str | None = None
    email: str | None = None


class ShopInventorySnapshot(BaseModel):
    """Per-shop stock totals as shown on the distribution overview."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    address: str = ""
    owner_name: str = ""
    total_items: int = 0
    total_value: Decimal = Decimal("0")
    low_stock_count: int = 0
    last_distribution: str | None = None


class ShopCreateRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    address: str
    owner_name: str
    phone: str
    email: str
    username: str
    password: str
    confirm_password: str


class ShopUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    address: str
    owner_name: str = ""
    phone: str = ""
    email: str = ""
