from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from optidist_sdk.models import UserProfile


class Route(str, Enum):
    LOGIN = "/login"
    DISTRIBUTOR_HOME = "/distributor"
    PRODUCT_CATALOG = "/distributor/catalog"
    SHOP_MANAGEMENT = "/distributor/shops"
    INVENTORY_DISTRIBUTION = "/distributor/distribution"
    DISTRIBUTOR_ANALYTICS = "/distributor/analytics"
    SHOP_INVENTORY_DETAIL = "/distributor/shop-inventory/{shop_id}"
    SHOP_OWNER_HOME = "/shop-owner"
    SHOP_OWNER_INVENTORY = "/shop-owner/inventory"
    SHOP_OWNER_SALES = "/shop-owner/sales"
    SHOP_OWNER_ANALYTICS = "/shop-owner/analytics"

    def path(self, **params: object) -> str:
        return self.value.format(**params) if params else self.value


@dataclass
class AppState:
    route: Route = Route.LOGIN
    route_params: dict[str, object] = field(default_factory=dict)
    error_message: str | None = None
    status_message: str = "Ready"
    trace_id: str | None = None
    user: UserProfile | None = None

    @property
    def location(self) -> str:
        return self.route.path(**self.route_params)
