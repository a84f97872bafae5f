from __future__ import annotations

import logging
from dataclasses import dataclass

from optidist_sdk import ApiSession
from optidist_sdk.models import UserRole

from .state import Route

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteSpec:
    route: Route
    label: str
    role: UserRole | None


ROUTE_SPECS: tuple[RouteSpec, ...] = (
    RouteSpec(Route.LOGIN, "Login", None),
    RouteSpec(Route.DISTRIBUTOR_HOME, "Dashboard", UserRole.DISTRIBUTOR),
    RouteSpec(Route.PRODUCT_CATALOG, "Product Catalog", UserRole.DISTRIBUTOR),
    RouteSpec(Route.SHOP_MANAGEMENT, "Shop Management", UserRole.DISTRIBUTOR),
    RouteSpec(Route.INVENTORY_DISTRIBUTION, "Inventory Distribution", UserRole.DISTRIBUTOR),
    RouteSpec(Route.DISTRIBUTOR_ANALYTICS, "Analytics", UserRole.DISTRIBUTOR),
    RouteSpec(Route.SHOP_INVENTORY_DETAIL, "Shop Inventory", UserRole.DISTRIBUTOR),
    RouteSpec(Route.SHOP_OWNER_HOME, "Dashboard", UserRole.SHOP_OWNER),
    RouteSpec(Route.SHOP_OWNER_INVENTORY, "My Inventory", UserRole.SHOP_OWNER),
    RouteSpec(Route.SHOP_OWNER_SALES, "Sales", UserRole.SHOP_OWNER),
    RouteSpec(Route.SHOP_OWNER_ANALYTICS, "Analytics", UserRole.SHOP_OWNER),
)

ROLE_HOMES: dict[UserRole, Route] = {
    UserRole.DISTRIBUTOR: Route.DISTRIBUTOR_HOME,
    UserRole.SHOP_OWNER: Route.SHOP_OWNER_HOME,
}

_SPECS_BY_ROUTE = {spec.route: spec for spec in ROUTE_SPECS}


def required_role(route: Route) -> UserRole | None:
    return _SPECS_BY_ROUTE[route].role


def menu_for(role: UserRole | None) -> list[RouteSpec]:
    # Detail pages are reached from a shop row, not from the menu.
    return [
        spec
        for spec in ROUTE_SPECS
        if spec.role is not None and spec.role is role and spec.route is not Route.SHOP_INVENTORY_DETAIL
    ]


def resolve_route(requested: Route, session: ApiSession) -> Route:
    """Route guard: where a navigation request actually lands."""
    role_needed = required_role(requested)
    if role_needed is None:
        return requested
    if not session.is_authenticated:
        logger.info("route_redirect", extra={"requested": requested.value, "reason": "no_session"})
        return Route.LOGIN
    role = session.role
    if role is None:
        logger.warning("route_redirect", extra={"requested": requested.value, "reason": "unknown_role"})
        return Route.LOGIN
    if role is not role_needed:
        logger.info("route_redirect", extra={"requested": requested.value, "reason": "role_mismatch"})
        return ROLE_HOMES[role]
    return requested


def initial_route(session: ApiSession) -> Route:
    if not session.is_authenticated or session.role is None:
        return Route.LOGIN
    return ROLE_HOMES[session.role]
