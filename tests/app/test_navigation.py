from __future__ import annotations

import pytest

from optidist_app.app.navigation import initial_route, menu_for, resolve_route
from optidist_app.app.state import Route
from optidist_sdk.models import UserProfile, UserRole


def test_login_route_is_always_reachable(anonymous_session) -> None:
    assert resolve_route(Route.LOGIN, anonymous_session) is Route.LOGIN


@pytest.mark.parametrize("route", [Route.DISTRIBUTOR_HOME, Route.SHOP_OWNER_SALES, Route.SHOP_INVENTORY_DETAIL])
def test_no_session_goes_to_login(anonymous_session, route) -> None:
    assert resolve_route(route, anonymous_session) is Route.LOGIN


def test_role_mismatch_goes_home(distributor_session, owner_session) -> None:
    assert resolve_route(Route.SHOP_OWNER_SALES, distributor_session) is Route.DISTRIBUTOR_HOME
    assert resolve_route(Route.INVENTORY_DISTRIBUTION, owner_session) is Route.SHOP_OWNER_HOME
    assert resolve_route(Route.INVENTORY_DISTRIBUTION, distributor_session) is Route.INVENTORY_DISTRIBUTION


def test_unknown_role_goes_to_login(distributor_session) -> None:
    distributor_session.user = UserProfile(username="x", role="AUDITOR")
    assert resolve_route(Route.DISTRIBUTOR_HOME, distributor_session) is Route.LOGIN
    assert initial_route(distributor_session) is Route.LOGIN


def test_initial_route_per_role(anonymous_session, distributor_session, owner_session) -> None:
    assert initial_route(anonymous_session) is Route.LOGIN
    assert initial_route(distributor_session) is Route.DISTRIBUTOR_HOME
    assert initial_route(owner_session) is Route.SHOP_OWNER_HOME


def test_menu_hides_detail_page() -> None:
    routes = [spec.route for spec in menu_for(UserRole.DISTRIBUTOR)]
    assert Route.SHOP_INVENTORY_DETAIL not in routes
    assert Route.INVENTORY_DISTRIBUTION in routes
    assert all(spec.role is UserRole.SHOP_OWNER for spec in menu_for(UserRole.SHOP_OWNER))
    assert menu_for(None) == []


def test_detail_route_path() -> None:
    assert Route.SHOP_INVENTORY_DETAIL.path(shop_id=12) == "/distributor/shop-inventory/12"
