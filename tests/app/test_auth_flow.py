from __future__ import annotations

import json

import pytest
import responses

from optidist_app.app.bootstrap import OptiDistBootstrap
from optidist_app.app.state import Route
from optidist_app.services.auth_service import UNKNOWN_ROLE_MESSAGE, AuthService, AuthServiceError
from optidist_app.services.shops_service import ShopsService, ShopsServiceError
from optidist_app.ui.login_view import LoginView

API = "https://api.example.com/api"


@responses.activate
def test_login_stores_session_and_routes_home(anonymous_session) -> None:
    responses.add(responses.POST, f"{API}/token/", json={"access": "acc", "refresh": "ref"})
    responses.add(responses.GET, f"{API}/user-info/", json={"id": 2, "username": "owner", "role": "SHOP_OWNER"})
    app = OptiDistBootstrap(config=anonymous_session.config, session=anonymous_session)

    result = app.login("owner", "secret")

    assert result.route is Route.SHOP_OWNER_HOME
    assert anonymous_session.token == "acc"
    assert anonymous_session.auth_store.load().user_info.username == "owner"


@responses.activate
def test_unknown_role_is_rejected_without_session(anonymous_session) -> None:
    responses.add(responses.POST, f"{API}/token/", json={"access": "acc"})
    responses.add(responses.GET, f"{API}/user-info/", json={"id": 3, "username": "aud", "role": "AUDITOR"})

    with pytest.raises(AuthServiceError) as excinfo:
        AuthService(anonymous_session).login("aud", "secret")

    assert excinfo.value.message == UNKNOWN_ROLE_MESSAGE
    assert anonymous_session.token is None
    assert anonymous_session.auth_store.load() is None


@responses.activate
def test_bad_credentials_message(anonymous_session) -> None:
    responses.add(
        responses.POST,
        f"{API}/token/",
        json={"detail": "No active account found with the given credentials"},
        status=401,
    )
    app = OptiDistBootstrap(config=anonymous_session.config, session=anonymous_session)
    result = app.login("nobody", "wrong")
    assert result.route is Route.LOGIN
    assert result.error_message == "Invalid username or password."
    assert app.state.error_message == "Invalid username or password."


@responses.activate
def test_server_failure_during_login(anonymous_session) -> None:
    responses.add(responses.POST, f"{API}/token/", body="", status=502)
    with pytest.raises(AuthServiceError) as excinfo:
        AuthService(anonymous_session).login("dist", "pw")
    assert excinfo.value.message == "Login failed. Please try again."


@responses.activate
def test_expired_token_clears_session(distributor_session) -> None:
    responses.add(responses.GET, f"{API}/shops/", json={"detail": "Token is invalid or expired"}, status=401)

    with pytest.raises(ShopsServiceError) as excinfo:
        ShopsService(distributor_session).list_shops()

    assert excinfo.value.session_expired
    assert not distributor_session.is_authenticated
    assert distributor_session.auth_store.load() is None


def test_logout_clears_store(distributor_session) -> None:
    app = OptiDistBootstrap(config=distributor_session.config, session=distributor_session)
    assert app.start().route is Route.DISTRIBUTOR_HOME
    assert app.logout().route is Route.LOGIN
    assert distributor_session.auth_store.load() is None


def test_navigate_applies_guard(owner_session) -> None:
    app = OptiDistBootstrap(config=owner_session.config, session=owner_session)
    assert app.navigate(Route.SHOP_INVENTORY_DETAIL, shop_id=4).route is Route.SHOP_OWNER_HOME
    assert app.state.location == "/shop-owner"
    assert app.navigate(Route.SHOP_OWNER_SALES).route is Route.SHOP_OWNER_SALES


@responses.activate
def test_login_view_returns_role_home(anonymous_session) -> None:
    responses.add(responses.POST, f"{API}/token/", json={"access": "acc"})
    responses.add(responses.GET, f"{API}/user-info/", json={"id": 1, "username": "dist", "role": "DISTRIBUTOR"})
    view = LoginView(service=AuthService(anonymous_session))

    assert view.submit("  ", "pw")["error"] == "Please enter username and password"
    result = view.submit(" dist ", "pw")

    assert result["ok"] and result["route"] is Route.DISTRIBUTOR_HOME
    assert json.loads(responses.calls[0].request.body) == {"username": "dist", "password": "pw"}
