from __future__ import annotations

import json
from pathlib import Path

import pytest
import responses

from optidist_app.main import main
from optidist_sdk import ApiSession, load_config
from optidist_sdk.models import TokenResponse, UserProfile

API = "https://api.example.com/api"

FRAMES = [
    {"id": 11, "product_id": "F001", "name": "Aviator", "price": "45.00", "brand": "RayBan"},
    {"id": 12, "product_id": "F002", "name": "Round", "price": "38.50", "brand": "RayBan"},
]


@pytest.fixture
def store_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr("optidist_sdk.auth_store.user_data_dir", lambda *args, **kwargs: str(tmp_path))
    return tmp_path


def _login_as(role: str) -> None:
    ApiSession(load_config()).establish(
        TokenResponse(access="tok"), UserProfile(id=1, username="user", role=role, shop_id=5)
    )


def _output(capsys: pytest.CaptureFixture[str]) -> object:
    return json.loads(capsys.readouterr().out)


@responses.activate
def test_login_then_whoami(store_dir, capsys) -> None:
    responses.add(responses.POST, f"{API}/token/", json={"access": "acc"})
    responses.add(responses.GET, f"{API}/user-info/", json={"id": 1, "username": "dist", "role": "DISTRIBUTOR"})

    assert main(["login", "--username", "dist", "--password", "pw"]) == 0
    assert _output(capsys)["route"] == "/distributor"

    assert main(["whoami"]) == 0
    assert _output(capsys)["home"] == "/distributor"


def test_whoami_without_session_fails(store_dir, capsys) -> None:
    assert main(["whoami"]) == 1
    assert _output(capsys) == {"error": "CommandError", "message": "Not logged in", "trace_id": None}


@responses.activate
def test_distribute_dry_run_prints_payload(store_dir, capsys) -> None:
    _login_as("DISTRIBUTOR")
    responses.add(responses.GET, f"{API}/distribution/", json={"frames": FRAMES})

    code = main(["distribute", "--line", "1:F001:5", "--line", "2:round:2", "--dry-run"])

    assert code == 0
    assert _output(capsys) == {
        "distributions": [
            {"shop_id": 1, "items": [{"frame_id": 11, "quantity": 5, "cost_per_unit": 45.0}]},
            {"shop_id": 2, "items": [{"frame_id": 12, "quantity": 2, "cost_per_unit": 38.5}]},
        ]
    }
    assert all(call.request.method == "GET" for call in responses.calls)


@responses.activate
def test_distribute_with_ambiguous_frame_is_rejected(store_dir, capsys) -> None:
    _login_as("DISTRIBUTOR")
    responses.add(responses.GET, f"{API}/distribution/", json={"frames": FRAMES})

    assert main(["distribute", "--line", "1:F00:5"]) == 1
    body = _output(capsys)
    assert body["error"] == "DistributionServiceError"
    assert body["message"] == "Please fix all errors and ensure all fields are properly filled"


def test_shop_owner_cannot_distribute(store_dir, capsys) -> None:
    _login_as("SHOP_OWNER")
    assert main(["distribute", "--line", "1:F001:5"]) == 1
    assert "Not allowed" in _output(capsys)["message"]


@responses.activate
def test_owner_analytics_uses_shop_scope(store_dir, capsys) -> None:
    _login_as("SHOP_OWNER")
    responses.add(responses.GET, f"{API}/dashboard/shop/summary/", json={"shop_name": "Downtown", "items_in_stock": 7})

    assert main(["analytics", "summary"]) == 0
    assert _output(capsys)["items_in_stock"] == 7


def test_owner_cannot_read_distributor_series(store_dir, capsys) -> None:
    _login_as("SHOP_OWNER")
    assert main(["analytics", "revenue-summary"]) == 1
    assert _output(capsys)["message"] == "revenue-summary is only available to the distributor"


@responses.activate
def test_distributor_trends_include_chart(store_dir, capsys) -> None:
    _login_as("DISTRIBUTOR")
    responses.add(
        responses.GET,
        f"{API}/dashboard/sales-trends/",
        json={"trends": [{"period": "2024-06-01", "sales_count": 2, "total_revenue": "80.00"}]},
    )

    assert main(["analytics", "sales-trends", "--period", "day"]) == 0
    body = _output(capsys)
    assert body["chart"] == {"labels": ["2024-06-01"], "sales_count": [2], "total_revenue": [80.0]}
    assert "period=day" in responses.calls[0].request.url


@responses.activate
def test_frames_search_matches_catalog_filter(store_dir, capsys) -> None:
    _login_as("DISTRIBUTOR")
    responses.add(
        responses.GET,
        f"{API}/frames/",
        json=[
            {"id": 1, "frame_id": "F001", "frame_name": "Aviator", "price": "45.00", "brand": "RayBan"},
            {"id": 2, "frame_id": "V300", "frame_name": "Cat Eye", "price": "52.00", "brand": "Vogue"},
        ],
    )

    assert main(["frames", "--search", "vogue"]) == 0
    assert _output(capsys) == [{"id": 2, "product_id": "V300", "name": "Cat Eye", "brand": "Vogue", "price": "$52.00"}]
