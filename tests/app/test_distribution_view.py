from __future__ import annotations

import json

import responses

from optidist_app.services.distribution_service import DistributionService
from optidist_app.ui.distribution_view import DistributionView
from optidist_sdk.distribution_validation import INCOMPLETE_ITEMS_MESSAGE

API = "https://api.example.com/api"

OVERVIEW = {
    "shop_inventory_summary": [
        {"id": 1, "name": "Downtown", "owner_name": "Sam", "total_items": 10, "total_value": "450.00"},
        {"id": 2, "name": "Uptown", "owner_name": "Ana", "total_items": 0, "total_value": "0"},
    ],
    "frames": [
        {"id": 11, "product_id": "F001", "name": "Aviator", "price": "45.00", "brand": "RayBan"},
        {"id": 12, "product_id": "F002", "name": "Round", "price": "38.50", "brand": "RayBan"},
    ],
    "recent_distributions": [{"id": 1, "shop_name": "Downtown", "quantity": 3, "unit_cost": None}],
}


def _view(session) -> DistributionView:
    view = DistributionView(service=DistributionService(session))
    assert view.load()["ok"]
    return view


@responses.activate
def test_distribute_single_line_end_to_end(distributor_session) -> None:
    responses.add(responses.GET, f"{API}/distribution/", json=OVERVIEW)
    sent: list[dict] = []

    def _bulk(request):
        sent.append(json.loads(request.body))
        return (201, {}, json.dumps({"total_items_distributed": 5, "shops_updated": 1}))

    responses.add_callback(responses.POST, f"{API}/distribution/bulk/", callback=_bulk)
    view = _view(distributor_session)
    builder = view.builder
    builder.toggle_shop(1)
    builder.toggle_shop(2)
    index = builder.add_item(1)
    item = builder.type_frame_query(1, index, "F001")
    builder.select_frame(1, index, item.search_results[0])
    builder.set_quantity(1, index, "5")

    result = view.submit()

    assert result["ok"]
    assert sent == [{"distributions": [{"shop_id": 1, "items": [{"frame_id": 11, "quantity": 5, "cost_per_unit": 45.0}]}]}]
    assert view.success_message == "Successfully distributed 5 items to 1 shops"
    assert view.builder.batches == {}
    assert len([c for c in responses.calls if c.request.method == "GET"]) == 2


@responses.activate
def test_invalid_batch_is_kept_for_correction(distributor_session) -> None:
    responses.add(responses.GET, f"{API}/distribution/", json=OVERVIEW)
    view = _view(distributor_session)
    view.builder.toggle_shop(1)
    index = view.builder.add_item(1)
    view.builder.type_frame_query(1, index, "Round")

    result = view.submit()

    assert result == {"ok": False, "error": INCOMPLETE_ITEMS_MESSAGE, "trace_id": None, "details": "CLIENT_VALIDATION"}
    assert view.builder.batch(1).items[0].frame_query == "Round"
    assert not any(c.request.method == "POST" for c in responses.calls)


@responses.activate
def test_backend_error_is_shown_and_batch_kept(distributor_session) -> None:
    responses.add(responses.GET, f"{API}/distribution/", json=OVERVIEW)
    responses.add(responses.POST, f"{API}/distribution/bulk/", json={"error": "Insufficient frames"}, status=400)
    view = _view(distributor_session)
    view.builder.toggle_shop(2)
    index = view.builder.add_item(2)
    view.builder.select_frame(2, index, view.overview.frames[1])
    view.builder.set_quantity(2, index, 1)

    result = view.submit()

    assert result["error"] == "Insufficient frames"
    assert view.error_message == "Insufficient frames"
    assert view.builder.is_selected(2)
    assert not view.is_submitting


@responses.activate
def test_server_failure_uses_generic_message(distributor_session) -> None:
    responses.add(responses.GET, f"{API}/distribution/", json=OVERVIEW)
    responses.add(responses.POST, f"{API}/distribution/bulk/", body="", status=500)
    view = _view(distributor_session)
    view.builder.toggle_shop(1)
    index = view.builder.add_item(1)
    view.builder.select_frame(1, index, view.overview.frames[0])
    view.builder.set_quantity(1, index, 2)

    assert view.submit()["error"] == "Failed to process distribution. Please try again."


def test_submit_is_locked_while_in_flight(distributor_session) -> None:
    view = DistributionView(service=DistributionService(distributor_session), is_submitting=True)
    assert view.submit() == {"ok": False, "error": "Distribution already in progress"}


@responses.activate
def test_render_formats_money(distributor_session) -> None:
    responses.add(responses.GET, f"{API}/distribution/", json=OVERVIEW)
    view = _view(distributor_session)
    view.builder.toggle_shop(1)
    rendered = view.render()
    assert rendered["shops"][0]["total_value"] == "$450.00"
    assert rendered["shops"][0]["selected"] is True
    assert rendered["recent_distributions"][0]["unit_cost"] == "N/A"
    assert rendered["state"]["status"] == "success"
