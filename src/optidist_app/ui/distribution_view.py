from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from optidist_sdk import DistributionBuilder
from optidist_sdk.formatting import format_currency
from optidist_sdk.models_inventory import DistributionOverview

from ..services.distribution_service import DistributionService, DistributionServiceError
from .shared.view_state import ViewState, resolve_state


@dataclass
class DistributionView:
    """Inventory distribution screen: overview tables plus the batch builder."""

    service: DistributionService
    overview: DistributionOverview | None = None
    builder: DistributionBuilder = field(default_factory=DistributionBuilder)
    error_message: str | None = None
    success_message: str | None = None
    trace_id: str | None = None
    session_expired: bool = False
    is_loading: bool = False
    is_submitting: bool = False

    def load(self) -> dict[str, Any]:
        self.is_loading = True
        try:
            self.overview = self.service.overview()
        except DistributionServiceError as exc:
            return self._fail(exc)
        finally:
            self.is_loading = False
        self.builder.frames = list(self.overview.frames)
        self.error_message = None
        return {"ok": True}

    def submit(self) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": "Distribution already in progress"}
        self.is_submitting = True
        self.success_message = None
        try:
            response = self.service.submit(self.builder.batches.values())
        except DistributionServiceError as exc:
            # Batches stay as they are so the user can fix and resend.
            return self._fail(exc)
        finally:
            self.is_submitting = False
        self.error_message = None
        self.success_message = (
            f"Successfully distributed {response.total_items_distributed} items to "
            f"{response.shops_updated} shops"
        )
        self.builder.reset()
        self.load()
        return {
            "ok": True,
            "total_items_distributed": response.total_items_distributed,
            "shops_updated": response.shops_updated,
        }

    def state(self) -> ViewState:
        return resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=self.overview is not None,
            trace_id=self.trace_id,
        )

    def render(self) -> dict[str, Any]:
        overview = self.overview or DistributionOverview()
        return {
            "state": self.state().render(),
            "shops": [
                {
                    "id": shop.id,
                    "name": shop.name,
                    "owner_name": shop.owner_name,
                    "total_items": shop.total_items,
                    "total_value": format_currency(shop.total_value),
                    "low_stock_count": shop.low_stock_count,
                    "selected": self.builder.is_selected(shop.id),
                }
                for shop in overview.shop_inventory_summary
            ],
            "batches": self.builder.render(),
            "recent_distributions": [
                {
                    "shop_name": dist.shop_name,
                    "frame_name": dist.frame_name,
                    "product_id": dist.product_id,
                    "quantity": dist.quantity,
                    "unit_cost": format_currency(dist.unit_cost),
                    "created_at": dist.created_at,
                }
                for dist in overview.recent_distributions
            ],
            "can_submit": not self.is_submitting and bool(self.builder.batches),
            "error": self.error_message,
            "success": self.success_message,
        }

    def _fail(self, exc: DistributionServiceError) -> dict[str, Any]:
        self.error_message = exc.message
        self.trace_id = exc.trace_id
        self.session_expired = exc.session_expired
        return {"ok": False, "error": exc.message, "trace_id": exc.trace_id, "details": exc.details}
