from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from optidist_sdk.models_shops import Shop, ShopCreateRequest, ShopUpdateRequest

from ..services.shops_service import ShopsService, ShopsServiceError
from .shared.validators import validate_create_shop, validate_edit_shop
from .shared.view_state import ViewState, resolve_state


@dataclass
class ShopManagementView:
    service: ShopsService
    shops: list[Shop] = field(default_factory=list)
    field_errors: dict[str, str] = field(default_factory=dict)
    error_message: str | None = None
    success_message: str | None = None
    trace_id: str | None = None
    is_loading: bool = False
    is_submitting: bool = False

    def load(self) -> dict[str, Any]:
        self.is_loading = True
        try:
            self.shops = self.service.list_shops()
        except ShopsServiceError as exc:
            return self._fail(exc)
        finally:
            self.is_loading = False
        self.error_message = None
        return {"ok": True, "count": len(self.shops)}

    def create_shop(self, form: Mapping[str, Any]) -> dict[str, Any]:
        validation = validate_create_shop(form)
        self.field_errors = validation.field_errors
        if not validation.ok:
            return {"ok": False, "field_errors": validation.field_errors}
        request = ShopCreateRequest.model_validate({key: str(value).strip() for key, value in form.items()})
        return self._mutate(lambda: self.service.create_shop(request), "Shop created successfully")

    def update_shop(self, shop_id: int, form: Mapping[str, Any]) -> dict[str, Any]:
        validation = validate_edit_shop(form)
        self.field_errors = validation.field_errors
        if not validation.ok:
            return {"ok": False, "field_errors": validation.field_errors}
        request = ShopUpdateRequest.model_validate({key: str(value or "").strip() for key, value in form.items()})
        return self._mutate(lambda: self.service.update_shop(shop_id, request), "Shop updated successfully")

    def delete_shop(self, shop_id: int, *, confirmed: bool) -> dict[str, Any]:
        if not confirmed:
            return {"ok": False, "error": "Deletion not confirmed"}
        return self._mutate(lambda: self.service.delete_shop(shop_id), "Shop deleted successfully")

    def state(self) -> ViewState:
        return resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=bool(self.shops),
            trace_id=self.trace_id,
            empty_message="No shops yet",
        )

    def _mutate(self, action, success_message: str) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": "Request already in progress"}
        self.is_submitting = True
        self.success_message = None
        try:
            result = action()
        except ShopsServiceError as exc:
            return self._fail(exc)
        finally:
            self.is_submitting = False
        self.error_message = None
        self.field_errors = {}
        self.success_message = success_message
        self.load()
        return {"ok": True, "shop": result}

    def _fail(self, exc: ShopsServiceError) -> dict[str, Any]:
        self.error_message = exc.message
        self.trace_id = exc.trace_id
        return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
