from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Mapping

from optidist_sdk.formatting import format_currency
from optidist_sdk.models_catalog import Frame, FrameChoices, FrameCsvUploadResult

from ..services.catalog_service import CatalogService, CatalogServiceError
from .shared.validators import validate_frame_form
from .shared.view_state import ViewState, resolve_state

FILTER_FIELDS: tuple[str, ...] = ("frame_type", "color", "material", "brand")
SEARCH_FIELDS: tuple[str, ...] = ("name", "product_id", "brand")


def filter_frames(frames: list[Frame], search: str, filters: Mapping[str, str]) -> list[Frame]:
    needle = search.lower()
    result = []
    for frame in frames:
        if needle and not any(needle in str(getattr(frame, name) or "").lower() for name in SEARCH_FIELDS):
            continue
        if any(value and getattr(frame, key) != value for key, value in filters.items()):
            continue
        result.append(frame)
    return result


@dataclass
class CatalogView:
    service: CatalogService
    frames: list[Frame] = field(default_factory=list)
    choices: FrameChoices | None = None
    search: str = ""
    filters: dict[str, str] = field(default_factory=lambda: {key: "" for key in FILTER_FIELDS})
    upload_result: FrameCsvUploadResult | None = None
    error_message: str | None = None
    trace_id: str | None = None
    is_loading: bool = False
    is_uploading: bool = False

    @property
    def visible_frames(self) -> list[Frame]:
        return filter_frames(self.frames, self.search, self.filters)

    def load(self) -> dict[str, Any]:
        self.is_loading = True
        try:
            self.frames = self.service.list_frames()
        except CatalogServiceError as exc:
            return self._fail(exc)
        finally:
            self.is_loading = False
        self.error_message = None
        try:
            self.choices = self.service.choices()
        except CatalogServiceError:
            # Filter dropdowns just stay empty.
            self.choices = None
        return {"ok": True, "count": len(self.frames)}

    def set_filter(self, key: str, value: str) -> None:
        if key not in FILTER_FIELDS:
            raise KeyError(key)
        self.filters[key] = value

    def clear_filters(self) -> None:
        self.search = ""
        self.filters = {key: "" for key in FILTER_FIELDS}

    def upload_csv(self, source: str | Path | bytes | BinaryIO | None, filename: str | None = None) -> dict[str, Any]:
        if source is None:
            self.error_message = "Please select a CSV file first"
            return {"ok": False, "error": self.error_message}
        if self.is_uploading:
            return {"ok": False, "error": "Upload already in progress"}
        self.is_uploading = True
        self.upload_result = None
        try:
            self.upload_result = self.service.upload_csv(source, filename)
        except CatalogServiceError as exc:
            return self._fail(exc)
        finally:
            self.is_uploading = False
        self.error_message = None
        if self.upload_result.should_refresh:
            self.load()
        return {"ok": self.upload_result.success, "result": self.upload_result}

    def download_template(self, target: str | Path) -> dict[str, Any]:
        try:
            content = self.service.csv_template()
        except CatalogServiceError as exc:
            return self._fail(exc)
        path = Path(target)
        path.write_bytes(content)
        return {"ok": True, "path": str(path)}

    def save_frame(self, form: Mapping[str, Any], frame_id: int | None = None) -> dict[str, Any]:
        validation = validate_frame_form(form)
        if not validation.ok:
            return {"ok": False, "field_errors": validation.field_errors}
        try:
            frame = self.service.save_frame(dict(form), frame_id=frame_id)
        except CatalogServiceError as exc:
            return self._fail(exc)
        self.load()
        return {"ok": True, "frame": frame}

    def delete_frame(self, frame_id: int, *, confirmed: bool) -> dict[str, Any]:
        if not confirmed:
            return {"ok": False, "error": "Deletion not confirmed"}
        try:
            self.service.delete_frame(frame_id)
        except CatalogServiceError as exc:
            return self._fail(exc)
        self.frames = [frame for frame in self.frames if frame.id != frame_id]
        return {"ok": True}

    def state(self) -> ViewState:
        return resolve_state(
            is_loading=self.is_loading,
            error=self.error_message,
            has_data=bool(self.frames),
            trace_id=self.trace_id,
            empty_message="No frames found",
        )

    def render(self) -> dict[str, Any]:
        visible = self.visible_frames
        return {
            "state": self.state().render(),
            "total": len(visible),
            "frames": [
                {
                    "product_id": frame.product_id,
                    "name": frame.name,
                    "brand": frame.brand,
                    "frame_type": frame.frame_type,
                    "color": frame.color,
                    "material": frame.material,
                    "price": format_currency(frame.price),
                }
                for frame in visible
            ],
            "filters": dict(self.filters),
            "search": self.search,
        }

    def _fail(self, exc: CatalogServiceError) -> dict[str, Any]:
        self.error_message = exc.message
        self.trace_id = exc.trace_id
        return {"ok": False, "error": exc.message, "trace_id": exc.trace_id}
