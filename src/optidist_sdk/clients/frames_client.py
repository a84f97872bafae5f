from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Mapping

from ..models_catalog import Frame, FrameChoices, FrameCsvUploadResult, FrameWrite
from ..validation import ClientValidationError, ValidationIssue, coerce_model
from .base import BaseClient, expect_object, expect_rows

INVALID_CSV_MESSAGE = "Please select a valid CSV file"


def csv_upload_part(source: str | Path | bytes | BinaryIO, filename: str | None = None) -> tuple[str, Any, str]:
    """Build the ``files`` tuple for a multipart CSV upload."""
    if isinstance(source, (str, Path)):
        name = filename or Path(source).name
    else:
        name = filename or getattr(source, "name", None) or "upload.csv"
    name = Path(str(name)).name
    if not name.lower().endswith(".csv"):
        raise ClientValidationError(
            [ValidationIssue(row_index=None, field="file", reason="file name must end in .csv")],
            summary=INVALID_CSV_MESSAGE,
        )
    content: Any = Path(source).read_bytes() if isinstance(source, (str, Path)) else source
    return (name, content, "text/csv")


@dataclass
class FramesClient(BaseClient):
    module: str = "frames"

    def list_frames(self) -> list[Frame]:
        payload = self._request("GET", "/frames/", operation="list")
        return [Frame.model_validate(row) for row in expect_rows(payload, "frames")]

    def get_choices(self) -> FrameChoices:
        payload = self._request("GET", "/frames/choices/", operation="choices")
        return FrameChoices.model_validate(expect_object(payload, "frame choices"))

    def create_frame(self, payload: FrameWrite | Mapping[str, Any]) -> Frame:
        request = coerce_model(payload, FrameWrite)
        data = self._request("POST", "/frames/", json_body=request.model_dump(mode="json"), operation="create")
        return Frame.model_validate(expect_object(data, "create frame"))

    def update_frame(self, frame_id: int, payload: FrameWrite | Mapping[str, Any]) -> Frame:
        request = coerce_model(payload, FrameWrite)
        data = self._request(
            "PUT",
            f"/frames/{frame_id}/",
            json_body=request.model_dump(mode="json"),
            operation="update",
        )
        return Frame.model_validate(expect_object(data, "update frame"))

    def delete_frame(self, frame_id: int) -> None:
        self._request("DELETE", f"/frames/{frame_id}/", operation="delete")

    def upload_csv(self, source: str | Path | bytes | BinaryIO, filename: str | None = None) -> FrameCsvUploadResult:
        files = {"file": csv_upload_part(source, filename)}
        data = self._request("POST", "/frames/upload_csv/", files=files, operation="upload_csv")
        return FrameCsvUploadResult.model_validate(expect_object(data, "frame CSV upload"))

    def csv_template(self) -> bytes:
        return self._request_bytes("GET", "/frames/csv_template/", operation="csv_template")
