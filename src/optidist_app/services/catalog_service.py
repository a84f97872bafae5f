from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Mapping

from optidist_sdk import ApiSession
from optidist_sdk.models_catalog import Frame, FrameChoices, FrameCsvUploadResult, FrameWrite

from .errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class CatalogServiceError(ServiceError):
    pass


class CatalogService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def list_frames(self) -> list[Frame]:
        try:
            return self.session.frames_client().list_frames()
        except Exception as exc:
            raise normalize_error(exc, self.session, CatalogServiceError, "Failed to load frames") from exc

    def choices(self) -> FrameChoices:
        try:
            return self.session.frames_client().get_choices()
        except Exception as exc:
            raise normalize_error(exc, self.session, CatalogServiceError, "Failed to load filter options") from exc

    def save_frame(self, payload: FrameWrite | Mapping[str, Any], frame_id: int | None = None) -> Frame:
        client = self.session.frames_client()
        try:
            frame = client.update_frame(frame_id, payload) if frame_id is not None else client.create_frame(payload)
        except Exception as exc:
            raise normalize_error(exc, self.session, CatalogServiceError, "Failed to save frame") from exc
        logger.info("frame_saved", extra={"frame_id": frame.id, "created": frame_id is None})
        return frame

    def delete_frame(self, frame_id: int) -> None:
        try:
            self.session.frames_client().delete_frame(frame_id)
        except Exception as exc:
            raise normalize_error(exc, self.session, CatalogServiceError, "Failed to delete frame") from exc
        logger.info("frame_deleted", extra={"frame_id": frame_id})

    def upload_csv(self, source: str | Path | bytes | BinaryIO, filename: str | None = None) -> FrameCsvUploadResult:
        try:
            result = self.session.frames_client().upload_csv(source, filename)
        except Exception as exc:
            raise normalize_error(exc, self.session, CatalogServiceError, "Failed to upload CSV file") from exc
        logger.info(
            "frames_csv_uploaded",
            extra={"total_processed": result.total_processed, "errors": len(result.errors)},
        )
        return result

    def csv_template(self) -> bytes:
        try:
            return self.session.frames_client().csv_template()
        except Exception as exc:
            raise normalize_error(exc, self.session, CatalogServiceError, "Failed to download template") from exc
