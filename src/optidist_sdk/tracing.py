from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

TRACE_HEADER = "X-Request-ID"
TRACE_HEADER_ALIASES = (TRACE_HEADER, "X-Request-Id", "x-request-id")


@dataclass
class TraceContext:
    """Correlation id of the latest request, echoed back in errors.

    Every request gets a fresh id; a server-assigned id from the response
    headers replaces it.
    """

    trace_id: str | None = None

    def new_request(self) -> str:
        self.trace_id = uuid.uuid4().hex
        return self.trace_id

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        for key in TRACE_HEADER_ALIASES:
            value = headers.get(key)
            if value:
                self.trace_id = value
                return
