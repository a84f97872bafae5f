from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    module: str = "api"

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        kwargs.setdefault("module", self.module)
        return self.http.request(method, path, headers=merged, **kwargs)

    def _request_bytes(self, method: str, path: str, **kwargs) -> bytes:
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        kwargs.setdefault("module", self.module)
        return self.http.request_bytes(method, path, headers=merged, **kwargs)


def expect_object(payload: Any, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError(f"Expected {what} response to be a JSON object")
    return payload


def expect_rows(payload: Any, what: str) -> list[Any]:
    """Accept either a bare list or a paginated ``{"results": [...]}`` body."""
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        return payload["results"]
    if isinstance(payload, list):
        return payload
    raise ValueError(f"Expected {what} response to be a JSON list")
