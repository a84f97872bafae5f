from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError
from .tracing import TRACE_HEADER, TraceContext

logger = logging.getLogger(__name__)

JsonPayload = dict[str, Any] | list[Any] | None


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> JsonPayload:
        response = self._send(
            method,
            path,
            headers=headers,
            json_body=json_body,
            params=params,
            data=data,
            files=files,
            accept="application/json",
            module=module,
            operation=operation,
        )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                code="INVALID_RESPONSE",
                message="Server returned a non-JSON response",
                details={"content_type": response.headers.get("Content-Type")},
                trace_id=self.trace.trace_id if self.trace else None,
                status_code=response.status_code,
                raw_payload=response.text,
            ) from exc

    def request_bytes(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> bytes:
        response = self._send(
            method,
            path,
            headers=headers,
            params=params,
            accept="*/*",
            module=module,
            operation=operation,
        )
        return response.content

    def _send(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        accept: str,
        module: str,
        operation: str,
    ) -> requests.Response:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": accept}
        if headers:
            request_headers.update(headers)
        trace_context = self.trace or TraceContext()
        request_headers[TRACE_HEADER] = trace_context.new_request()

        normalized_method = method.upper()
        url = self.build_url(path)
        started = time.monotonic()
        try:
            response = self.session.request(
                method=normalized_method,
                url=url,
                headers=request_headers,
                json=json_body,
                params=params,
                data=data,
                files=files,
                timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            self._record_operation(module, operation, started, "error", trace_context.trace_id)
            logger.warning(
                "http_transport_error",
                extra={"method": normalized_method, "path": path, "trace_id": trace_context.trace_id},
            )
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
                trace_id=trace_context.trace_id,
                status_code=0,
                raw_payload=None,
            ) from exc

        trace_context.update_from_headers(response.headers)
        if response.ok:
            self._record_operation(module, operation, started, "success", trace_context.trace_id)
            return response

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text}
        if not isinstance(payload, dict):
            payload = {"message": str(payload)}
        self._record_operation(module, operation, started, "error", trace_context.trace_id)
        logger.warning(
            "http_error_response",
            extra={
                "method": normalized_method,
                "path": path,
                "status_code": response.status_code,
                "trace_id": trace_context.trace_id,
            },
        )
        raise map_error(response.status_code, payload, trace_context.trace_id)

    def _record_operation(self, module: str, operation: str, started: float, result: str, trace_id: str | None) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )
        logger.debug(
            "http_operation",
            extra={"operation": f"{module}.{operation}", "result": result, "duration_ms": self.last_operation.duration_ms},
        )
