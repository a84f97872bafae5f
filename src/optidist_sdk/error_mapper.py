from __future__ import annotations

from typing import Any, Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    ServerError,
    ValidationError,
)

_DEFAULT_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    400: "VALIDATION_ERROR",
    422: "VALIDATION_ERROR",
    409: "CONFLICT",
}


def extract_message(payload: Mapping[str, Any] | None) -> str | None:
    """Pick the human-readable message out of a backend error body.

    The API answers with ``{"error": ...}`` from its own views,
    ``{"detail": ...}`` from the auth layer and ``{"field": ["..."]}`` for
    serializer validation failures.
    """
    if not payload:
        return None
    for key in ("error", "detail", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    for key, value in payload.items():
        if key in {"code", "trace_id"}:
            continue
        if isinstance(value, list) and value and isinstance(value[0], str):
            if key == "non_field_errors":
                return value[0]
            return f"{key}: {value[0]}"
        if isinstance(value, str) and value.strip():
            return f"{key}: {value.strip()}"
    return None


def field_errors(payload: Mapping[str, Any] | None) -> dict[str, str]:
    errors: dict[str, str] = {}
    for key, value in (payload or {}).items():
        if isinstance(value, list) and value and isinstance(value[0], str):
            errors[key] = value[0]
    return errors


def map_error(status_code: int, payload: Mapping[str, Any] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    code = str(payload.get("code") or _DEFAULT_CODES.get(status_code) or ("SERVER_ERROR" if status_code >= 500 else "HTTP_ERROR"))
    message = extract_message(payload) or "Request failed"
    details = field_errors(payload) or None
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped: type[ApiError]
    if status_code == 401:
        mapped = AuthError
    elif status_code == 403:
        mapped = PermissionError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        details=details,
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )
