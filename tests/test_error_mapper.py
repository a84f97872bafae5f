from __future__ import annotations

from optidist_sdk.error_mapper import extract_message, map_error
from optidist_sdk.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)


def test_map_error_prefers_error_key() -> None:
    error = map_error(400, {"error": "Frame F009 not found"}, "trace-1")
    assert isinstance(error, ValidationError)
    assert error.message == "Frame F009 not found"
    assert error.code == "VALIDATION_ERROR"
    assert error.trace_id == "trace-1"


def test_map_error_unauthorized_uses_detail() -> None:
    error = map_error(401, {"detail": "Given token not valid for any token type"}, None)
    assert isinstance(error, AuthError)
    assert isinstance(error, UnauthorizedError)
    assert error.message == "Given token not valid for any token type"


def test_map_error_field_errors() -> None:
    error = map_error(400, {"email": ["Enter a valid email address."], "name": ["This field is required."]}, None)
    assert error.message == "email: Enter a valid email address."
    assert error.details == {"email": "Enter a valid email address.", "name": "This field is required."}


def test_non_field_errors_are_returned_bare() -> None:
    assert extract_message({"non_field_errors": ["Shop already has an owner"]}) == "Shop already has an owner"


def test_map_error_status_classes() -> None:
    assert isinstance(map_error(403, {}, None), PermissionError)
    assert isinstance(map_error(404, {}, None), NotFoundError)
    assert isinstance(map_error(409, {}, None), ConflictError)
    server = map_error(502, {}, None)
    assert isinstance(server, ServerError)
    assert server.code == "SERVER_ERROR"
    assert server.message == "Request failed"


def test_map_error_prefers_payload_trace_id() -> None:
    error = map_error(500, {"message": "boom", "trace_id": "server-trace"}, "client-trace")
    assert error.trace_id == "server-trace"
