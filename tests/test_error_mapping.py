from __future__ import annotations

from erp_admin_sdk.error_mapper import envelope_failure, map_error
from erp_admin_sdk.exceptions import (
    ApplicationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)


def test_map_error_classes() -> None:
    assert isinstance(map_error(401, {"message": "expired"}, "t"), UnauthorizedError)
    assert isinstance(map_error(403, {"message": "no"}, "t"), ForbiddenError)
    assert isinstance(map_error(404, {"message": "Product not found"}, "t"), NotFoundError)
    assert isinstance(map_error(409, {"message": "SKU already exists"}, "t"), ConflictError)
    assert isinstance(map_error(503, None, "t"), ServerError)
    other = map_error(400, {"message": "Bad input"}, "t")
    assert type(other) is ApplicationError


def test_map_error_keeps_server_message_verbatim() -> None:
    err = map_error(409, {"success": False, "message": "Product with SKU ABC already exists"}, "trace-409")
    assert err.message == "Product with SKU ABC already exists"
    assert err.code == "CONFLICT"
    assert err.status_code == 409
    assert "trace_id=trace-409" in str(err)


def test_map_error_without_body_uses_status_message() -> None:
    err = map_error(502, None, None)
    assert err.message == "Request failed with status 502"
    assert err.code == "HTTP_ERROR"


def test_envelope_failure_is_application_error() -> None:
    err = envelope_failure({"success": False, "message": "Not found", "data": None}, 200, "trace-1")
    assert isinstance(err, ApplicationError)
    assert err.message == "Not found"
    assert err.trace_id == "trace-1"
