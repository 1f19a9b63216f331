from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    ApplicationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)

_STATUS_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
}


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    """Build the exception for a non-2xx response, keeping the server message verbatim."""
    payload = payload or {}
    code = str(payload.get("code") or _STATUS_CODES.get(status_code) or "HTTP_ERROR")
    message = str(payload.get("message") or payload.get("error") or f"Request failed with status {status_code}")
    details = payload.get("details") or payload.get("errors")
    payload_trace_id = payload.get("trace_id")
    resolved_trace_id = str(payload_trace_id) if payload_trace_id is not None else trace_id
    mapped: type[ApiError]
    if status_code == 401:
        mapped = UnauthorizedError
    elif status_code == 403:
        mapped = ForbiddenError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApplicationError
    return mapped(
        code=code,
        message=message,
        details=details,
        trace_id=resolved_trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )


def envelope_failure(payload: Mapping[str, object], status_code: int, trace_id: str | None) -> ApplicationError:
    """A 2xx envelope that carries ``success: false``."""
    message = str(payload.get("message") or "Request failed")
    return ApplicationError(
        code="APPLICATION_ERROR",
        message=message,
        details=payload.get("data"),
        trace_id=trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )
