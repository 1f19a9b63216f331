from __future__ import annotations

from dataclasses import dataclass

from .exceptions import GENERIC_TRANSPORT_MESSAGE, ApiError, TransportError, ValidationError


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None
    field_errors: dict[str, str] | None = None


def to_user_facing_error(exc: Exception) -> UserFacingError:
    if isinstance(exc, ValidationError):
        return UserFacingError(message=str(exc), details="CLIENT_VALIDATION", field_errors=exc.field_errors)
    if isinstance(exc, TransportError):
        return UserFacingError(
            message=GENERIC_TRANSPORT_MESSAGE,
            details=f"{exc.code}: {exc.message}",
            trace_id=exc.trace_id,
        )
    if isinstance(exc, ApiError):
        primary = exc.message.strip() or "Request failed"
        details = f"{exc.code} (HTTP {exc.status_code})"
        if exc.details:
            details = f"{details}: {exc.details}"
        return UserFacingError(message=primary, details=details, trace_id=exc.trace_id)
    return UserFacingError(message=str(exc) or "Unexpected error")
