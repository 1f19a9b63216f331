from __future__ import annotations

from dataclasses import dataclass

GENERIC_TRANSPORT_MESSAGE = "Unable to reach the ERP server. Check your connection and retry."


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None = None
    trace_id: str | None = None
    status_code: int = 0
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class ApplicationError(ApiError):
    """The server answered but reported failure (success=false or a non-2xx status)."""


class UnauthorizedError(ApplicationError):
    pass


class ForbiddenError(ApplicationError):
    pass


class NotFoundError(ApplicationError):
    pass


class ConflictError(ApplicationError):
    pass


class ServerError(ApplicationError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class MalformedResponseError(ApiError):
    """2xx response whose body does not match the expected envelope."""


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str
    row_index: int | None = None


class ValidationError(ValueError):
    """Client-side rejection; raised before any request is built."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    @classmethod
    def single(cls, field: str, reason: str) -> "ValidationError":
        return cls([ValidationIssue(field=field, reason=reason)])

    @property
    def field_errors(self) -> dict[str, str]:
        return {issue.field: issue.reason for issue in self.issues}

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        issue = self.issues[0]
        location = f"row {issue.row_index} " if issue.row_index is not None else ""
        return f"{location}{issue.field}: {issue.reason}"


class DuplicateSubmissionError(ValidationError):
    """The same mutation is already in flight."""
