from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStateStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    STALE_ERROR = "stale_error"
    FATAL_ERROR = "fatal_error"


_ICONS = {
    "idle": "none",
    "loading": "spinner",
    "empty": "inbox",
    "success": "check",
    "stale_error": "warning",
    "fatal_error": "error",
}


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    trace_id: str | None = None
    data_available: bool = False

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "trace_id": self.trace_id,
            "data_available": self.data_available,
            "icon": _ICONS[self.status.value],
        }


def resolve_state(
    *,
    started: bool,
    is_loading: bool,
    error: str | None,
    has_data: bool,
    has_rows: bool,
    trace_id: str | None = None,
) -> ViewState:
    """Collapse fetch facts into the single state a screen shows."""
    if not started:
        return ViewState(ViewStateStatus.IDLE, trace_id=trace_id)
    if is_loading:
        return ViewState(ViewStateStatus.LOADING, "Loading data...", trace_id=trace_id, data_available=has_data)
    if error and has_data:
        return ViewState(ViewStateStatus.STALE_ERROR, error, trace_id=trace_id, data_available=True)
    if error:
        return ViewState(ViewStateStatus.FATAL_ERROR, error, trace_id=trace_id)
    if not has_rows:
        return ViewState(ViewStateStatus.EMPTY, "No data found", trace_id=trace_id, data_available=has_data)
    return ViewState(ViewStateStatus.SUCCESS, "Ready", trace_id=trace_id, data_available=True)
