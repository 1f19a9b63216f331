from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from erp_admin_sdk.models import PageData


class FetchState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class FetchStatus:
    state: FetchState
    message: str | None = None
    error_code: str | None = None
    trace_id: str | None = None

    @classmethod
    def idle(cls) -> "FetchStatus":
        return cls(FetchState.IDLE)

    @classmethod
    def loading(cls) -> "FetchStatus":
        return cls(FetchState.LOADING)

    @classmethod
    def success(cls, trace_id: str | None = None) -> "FetchStatus":
        return cls(FetchState.SUCCESS, trace_id=trace_id)

    @classmethod
    def error(cls, message: str, *, error_code: str | None = None, trace_id: str | None = None) -> "FetchStatus":
        return cls(FetchState.ERROR, message=message, error_code=error_code, trace_id=trace_id)

    @property
    def is_loading(self) -> bool:
        return self.state is FetchState.LOADING

    @property
    def is_error(self) -> bool:
        return self.state is FetchState.ERROR

    def render(self) -> dict[str, Any]:
        return {"state": self.state.value, "message": self.message, "error_code": self.error_code, "trace_id": self.trace_id}


@dataclass(frozen=True)
class PageResult:
    items: tuple[dict[str, Any], ...]
    page_index: int
    page_size: int
    total_elements: int
    total_pages: int
    is_first: bool
    is_last: bool

    @classmethod
    def from_page_data(cls, page: PageData) -> "PageResult":
        # A page past the end (e.g. emptied by a delete) still counts as last.
        return cls(
            items=tuple(page.content),
            page_index=page.page,
            page_size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            is_first=page.page == 0,
            is_last=page.total_pages == 0 or page.page >= page.total_pages - 1,
        )


class ResultCache:
    """Single slot: the last committed page plus the current fetch status."""

    def __init__(self) -> None:
        self._result: PageResult | None = None
        self._status = FetchStatus.idle()

    def current(self) -> tuple[PageResult | None, FetchStatus]:
        return self._result, self._status

    @property
    def result(self) -> PageResult | None:
        return self._result

    @property
    def status(self) -> FetchStatus:
        return self._status

    def mark_loading(self) -> None:
        self._status = FetchStatus.loading()

    def commit_success(self, result: PageResult, *, trace_id: str | None = None) -> None:
        self._result = result
        self._status = FetchStatus.success(trace_id)

    def commit_error(self, message: str, *, error_code: str | None = None, trace_id: str | None = None) -> None:
        self._status = FetchStatus.error(message, error_code=error_code, trace_id=trace_id)
