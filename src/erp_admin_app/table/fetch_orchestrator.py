from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from erp_admin_sdk.clients.collection_client import CollectionClient
from erp_admin_sdk.exceptions import GENERIC_TRANSPORT_MESSAGE, ApiError, TransportError
from erp_admin_sdk.models import PageData, PageQuery

from ..shared.log import get_logger, log_action
from ..shared.telemetry import TelemetryLogger, build_event
from ..shared.telemetry.logger import disabled_telemetry
from .columns import CollectionSpec, Route
from .query_state import QueryState
from .result_cache import FetchStatus, PageResult, ResultCache

logger = get_logger(__name__)

UNEXPECTED_ERROR_CODE = "UNEXPECTED_ERROR"
UNEXPECTED_MESSAGE = "Something went wrong while loading this page."


class StaleResultDiscarded(Exception):
    """A response arrived for a request that is no longer the latest one."""

    def __init__(self, seq: int, latest: int) -> None:
        super().__init__(f"result of request #{seq} discarded; latest is #{latest}")
        self.seq = seq
        self.latest = latest


@dataclass(frozen=True)
class FetchTicket:
    seq: int
    query: QueryState
    route: Route


class FetchOrchestrator:
    """Turns query states into page requests and commits the latest answer.

    Requests run on worker threads. Each carries a sequence number, and only
    the most recently issued one may write to the cache.
    """

    def __init__(
        self,
        collection: CollectionSpec,
        client: CollectionClient,
        cache: ResultCache | None = None,
        *,
        server_search: bool = False,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.collection = collection
        self.client = client
        self.cache = cache or ResultCache()
        self.server_search = server_search
        self.telemetry = telemetry or disabled_telemetry()
        self._issued = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def issued(self) -> int:
        return self._issued

    def clamp(self, query: QueryState) -> QueryState:
        result = self.cache.result
        if result is None:
            return query
        return query.clamped(result.total_pages)

    def route_for(self, query: QueryState) -> Route:
        return self.collection.route_for(query, server_search=self.server_search)

    def build_query(self, query: QueryState, route: Route | None = None) -> PageQuery:
        sort = self.collection.effective_sort(query, route or self.route_for(query))
        sort_by, sort_dir = sort if sort else (None, None)
        return PageQuery(page=query.page_index, size=query.page_size, sortBy=sort_by, sortDir=sort_dir)

    async def refresh(self, query: QueryState) -> FetchStatus:
        if self._closed:
            return self.cache.status
        ticket = self._issue(query)
        self.cache.mark_loading()
        started = time.monotonic()
        try:
            page = await asyncio.to_thread(self._fetch, ticket)
        except ApiError as exc:
            if self._discard_if_stale(ticket):
                return self.cache.status
            self._commit_error(ticket, exc, started)
            return self.cache.status
        except Exception:
            if not self._discard_if_stale(ticket):
                self.cache.commit_error(UNEXPECTED_MESSAGE, error_code=UNEXPECTED_ERROR_CODE)
                self._record(ticket, started, success=False, error_code=UNEXPECTED_ERROR_CODE)
            raise
        if self._discard_if_stale(ticket):
            return self.cache.status
        self.cache.commit_success(PageResult.from_page_data(page), trace_id=self._trace_id())
        self._record(ticket, started, success=True)
        return self.cache.status

    def close(self) -> None:
        self._closed = True

    def _issue(self, query: QueryState) -> FetchTicket:
        self._issued += 1
        return FetchTicket(seq=self._issued, query=query, route=self.route_for(query))

    def _fetch(self, ticket: FetchTicket) -> PageData:
        return self.client.list_page(
            self.build_query(ticket.query, ticket.route),
            path=ticket.route.path,
            extra_params=ticket.route.params,
        )

    def _ensure_current(self, ticket: FetchTicket) -> None:
        if self._closed or ticket.seq != self._issued:
            raise StaleResultDiscarded(ticket.seq, self._issued)

    def _discard_if_stale(self, ticket: FetchTicket) -> bool:
        try:
            self._ensure_current(ticket)
        except StaleResultDiscarded as exc:
            logger.debug("%s (%s closed=%s)", exc, self.collection.name, self._closed)
            return True
        return False

    def _commit_error(self, ticket: FetchTicket, exc: ApiError, started: float) -> None:
        message = exc.message.strip() if exc.message else ""
        if not message and isinstance(exc, TransportError):
            message = GENERIC_TRANSPORT_MESSAGE
        self.cache.commit_error(message or "Request failed", error_code=exc.code, trace_id=exc.trace_id)
        self._record(ticket, started, success=False, error_code=exc.code, trace_id=exc.trace_id)

    def _trace_id(self) -> str | None:
        trace = getattr(getattr(self.client, "http", None), "trace", None)
        return trace.trace_id if trace else None

    def _record(
        self,
        ticket: FetchTicket,
        started: float,
        *,
        success: bool,
        error_code: str | None = None,
        trace_id: str | None = None,
    ) -> None:
        duration_ms = int((time.monotonic() - started) * 1000)
        trace_id = trace_id or self._trace_id()
        log_action(
            logger,
            module=self.collection.name,
            action="list",
            trace_id=trace_id,
            outcome="success" if success else "error",
            level=logging.INFO if success else logging.WARNING,
            path=ticket.route.path,
            page=ticket.query.page_index,
            size=ticket.query.page_size,
            error_code=error_code,
        )
        self.telemetry.emit(
            build_event(
                category="api_call_result",
                name="api_call_result",
                module=self.collection.name,
                action=f"{self.collection.name}.list",
                trace_id=trace_id,
                duration_ms=duration_ms,
                success=success,
                error_code=error_code,
                context={"path": ticket.route.path, "page": ticket.query.page_index, "size": ticket.query.page_size},
            )
        )
