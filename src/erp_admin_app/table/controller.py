from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from erp_admin_sdk.clients.collection_client import CollectionClient
from erp_admin_sdk.exceptions import ValidationError

from ..config import AppConfig
from ..shared.telemetry import TelemetryLogger
from ..shared.telemetry.logger import disabled_telemetry
from ..shared.view_state import resolve_state
from .columns import CollectionSpec
from .fetch_orchestrator import FetchOrchestrator
from .mutation_coordinator import MutationCoordinator
from .query_state import QueryState
from .result_cache import FetchState, FetchStatus, PageResult, ResultCache
from .view_projection import ViewProjection


class TableController:
    """One server-backed table: query state, fetches, mutations and projection."""

    def __init__(
        self,
        collection: CollectionSpec,
        client: CollectionClient,
        *,
        config: AppConfig | None = None,
        telemetry: TelemetryLogger | None = None,
        query: QueryState | None = None,
    ) -> None:
        self.collection = collection
        self.client = client
        self.config = config or AppConfig()
        self.telemetry = telemetry or disabled_telemetry()
        self.cache = ResultCache()
        self.orchestrator = FetchOrchestrator(
            collection,
            client,
            self.cache,
            server_search=self._server_search,
            telemetry=self.telemetry,
        )
        self.projection = ViewProjection(
            collection,
            client_filter_enabled=self.config.client_filter_enabled,
            page_size_options=self.config.page_size_options,
        )
        self._query = query or QueryState.initial(collection, page_size=self.config.default_page_size)
        self.mutate = MutationCoordinator(
            collection,
            client,
            self.orchestrator,
            lambda: self._query,
            telemetry=self.telemetry,
            on_refreshed=self._prune_selection,
        )

    @property
    def _server_search(self) -> bool:
        return not self.config.client_filter_enabled and self.collection.search_path is not None

    @property
    def query_state(self) -> QueryState:
        return self._query

    @property
    def page_result(self) -> PageResult | None:
        return self.cache.result

    @property
    def fetch_status(self) -> FetchStatus:
        return self.cache.status

    async def refresh(self) -> FetchStatus:
        return await self.orchestrator.refresh(self._query)

    async def set_sort(self, field: str) -> FetchStatus:
        if field not in self.collection.sortable_fields:
            raise ValidationError.single("sort_field", f"Column {field!r} is not sortable")
        route = self.orchestrator.route_for(self._query)
        if not route.sortable:
            raise ValidationError.single("sort_field", f"Results from {route.path} come in a fixed order")
        query = self._query
        if query.sort_field is None and field == self.collection.default_sort_field:
            query = replace(query, sort_field=field)
        return await self._transition(query.set_sort(field))

    async def set_filter_text(self, text: str | None) -> FetchStatus:
        return await self._transition(self._query.set_filter_text(text))

    async def set_page_index(self, page_index: int) -> FetchStatus:
        return await self._transition(self.orchestrator.clamp(self._query.set_page_index(page_index)))

    async def set_page_size(self, page_size: int) -> FetchStatus:
        if self.config.page_size_options and page_size not in self.config.page_size_options:
            raise ValidationError.single(
                "page_size", f"Page size must be one of {list(self.config.page_size_options)}"
            )
        return await self._transition(self._query.set_page_size(page_size))

    async def set_extra_filters(self, filters: Mapping[str, Any] | None) -> FetchStatus:
        return await self._transition(self._query.set_extra_filters(filters))

    async def next_page(self) -> FetchStatus:
        result = self.page_result
        if result is None or result.is_last:
            return self.fetch_status
        return await self.set_page_index(self._query.page_index + 1)

    async def previous_page(self) -> FetchStatus:
        if self._query.page_index == 0:
            return self.fetch_status
        return await self.set_page_index(self._query.page_index - 1)

    async def _transition(self, query: QueryState) -> FetchStatus:
        previous = self._query
        self._query = query
        if self._fetch_key(query) == self._fetch_key(previous) and self.orchestrator.issued > 0:
            return self.fetch_status
        self.projection.clear_selection()
        return await self.refresh()

    def _fetch_key(self, query: QueryState) -> tuple[Any, ...]:
        return query.fetch_key(include_filter_text=self._server_search)

    def _prune_selection(self, status: FetchStatus) -> None:
        result = self.cache.result
        if status.state is FetchState.SUCCESS and result is not None:
            self.projection.retain_selection(result.items)

    def render(self) -> dict[str, Any]:
        result, status = self.cache.current()
        table = self.projection.project(result, self._query, self.orchestrator.route_for(self._query))
        state = resolve_state(
            started=self.orchestrator.issued > 0,
            is_loading=status.is_loading,
            error=status.message if status.is_error else None,
            has_data=result is not None,
            has_rows=bool(table["rows"]),
            trace_id=status.trace_id,
        )
        return {
            "collection": self.collection.name,
            "query": self._query.to_dict(),
            "status": status.render(),
            "view_state": state.render(),
            "table": table,
        }

    def close(self) -> None:
        self.orchestrator.close()
