from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from .query_state import QueryState

EMPTY_VALUE = "—"

Accessor = Callable[[Mapping[str, Any]], Any]
Renderer = Callable[[Any, Mapping[str, Any]], str]


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        clean = value.strip()
        return clean or EMPTY_VALUE
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value)


def render_money(value: Any, _row: Mapping[str, Any]) -> str:
    if value is None or value == "":
        return EMPTY_VALUE
    try:
        return f"{Decimal(str(value)):,.2f}"
    except ArithmeticError:
        return normalize_value(value)


def render_timestamp(value: Any, _row: Mapping[str, Any]) -> str:
    if isinstance(value, str) and "T" in value:
        try:
            return normalize_value(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return normalize_value(value)
    return normalize_value(value)


@dataclass(frozen=True)
class ColumnDescriptor:
    id: str
    label: str
    accessor: Accessor | None = None
    sortable: bool = False
    hideable: bool = True
    render: Renderer | None = None

    def value(self, row: Mapping[str, Any]) -> Any:
        if self.accessor is not None:
            return self.accessor(row)
        return row.get(self.id)

    def display(self, row: Mapping[str, Any]) -> str:
        value = self.value(row)
        if self.render is not None:
            return self.render(value, row)
        return normalize_value(value)


@dataclass(frozen=True)
class Route:
    """Where one page request goes and whether the server honours ``sortBy``."""

    path: str
    params: dict[str, str] = field(default_factory=dict)
    sortable: bool = True
    fixed_sort: tuple[str, str] | None = None


@dataclass(frozen=True)
class CollectionSpec:
    """Declares one server collection for the generic table controller.

    ``date_range_sort`` is the order the date-range route always returns;
    ``search_sortable`` is false when the search route ignores sort params.
    ``mutations`` lists the writes the server exposes, row actions included.
    """

    name: str
    path: str
    columns: tuple[ColumnDescriptor, ...]
    default_sort_field: str
    default_sort_direction: str = "asc"
    filter_fields: tuple[str, ...] = ()
    id_field: str = "id"
    search_path: str | None = None
    search_param: str = "query"
    search_sortable: bool = True
    date_range_path: str | None = None
    date_range_sort: tuple[str, str] | None = None
    payload_model: type[BaseModel] | None = None
    mutations: frozenset[str] = frozenset({"create", "update", "delete"})

    @property
    def sortable_fields(self) -> tuple[str, ...]:
        return tuple(column.id for column in self.columns if column.sortable)

    def column(self, column_id: str) -> ColumnDescriptor | None:
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    def supports(self, mutation: str) -> bool:
        return mutation in self.mutations

    def sort_field_for(self, query: QueryState) -> str:
        return query.sort_field or self.default_sort_field

    def effective_sort(self, query: QueryState, route: Route) -> tuple[str, str] | None:
        if route.sortable:
            return self.sort_field_for(query), query.sort_direction.value
        return route.fixed_sort

    def route_for(self, query: QueryState, *, server_search: bool = False) -> Route:
        filters = query.filters
        if filters and self.date_range_path:
            return Route(
                path=self.date_range_path,
                params=filters,
                sortable=self.date_range_sort is None,
                fixed_sort=self.date_range_sort,
            )
        text = query.filter_text.strip()
        if server_search and text and self.search_path:
            return Route(
                path=self.search_path,
                params={**filters, self.search_param: text},
                sortable=self.search_sortable,
            )
        return Route(path=self.path, params=filters)
