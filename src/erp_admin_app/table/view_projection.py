from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from erp_admin_sdk.exceptions import ValidationError

from .columns import CollectionSpec, ColumnDescriptor, Route, normalize_value
from .pagination import PaginationControls
from .query_state import QueryState
from .result_cache import PageResult


@dataclass
class ViewProjection:
    """Local presentation state layered over the fetched page.

    Nothing here talks to the server: client filtering narrows the rows of
    the current page only, and selection never survives a page change.
    """

    collection: CollectionSpec
    client_filter_enabled: bool = True
    page_size_options: tuple[int, ...] = ()
    hidden_columns: set[str] = field(default_factory=set)
    selected: set[Any] = field(default_factory=set)

    def visible_columns(self) -> list[ColumnDescriptor]:
        return [column for column in self.collection.columns if column.id not in self.hidden_columns]

    def set_column_visible(self, column_id: str, visible: bool) -> None:
        column = self.collection.column(column_id)
        if column is None:
            raise ValidationError.single("column", f"Unknown column: {column_id}")
        if visible:
            self.hidden_columns.discard(column_id)
            return
        if not column.hideable:
            raise ValidationError.single("column", f"Column {column_id} cannot be hidden")
        self.hidden_columns.add(column_id)

    def toggle_column(self, column_id: str) -> bool:
        visible = column_id in self.hidden_columns
        self.set_column_visible(column_id, visible)
        return visible

    def toggle_selection(self, row_id: Any) -> bool:
        if row_id in self.selected:
            self.selected.discard(row_id)
            return False
        self.selected.add(row_id)
        return True

    def clear_selection(self) -> None:
        self.selected.clear()

    def retain_selection(self, items: Sequence[Mapping[str, Any]]) -> None:
        present = {row.get(self.collection.id_field) for row in items}
        self.selected &= present

    def filter_rows(self, items: Sequence[Mapping[str, Any]], filter_text: str) -> list[Mapping[str, Any]]:
        needle = filter_text.strip().lower()
        if not self.client_filter_enabled or not needle:
            return list(items)
        fields = self.collection.filter_fields
        return [row for row in items if any(needle in str(row.get(name) or "").lower() for name in fields)]

    def project(self, result: PageResult | None, query: QueryState, route: Route | None = None) -> dict[str, Any]:
        route = route or self.collection.route_for(query)
        sort = self.collection.effective_sort(query, route)
        items = result.items if result else ()
        rows = self.filter_rows(items, query.filter_text)
        columns = self.visible_columns()
        id_field = self.collection.id_field
        total = result.total_elements if result else 0
        if result is not None:
            controls = PaginationControls.build(
                page_index=result.page_index,
                page_size=result.page_size,
                total_pages=result.total_pages,
                is_first=result.is_first,
                is_last=result.is_last,
                page_size_options=self.page_size_options,
            )
        else:
            controls = PaginationControls.build(
                page_index=query.page_index,
                page_size=query.page_size,
                total_pages=0,
                is_first=True,
                is_last=True,
                page_size_options=self.page_size_options,
            )
        return {
            "columns": [
                {
                    "id": column.id,
                    "label": column.label,
                    "sortable": column.sortable and route.sortable,
                    "hideable": column.hideable,
                    "sorted": sort[1] if sort and sort[0] == column.id else None,
                }
                for column in columns
            ],
            "rows": [
                {
                    "id": row.get(id_field),
                    "selected": row.get(id_field) in self.selected,
                    "cells": {column.id: column.display(row) for column in columns},
                }
                for row in rows
            ],
            "hidden_columns": sorted(self.hidden_columns),
            "selected": sorted((normalize_value(value) for value in self.selected)),
            "summary": {
                "shown": len(rows),
                "on_page": len(items),
                "total": total,
                "page_text": f"{len(rows)} of {len(items)} rows on this page",
                "total_text": f"{total} total rows",
            },
            "pagination": controls.render(),
        }
