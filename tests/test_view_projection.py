from __future__ import annotations

import pytest

from erp_admin_app.collections import PRODUCTS, SALES
from erp_admin_app.table.columns import EMPTY_VALUE, normalize_value, render_money
from erp_admin_app.table.query_state import QueryState
from erp_admin_app.table.result_cache import PageResult
from erp_admin_app.table.view_projection import ViewProjection
from erp_admin_sdk.exceptions import ValidationError

from conftest import make_products


def _page(rows, *, page_index=0, total_elements=25, total_pages=3) -> PageResult:
    return PageResult(
        items=tuple(rows),
        page_index=page_index,
        page_size=10,
        total_elements=total_elements,
        total_pages=total_pages,
        is_first=page_index == 0,
        is_last=page_index == total_pages - 1,
    )


def test_rows_keep_server_order_and_summary_counts() -> None:
    rows = list(reversed(make_products(10)))
    payload = ViewProjection(PRODUCTS).project(_page(rows), QueryState())
    assert [row["id"] for row in payload["rows"]] == [row["id"] for row in rows]
    assert payload["summary"]["page_text"] == "10 of 10 rows on this page"
    assert payload["summary"]["total_text"] == "25 total rows"


def test_client_filter_narrows_current_page_only() -> None:
    rows = make_products(10)
    projection = ViewProjection(PRODUCTS)
    payload = projection.project(_page(rows), QueryState(filter_text="sku-00"))
    assert [row["id"] for row in payload["rows"]] == list(range(1, 10))
    assert payload["summary"]["shown"] == 9
    assert payload["summary"]["on_page"] == 10
    assert payload["summary"]["total"] == 25


def test_client_filter_can_be_disabled() -> None:
    payload = ViewProjection(PRODUCTS, client_filter_enabled=False).project(_page(make_products(3)), QueryState(filter_text="zzz"))
    assert len(payload["rows"]) == 3


def test_column_visibility_respects_hideable_flag() -> None:
    projection = ViewProjection(PRODUCTS)
    projection.set_column_visible("category", False)
    ids = [column["id"] for column in projection.project(None, QueryState())["columns"]]
    assert "category" not in ids
    with pytest.raises(ValidationError):
        projection.set_column_visible("sku", False)
    with pytest.raises(ValidationError):
        projection.set_column_visible("missing", True)
    assert projection.toggle_column("category") is True


def test_sorted_marker_follows_default_sort() -> None:
    columns = ViewProjection(PRODUCTS).project(None, QueryState())["columns"]
    markers = {column["id"]: column["sorted"] for column in columns}
    assert markers["name"] == "asc"
    assert markers["sku"] is None


def test_date_range_route_marks_its_fixed_order() -> None:
    query = QueryState.initial(SALES).set_sort("customerName")
    query = query.set_extra_filters({"startDate": "2026-01-01", "endDate": "2026-01-31"})
    columns = ViewProjection(SALES).project(None, query)["columns"]
    markers = {column["id"]: column["sorted"] for column in columns}
    assert markers["saleDate"] == "desc"
    assert markers["customerName"] is None
    assert not any(column["sortable"] for column in columns)


def test_selection_flags_rows() -> None:
    projection = ViewProjection(PRODUCTS)
    projection.toggle_selection(2)
    payload = projection.project(_page(make_products(3)), QueryState())
    assert [row["selected"] for row in payload["rows"]] == [False, True, False]
    projection.clear_selection()
    assert projection.selected == set()


def test_retain_selection_drops_rows_no_longer_on_page() -> None:
    projection = ViewProjection(PRODUCTS)
    projection.toggle_selection(1)
    projection.toggle_selection(3)
    projection.retain_selection(make_products(3)[1:])
    assert projection.selected == {3}


def test_no_result_yet_renders_disabled_pagination() -> None:
    payload = ViewProjection(PRODUCTS, page_size_options=(10, 20)).project(None, QueryState())
    assert payload["rows"] == []
    assert payload["pagination"]["previous_enabled"] is False
    assert payload["pagination"]["next_enabled"] is False
    assert payload["pagination"]["page_size_options"] == [10, 20]


def test_cells_use_column_renderers() -> None:
    row = {"id": 1, "sku": " ", "name": "Drill", "price": 1234.5, "stockQuantity": 0, "isActive": False}
    payload = ViewProjection(PRODUCTS).project(_page([row], total_elements=1, total_pages=1), QueryState())
    cells = payload["rows"][0]["cells"]
    assert cells["sku"] == EMPTY_VALUE
    assert cells["price"] == "1,234.50"
    assert cells["stockQuantity"] == "0 (out of stock)"
    assert cells["isActive"] == "INACTIVE"
    assert cells["category"] == EMPTY_VALUE


def test_normalize_value_variants() -> None:
    assert normalize_value(None) == EMPTY_VALUE
    assert normalize_value(True) == "Yes"
    assert normalize_value("  x ") == "x"
    assert render_money(None, {}) == EMPTY_VALUE
