from __future__ import annotations

from typing import Any, Mapping

from erp_admin_sdk.clients.products_client import PRODUCTS_PATH, PRODUCTS_SEARCH_PATH
from erp_admin_sdk.clients.sales_client import CANCEL_ACTION, SALES_DATE_RANGE_PATH, SALES_PATH
from erp_admin_sdk.models_products import ProductPayload
from erp_admin_sdk.models_sales import SalePayload

from .table.columns import EMPTY_VALUE, CollectionSpec, ColumnDescriptor, render_money, render_timestamp


def _stock_label(value: Any, row: Mapping[str, Any]) -> str:
    if value is None:
        return EMPTY_VALUE
    in_stock = row.get("inStock")
    if in_stock is None:
        in_stock = isinstance(value, int) and value > 0
    return f"{value} ({'in stock' if in_stock else 'out of stock'})"


def _item_count(row: Mapping[str, Any]) -> int:
    return len(row.get("items") or [])


def _status_label(value: Any, _row: Mapping[str, Any]) -> str:
    if isinstance(value, bool):
        return "ACTIVE" if value else "INACTIVE"
    return str(value).upper() if value else EMPTY_VALUE


PRODUCTS = CollectionSpec(
    name="products",
    path=PRODUCTS_PATH,
    columns=(
        ColumnDescriptor("sku", "SKU", sortable=True, hideable=False),
        ColumnDescriptor("name", "Name", sortable=True, hideable=False),
        ColumnDescriptor("category", "Category", sortable=True),
        ColumnDescriptor("price", "Price", render=render_money),
        ColumnDescriptor("stockQuantity", "Stock", sortable=True, render=_stock_label),
        ColumnDescriptor("isActive", "Status", render=_status_label),
        ColumnDescriptor("updatedAt", "Updated", render=render_timestamp),
    ),
    default_sort_field="name",
    default_sort_direction="asc",
    filter_fields=("name", "sku"),
    search_path=PRODUCTS_SEARCH_PATH,
    search_sortable=False,
    payload_model=ProductPayload,
)

SALES = CollectionSpec(
    name="sales",
    path=SALES_PATH,
    columns=(
        ColumnDescriptor("saleNumber", "Sale #", sortable=True, hideable=False),
        ColumnDescriptor("saleDate", "Date", sortable=True, render=render_timestamp),
        ColumnDescriptor("customerName", "Customer", sortable=True),
        ColumnDescriptor("userName", "Sales Person", sortable=True),
        ColumnDescriptor("itemCount", "Items", accessor=_item_count),
        ColumnDescriptor("totalAmount", "Total", render=render_money),
        ColumnDescriptor("paymentMethod", "Payment"),
        ColumnDescriptor("status", "Status", hideable=False, render=_status_label),
    ),
    default_sort_field="saleDate",
    default_sort_direction="desc",
    filter_fields=("customerName", "saleNumber"),
    date_range_path=SALES_DATE_RANGE_PATH,
    date_range_sort=("saleDate", "desc"),
    payload_model=SalePayload,
    mutations=frozenset({"create", CANCEL_ACTION}),
)
