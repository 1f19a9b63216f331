from __future__ import annotations

import math
import sys
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from erp_admin_sdk.exceptions import ApiError  # noqa: E402
from erp_admin_sdk.models import PageData, PageQuery  # noqa: E402
from erp_admin_sdk.models_products import Product  # noqa: E402
from erp_admin_sdk.models_sales import Sale  # noqa: E402

API_BASE_URL = "https://erp.example.test/api"


def envelope(data: Any, *, success: bool = True, message: str | None = None) -> dict[str, Any]:
    return {"success": success, "message": message, "data": data, "timestamp": "2026-01-05T10:00:00"}


def page_body(content: list[dict[str, Any]], *, page: int = 0, size: int = 10, total_elements: int | None = None) -> dict[str, Any]:
    total = len(content) if total_elements is None else total_elements
    total_pages = math.ceil(total / size) if total else 0
    return {
        "content": content,
        "page": page,
        "size": size,
        "totalElements": total,
        "totalPages": total_pages,
        "first": page == 0,
        "last": total_pages == 0 or page >= total_pages - 1,
    }


def make_products(count: int) -> list[dict[str, Any]]:
    categories = ("tools", "garden", "kitchen")
    return [
        {
            "id": index,
            "sku": f"SKU-{index:03d}",
            "name": f"Product {index:03d}",
            "price": 10 + index,
            "stockQuantity": (index * 7) % 40,
            "category": categories[index % 3],
            "isActive": True,
        }
        for index in range(1, count + 1)
    ]


@dataclass
class FakeCollectionClient:
    """In-memory stand-in for a collection client that pages and sorts like the server."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    calls: list[tuple[Any, ...]] = field(default_factory=list)
    list_gates: dict[int, threading.Event] = field(default_factory=dict)
    mutation_gate: threading.Event | None = None
    list_error: ApiError | None = None
    mutation_error: ApiError | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def list_calls(self) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == "list"]

    def mutation_calls(self) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] != "list"]

    def list_page(self, query: PageQuery, *, path: str | None = None, extra_params: dict[str, Any] | None = None) -> PageData:
        with self._lock:
            self.calls.append(("list", query.to_params(), path, dict(extra_params or {})))
        gate = self.list_gates.get(query.page)
        if gate is not None:
            gate.wait(5)
        if self.list_error is not None:
            raise self.list_error
        ordered = list(self.rows)
        if query.sort_by:
            ordered.sort(key=lambda row: row.get(query.sort_by), reverse=query.sort_dir == "desc")
        start = query.page * query.size
        body = page_body(ordered[start : start + query.size], page=query.page, size=query.size, total_elements=len(ordered))
        return PageData.model_validate(body)

    def _mutate(self, call: tuple[Any, ...]) -> None:
        with self._lock:
            self.calls.append(call)
        if self.mutation_gate is not None:
            self.mutation_gate.wait(5)
        if self.mutation_error is not None:
            raise self.mutation_error

    def create(self, body: dict[str, Any]) -> dict[str, Any]:
        self._mutate(("create", body))
        row = {"id": max((row["id"] for row in self.rows), default=0) + 1, **body}
        self.rows.append(row)
        return row

    def update(self, entity_id: int, body: dict[str, Any]) -> dict[str, Any]:
        self._mutate(("update", entity_id, body))
        for row in self.rows:
            if row["id"] == entity_id:
                row.update(body)
                return row
        return {}

    def delete(self, entity_id: int) -> None:
        self._mutate(("delete", entity_id))
        self.rows = [row for row in self.rows if row["id"] != entity_id]

    def action(self, entity_id: int, action: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        self._mutate(("action", entity_id, action))
        for row in self.rows:
            if row["id"] == entity_id and action == "cancel":
                row["status"] = "CANCELLED"
                return row
        return {}

    def get_product(self, product_id: int) -> Product:
        self._mutate(("get", product_id))
        for row in self.rows:
            if row["id"] == product_id:
                return Product.model_validate(row)
        raise LookupError(product_id)

    def get_sale(self, sale_id: int) -> Sale:
        self._mutate(("get", sale_id))
        for row in self.rows:
            if row["id"] == sale_id:
                return Sale.model_validate(row)
        raise LookupError(sale_id)


@pytest.fixture
def product_rows() -> list[dict[str, Any]]:
    return make_products(25)


@pytest.fixture
def fake_products(product_rows: list[dict[str, Any]]) -> FakeCollectionClient:
    return FakeCollectionClient(rows=product_rows)


@pytest.fixture
def sdk_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERP_API_BASE_URL", API_BASE_URL)
    for key in (
        "ERP_ENV",
        "ERP_API_BASE_URL_DEV",
        "ERP_TIMEOUT_SECONDS",
        "ERP_CONNECT_TIMEOUT_SECONDS",
        "ERP_READ_TIMEOUT_SECONDS",
        "ERP_MAX_CONNECTIONS",
        "ERP_VERIFY_SSL",
    ):
        monkeypatch.delenv(key, raising=False)
