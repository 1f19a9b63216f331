from __future__ import annotations

import asyncio
import threading

import pytest

from erp_admin_app.collections import PRODUCTS, SALES
from erp_admin_app.table.fetch_orchestrator import FetchOrchestrator
from erp_admin_app.table.mutation_coordinator import DeleteIntent, MutationCoordinator
from erp_admin_app.table.query_state import QueryState
from erp_admin_app.table.result_cache import FetchState
from erp_admin_sdk.exceptions import ConflictError, DuplicateSubmissionError, TransportError, ValidationError

from conftest import FakeCollectionClient, make_products

VALID_PRODUCT = {"sku": "NEW-1", "name": "Zeta drill", "price": 49.9, "stockQuantity": 4, "category": "tools"}


def _coordinator(client: FakeCollectionClient, query: QueryState, collection=PRODUCTS):
    orchestrator = FetchOrchestrator(collection, client)
    return orchestrator, MutationCoordinator(collection, client, orchestrator, lambda: query)


def test_create_refreshes_with_current_query(fake_products: FakeCollectionClient) -> None:
    query = QueryState(page_index=1)
    orchestrator, coordinator = _coordinator(fake_products, query)
    result = asyncio.run(coordinator.create(VALID_PRODUCT))
    assert result.entity["sku"] == "NEW-1"
    assert result.refresh_status.state is FetchState.SUCCESS
    _, params, _, _ = fake_products.list_calls()[-1]
    assert params["page"] == 1
    assert orchestrator.cache.result.total_elements == 26


def test_invalid_payload_never_reaches_client(fake_products: FakeCollectionClient) -> None:
    _, coordinator = _coordinator(fake_products, QueryState())
    with pytest.raises(ValidationError) as exc:
        asyncio.run(coordinator.create({**VALID_PRODUCT, "price": -1}))
    assert "price" in exc.value.field_errors
    assert fake_products.calls == []


def test_failure_performs_no_refresh_and_leaves_cache_untouched(fake_products: FakeCollectionClient) -> None:
    query = QueryState()
    orchestrator, coordinator = _coordinator(fake_products, query)

    async def scenario():
        await orchestrator.refresh(query)
        before = orchestrator.cache.current()
        fake_products.mutation_error = ConflictError(code="CONFLICT", message="SKU already exists", status_code=409)
        with pytest.raises(ConflictError) as exc:
            await coordinator.update(3, VALID_PRODUCT)
        return before, exc.value

    before, error = asyncio.run(scenario())
    assert error.message == "SKU already exists"
    assert orchestrator.cache.current() == before
    assert len(fake_products.list_calls()) == 1


def test_transport_failure_propagates(fake_products: FakeCollectionClient) -> None:
    fake_products.mutation_error = TransportError(code="TRANSPORT_ERROR", message="timed out")
    _, coordinator = _coordinator(fake_products, QueryState())
    with pytest.raises(TransportError):
        asyncio.run(coordinator.delete(DeleteIntent(4).confirm()))
    assert fake_products.list_calls() == []


def test_unconfirmed_delete_is_rejected(fake_products: FakeCollectionClient) -> None:
    _, coordinator = _coordinator(fake_products, QueryState())
    with pytest.raises(ValidationError):
        asyncio.run(coordinator.delete(DeleteIntent(4)))
    assert fake_products.calls == []


def test_delete_emptying_last_page_is_surfaced_as_is() -> None:
    client = FakeCollectionClient(rows=make_products(21))
    query = QueryState(page_index=2)
    orchestrator, coordinator = _coordinator(client, query)

    async def scenario():
        await orchestrator.refresh(query)
        only_row = orchestrator.cache.result.items[0]
        return await coordinator.delete(DeleteIntent(only_row["id"]).confirm())

    result = asyncio.run(scenario())
    page = orchestrator.cache.result
    assert result.entity is None
    assert client.list_calls()[-1][1]["page"] == 2
    assert page.page_index == 2
    assert page.items == ()
    assert page.total_pages == 2
    assert page.is_last


def test_double_submission_is_rejected(fake_products: FakeCollectionClient) -> None:
    gate = threading.Event()
    fake_products.mutation_gate = gate
    _, coordinator = _coordinator(fake_products, QueryState())

    async def scenario():
        first = asyncio.create_task(coordinator.create(VALID_PRODUCT))
        await asyncio.sleep(0)
        assert coordinator.in_flight("create")
        with pytest.raises(DuplicateSubmissionError):
            await coordinator.create(VALID_PRODUCT)
        gate.set()
        return await first

    result = asyncio.run(scenario())
    assert result.refresh_status.state is FetchState.SUCCESS
    assert not coordinator.in_flight("create")
    assert len([call for call in fake_products.calls if call[0] == "create"]) == 1


def test_row_action_posts_named_action() -> None:
    client = FakeCollectionClient(rows=[{"id": 5, "saleNumber": "S-5", "saleDate": "2026-01-01", "status": "COMPLETED"}])
    _, coordinator = _coordinator(client, QueryState.initial(SALES), collection=SALES)
    result = asyncio.run(coordinator.action(5, "cancel"))
    assert client.mutation_calls() == [("action", 5, "cancel")]
    assert result.entity["status"] == "CANCELLED"


def test_collection_rejects_mutations_the_server_lacks() -> None:
    client = FakeCollectionClient(rows=[{"id": 5, "saleNumber": "S-5", "status": "COMPLETED"}])
    _, coordinator = _coordinator(client, QueryState.initial(SALES), collection=SALES)
    with pytest.raises(ValidationError):
        asyncio.run(coordinator.update(5, {"customerName": "Ana"}))
    with pytest.raises(ValidationError):
        asyncio.run(coordinator.delete(DeleteIntent(5).confirm()))
    with pytest.raises(ValidationError):
        asyncio.run(coordinator.action(5, "refund"))
    assert client.calls == []
