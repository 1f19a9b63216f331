from __future__ import annotations

import asyncio
from datetime import date
from urllib.parse import parse_qs, urlparse

import requests
import responses

from erp_admin_app.collections import PRODUCTS, SALES
from erp_admin_app.config import AppConfig
from erp_admin_app.table.controller import TableController
from erp_admin_app.table.query_state import QueryState
from erp_admin_app.table.result_cache import FetchState
from erp_admin_sdk.clients import ProductsClient, SalesClient
from erp_admin_sdk.config import ClientConfig
from erp_admin_sdk.http_client import HttpClient
from erp_admin_sdk.tracing import TraceContext

from conftest import API_BASE_URL, envelope, make_products, page_body


def _controller() -> TableController:
    http = HttpClient(config=ClientConfig(env_name="test", api_base_url=API_BASE_URL), trace=TraceContext())
    return TableController(PRODUCTS, ProductsClient(http=http, access_token="t"), config=AppConfig())


@responses.activate
def test_envelope_failure_keeps_previous_page() -> None:
    responses.add(responses.GET, f"{API_BASE_URL}/products", json=envelope(page_body(make_products(10), total_elements=25)))
    responses.add(responses.GET, f"{API_BASE_URL}/products", json=envelope(None, success=False, message="Not found"))
    controller = _controller()

    async def scenario():
        await controller.refresh()
        return await controller.next_page()

    status = asyncio.run(scenario())
    assert status.state is FetchState.ERROR
    assert status.message == "Not found"
    assert controller.page_result.page_index == 0
    assert len(controller.page_result.items) == 10
    second = parse_qs(urlparse(responses.calls[1].request.url).query)
    assert second["page"] == ["1"]
    assert second["sortBy"] == ["name"]


@responses.activate
def test_transport_failure_is_reported_without_retry() -> None:
    responses.add(responses.GET, f"{API_BASE_URL}/products", body=requests.ConnectionError("connection refused"))
    controller = _controller()
    status = asyncio.run(controller.refresh())
    assert status.state is FetchState.ERROR
    assert status.message == "connection refused"
    assert status.error_code == "TRANSPORT_ERROR"
    assert controller.page_result is None
    assert controller.render()["view_state"]["status"] == "fatal_error"
    assert len(responses.calls) == 1


@responses.activate
def test_malformed_page_is_an_error() -> None:
    responses.add(responses.GET, f"{API_BASE_URL}/products", json=envelope({"content": make_products(3)}))
    status = asyncio.run(_controller().refresh())
    assert status.state is FetchState.ERROR
    assert status.error_code == "MALFORMED_RESPONSE"


@responses.activate
def test_server_search_sends_no_sort_params() -> None:
    responses.add(responses.GET, f"{API_BASE_URL}/products", json=envelope(page_body(make_products(10), total_elements=25)))
    responses.add(responses.GET, f"{API_BASE_URL}/products/search", json=envelope(page_body(make_products(2))))
    http = HttpClient(config=ClientConfig(env_name="test", api_base_url=API_BASE_URL), trace=TraceContext())
    controller = TableController(PRODUCTS, ProductsClient(http=http), config=AppConfig(client_filter_enabled=False))

    async def scenario():
        await controller.refresh()
        return await controller.set_filter_text("drill")

    status = asyncio.run(scenario())
    assert status.state is FetchState.SUCCESS
    params = parse_qs(urlparse(responses.calls[1].request.url).query)
    assert params == {"page": ["0"], "size": ["10"], "query": ["drill"]}
    markers = {column["id"]: column["sorted"] for column in controller.render()["table"]["columns"]}
    assert set(markers.values()) == {None}


@responses.activate
def test_date_range_requests_fixed_sale_date_order() -> None:
    responses.add(responses.GET, f"{API_BASE_URL}/sales/date-range", json=envelope(page_body([])))
    http = HttpClient(config=ClientConfig(env_name="test", api_base_url=API_BASE_URL), trace=TraceContext())
    query = QueryState.initial(SALES).set_sort("customerName")
    controller = TableController(SALES, SalesClient(http=http), config=AppConfig(), query=query)
    asyncio.run(controller.set_extra_filters({"startDate": date(2026, 1, 1), "endDate": date(2026, 1, 31)}))
    params = parse_qs(urlparse(responses.calls[0].request.url).query)
    assert params["sortBy"] == ["saleDate"]
    assert params["sortDir"] == ["desc"]
    assert params["startDate"] == ["2026-01-01"]
