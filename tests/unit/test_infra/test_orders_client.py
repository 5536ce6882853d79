"""Unit tests for the upstream orders client."""

from __future__ import annotations

import httpx
import pytest

from notify_relay.infra.external import OrdersAPIClient, OrdersSourceError
from notify_relay.utils.retry import RetryError

SOURCE = "https://orders.test/v1/open-orders"


def _client(handler) -> OrdersAPIClient:
    return OrdersAPIClient(SOURCE, transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestOrdersAPIClient:
    """Fetching the open-order list."""

    @pytest.mark.asyncio
    async def test_returns_order_list(self):
        """Test a JSON array is returned as-is."""
        orders = [{"address": "0xabc", "id": 1}, {"address": "0xdef", "id": 2}]
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=orders)

        async with _client(handler) as client:
            assert await client.fetch_orders() == orders

        assert str(seen[0].url) == SOURCE
        assert seen[0].headers["accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_non_list_document_is_rejected(self):
        """Test an object body raises OrdersSourceError."""
        async with _client(lambda request: httpx.Response(200, json={"orders": []})) as client:
            with pytest.raises(OrdersSourceError, match="JSON array"):
                await client.fetch_orders()

    @pytest.mark.asyncio
    async def test_error_status_is_not_retried(self):
        """Test a 5xx answer raises on the first response."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        async with _client(handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.fetch_orders()

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_invalid_json_raises_value_error(self):
        """Test a non-JSON body surfaces as ValueError."""
        async with _client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ValueError):
                await client.fetch_orders()

    @pytest.mark.asyncio
    async def test_transport_errors_are_retried(self):
        """Test connection failures get three attempts before giving up."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(RetryError):
                await client.fetch_orders()

        assert len(calls) == 3
