"""HTTP tests for the orders and health endpoints.

The app runs in-process through httpx's ASGI transport; the upstream client
and the broker are replaced through FastAPI dependency overrides.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from notify_relay.app.main import create_app
from notify_relay.core.settings import get_orders_settings
from notify_relay.core.settings.orders import OrdersSettings
from notify_relay.features.orders.dependencies import get_broker, get_orders_client
from notify_relay.infra.external import OrdersSourceError

ORDERS = [
    {"id": 1, "address": "0xAbC", "side": "buy"},
    {"id": 2, "address": "0xdef", "side": "sell"},
    {"id": 3, "address": "0xabc", "side": "sell"},
    "not-an-order",
]


class _OrdersClientStub:
    def __init__(self, orders=None, error: Exception | None = None) -> None:
        self.fetch_orders = AsyncMock(return_value=orders, side_effect=error)


@pytest.fixture
def orders_client() -> _OrdersClientStub:
    return _OrdersClientStub(ORDERS)


@pytest.fixture
def app(orders_client, broker):
    application = create_app()
    application.dependency_overrides[get_orders_client] = lambda: orders_client
    application.dependency_overrides[get_broker] = lambda: broker
    application.dependency_overrides[get_orders_settings] = lambda: OrdersSettings(
        _env_file=None, queue_prefix="orders"
    )
    return application


@pytest_asyncio.fixture
async def http(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.integration
class TestPublishOrders:
    """POST /api/v1/orders/{address}/publish"""

    @pytest.mark.asyncio
    async def test_publishes_matching_orders(self, http, broker):
        """Test matches are published as one persistent JSON array to the address queue."""
        response = await http.post("/api/v1/orders/0xABC/publish")

        assert response.status_code == 200
        assert response.json() == {"address": "0xABC", "queue": "orders.0xabc", "published": 2}

        declared = broker.declare_queue.await_args.args[0]
        assert declared.name == "orders.0xabc"
        assert declared.durable is True

        call = broker.publish.await_args
        assert json.loads(call.args[0]) == [ORDERS[0], ORDERS[2]]
        assert call.kwargs["queue"] == "orders.0xabc"
        assert call.kwargs["persist"] is True
        assert call.kwargs["content_type"] == "application/json"

    @pytest.mark.asyncio
    async def test_no_match_is_404_problem(self, http, broker):
        """Test an address without orders answers 404 Problem Details and publishes nothing."""
        response = await http.post("/api/v1/orders/0x999/publish")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"
        body = response.json()
        assert body["type"] == "orders-not-found"
        assert body["title"] == "Not Found"
        assert body["address"] == "0x999"
        assert body["instance"] == "/api/v1/orders/0x999/publish"
        broker.publish.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("refused"),
            OrdersSourceError("expected a JSON array of orders, got dict"),
        ],
    )
    async def test_upstream_failure_is_502(self, http, orders_client, error):
        """Test upstream errors answer 502."""
        orders_client.fetch_orders.side_effect = error

        response = await http.post("/api/v1/orders/0xabc/publish")

        assert response.status_code == 502
        assert response.json()["type"] == "orders-upstream-error"

    @pytest.mark.asyncio
    async def test_publish_failure_is_500(self, http, broker):
        """Test a broker failure answers 500 naming the queue."""
        broker.publish.side_effect = ConnectionResetError("channel closed")

        response = await http.post("/api/v1/orders/0xdef/publish")

        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "orders-publish-failed"
        assert body["queue"] == "orders.0xdef"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500(self, http, orders_client):
        """Test unhandled errors are rendered without internals."""
        orders_client.fetch_orders.side_effect = KeyError("secret-internal-detail")

        response = await http.post("/api/v1/orders/0xabc/publish")

        assert response.status_code == 500
        assert response.json()["type"] == "internal-server-error"
        assert "secret-internal-detail" not in response.text


@pytest.mark.integration
class TestHealth:
    """Liveness and readiness probes."""

    @pytest.mark.asyncio
    async def test_live(self, http):
        """Test liveness always answers 200."""
        response = await http.get("/health/live")

        assert response.status_code == 200
        assert response.json()["alive"] is True

    @pytest.mark.asyncio
    async def test_ready_when_broker_answers(self, http):
        """Test readiness is 200 while the broker ping succeeds."""
        response = await http.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"] == {"rabbitmq": True}

    @pytest.mark.asyncio
    async def test_not_ready_when_ping_fails(self, http, broker):
        """Test readiness is 503 when the broker cannot be pinged."""
        broker.ping.side_effect = ConnectionError("closed")

        response = await http.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["ready"] is False
