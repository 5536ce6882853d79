"""Client for the upstream open-orders endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from notify_relay.infra.external.base_client import BaseHTTPClient

logger = logging.getLogger(__name__)


class OrdersSourceError(Exception):
    """The upstream answered with something other than a JSON array."""


class OrdersAPIClient(BaseHTTPClient):
    """Fetches the full open-order list from ``ORDERS_SOURCE_URL``."""

    def __init__(
        self,
        source_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, headers={"Accept": "application/json"}, transport=transport)
        self.source_url = source_url

    async def fetch_orders(self) -> list[Any]:
        document = await self.get(self.source_url)
        if not isinstance(document, list):
            msg = f"expected a JSON array of orders, got {type(document).__name__}"
            raise OrdersSourceError(msg)
        logger.debug("Fetched orders", extra={"count": len(document)})
        return document
