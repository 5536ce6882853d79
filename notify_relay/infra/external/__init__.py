"""Upstream HTTP clients.

Each client wraps one upstream endpoint on top of BaseHTTPClient.
"""

from notify_relay.infra.external.base_client import BaseHTTPClient
from notify_relay.infra.external.orders_client import OrdersAPIClient, OrdersSourceError

__all__ = [
    "BaseHTTPClient",
    "OrdersAPIClient",
    "OrdersSourceError",
]
