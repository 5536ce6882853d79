"""Message broker infrastructure.

RabbitMQ integration using FastStream:

- Connection: unbounded fixed-backoff connect loop with state tracking
- Exchanges: durable direct exchange definitions and fatal-on-conflict provisioning
- Publisher: persistent publishes that wait for publisher confirms
"""

from __future__ import annotations

from notify_relay.infra.messaging.connection import (
    BrokerConnectionManager,
    ConnectionState,
    create_broker,
)
from notify_relay.infra.messaging.exchanges import (
    direct_exchange,
    ensure_exchange,
    ensure_exchanges,
)
from notify_relay.infra.messaging.publisher import publish

__all__ = [
    "BrokerConnectionManager",
    "ConnectionState",
    "create_broker",
    "direct_exchange",
    "ensure_exchange",
    "ensure_exchanges",
    "publish",
]
