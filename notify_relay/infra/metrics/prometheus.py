"""Prometheus metrics for the relay and the orders service."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge

# Dedicated registry so tests and embedded apps never collide with the
# process-global default registry.
REGISTRY = CollectorRegistry()

# Relay metrics
notifications_received_total = Counter(
    "relay_notifications_received_total",
    "Notifications received from the database channel",
    ["channel"],
    registry=REGISTRY,
)

events_published_total = Counter(
    "relay_events_published_total",
    "Events confirmed by the broker",
    ["exchange", "topic"],
    registry=REGISTRY,
)

events_rejected_total = Counter(
    "relay_events_rejected_total",
    "Events dropped during classification",
    ["reason"],
    registry=REGISTRY,
)

broker_connect_failures_total = Counter(
    "relay_broker_connect_failures_total",
    "Failed broker connection attempts",
    registry=REGISTRY,
)

listener_restarts_total = Counter(
    "relay_listener_restarts_total",
    "Listener sessions ended by an error and restarted",
    ["channel"],
    registry=REGISTRY,
)

connection_state = Gauge(
    "relay_connection_state",
    "1 when the labelled component is in the labelled state, else 0",
    ["component", "state"],
    registry=REGISTRY,
)

# Orders service metrics
orders_published_total = Counter(
    "orders_published_total",
    "Per-address order batches published",
    registry=REGISTRY,
)

orders_requests_total = Counter(
    "orders_requests_total",
    "Orders publish requests by outcome",
    ["outcome"],
    registry=REGISTRY,
)
