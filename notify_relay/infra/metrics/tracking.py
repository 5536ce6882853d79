"""Helper functions for tracking relay metrics."""

from __future__ import annotations

import logging
from enum import Enum

from prometheus_client import start_http_server

from notify_relay.infra.metrics import prometheus

logger = logging.getLogger(__name__)


def track_notification(channel: str) -> None:
    prometheus.notifications_received_total.labels(channel=channel).inc()


def track_published(exchange: str, topic: str) -> None:
    prometheus.events_published_total.labels(exchange=exchange, topic=topic).inc()


def track_rejected(reason: str) -> None:
    prometheus.events_rejected_total.labels(reason=reason).inc()


def track_broker_connect_failure() -> None:
    prometheus.broker_connect_failures_total.inc()


def track_listener_restart(channel: str) -> None:
    prometheus.listener_restarts_total.labels(channel=channel).inc()


def track_connection_state(component: str, state: Enum, states: type[Enum]) -> None:
    """Set the one-hot state gauge for ``component``.

    Args:
        component: "broker" or "listener".
        state: The state just entered.
        states: The enum the state belongs to, used to zero the others.
    """
    for candidate in states:
        prometheus.connection_state.labels(
            component=component, state=candidate.value
        ).set(1 if candidate is state else 0)


def track_orders_request(outcome: str) -> None:
    prometheus.orders_requests_total.labels(outcome=outcome).inc()
    if outcome == "published":
        prometheus.orders_published_total.inc()


def start_metrics_server(port: int) -> None:
    """Serve the relay registry on ``port`` from a daemon thread."""
    start_http_server(port, registry=prometheus.REGISTRY)
    logger.info("Prometheus metrics exporter listening", extra={"port": port})
