"""PostgreSQL notification to RabbitMQ relay."""

from __future__ import annotations

from notify_relay.features.relay.classifier import (
    Classification,
    EventRouter,
    Rejected,
    RejectionReason,
    Routed,
)
from notify_relay.features.relay.service import RelayService
from notify_relay.features.relay.shutdown import ShutdownCoordinator
from notify_relay.features.relay.topics import (
    TOPIC_EXCHANGE_ROLES,
    ExchangeRole,
    ExchangeTargets,
    Topic,
)

__all__ = [
    "TOPIC_EXCHANGE_ROLES",
    "Classification",
    "EventRouter",
    "ExchangeRole",
    "ExchangeTargets",
    "Rejected",
    "RejectionReason",
    "RelayService",
    "Routed",
    "ShutdownCoordinator",
    "Topic",
]
