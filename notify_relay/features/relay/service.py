"""Relay pipeline: database notifications in, RabbitMQ events out.

Startup runs once, in order:

1. connect to RabbitMQ (retried without limit),
2. declare the position and orders exchanges (fatal on failure),
3. hand control to the notification listener.

Every notification then goes through :meth:`RelayService.handle`, which
either drops it with a logged reason or publishes it and waits for the
broker confirm. A publish failure is raised out of ``handle`` so the
listener restarts its session.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

from notify_relay.features.relay.classifier import Classification, EventRouter, Rejected
from notify_relay.features.relay.topics import ExchangeTargets
from notify_relay.infra.database.listener import (
    NotificationListener,
    PsycopgNotificationSession,
    SessionFactory,
)
from notify_relay.infra.logging.context import remove_from_log_context, set_log_context
from notify_relay.infra.messaging.connection import (
    BrokerConnectionManager,
    BrokerFactory,
    create_broker,
)
from notify_relay.infra.messaging.exchanges import ensure_exchanges
from notify_relay.infra.messaging.publisher import publish
from notify_relay.infra.metrics.tracking import track_published, track_rejected
from notify_relay.utils.retry import Backoff, FixedBackoff

if TYPE_CHECKING:
    from faststream.rabbit import RabbitBroker

    from notify_relay.core.settings.relay import RelaySettings

logger = logging.getLogger(__name__)


class RelayService:
    """Wires connection manager, router, publisher and listener together."""

    def __init__(
        self,
        settings: RelaySettings,
        *,
        backoff: Backoff | None = None,
        broker_factory: BrokerFactory = create_broker,
        session_factory: SessionFactory = PsycopgNotificationSession.connect,
    ) -> None:
        self.settings = settings
        backoff = backoff or FixedBackoff(settings.reconnect_interval)
        self.connections = BrokerConnectionManager(
            settings.amqp_uri,
            backoff=backoff,
            broker_factory=broker_factory,
        )
        self.listener = NotificationListener(
            settings.database_url,
            settings.listen_channel,
            backoff=backoff,
            session_factory=session_factory,
        )
        self.router = EventRouter(
            ExchangeTargets(
                position=settings.position_exchange,
                orders=settings.orders_exchange,
            )
        )
        self._broker: RabbitBroker | None = None

    async def start(self) -> RabbitBroker:
        """Connect to the broker and provision both exchanges.

        Raises:
            ExchangeProvisioningError: An exchange could not be declared.
        """
        broker = await self.connections.acquire_connection()
        await ensure_exchanges(broker, self.settings.exchange_names)
        self._broker = broker
        return broker

    async def handle(self, payload: str) -> Classification:
        """Route one notification payload, publishing it if it is routable."""
        if self._broker is None:
            msg = "RelayService.start() must complete before handling notifications"
            raise RuntimeError(msg)

        result = self.router.classify(payload)
        if isinstance(result, Rejected):
            track_rejected(result.reason)
            logger.warning(
                f"Dropping notification: {result.reason}",
                extra={"reason": str(result.reason), "detail": result.detail},
            )
            return result

        set_log_context(topic=str(result.topic), exchange=result.exchange)
        try:
            await publish(self._broker, result.exchange, result.routing_key, result.body)
            track_published(result.exchange, result.topic)
            logger.info(
                f"Published event to {result.exchange}",
                extra={"routing_key": result.routing_key, "bytes": len(result.body)},
            )
        finally:
            remove_from_log_context("topic", "exchange")
        return result

    async def run(self) -> NoReturn:
        """Start up, then relay notifications until cancelled."""
        await self.start()
        await self.listener.run(self.handle)
