"""RabbitMQ connection management using FastStream.

The relay has nothing useful to do without a broker, so connecting is an
unbounded loop: every failed attempt is logged, followed by a fixed backoff,
and the caller only ever observes latency, never failure.

FastStream connects through aio-pika's robust connection, which also
re-establishes the channel after a later broker outage. Publishes that fail
during such an outage surface to the listener's restart loop.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
import logging

from faststream.rabbit import RabbitBroker

from notify_relay.core.settings._sanitizers import redact_url
from notify_relay.infra.metrics.tracking import (
    track_broker_connect_failure,
    track_connection_state,
)
from notify_relay.utils.retry import Backoff, FixedBackoff

logger = logging.getLogger(__name__)

BrokerFactory = Callable[[str], RabbitBroker]


class ConnectionState(str, Enum):
    """Connection states shared by the broker manager and the listener.

    Attributes:
        DISCONNECTED: No connection is held.
        CONNECTING: An attempt is in progress.
        CONNECTED: Connection is established and usable.
        ERROR: The last attempt or session failed; a backoff follows.
    """

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


def create_broker(uri: str) -> RabbitBroker:
    """Build an unconnected FastStream broker for ``uri``.

    With publisher confirms ``publish`` resolves to the broker's confirm
    frame instead of returning as soon as the frame is written.
    """
    return RabbitBroker(uri, publisher_confirms=True, logger=logging.getLogger("faststream"))


class BrokerConnectionManager:
    """Owns the relay's broker connection.

    Example:
        manager = BrokerConnectionManager(settings.amqp_uri, backoff=FixedBackoff(5.0))
        broker = await manager.acquire_connection()  # blocks until connected
    """

    def __init__(
        self,
        uri: str,
        *,
        backoff: Backoff | None = None,
        broker_factory: BrokerFactory = create_broker,
    ) -> None:
        self.uri = uri
        self._backoff = backoff or FixedBackoff(5.0)
        self._broker_factory = broker_factory
        self._broker: RabbitBroker | None = None
        self._state = ConnectionState.DISCONNECTED
        self.attempts = 0

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def broker(self) -> RabbitBroker | None:
        """The connected broker, or None before acquire_connection() returns."""
        return self._broker

    def _set_state(self, state: ConnectionState) -> None:
        self._state = state
        track_connection_state("broker", state, ConnectionState)

    async def acquire_connection(self) -> RabbitBroker:
        """Connect to the broker, retrying forever with the fixed backoff.

        Returns:
            A connected RabbitBroker usable for declarations and publishing.
        """
        if self._broker is not None and self._state is ConnectionState.CONNECTED:
            return self._broker

        failures = 0
        while True:
            self.attempts += 1
            self._set_state(ConnectionState.CONNECTING)
            broker = self._broker_factory(self.uri)
            try:
                await broker.connect()
            except Exception as e:
                failures += 1
                self._set_state(ConnectionState.ERROR)
                track_broker_connect_failure()
                logger.error(
                    f"RabbitMQ connect error: {e}. Retrying in {self._backoff.interval}s",
                    extra={
                        "url": redact_url(self.uri),
                        "attempt": self.attempts,
                        "error": str(e),
                    },
                )
                await self._discard(broker)
                self._set_state(ConnectionState.DISCONNECTED)
                await self._backoff.wait(failures)
                continue

            self._broker = broker
            self._set_state(ConnectionState.CONNECTED)
            logger.info(
                "Connected to RabbitMQ",
                extra={"url": redact_url(self.uri), "attempt": self.attempts},
            )
            return broker

    async def close(self) -> None:
        """Close the held connection, if any."""
        if self._broker is None:
            return
        logger.info("Closing RabbitMQ connection")
        try:
            await self._broker.close()
        finally:
            self._broker = None
            self._set_state(ConnectionState.DISCONNECTED)

    @staticmethod
    async def _discard(broker: RabbitBroker) -> None:
        try:
            await broker.close()
        except Exception as e:
            logger.debug("Error closing failed broker connection", extra={"error": str(e)})
