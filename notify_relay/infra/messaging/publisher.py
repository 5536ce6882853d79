"""Durable publishing with publisher confirms.

A publish succeeds only after two stages complete in order:

1. the broker channel accepts the ``basic.publish`` (``broker.publish``
   returns without raising), and
2. the publisher-confirm frame it returns is a ``Basic.Ack``.

Success therefore means "accepted by the broker", never "consumed". Failures
are raised to the caller unchanged; the relay lets them end the listener
session instead of retrying here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pamqp.commands import Basic

from notify_relay.core.exceptions import PublishNotConfirmedError
from notify_relay.infra.messaging.exchanges import direct_exchange

if TYPE_CHECKING:
    from faststream.rabbit import RabbitBroker

logger = logging.getLogger(__name__)

_NEGATIVE_CONFIRMS = (Basic.Nack, Basic.Reject)


async def publish(
    broker: RabbitBroker,
    exchange: str,
    routing_key: str,
    body: bytes,
) -> None:
    """Publish ``body`` as a persistent message and wait for the broker ack.

    Args:
        broker: Connected broker handed out by the connection manager.
        exchange: Target exchange name.
        routing_key: Routing key, used verbatim.
        body: Message body, sent unchanged.

    Raises:
        PublishNotConfirmedError: The broker nacked or rejected the message.
        Exception: Any channel or connection error from the publish call.
    """
    confirmation = await broker.publish(
        body,
        exchange=direct_exchange(exchange),
        routing_key=routing_key,
        persist=True,
        mandatory=False,
    )

    if isinstance(confirmation, _NEGATIVE_CONFIRMS):
        raise PublishNotConfirmedError(exchange, routing_key, type(confirmation).__name__)

    logger.debug(
        "Publish confirmed",
        extra={"exchange": exchange, "routing_key": routing_key, "bytes": len(body)},
    )
