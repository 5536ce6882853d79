"""Point-to-point send/receive pair over the default exchange.

Both sides declare ``hello-queue`` with broker defaults (not durable, not
exclusive, not auto-deleted) and address it through the default exchange,
where the routing key is the queue name. The receiver acknowledges each
delivery explicitly after logging it.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import logging

import aio_pika
from aio_pika.abc import AbstractIncomingMessage
from faststream.rabbit import RabbitBroker, RabbitQueue

logger = logging.getLogger(__name__)

HELLO_MESSAGE = "Hello from Python!"


def hello_queue(name: str) -> RabbitQueue:
    return RabbitQueue(name, durable=False, auto_delete=False)


async def send_hello(broker: RabbitBroker, queue: str, message: str = HELLO_MESSAGE) -> None:
    """Declare ``queue`` and publish ``message`` to it once."""
    await broker.declare_queue(hello_queue(queue))
    logger.info(f"Declared queue {queue}")
    await broker.publish(message.encode("utf-8"), queue=queue)
    logger.info(f"Sent: {message}")


async def on_hello(message: AbstractIncomingMessage) -> None:
    """Log the delivery body and acknowledge it."""
    logger.info(
        f"Received: {message.body.decode('utf-8', errors='replace')!r}",
        extra={"delivery_tag": message.delivery_tag},
    )
    await message.ack()


async def receive_hello(
    uri: str,
    queue: str,
    consumer_tag: str,
    *,
    on_message: Callable[[AbstractIncomingMessage], Awaitable[None]] = on_hello,
) -> None:
    """Consume ``queue`` with manual acknowledgement until cancelled."""
    connection = await aio_pika.connect(uri)
    logger.info("Connected to RabbitMQ")
    try:
        channel = await connection.channel()
        declared = await channel.declare_queue(queue, durable=False, auto_delete=False)
        logger.info(f"Declared queue {queue}")
        logger.info("Waiting for messages...")
        async with declared.iterator(consumer_tag=consumer_tag) as deliveries:
            async for delivery in deliveries:
                await on_message(delivery)
    finally:
        await connection.close()
