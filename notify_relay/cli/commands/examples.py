"""hello-queue example commands."""

from __future__ import annotations

import logging

import click
from faststream.rabbit import RabbitBroker

from notify_relay.cli.utils import async_command, info, success
from notify_relay.core.settings import get_example_settings
from notify_relay.features.examples.hello import HELLO_MESSAGE, receive_hello, send_hello
from notify_relay.features.relay.shutdown import ShutdownCoordinator

logger = logging.getLogger(__name__)


@click.group(name="examples")
def examples() -> None:
    """Point-to-point send/receive examples."""


@examples.command()
@click.option("--message", "-m", default=HELLO_MESSAGE, show_default=True, help="Message body")
@click.option("--queue", default=None, help="Queue name (default: EXAMPLE_QUEUE)")
@async_command
async def send(message: str, queue: str | None) -> None:
    """Publish one message to the example queue."""
    settings = get_example_settings()
    queue = queue or settings.queue
    async with RabbitBroker(settings.amqp_uri, logger=logging.getLogger("faststream")) as broker:
        await send_hello(broker, queue, message)
    success(f"Sent to {queue}: {message}")


@examples.command()
@click.option("--queue", default=None, help="Queue name (default: EXAMPLE_QUEUE)")
@async_command
async def receive(queue: str | None) -> None:
    """Consume the example queue with manual acks until interrupted."""
    settings = get_example_settings()
    queue = queue or settings.queue
    info(f"Consuming {queue}, press Ctrl+C to stop")

    coordinator = ShutdownCoordinator()
    coordinator.install_signal_handlers()
    try:
        await coordinator.run(receive_hello(settings.amqp_uri, queue, settings.consumer_tag))
    finally:
        coordinator.remove_signal_handlers()
