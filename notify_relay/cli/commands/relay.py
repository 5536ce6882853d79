"""Relay commands."""

from __future__ import annotations

import logging
import sys

import click
from pydantic import ValidationError

from notify_relay.cli.utils import error, header, key_value, run_async, success
from notify_relay.core.exceptions import ConfigurationError, RelayError
from notify_relay.core.settings import get_relay_settings
from notify_relay.core.settings.relay import RelaySettings
from notify_relay.features.relay.service import RelayService
from notify_relay.features.relay.shutdown import ShutdownCoordinator
from notify_relay.infra.metrics.tracking import start_metrics_server

logger = logging.getLogger(__name__)


def load_relay_settings() -> RelaySettings:
    """Load relay settings, converting validation failures to ConfigurationError."""
    try:
        return get_relay_settings()
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) if err["loc"] else "<root>" for err in e.errors())
        msg = f"Invalid or missing relay configuration: {fields}"
        raise ConfigurationError(msg) from e


async def run_relay(settings: RelaySettings, coordinator: ShutdownCoordinator | None = None) -> int:
    """Run the relay until a shutdown request; return the process exit code."""
    service = RelayService(settings)
    coordinator = coordinator or ShutdownCoordinator()
    coordinator.install_signal_handlers()
    try:
        await coordinator.run(service.run())
    except RelayError as e:
        logger.error(f"Relay failed: {e}")
        error(str(e))
        return 1
    finally:
        coordinator.remove_signal_handlers()

    logger.info("Relay stopped")
    return 0


@click.group(name="relay")
def relay() -> None:
    """PostgreSQL NOTIFY to RabbitMQ relay."""


@relay.command()
def run() -> None:
    """Run the relay until SIGINT or SIGTERM."""
    try:
        settings = load_relay_settings()
    except ConfigurationError as e:
        logger.error(str(e))
        error(str(e))
        sys.exit(1)

    if settings.metrics_port is not None:
        start_metrics_server(settings.metrics_port)

    logger.info(
        "Starting relay",
        extra={
            "channel": settings.listen_channel,
            "exchanges": list(settings.exchange_names),
            "broker": settings.safe_amqp_uri(),
            "database": settings.safe_database_url(),
        },
    )
    sys.exit(run_async(run_relay(settings)))


@relay.command("check-config")
def check_config() -> None:
    """Validate relay configuration without connecting anywhere."""
    try:
        settings = load_relay_settings()
    except ConfigurationError as e:
        error(str(e))
        sys.exit(1)

    header("Relay configuration")
    key_value("RABBITMQ_URI", settings.safe_amqp_uri())
    key_value("RABBITMQ_POSITION_EXCHANGE", settings.position_exchange)
    key_value("RABBITMQ_ORDERS_EXCHANGE", settings.orders_exchange)
    key_value("DATABASE_URL", settings.safe_database_url())
    key_value("PG_LISTEN_CHANNEL", settings.listen_channel)
    key_value("RELAY_RECONNECT_INTERVAL", f"{settings.reconnect_interval}s")
    key_value("RELAY_METRICS_PORT", settings.metrics_port or "disabled")
    success("Configuration is valid")
