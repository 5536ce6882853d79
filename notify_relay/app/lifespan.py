"""Application lifespan management.

Startup order:
1. Logging
2. Upstream orders client
3. RabbitMQ broker (a failed connect is logged, not fatal; publishes then
   answer 500 and /health/ready reports 503)

Shutdown runs in reverse order.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from faststream.rabbit import RabbitBroker
from fastapi import FastAPI

from notify_relay.core.settings import get_logging_settings, get_orders_settings
from notify_relay.core.settings._sanitizers import redact_url
from notify_relay.infra.external.orders_client import OrdersAPIClient
from notify_relay.infra.logging.config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging(get_logging_settings())
    settings = get_orders_settings()

    app.state.orders_client = OrdersAPIClient(settings.source_url, timeout=settings.request_timeout)
    app.state.broker = RabbitBroker(settings.amqp_uri, logger=logging.getLogger("faststream"))
    try:
        await app.state.broker.connect()
        logger.info("Connected to RabbitMQ", extra={"url": redact_url(settings.amqp_uri)})
    except Exception as e:
        logger.warning(
            f"RabbitMQ unavailable at startup: {e}",
            extra={"url": redact_url(settings.amqp_uri), "error": str(e)},
        )

    logger.info("Orders service started", extra={"source_url": settings.source_url})
    try:
        yield
    finally:
        await app.state.broker.close()
        await app.state.orders_client.close()
        logger.info("Orders service stopped")
