"""FastAPI dependencies for the orders feature.

Long-lived clients are created by the application lifespan and stored on
``app.state``; these dependencies only look them up, so tests can replace
them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from faststream.rabbit import RabbitBroker
from fastapi import Depends, Request

from notify_relay.core.settings import get_orders_settings
from notify_relay.core.settings.orders import OrdersSettings
from notify_relay.features.orders.service import OrdersService
from notify_relay.infra.external.orders_client import OrdersAPIClient


def get_orders_client(request: Request) -> OrdersAPIClient:
    return request.app.state.orders_client


def get_broker(request: Request) -> RabbitBroker:
    return request.app.state.broker


def get_orders_service(
    client: Annotated[OrdersAPIClient, Depends(get_orders_client)],
    broker: Annotated[RabbitBroker, Depends(get_broker)],
    settings: Annotated[OrdersSettings, Depends(get_orders_settings)],
) -> OrdersService:
    return OrdersService(client, broker, settings)
