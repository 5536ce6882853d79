"""Orders republishing endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from notify_relay.core.schemas import ProblemDetails
from notify_relay.features.orders.dependencies import get_orders_service
from notify_relay.features.orders.schemas import OrdersPublishResponse
from notify_relay.features.orders.service import OrdersService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "/{address}/publish",
    response_model=OrdersPublishResponse,
    responses={
        404: {"model": ProblemDetails, "description": "No open orders for the address"},
        500: {"model": ProblemDetails, "description": "Publishing to the broker failed"},
        502: {"model": ProblemDetails, "description": "Upstream order source failed"},
    },
    summary="Publish open orders of an address",
    description="Fetch the open-order list upstream and publish the orders of one address "
    "to its queue as a single persistent JSON message.",
)
async def publish_orders(
    address: Annotated[str, Path(min_length=1, max_length=200)],
    service: Annotated[OrdersService, Depends(get_orders_service)],
) -> OrdersPublishResponse:
    """Publish the open orders of ``address``.

    Args:
        address: Address to match against each order, case-insensitively.
        service: Orders service built from the app's shared clients.
    """
    return await service.publish_for_address(address)
