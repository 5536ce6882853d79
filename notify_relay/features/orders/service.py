"""Fetch open orders upstream and republish one address's slice.

The whole order list is fetched on every request, filtered to the orders
whose address field equals the requested address ignoring case, and the
matches are published as a single persistent JSON array to the address's
queue. The queue is declared durable before publishing so the message is
kept even when no consumer is attached yet.
"""

from __future__ import annotations

from collections.abc import Iterable
import json
import logging
from typing import TYPE_CHECKING, Any

import httpx
from faststream.rabbit import RabbitQueue

from notify_relay.core.exceptions import (
    NotFoundException,
    PublishFailedException,
    UpstreamException,
)
from notify_relay.features.orders.schemas import OrdersPublishResponse
from notify_relay.infra.external.orders_client import OrdersSourceError
from notify_relay.infra.metrics.tracking import track_orders_request
from notify_relay.utils.retry import RetryError

if TYPE_CHECKING:
    from faststream.rabbit import RabbitBroker

    from notify_relay.core.settings.orders import OrdersSettings
    from notify_relay.infra.external.orders_client import OrdersAPIClient

logger = logging.getLogger(__name__)


def filter_orders(orders: Iterable[Any], address: str, field: str = "address") -> list[dict[str, Any]]:
    """Return the orders whose ``field`` equals ``address`` ignoring case.

    Entries that are not objects, or whose field is missing or not a
    string, never match.
    """
    wanted = address.lower()
    return [
        order
        for order in orders
        if isinstance(order, dict)
        and isinstance(order.get(field), str)
        and order[field].lower() == wanted
    ]


class OrdersService:
    def __init__(
        self,
        client: OrdersAPIClient,
        broker: RabbitBroker,
        settings: OrdersSettings,
    ) -> None:
        self.client = client
        self.broker = broker
        self.settings = settings

    async def publish_for_address(self, address: str) -> OrdersPublishResponse:
        """Publish the open orders of ``address`` to its queue.

        Raises:
            UpstreamException: The order list could not be fetched (502).
            NotFoundException: No order matches the address (404).
            PublishFailedException: The broker did not take the message (500).
        """
        try:
            orders = await self.client.fetch_orders()
        except (httpx.HTTPError, RetryError, OrdersSourceError, ValueError) as e:
            track_orders_request("upstream_error")
            logger.warning("Order source fetch failed", extra={"error": str(e)})
            raise UpstreamException(
                detail=f"Could not fetch orders from upstream: {e}",
                type="orders-upstream-error",
            ) from e

        matches = filter_orders(orders, address, self.settings.address_field)
        if not matches:
            track_orders_request("not_found")
            raise NotFoundException(
                detail=f"No open orders for address {address}",
                type="orders-not-found",
                extra={"address": address},
            )

        queue = self.settings.queue_for(address)
        body = json.dumps(matches).encode("utf-8")
        try:
            await self.broker.declare_queue(RabbitQueue(queue, durable=True))
            await self.broker.publish(
                body,
                queue=queue,
                persist=True,
                content_type="application/json",
            )
        except Exception as e:
            track_orders_request("publish_error")
            logger.error(
                f"Publishing orders to {queue} failed: {e}",
                extra={"queue": queue, "error": str(e)},
            )
            raise PublishFailedException(
                detail=f"Could not publish orders to queue {queue}",
                type="orders-publish-failed",
                extra={"queue": queue},
            ) from e

        track_orders_request("published")
        logger.info(
            f"Published {len(matches)} orders to {queue}",
            extra={"queue": queue, "count": len(matches)},
        )
        return OrdersPublishResponse(address=address, queue=queue, published=len(matches))
