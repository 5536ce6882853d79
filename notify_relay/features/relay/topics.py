"""Event topics and their target exchanges."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class Topic(StrEnum):
    """Topics the relay knows how to route."""

    FULL_POSITION = "full_position"
    POSITION_DELETION = "position_deletion"
    FULL_OPEN_ORDERS = "full_open_orders"
    OPEN_ORDERS_DELETION = "open_orders_deletion"


class ExchangeRole(StrEnum):
    """Which of the two configured exchanges receives a topic."""

    POSITION = "position"
    ORDERS = "orders"


TOPIC_EXCHANGE_ROLES: Mapping[Topic, ExchangeRole] = MappingProxyType(
    {
        Topic.FULL_POSITION: ExchangeRole.POSITION,
        Topic.POSITION_DELETION: ExchangeRole.POSITION,
        Topic.FULL_OPEN_ORDERS: ExchangeRole.ORDERS,
        Topic.OPEN_ORDERS_DELETION: ExchangeRole.ORDERS,
    }
)


@dataclass(frozen=True, slots=True)
class ExchangeTargets:
    """Concrete exchange names for each role, taken from configuration."""

    position: str
    orders: str

    def for_role(self, role: ExchangeRole) -> str:
        if role is ExchangeRole.POSITION:
            return self.position
        return self.orders

    def for_topic(self, topic: Topic) -> str:
        return self.for_role(TOPIC_EXCHANGE_ROLES[topic])
