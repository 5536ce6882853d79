"""Target exchange definitions and provisioning.

Both relay exchanges are durable, direct-routing and never auto-deleted;
together with per-message persistence this lets a routed event survive a
broker restart.

Broker outcomes of a declaration:
    - exchange missing: created.
    - exchange present with identical settings: no-op, the broker answers
      Declare-Ok.
    - present with another type or flags: reply code 406
      PRECONDITION_FAILED -> ExchangeConflictError.
    - user may not configure it: reply code 403 ACCESS_REFUSED ->
      ExchangeAccessError.
    - anything else -> ExchangeProvisioningError.

All of these errors are fatal at startup and never retried: they mean the
deployment is misconfigured.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import TYPE_CHECKING

from aiormq.exceptions import ChannelAccessRefused, ChannelPreconditionFailed
from faststream.rabbit import ExchangeType, RabbitExchange

from notify_relay.core.exceptions import (
    ExchangeAccessError,
    ExchangeConflictError,
    ExchangeProvisioningError,
)

if TYPE_CHECKING:
    from faststream.rabbit import RabbitBroker

logger = logging.getLogger(__name__)

PRECONDITION_FAILED = 406
ACCESS_REFUSED = 403


def direct_exchange(name: str) -> RabbitExchange:
    """Return the durable direct exchange definition for ``name``."""
    return RabbitExchange(
        name=name,
        type=ExchangeType.DIRECT,
        durable=True,
        auto_delete=False,
    )


async def ensure_exchange(broker: RabbitBroker, name: str) -> None:
    """Declare the durable direct exchange ``name``; idempotent.

    Raises:
        ExchangeConflictError: Exchange exists with incompatible settings.
        ExchangeAccessError: Broker refused access to the exchange.
        ExchangeProvisioningError: Any other declaration failure.
    """
    try:
        await broker.declare_exchange(direct_exchange(name))
    except ChannelPreconditionFailed as e:
        raise ExchangeConflictError(name, str(e), reply_code=PRECONDITION_FAILED) from e
    except ChannelAccessRefused as e:
        raise ExchangeAccessError(name, str(e), reply_code=ACCESS_REFUSED) from e
    except Exception as e:
        raise ExchangeProvisioningError(name, str(e)) from e

    logger.debug("Exchange declared", extra={"exchange": name})


async def ensure_exchanges(broker: RabbitBroker, names: Iterable[str]) -> None:
    """Declare every exchange in ``names`` in order, stopping at the first failure."""
    declared = []
    for name in names:
        await ensure_exchange(broker, name)
        declared.append(name)
    logger.info(
        f"RabbitMQ exchanges declared: {', '.join(declared)}",
        extra={"exchanges": declared},
    )
