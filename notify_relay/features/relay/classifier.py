"""Classification of raw notification payloads.

A payload is routed when it is a JSON object carrying a known string
``topic`` and a string ``address``. Checks run in a fixed order and the
first failing one decides the rejection reason:

1. the payload parses as JSON (``malformed-payload``),
2. it is an object with a string ``topic`` (``missing-topic``),
3. the topic is one of :class:`Topic` (``unknown-topic``),
4. it has a string ``address`` (``missing-address``).

The routed body is the UTF-8 encoding of the delivered payload, byte for
byte. Parsing only decides where it goes; other fields are never inspected
or rewritten.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import json
from typing import Any

from notify_relay.features.relay.topics import ExchangeTargets, Topic


class RejectionReason(StrEnum):
    MALFORMED_PAYLOAD = "malformed-payload"
    MISSING_TOPIC = "missing-topic"
    UNKNOWN_TOPIC = "unknown-topic"
    MISSING_ADDRESS = "missing-address"


@dataclass(frozen=True, slots=True)
class Routed:
    """A payload ready for publishing."""

    exchange: str
    routing_key: str
    body: bytes
    topic: Topic


@dataclass(frozen=True, slots=True)
class Rejected:
    """A payload that will be dropped, with the reason why."""

    reason: RejectionReason
    detail: str


Classification = Routed | Rejected


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are Python extensions, not JSON.
    msg = f"{name} is not valid JSON"
    raise ValueError(msg)


class EventRouter:
    """Maps notification payloads to exchange and routing key.

    Example:
        router = EventRouter(ExchangeTargets(position="positions", orders="orders"))
        result = router.classify('{"topic": "full_position", "address": "0xabc"}')
        # Routed(exchange="positions", routing_key="0xabc", ...)
    """

    def __init__(self, targets: ExchangeTargets) -> None:
        self.targets = targets

    def classify(self, raw: str | bytes) -> Classification:
        try:
            if isinstance(raw, str):
                text, body = raw, raw.encode("utf-8")
            else:
                body = bytes(raw)
                text = body.decode("utf-8")
            document: Any = json.loads(text, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            # UnicodeError and JSONDecodeError are both ValueErrors
            return Rejected(RejectionReason.MALFORMED_PAYLOAD, f"{type(e).__name__}: {e}")

        if not isinstance(document, dict):
            return Rejected(
                RejectionReason.MISSING_TOPIC,
                f"payload is a JSON {type(document).__name__}, not an object",
            )

        topic_value = document.get("topic")
        if not isinstance(topic_value, str):
            return Rejected(RejectionReason.MISSING_TOPIC, "no string 'topic' field")

        try:
            topic = Topic(topic_value)
        except ValueError:
            return Rejected(RejectionReason.UNKNOWN_TOPIC, f"unknown topic {topic_value!r}")

        address = document.get("address")
        if not isinstance(address, str):
            return Rejected(RejectionReason.MISSING_ADDRESS, "no string 'address' field")

        return Routed(
            exchange=self.targets.for_topic(topic),
            routing_key=address,
            body=body,
            topic=topic,
        )
