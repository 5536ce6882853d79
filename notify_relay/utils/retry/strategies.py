"""Wait policies for the two kinds of retry in the relay.

``RetryStrategy`` drives bounded, request-scoped retries (an upstream HTTP
fetch gets a few tries and then gives up). ``FixedBackoff`` drives the
unbounded reconnect loops of the broker and listener connections.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
import random
from typing import Protocol

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class RetryStrategy:
    """Capped exponential delays for a fixed number of attempts."""

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 60.0
    multiplier: float = 2.0
    jitter: bool = True
    exceptions: tuple[type[Exception], ...] = (Exception,)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)

    def retryable(self, exc: Exception) -> bool:
        return isinstance(exc, self.exceptions)

    def delay_for(self, failed_attempts: int) -> float:
        delay = min(self.initial_delay * self.multiplier ** (failed_attempts - 1), self.max_delay)
        if self.jitter:
            # Full jitter keeps concurrent callers from retrying in lockstep.
            delay = random.uniform(0, delay)
        return delay

    def delays(self) -> Iterator[float]:
        """Yield the wait before each retry, ``max_attempts - 1`` values."""
        for failed in range(1, self.max_attempts):
            yield self.delay_for(failed)


class Backoff(Protocol):
    """Waits between attempts of an unbounded reconnect loop."""

    interval: float

    async def wait(self, attempt: int) -> float: ...


class FixedBackoff:
    """Constant delay between attempts, with no cap on the number of attempts.

    The sleep function is injectable so tests can drive many failed
    attempts without wall-clock delay:

        delays = []

        async def fake_sleep(seconds: float) -> None:
            delays.append(seconds)

        backoff = FixedBackoff(5.0, sleep=fake_sleep)
    """

    def __init__(self, interval: float = 5.0, sleep: Sleep | None = None) -> None:
        if interval < 0:
            msg = "interval must be non-negative"
            raise ValueError(msg)
        self.interval = interval
        self._sleep = sleep or asyncio.sleep

    async def wait(self, attempt: int) -> float:
        """Sleep for the fixed interval and return it.

        Args:
            attempt: 1-based number of the attempt that just failed. Unused
                by the fixed policy, kept for strategies that grow.
        """
        await self._sleep(self.interval)
        return self.interval
