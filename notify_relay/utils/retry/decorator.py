from __future__ import annotations

import asyncio
from functools import wraps
import logging
import time
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from notify_relay.utils.retry.exceptions import RetryError, RetryStatistics
from notify_relay.utils.retry.strategies import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from notify_relay.utils.retry.strategies import Sleep

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def retry(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    multiplier: float = 2.0,
    jitter: bool = True,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    sleep: Sleep | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Give an async callable a bounded number of attempts.

    Exceptions outside ``exceptions`` propagate from the first attempt.
    When every attempt fails the last error is wrapped in ``RetryError``.
    Only request-scoped calls use this; the connection loops retry forever
    with ``FixedBackoff`` instead.
    """
    strategy = RetryStrategy(
        max_attempts=max_attempts,
        initial_delay=initial_delay,
        max_delay=max_delay,
        multiplier=multiplier,
        jitter=jitter,
        exceptions=exceptions,
    )
    pause = sleep or asyncio.sleep

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        name = func.__qualname__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            stats = RetryStatistics(start_time=time.monotonic())
            waits = strategy.delays()

            while True:
                stats.attempts += 1
                try:
                    return await func(*args, **kwargs)
                except Exception as exc:
                    if not strategy.retryable(exc):
                        raise
                    stats.exceptions.append(type(exc).__name__)
                    delay = next(waits, None)
                    if delay is None:
                        stats.end_time = time.monotonic()
                        logger.error(
                            "%s failed after %d attempts",
                            name,
                            stats.attempts,
                            extra={"function": name, "attempts": stats.attempts, "error": str(exc)},
                        )
                        raise RetryError(exc, stats.attempts, stats) from exc

                logger.warning(
                    "%s failed (attempt %d/%d), retrying in %.2fs",
                    name,
                    stats.attempts,
                    max_attempts,
                    delay,
                    extra={"function": name, "attempt": stats.attempts, "delay": delay},
                )
                stats.total_delay += delay
                await pause(delay)

        return wrapper

    return decorator
