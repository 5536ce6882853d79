"""Bridge between synchronous click callbacks and coroutines."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Drive ``coro`` on a new event loop that is closed afterwards."""
    with asyncio.Runner() as runner:
        return runner.run(coro)


def async_command(func: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Let an ``async def`` serve as a click command callback.

    Stack it under ``@click.command()`` and the option decorators.
    """

    @wraps(func)
    def invoke(*args: Any, **kwargs: Any) -> T:
        return run_async(func(*args, **kwargs))

    return invoke
