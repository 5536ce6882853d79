"""CLI utilities for running async operations and formatting output."""

from notify_relay.cli.utils.async_runner import async_command, run_async
from notify_relay.cli.utils.formatters import (
    error,
    header,
    info,
    key_value,
    success,
)

__all__ = [
    "async_command",
    "error",
    "header",
    "info",
    "key_value",
    "run_async",
    "success",
]
