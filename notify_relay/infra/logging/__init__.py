"""Structured logging for the relay and the HTTP service.

Call ``setup_logging()`` once at an entrypoint, then tag the current task:

    set_log_context(channel="position_changes")
    logger.info("Listening")  # record carries channel="position_changes"
"""

from notify_relay.infra.logging.config import configure_logging, setup_logging, shutdown
from notify_relay.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from notify_relay.infra.logging.formatters import ContextTextFormatter, JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "ContextTextFormatter",
    "JSONFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
