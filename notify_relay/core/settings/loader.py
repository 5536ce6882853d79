"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the
process.

Usage:
    from notify_relay.core.settings import get_relay_settings

    settings = get_relay_settings()  # First call: loads and validates
    settings = get_relay_settings()  # Subsequent calls: cached instance

Testing:
    clear_all_caches() forces the next call to reload from the environment.
"""

from __future__ import annotations

from functools import lru_cache

from .examples import ExampleSettings
from .logs import LoggingSettings
from .orders import OrdersSettings
from .relay import RelaySettings


@lru_cache(maxsize=1)
def get_relay_settings() -> RelaySettings:
    """Get cached relay settings.

    Raises:
        pydantic.ValidationError: If any required variable is missing.
    """
    return RelaySettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_orders_settings() -> OrdersSettings:
    """Get cached orders service settings."""
    return OrdersSettings()


@lru_cache(maxsize=1)
def get_example_settings() -> ExampleSettings:
    return ExampleSettings()


def clear_all_caches() -> None:
    """Clear every cached settings instance."""
    get_relay_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_orders_settings.cache_clear()
    get_example_settings.cache_clear()
