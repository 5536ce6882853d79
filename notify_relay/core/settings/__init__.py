"""Modular Pydantic Settings v2 configuration.

Settings are split by concern (relay/logging/orders/examples), read from the
environment and an optional ``.env`` file, frozen after validation and
exposed through LRU-cached loaders:

    from notify_relay.core.settings import get_relay_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .examples import ExampleSettings
from .loader import (
    clear_all_caches,
    get_example_settings,
    get_logging_settings,
    get_orders_settings,
    get_relay_settings,
)
from .logs import LoggingSettings
from .orders import OrdersSettings
from .relay import RelaySettings

__all__ = [
    "ExampleSettings",
    "LoggingSettings",
    "OrdersSettings",
    "RelaySettings",
    "clear_all_caches",
    "get_example_settings",
    "get_logging_settings",
    "get_orders_settings",
    "get_relay_settings",
]
