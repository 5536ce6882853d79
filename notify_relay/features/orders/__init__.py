"""Orders republishing HTTP feature."""

from notify_relay.features.orders.router import router

__all__ = ["router"]
