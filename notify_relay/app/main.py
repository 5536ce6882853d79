"""FastAPI application factory for the orders republishing service."""

from __future__ import annotations

from fastapi import FastAPI

from notify_relay import __version__
from notify_relay.app.exception_handlers import configure_exception_handlers
from notify_relay.app.lifespan import lifespan
from notify_relay.app.router import setup_routers


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="notify-relay orders",
        summary="Republish an address's open orders to its RabbitMQ queue",
        version=__version__,
        lifespan=lifespan,
    )

    # Must be registered before routes raise
    configure_exception_handlers(app)
    setup_routers(app)
    return app


# Application instance for uvicorn
app = create_app()
