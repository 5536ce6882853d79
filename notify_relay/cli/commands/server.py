"""Orders HTTP server command."""

import click
import uvicorn

from notify_relay.cli.utils import info
from notify_relay.core.settings import get_orders_settings


@click.group(name="server")
def server() -> None:
    """Orders HTTP service."""


@server.command()
@click.option("--host", default=None, help="Host to bind (default: ORDERS_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: ORDERS_PORT)")
@click.option("--reload/--no-reload", default=False, help="Enable auto-reload on code changes")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["critical", "error", "warning", "info", "debug"]),
    help="Uvicorn log level",
)
def run(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Run the orders HTTP service with uvicorn."""
    settings = get_orders_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Server will run at: http://{host}:{port}")
    uvicorn.run(
        "notify_relay.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )
