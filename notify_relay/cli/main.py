"""Main CLI entry point for notify-relay."""

import click

from notify_relay import __version__
from notify_relay.cli.commands import examples, relay, server
from notify_relay.core.settings import get_logging_settings
from notify_relay.infra.logging.config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="notify-relay")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """notify-relay - PostgreSQL LISTEN/NOTIFY to RabbitMQ relay.

    \b
    Command Groups:
      relay     Run the relay or validate its configuration
      examples  hello-queue send/receive pair
      server    Orders HTTP service

    \b
    Quick Start:
      notify-relay relay check-config   # Validate environment
      notify-relay relay run            # Relay until SIGINT/SIGTERM
    """
    ctx.ensure_object(dict)
    setup_logging(get_logging_settings())


cli.add_command(relay.relay)
cli.add_command(examples.examples)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
