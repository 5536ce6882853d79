"""CLI command modules."""

from notify_relay.cli.commands import examples, relay, server

__all__ = ["examples", "relay", "server"]
