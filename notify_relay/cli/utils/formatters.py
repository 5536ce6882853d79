"""Coloured terminal output shared by the CLI commands."""

from __future__ import annotations

import click

_STYLES = {
    "success": ("✓", "green"),
    "error": ("✗", "red"),
    "info": ("ℹ", "blue"),
}


def _emit(kind: str, message: str, *, err: bool = False) -> None:
    symbol, colour = _STYLES[kind]
    click.secho(f"{symbol} {message}", fg=colour, err=err)


def success(message: str) -> None:
    _emit("success", message)


def error(message: str) -> None:
    """Errors go to stderr so scripted callers can keep stdout clean."""
    _emit("error", message, err=True)


def info(message: str) -> None:
    _emit("info", message)


def header(title: str) -> None:
    click.echo()
    click.secho(title, fg="cyan", bold=True)


def key_value(key: str, value: object, width: int = 28) -> None:
    click.echo(f"  {key.ljust(width)} {value}")
