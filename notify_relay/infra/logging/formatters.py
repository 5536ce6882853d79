"""Record formatters: JSON Lines for collectors, key=value text for terminals."""

from __future__ import annotations

from datetime import UTC, datetime
import json
import logging
from typing import Any

from opentelemetry import trace

# Everything a bare LogRecord carries, so only ``extra=`` and context
# fields are treated as structured data.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the non-standard attributes attached to ``record``."""
    return {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}


def _utc_timestamp(created: float) -> str:
    stamp = datetime.fromtimestamp(created, tz=UTC).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Output keys come in a stable order: ``timestamp``, ``level``, ``logger``,
    ``message``, the static fields, the active trace ids, then any record
    fields (relay context such as ``channel`` or ``exchange``, and ``extra=``
    values). Tracebacks stay on the same line with escaped newlines.

        {"timestamp": "2025-01-01T00:00:00.123Z", "level": "INFO",
         "logger": "notify_relay.features.relay.service",
         "message": "Published event", "service": "notify-relay",
         "exchange": "positions", "routing_key": "0xABC"}
    """

    def __init__(self, static: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.static = dict(static or {})

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _utc_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self.static,
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            payload["trace_id"] = format(span_context.trace_id, "032x")
            payload["span_id"] = format(span_context.span_id, "016x")

        for key, value in record_fields(record).items():
            payload.setdefault(key, value)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_trace"] = self.formatStack(record.stack_info)

        # json.dumps escapes the newlines in tracebacks, keeping JSONL intact.
        return json.dumps(payload, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Plain text lines with record fields appended as ``key=value`` pairs."""

    default_format = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    default_datefmt = "%Y-%m-%d %H:%M:%S"

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt or self.default_format, datefmt or self.default_datefmt)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = record_fields(record)
        if not fields:
            return line
        head, sep, tail = line.partition("\n")
        pairs = " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
        return f"{head} [{pairs}]{sep}{tail}"
