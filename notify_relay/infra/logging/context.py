"""Per-task logging context.

The relay tags its log lines with the channel being listened on and the
topic, exchange and routing key of the event in flight. Those values live
in a ``ContextVar`` so each asyncio task sees only its own, and a filter
copies them onto every record.
"""

from __future__ import annotations

from contextvars import ContextVar
import logging
from types import MappingProxyType
from typing import Any

_EMPTY: MappingProxyType[str, Any] = MappingProxyType({})
_fields: ContextVar[MappingProxyType[str, Any]] = ContextVar("relay_log_fields", default=_EMPTY)


def set_log_context(**fields: Any) -> None:
    """Add or replace fields for the rest of the current task."""
    _fields.set(MappingProxyType({**_fields.get(), **fields}))


def remove_from_log_context(*keys: str) -> None:
    current = _fields.get()
    if any(key in current for key in keys):
        _fields.set(MappingProxyType({k: v for k, v in current.items() if k not in keys}))


def clear_log_context() -> None:
    _fields.set(_EMPTY)


def get_log_context() -> dict[str, Any]:
    return dict(_fields.get())


class ContextInjectingFilter(logging.Filter):
    """Copy the task's context fields onto records that lack them.

    Values passed with ``extra=`` win over context fields of the same name.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _fields.get().items():
            record.__dict__.setdefault(key, value)
        return True
