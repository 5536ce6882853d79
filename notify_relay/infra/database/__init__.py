"""Database infrastructure package.

PostgreSQL LISTEN/NOTIFY subscription used as the relay's event source:

- **NotificationListener**: unbounded connect/subscribe/receive loop
- **PsycopgNotificationSession**: psycopg async connection in autocommit mode

Example:
    from notify_relay.infra.database import NotificationListener

    listener = NotificationListener(database_url, "position_changes")
    await listener.run(handler)
"""

from __future__ import annotations

from notify_relay.infra.database.listener import (
    NotificationHandler,
    NotificationListener,
    NotificationSession,
    PsycopgNotificationSession,
)

__all__ = [
    "NotificationHandler",
    "NotificationListener",
    "NotificationSession",
    "PsycopgNotificationSession",
]
