"""PostgreSQL LISTEN/NOTIFY subscription with unbounded restart.

Each session runs three stages in order: connect, ``LISTEN <channel>``,
then receive notifications one at a time. The handler for a notification
is awaited before the next one is read, so delivery order per session is
preserved.

Any failure inside a session (connect, subscribe, receive, or the handler
itself) ends that session, is logged, and after a fixed backoff a new
session starts from the connect stage. There is no cap on the number of
restarts. Notifications issued while no session is active are lost; that
is inherent to LISTEN/NOTIFY.

Cancellation is never treated as a failure: it propagates out of
``run()`` so shutdown can abandon the listener at any point.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
import contextlib
import logging
from typing import NoReturn, Protocol, Self

import psycopg
from psycopg import sql

from notify_relay.core.settings._sanitizers import redact_url
from notify_relay.infra.logging.context import remove_from_log_context, set_log_context
from notify_relay.infra.messaging.connection import ConnectionState
from notify_relay.infra.metrics.tracking import (
    track_connection_state,
    track_listener_restart,
    track_notification,
)
from notify_relay.utils.retry import Backoff, FixedBackoff

logger = logging.getLogger(__name__)

NotificationHandler = Callable[[str], Awaitable[object]]


class NotificationSession(Protocol):
    """One database connection subscribed to notifications."""

    async def listen(self, channel: str) -> None: ...

    def notifies(self) -> AsyncIterator[str]: ...

    async def close(self) -> None: ...


SessionFactory = Callable[[str], Awaitable[NotificationSession]]


class PsycopgNotificationSession:
    """NotificationSession backed by a psycopg async connection.

    The connection runs in autocommit mode: a LISTEN issued inside an open
    transaction only takes effect at commit.
    """

    def __init__(self, conn: psycopg.AsyncConnection) -> None:
        self._conn = conn

    @classmethod
    async def connect(cls, database_url: str) -> Self:
        conn = await psycopg.AsyncConnection.connect(database_url, autocommit=True)
        return cls(conn)

    async def listen(self, channel: str) -> None:
        # Quote as an identifier so channel names with upper case or
        # punctuation are subscribed verbatim.
        await self._conn.execute(sql.SQL("LISTEN {}").format(sql.Identifier(channel)))

    async def notifies(self) -> AsyncIterator[str]:
        async for notify in self._conn.notifies():
            yield notify.payload

    async def close(self) -> None:
        await self._conn.close()


class NotificationListener:
    """Delivers notification payloads from one channel to a handler, forever.

    Example:
        listener = NotificationListener(settings.database_url, settings.listen_channel)
        await listener.run(relay.handle)  # returns only by cancellation
    """

    def __init__(
        self,
        database_url: str,
        channel: str,
        *,
        backoff: Backoff | None = None,
        session_factory: SessionFactory = PsycopgNotificationSession.connect,
    ) -> None:
        self.database_url = database_url
        self.channel = channel
        self._backoff = backoff or FixedBackoff(5.0)
        self._session_factory = session_factory
        self._state = ConnectionState.DISCONNECTED
        self.restarts = 0

    @property
    def state(self) -> ConnectionState:
        return self._state

    def _set_state(self, state: ConnectionState) -> None:
        self._state = state
        track_connection_state("listener", state, ConnectionState)

    async def run(self, handler: NotificationHandler) -> NoReturn:
        """Run listener sessions until cancelled.

        Args:
            handler: Awaited with each payload. An exception raised by the
                handler restarts the whole session like any other failure.
        """
        failures = 0
        while True:
            try:
                await self._run_session(handler)
                logger.warning(
                    "Notification stream ended, reconnecting",
                    extra={"channel": self.channel},
                )
            except Exception as e:
                logger.error(
                    f"Listener crashed: {e}. Restarting in {self._backoff.interval}s",
                    extra={
                        "channel": self.channel,
                        "url": redact_url(self.database_url),
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )
                self._set_state(ConnectionState.ERROR)
                track_listener_restart(self.channel)

            failures += 1
            self.restarts += 1
            self._set_state(ConnectionState.DISCONNECTED)
            await self._backoff.wait(failures)

    async def _run_session(self, handler: NotificationHandler) -> None:
        self._set_state(ConnectionState.CONNECTING)
        session = await self._session_factory(self.database_url)
        try:
            await session.listen(self.channel)
            self._set_state(ConnectionState.CONNECTED)
            set_log_context(channel=self.channel)
            logger.info(
                f"Listening for DB notifications on '{self.channel}'",
                extra={"channel": self.channel},
            )
            async with contextlib.aclosing(session.notifies()) as payloads:
                async for payload in payloads:
                    track_notification(self.channel)
                    await handler(payload)
        finally:
            remove_from_log_context("channel")
            await self._close_session(session)

    @staticmethod
    async def _close_session(session: NotificationSession) -> None:
        try:
            await session.close()
        except Exception as e:
            logger.debug("Error closing notification session", extra={"error": str(e)})
