"""Stop the relay on SIGINT or SIGTERM.

The relay coroutine and a wait on the shutdown event run as two tasks and
whichever finishes first wins. The other task is cancelled and not awaited.
There is no drain period: an event whose publish is in flight when the
signal arrives may never reach the broker. Connections are left to the
process exit to release.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine, Iterable
import logging
import signal
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownCoordinator:
    """Races a main coroutine against a shutdown request.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.install_signal_handlers()
        stopped_by_signal = await coordinator.run(service.run())
    """

    def __init__(
        self,
        stop_event: asyncio.Event | None = None,
        signals: Iterable[signal.Signals] = DEFAULT_SIGNALS,
    ) -> None:
        self._stop_event = stop_event or asyncio.Event()
        self._signals = tuple(signals)
        self._installed: list[signal.Signals] = []

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def request_shutdown(self, signum: int | None = None) -> None:
        if signum is not None:
            logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        self._stop_event.set()

    def install_signal_handlers(self) -> None:
        """Route the configured signals to :meth:`request_shutdown`.

        Must be called from inside the running event loop.
        """
        loop = asyncio.get_running_loop()
        for sig in self._signals:
            try:
                loop.add_signal_handler(sig, self.request_shutdown, sig)
            except NotImplementedError:
                # Windows event loops have no add_signal_handler
                signal.signal(
                    sig,
                    lambda signum, _frame: loop.call_soon_threadsafe(self.request_shutdown, signum),
                )
            self._installed.append(sig)

    def remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in self._installed:
            try:
                loop.remove_signal_handler(sig)
            except NotImplementedError:
                signal.signal(sig, signal.SIG_DFL)
        self._installed.clear()

    async def wait(self) -> None:
        """Block until shutdown is requested."""
        await self._stop_event.wait()

    async def run(self, main: Coroutine[Any, Any, Any]) -> bool:
        """Run ``main`` until it finishes or shutdown is requested.

        Returns:
            True when stopped by a shutdown request, False when ``main``
            returned on its own.

        Raises:
            Exception: Whatever ``main`` raised, if it finished first.
        """
        main_task = asyncio.create_task(main, name="relay-main")
        stop_task = asyncio.create_task(self.wait(), name="shutdown-signal")

        done, pending = await asyncio.wait(
            {main_task, stop_task},
            return_when=asyncio.FIRST_COMPLETED,
        )
        for task in pending:
            task.cancel()

        if main_task in done:
            # Raises if the relay failed
            main_task.result()
            return False

        logger.info("Shutdown requested, abandoning relay loop")
        return True
