# faktory_cli/background/lifecycle.py
"""
Signal-driven lifecycle control.

A single listener task pulls delivered signals off a queue and runs the
bound handler to completion before taking the next one, so reloads never
overlap each other or a shutdown.
"""

import asyncio
import logging
import signal
from enum import Enum
from types import MappingProxyType

from faktory_cli.background.signals import SignalBindingTable, shutdown
from faktory_cli.server import Server

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    """Lifecycle states of a running server."""

    RUNNING = "running"
    RELOADING = "reloading"
    TERMINATING = "terminating"


class LifecycleController:
    """
    Dispatches OS signals to handlers for one server.

    Manages:
        - Registration of every signal in the binding table with the loop
        - Serial handler dispatch from a single listener
        - Transition to TERMINATING once the server's stopper is set
    """

    def __init__(self, server: Server, table: SignalBindingTable) -> None:
        """
        Args:
            server: Live server handle passed to every handler
            table: Signal -> handler bindings; copied, read-only afterwards
        """
        self._server = server
        self._table = MappingProxyType(dict(table))
        self._queue: asyncio.Queue[signal.Signals] = asyncio.Queue()
        self._installed: list[signal.Signals] = []
        self.state = LifecycleState.RUNNING

    @property
    def signals(self) -> list[signal.Signals]:
        return list(self._table)

    def deliver(self, sig: signal.Signals) -> None:
        """Queue a signal for the listener. Safe to call from a loop callback."""
        self._queue.put_nowait(sig)

    def install(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Register every bound signal with the event loop."""
        loop = loop or asyncio.get_running_loop()
        for sig in self.signals:
            loop.add_signal_handler(sig, self.deliver, sig)
            self._installed.append(sig)
        logger.debug(f"Signal handlers registered: {[s.name for s in self._installed]}")

    def uninstall(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        loop = loop or asyncio.get_running_loop()
        for sig in self._installed:
            loop.remove_signal_handler(sig)
        self._installed.clear()

    def dispatch(self, sig: signal.Signals) -> None:
        """Run the handler bound to sig and update the lifecycle state."""
        handler = self._table.get(sig)
        if handler is None:
            logger.warning(f"No handler bound for {sig!r}")
            return

        if handler is shutdown:
            self.state = LifecycleState.TERMINATING
        else:
            self.state = LifecycleState.RELOADING
        try:
            handler(self._server)
        finally:
            if self._server.stopping:
                self.state = LifecycleState.TERMINATING
            else:
                self.state = LifecycleState.RUNNING

    async def run(self) -> None:
        """
        Listener loop.

        Returns once a handler has stopped the server; signals arriving
        after that are not processed.
        """
        while self.state is not LifecycleState.TERMINATING:
            sig = await self._queue.get()
            logger.debug(f"Received signal: {sig.name}")
            try:
                self.dispatch(sig)
            except Exception:
                logger.exception(f"Handler for {sig.name} failed")
        logger.info("Signal listener finished")
