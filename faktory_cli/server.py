# faktory_cli/server.py
"""
Lifecycle shell of the job server.

Holds the construction options and the stop/reload hooks used by signal
handling. Protocol handling and job storage live in their own subsystems.
"""

import asyncio
import logging

from faktory_cli.config.schema import ServerOptions
from faktory_cli.errors import ConstructionError

logger = logging.getLogger(__name__)


def _check_binding(binding: str) -> None:
    _host, sep, port = binding.rpartition(":")
    if not sep or not port.isdigit() or not 0 < int(port) < 65536:
        raise ConstructionError(f"Invalid binding {binding!r}, expected host:port")


class Server:
    """
    Running server handle.

    options.global_config is replaced wholesale on reload; readers should
    take one reference and work with it.
    """

    def __init__(self, options: ServerOptions) -> None:
        _check_binding(options.binding)
        _check_binding(options.web_binding)
        self.options = options
        self.reload_count = 0
        self._stopper: asyncio.Event | None = None
        logger.info(f"Created server for {options.binding} ({options.environment})")

    def stopper(self) -> asyncio.Event:
        """Event set when the server must shut down."""
        if self._stopper is None:
            self._stopper = asyncio.Event()
        return self._stopper

    @property
    def stopping(self) -> bool:
        return self._stopper is not None and self._stopper.is_set()

    def reload(self) -> None:
        """Apply options.global_config after it has been replaced."""
        self.reload_count += 1
        logger.info(f"Reloaded configuration ({len(self.options.global_config)} section(s))")

    async def run(self) -> None:
        """Serve until the stopper is set."""
        logger.info(f"Listening at {self.options.binding}, web UI at {self.options.web_binding}")
        await self.stopper().wait()
        logger.info("Server stopped")
