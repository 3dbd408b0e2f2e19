# faktory_cli/__main__.py
"""
Entry point for the Faktory server process.

serve() starts the signal listener once the server exists and runs until a
shutdown signal stops the server.
"""

import asyncio
import logging
from collections.abc import Callable

from faktory_cli.background.lifecycle import LifecycleController
from faktory_cli.background.signals import default_signal_table
from faktory_cli.server import Server

logger = logging.getLogger(__name__)


async def serve(server: Server, stop_storage: Callable[[], None]) -> None:
    """
    Run server under signal control, then release storage.

    Args:
        server: Constructed server
        stop_storage: Stopper returned by storage boot
    """
    controller = LifecycleController(server, default_signal_table())
    controller.install()
    listener = asyncio.create_task(controller.run())

    try:
        await server.run()
    finally:
        controller.uninstall()
        if not listener.done():
            listener.cancel()
        stop_storage()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    from faktory_cli.cli import app

    app()
