# faktory_cli/background/signals.py
"""
Signal handlers and the default signal binding table.

SIGTERM/SIGINT shut the server down, SIGHUP reloads conf.d.
"""

import logging
import signal
from collections.abc import Callable

from faktory_cli import __app_name__
from faktory_cli.config.loader import read_config
from faktory_cli.errors import ParseError, ReadError
from faktory_cli.server import Server

logger = logging.getLogger(__name__)

SignalHandler = Callable[[Server], None]
SignalBindingTable = dict[signal.Signals, SignalHandler]


def reload(server: Server) -> None:
    """
    Re-read conf.d and apply it to the running server.

    A failed read leaves the current config in place.
    """
    logger.debug(f"{__app_name__} reloading")

    options = server.options
    try:
        global_config = read_config(options.config_directory, options.environment)
    except (ReadError, ParseError) as e:
        logger.warning(f"Unable to reload config: {e}")
        return

    options.global_config = global_config.redacted()
    server.reload()


def shutdown(server: Server) -> None:
    """Signal the server to stop."""
    logger.info(f"{__app_name__} shutting down")
    server.stopper().set()


def default_signal_table() -> SignalBindingTable:
    """Signal -> handler bindings installed at process start."""
    return {
        signal.SIGTERM: shutdown,
        signal.SIGINT: shutdown,
        signal.SIGHUP: reload,
    }
