# faktory_cli/bootstrap.py
"""
Server construction from resolved process options.

Merges conf.d, resolves the password, boots storage and builds the server.
"""

import logging
import os
from collections.abc import Callable

from faktory_cli.config.loader import read_config
from faktory_cli.config.password import fetch_password
from faktory_cli.config.schema import DEFAULT_CMD_BINDING, ResolvedOptions, ServerOptions
from faktory_cli.errors import ConstructionError
from faktory_cli.server import Server
from faktory_cli.storage import boot_redis

logger = logging.getLogger(__name__)

Stopper = Callable[[], None]


def build_server(
    opts: ResolvedOptions,
    boot_storage: Callable[[str, str], Stopper] = boot_redis,
    server_factory: Callable[[ServerOptions], Server] = Server,
) -> tuple[Server, Stopper]:
    """
    Build the server for opts.

    Args:
        opts: Resolved process options
        boot_storage: Starts storage for (directory, socket), returns its stopper
        server_factory: Builds the server from ServerOptions

    Returns:
        (server, storage stopper)

    Raises:
        ReadError, ParseError: conf.d could not be merged
        ConfigurationError: No password in production
        ConstructionError: Storage or server failed; .stopper holds any
            storage already started
    """
    global_config = read_config(opts.config_directory, opts.environment)

    password, global_config = fetch_password(global_config, opts.environment)

    sock = os.path.join(opts.storage_directory, "redis.sock")
    try:
        stopper = boot_storage(opts.storage_directory, sock)
    except ConstructionError:
        raise
    except Exception as e:
        raise ConstructionError(f"Unable to boot storage: {e}") from e

    # allow binding from config if no CLI arg given:
    # [faktory]
    #   binding = "0.0.0.0:7419"
    binding = opts.cmd_binding
    if binding == DEFAULT_CMD_BINDING:
        binding = global_config.string("faktory", "binding", default=DEFAULT_CMD_BINDING)

    sopts = ServerOptions(
        binding=binding,
        web_binding=opts.web_binding,
        storage_directory=opts.storage_directory,
        config_directory=opts.config_directory,
        environment=opts.environment,
        redis_sock=sock,
        global_config=global_config,
        password=password,
    )

    # only log after fetch_password has masked the password
    logger.debug("Merged configuration")
    logger.debug(f"{global_config.to_dict()}")

    try:
        server = server_factory(sopts)
    except ConstructionError as e:
        e.stopper = e.stopper or stopper
        raise
    except Exception as e:
        raise ConstructionError(f"Unable to create server: {e}", stopper=stopper) from e

    return server, stopper
