# faktory_cli/storage.py
"""
Storage subsystem boot.

Starts a private redis-server listening only on a unix socket inside the
storage directory and returns a callable that stops it.
"""

import logging
import os
import shutil
import subprocess
from collections.abc import Callable

from tenacity import (
    RetryError,
    retry,
    retry_if_result,
    stop_after_delay,
    wait_fixed,
)

from faktory_cli.errors import ConstructionError

logger = logging.getLogger(__name__)

REDIS_BINARY = "redis-server"
SOCKET_TIMEOUT = 10.0


@retry(
    stop=stop_after_delay(SOCKET_TIMEOUT),
    wait=wait_fixed(0.1),
    retry=retry_if_result(lambda ready: not ready),
)
def _wait_for_socket(sock: str, proc: subprocess.Popen) -> bool:
    if proc.poll() is not None:
        raise ConstructionError(f"redis-server exited with status {proc.returncode}")
    return os.path.exists(sock)


def _make_stopper(proc: subprocess.Popen) -> Callable[[], None]:
    def stop() -> None:
        if proc.poll() is not None:
            return
        logger.info(f"Stopping redis-server (pid {proc.pid})")
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            logger.warning("redis-server did not exit, killing it")
            proc.kill()
            proc.wait()

    return stop


def boot_redis(storage_directory: str, sock: str) -> Callable[[], None]:
    """
    Launch redis-server for the given storage directory.

    Args:
        storage_directory: Directory holding the RDB/AOF files
        sock: Unix socket path redis should listen on

    Returns:
        Idempotent callable that stops the server

    Raises:
        ConstructionError: If redis cannot be started; .stopper is set
            whenever a process was launched
    """
    binary = shutil.which(REDIS_BINARY)
    if binary is None:
        raise ConstructionError(f"{REDIS_BINARY} not found in PATH")

    try:
        os.makedirs(storage_directory, mode=0o755, exist_ok=True)
    except OSError as e:
        raise ConstructionError(f"Unable to create {storage_directory}: {e}") from e

    try:
        if os.path.exists(sock):
            os.remove(sock)
    except OSError as e:
        raise ConstructionError(f"Unable to remove stale socket {sock}: {e}") from e

    args = [
        binary,
        "--port", "0",
        "--unixsocket", sock,
        "--unixsocketperm", "700",
        "--dir", storage_directory,
        "--daemonize", "no",
        "--loglevel", "warning",
    ]
    logger.debug(f"Booting redis: {' '.join(args)}")
    try:
        proc = subprocess.Popen(args, stdout=subprocess.DEVNULL, cwd=storage_directory)
    except OSError as e:
        raise ConstructionError(f"Unable to start {binary}: {e}") from e
    stopper = _make_stopper(proc)

    try:
        _wait_for_socket(sock, proc)
    except RetryError as e:
        raise ConstructionError(
            f"redis-server did not open {sock} within {SOCKET_TIMEOUT}s", stopper=stopper
        ) from e
    except ConstructionError as e:
        raise ConstructionError(str(e), stopper=stopper) from e

    logger.info(f"Redis booted at {sock} (pid {proc.pid})")
    return stopper
