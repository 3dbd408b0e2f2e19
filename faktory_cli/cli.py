# faktory_cli/cli.py
"""
Command-line interface for the Faktory server process.

Resolves flags into ResolvedOptions, builds the server and hands it to the
signal-driven lifecycle in __main__.
"""

import asyncio
import logging
import os
import pwd

import typer
from pydantic import ValidationError

from faktory_cli import __app_name__, __license__, __version__
from faktory_cli.config.schema import (
    DEFAULT_CMD_BINDING,
    DEFAULT_CONFIG_DIRECTORY,
    DEFAULT_ENVIRONMENT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_STORAGE_DIRECTORY,
    DEFAULT_WEB_BINDING,
    ResolvedOptions,
)
from faktory_cli.errors import ConstructionError, FaktoryError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="faktory",
    help="Faktory background job server.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _home_directory() -> str:
    """Current user's home directory, falling back to $HOME, else ''."""
    try:
        home = pwd.getpwuid(os.getuid()).pw_dir
    except KeyError:
        home = ""
    return home or os.environ.get("HOME", "")


def resolve_options(
    cmd_binding: str = DEFAULT_CMD_BINDING,
    web_binding: str = DEFAULT_WEB_BINDING,
    log_level: str = DEFAULT_LOG_LEVEL,
    environment: str = DEFAULT_ENVIRONMENT,
    storage_directory: str = DEFAULT_STORAGE_DIRECTORY,
    config_directory: str = DEFAULT_CONFIG_DIRECTORY,
) -> ResolvedOptions:
    """
    Build ResolvedOptions from flag values.

    development defaults to the user's home dir so everything is local and
    permissions aren't a problem.
    """
    if environment == "development":
        home = _home_directory()
        if home:
            if storage_directory == DEFAULT_STORAGE_DIRECTORY:
                storage_directory = os.path.join(home, ".faktory", "db")
            if config_directory == DEFAULT_CONFIG_DIRECTORY:
                config_directory = os.path.join(home, ".faktory")

    return ResolvedOptions(
        cmd_binding=cmd_binding,
        web_binding=web_binding,
        environment=environment,
        config_directory=config_directory,
        storage_directory=storage_directory,
        log_level=log_level,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{__app_name__} {__version__}")
        typer.echo(__license__)
        raise typer.Exit()


@app.command()
def main(
    cmd_binding: str = typer.Option(
        DEFAULT_CMD_BINDING, "-b",
        help="Network binding (use :7419 to listen on all interfaces)",
    ),
    web_binding: str = typer.Option(
        DEFAULT_WEB_BINDING, "-w",
        help="Web UI binding (use :7420 to listen on all interfaces)",
    ),
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL, "-l", help="Logging level (error, warn, info, debug)"
    ),
    environment: str = typer.Option(
        DEFAULT_ENVIRONMENT, "-e", help="Environment (development, production)"
    ),
    # undocumented on purpose, we don't want people changing these if possible
    storage_directory: str = typer.Option(
        DEFAULT_STORAGE_DIRECTORY, "-d", hidden=True, help="Storage directory"
    ),
    config_directory: str = typer.Option(
        DEFAULT_CONFIG_DIRECTORY, "-c", hidden=True, help="Config directory"
    ),
    version: bool = typer.Option(
        False, "-v", "--version", is_eager=True, callback=_version_callback,
        help="Show version and license information",
    ),
):
    """Start the Faktory server. SIGHUP reloads conf.d, SIGTERM/Ctrl+C stops it."""
    from faktory_cli.__main__ import serve
    from faktory_cli.bootstrap import build_server
    from faktory_cli.logging_config import configure_logging

    try:
        opts = resolve_options(
            cmd_binding, web_binding, log_level, environment, storage_directory, config_directory
        )
    except ValidationError as e:
        raise typer.BadParameter(str(e), param_hint="-e") from e

    configure_logging(opts.log_level)
    logger.info(f"{__app_name__} {__version__} starting in {opts.environment}")

    try:
        server, stop_storage = build_server(opts)
    except FaktoryError as e:
        logger.error(f"Unable to start {__app_name__}: {e}")
        if isinstance(e, ConstructionError) and e.stopper is not None:
            e.stopper()
        raise typer.Exit(1)

    try:
        asyncio.run(serve(server, stop_storage))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    app()
