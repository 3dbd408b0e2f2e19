# faktory_cli/config/loader.py
"""
Reads all config files in:
    /etc/faktory/conf.d/*.toml  (production)
    ~/.faktory/conf.d/*.toml    (development)

Files are read in alphabetical order and shallow merged: a later file
replaces the whole value of a top-level key set by an earlier one.
"""

import glob
import logging
import os
import tomllib
from typing import Any

from faktory_cli.config.schema import GlobalConfig
from faktory_cli.errors import ParseError, ReadError

logger = logging.getLogger(__name__)


def config_globs(config_directory: str) -> list[str]:
    """Glob patterns searched for config files, in merge order."""
    return [os.path.join(config_directory, "conf.d", "*.toml")]


def read_config(config_directory: str, environment: str) -> GlobalConfig:
    """
    Merge every conf.d/*.toml file under config_directory.

    Args:
        config_directory: Base config directory (e.g. /etc/faktory)
        environment: development or production

    Returns:
        Merged GlobalConfig (empty if no file matched)

    Raises:
        ReadError: If a file cannot be read
        ParseError: If a file is not valid TOML
    """
    merged: dict[str, Any] = {}

    for pattern in config_globs(config_directory):
        try:
            matches = sorted(glob.glob(pattern))
        except OSError as e:
            raise ReadError(f"Unable to expand {pattern}: {e}") from e

        for path in matches:
            logger.debug(f"Reading configuration in {path}")
            try:
                with open(path, "rb") as f:
                    raw = f.read()
            except OSError as e:
                raise ReadError(f"Unable to read {path}: {e}") from e

            try:
                data = tomllib.loads(raw.decode("utf-8"))
            except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
                logger.warning(f"Unable to parse TOML file at {path}")
                raise ParseError(f"{path}: {e}") from e

            merged.update(data)

    logger.debug(f"Read {len(merged)} config section(s) for {environment}")
    return GlobalConfig(merged)
