# faktory_cli/errors.py
"""
Error taxonomy for process bootstrap.

Every error raised while resolving configuration or constructing the server
derives from FaktoryError so the CLI can report it and exit non-zero.
"""

from collections.abc import Callable


class FaktoryError(Exception):
    """Base class for bootstrap failures."""


class ReadError(FaktoryError):
    """A config file, glob or password file could not be read."""


class ParseError(FaktoryError):
    """A config file is not valid TOML."""


class ConfigurationError(FaktoryError):
    """The resolved configuration is unusable (e.g. no password in production)."""


class ConstructionError(FaktoryError):
    """
    Storage boot or server construction failed.

    Carries the stop handle of any storage already started so the caller
    can still release it.
    """

    def __init__(self, message: str, stopper: Callable[[], None] | None = None) -> None:
        super().__init__(message)
        self.stopper = stopper
