# faktory_cli/config/password.py
"""
Server password resolution.

Expects a TOML file like:

    [faktory]
    password = "foobar"  # or...
    password = "/run/secrets/my_faktory_password"

FAKTORY_PASSWORD takes precedence over the file. A value starting with "/"
points to a file holding the password (this is how Docker secrets work).
"""

import logging
import os
from typing import NamedTuple

from faktory_cli.config.schema import GlobalConfig
from faktory_cli.errors import ConfigurationError, ReadError

logger = logging.getLogger(__name__)

PASSWORD_ENV = "FAKTORY_PASSWORD"
SKIP_PASSWORD_ENV = "FAKTORY_SKIP_PASSWORD"
DEFAULT_PASSWORD_FILE = "/etc/faktory/password"


class PasswordResult(NamedTuple):
    """Resolved password plus a config snapshot with the password masked."""

    password: str
    config: GlobalConfig


def skip_password() -> bool:
    """True when FAKTORY_SKIP_PASSWORD disables production enforcement."""
    return os.environ.get(SKIP_PASSWORD_ENV) in ("1", "true", "yes")


def _enforced(environment: str) -> bool:
    return environment == "production" and not skip_password()


def fetch_password(config: GlobalConfig, environment: str) -> PasswordResult:
    """
    Resolve the server password.

    Order: FAKTORY_PASSWORD (even if empty), then faktory.password from
    config, then /etc/faktory/password in production. Pointer values are
    dereferenced and trimmed.

    Raises:
        ReadError: If a password file cannot be read
        ConfigurationError: If production ends up without a password
    """
    password = ""

    if PASSWORD_ENV in os.environ:
        password = os.environ[PASSWORD_ENV]
    else:
        password = config.string("faktory", "password")

    if not password and _enforced(environment) and os.path.isfile(DEFAULT_PASSWORD_FILE):
        password = DEFAULT_PASSWORD_FILE

    if password.startswith("/"):
        try:
            with open(password, encoding="utf-8") as f:
                password = f.read().strip()
        except OSError as e:
            raise ReadError(f"Unable to read password file {password}: {e}") from e

    if not password and _enforced(environment):
        raise ConfigurationError(
            "Faktory requires a password to be set in production mode, see the Security wiki page"
        )

    # masked even when the env var won, the conf.d value may still be there
    return PasswordResult(password, config.redacted())
