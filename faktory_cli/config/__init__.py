# faktory_cli/config/__init__.py
"""Configuration system for faktory-cli."""

from .loader import read_config
from .password import PasswordResult, fetch_password, skip_password
from .schema import (
    REDACTED,
    GlobalConfig,
    ResolvedOptions,
    ServerOptions,
)

__all__ = [
    "GlobalConfig",
    "ResolvedOptions",
    "ServerOptions",
    "PasswordResult",
    "REDACTED",
    "read_config",
    "fetch_password",
    "skip_password",
]
