# faktory_cli/config/schema.py
"""
Configuration models for faktory-cli.

ResolvedOptions and ServerOptions are pydantic models. GlobalConfig wraps the
merged TOML tree and is the only place that deals with its untyped shape.
"""

import copy
from collections.abc import Iterator, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CMD_BINDING = "localhost:7419"
DEFAULT_WEB_BINDING = "localhost:7420"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_CONFIG_DIRECTORY = "/etc/faktory"
DEFAULT_STORAGE_DIRECTORY = "/var/lib/faktory/db"
DEFAULT_LOG_LEVEL = "info"

REDACTED = "********"


class GlobalConfig(Mapping):
    """
    Read-only view of the merged conf.d tree.

    Maps subsystem name -> mapping of key -> value. Values are whatever TOML
    produced (str, int, float, bool, nested tables).
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"GlobalConfig({self._data!r})"

    def lookup(self, *path: str) -> Any | None:
        """Return the value at a path of keys, or None if any segment is missing."""
        node: Any = self._data
        for segment in path:
            if not isinstance(node, Mapping) or segment not in node:
                return None
            node = node[segment]
        return node

    def string(self, *path: str, default: str = "") -> str:
        """Return the value at path if it is a string, else default."""
        value = self.lookup(*path)
        if isinstance(value, str):
            return value
        return default

    def redacted(self) -> "GlobalConfig":
        """
        Return a copy safe to log: faktory.password replaced by a mask.

        The receiver is left untouched.
        """
        data = copy.deepcopy(self._data)
        faktory = data.get("faktory")
        if isinstance(faktory, dict) and faktory.get("password"):
            faktory["password"] = REDACTED
        return GlobalConfig(data)

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of the underlying tree."""
        return copy.deepcopy(self._data)


class ResolvedOptions(BaseModel):
    """Process options produced from CLI flags and the environment."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    cmd_binding: str = Field(default=DEFAULT_CMD_BINDING, description="Network binding")
    web_binding: str = Field(default=DEFAULT_WEB_BINDING, description="Web UI binding")
    environment: Literal["development", "production"] = Field(
        default=DEFAULT_ENVIRONMENT, description="Execution environment"
    )
    config_directory: str = Field(default=DEFAULT_CONFIG_DIRECTORY)
    storage_directory: str = Field(default=DEFAULT_STORAGE_DIRECTORY)
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="error, warn, info or debug")


class ServerOptions(BaseModel):
    """Everything the server needs to be constructed."""

    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    binding: str
    web_binding: str = DEFAULT_WEB_BINDING
    storage_directory: str
    config_directory: str
    environment: Literal["development", "production"]
    redis_sock: str
    global_config: GlobalConfig = Field(default_factory=GlobalConfig)
    password: str = Field(default="", repr=False)
