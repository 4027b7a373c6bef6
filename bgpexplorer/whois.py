"""Whois resolver configuration loaded from its JSON server map.

The file maps a lookup target (a TLD such as ``"org"``, or ``""`` for the
fallback server) to a whois server. A server is either a bare host name or
an object with ``host`` and an optional ``query`` template. The special
``"_"`` key holds named servers for non-domain lookups (e.g. ``"ip"``).
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from bgpexplorer.errors import ConfigError

logger = logging.getLogger(__name__)

SPECIAL_KEY = "_"


class WhoisServer(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    host: str
    query: str | None = None
    punycode: bool = True

    @field_validator("host")
    @classmethod
    def _host_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("whois server host must not be empty")
        return value


def _as_server(value: str | dict) -> str | dict:
    if isinstance(value, str):
        return {"host": value}
    return value


class WhoisConfig(BaseModel):
    """Whois resolver configuration handle."""

    model_config = ConfigDict(frozen=True)

    source: str
    servers: Mapping[str, WhoisServer]
    special: Mapping[str, WhoisServer] = Field(default_factory=dict, validate_default=True)

    @field_validator("servers", "special")
    @classmethod
    def _read_only(cls, value: Mapping[str, WhoisServer]) -> Mapping[str, WhoisServer]:
        return MappingProxyType(dict(value))

    @field_serializer("servers", "special")
    def _dump_servers(self, value: Mapping[str, WhoisServer]) -> dict[str, WhoisServer]:
        return dict(value)

    def server_for(self, target: str) -> WhoisServer | None:
        """Return the server responsible for a TLD, or the fallback server."""
        return self.servers.get(target.lower(), self.servers.get(""))

    @classmethod
    def from_mapping(cls, data: object, source: str) -> "WhoisConfig":
        if not isinstance(data, dict):
            raise ConfigError(f"whois config {source} must be a JSON object")
        servers = {}
        special = {}
        for target, value in data.items():
            if target == SPECIAL_KEY and isinstance(value, dict) and "host" not in value:
                special = {name: _as_server(entry) for name, entry in value.items()}
            else:
                servers[target] = _as_server(value)
        try:
            return cls(source=source, servers=servers, special=special)
        except ValidationError as e:
            raise ConfigError(
                f"Invalid whois config {source}: "
                + "; ".join(
                    f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                )
            ) from e

    @classmethod
    def from_path(cls, path: str | Path) -> "WhoisConfig":
        """Load and validate the whois JSON configuration file.

        Raises:
            ConfigError: If the file cannot be read, is not JSON or does not
                describe whois servers.
        """
        path = Path(path)
        logger.debug("Loading whois configuration from %s", path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot read whois config {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in whois config {path}: {e}") from e
        return cls.from_mapping(data, source=str(path))
