from datetime import timedelta
from enum import Enum
from ipaddress import IPv4Address, IPv6Address

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    SerializationInfo,
    model_serializer,
)

from bgpexplorer.constants import U32_MAX
from bgpexplorer.whois import WhoisConfig


class PeerMode(str, Enum):
    """Which side opens the transport connection, and which protocol it speaks."""

    BGP_ACTIVE = "bgpactive"  # we connect to the BGP router
    BGP_PASSIVE = "bgppassive"  # the BGP router connects to us
    BMP_PASSIVE = "bmppassive"  # the BMP router connects to us
    BMP_ACTIVE = "bmpactive"  # we connect to the BMP router


class HistoryChangeMode(str, Enum):
    """When the history store records a route change."""

    EVERY_UPDATE = "every"  # every update, duplicates included
    ONLY_DIFFER = "differ"  # only when route attributes differ


class SocketAddress(BaseModel):
    """IP address and port pair."""

    model_config = ConfigDict(frozen=True)

    ip: IPv4Address | IPv6Address
    port: int = Field(ge=0, le=65535)

    def __str__(self) -> str:
        if self.ip.version == 6:
            return f"[{self.ip}]:{self.port}"
        return f"{self.ip}:{self.port}"

    @model_serializer(mode="wrap")
    def _serialize(self, handler, info: SerializationInfo):
        if info.mode_is_json():
            return str(self)
        return handler(self)


class ServiceConfig(BaseModel):
    """Runtime configuration of the route monitor.

    Built once at startup from the INI settings file and shared read-only
    by the peer session manager, the HTTP API, the history store and the
    whois resolver.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", ser_json_timedelta="float")

    # Peer session manager
    peer_mode: PeerMode
    router_id: IPv4Address
    peer_as: int = Field(ge=0, le=U32_MAX)
    bgp_peer: SocketAddress | None
    bmp_peer: SocketAddress | None
    proto_listen: SocketAddress | None

    # HTTP API
    http_listen: SocketAddress
    http_root: str
    http_timeout: NonNegativeInt

    # History store
    history_depth: NonNegativeInt
    history_mode: HistoryChangeMode
    purge_after_withdraws: NonNegativeInt
    purge_every: timedelta

    # Whois resolver
    whois_config: WhoisConfig
    whois_db: str
    whois_request_timeout: NonNegativeInt
    whois_cache_seconds: int
    whois_dnses: tuple[SocketAddress, ...] = Field(min_length=1)
