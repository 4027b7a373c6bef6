"""Value parsers for settings file fields.

Every parser takes the raw string value and either returns the typed value
or raises ``ValueError`` with a short description of what is wrong.
"""

import logging
import re
from datetime import timedelta
from enum import Enum
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Callable, TypeVar

from bgpexplorer.constants import (
    DEFAULT_DNS_RESOLVER,
    DEFAULT_PROTO_LISTEN_IP,
    DNS_PORT,
    I64_MAX,
    I64_MIN,
)
from bgpexplorer.settings import SocketAddress

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_SOCKET_RE = re.compile(r"(?:\[(?P<ipv6>[^\]]+)\]|(?P<ipv4>[^:\[\]]+)):(?P<port>[0-9]+)")


def _parse_integer(value: str, pattern: re.Pattern, minimum: int, maximum: int) -> int:
    if not value:
        raise ValueError("cannot parse integer from empty string")
    if not pattern.fullmatch(value):
        raise ValueError(f"invalid digit found in {value!r}")
    number = int(value)
    if number > maximum:
        raise ValueError(f"number too large to fit in target type: {value}")
    if number < minimum:
        raise ValueError(f"number too small to fit in target type: {value}")
    return number


def unsigned(maximum: int) -> Callable[[str], int]:
    """Build a parser for unsigned integers up to ``maximum``."""

    def parse(value: str) -> int:
        return _parse_integer(value, _UNSIGNED_RE, 0, maximum)

    return parse


def signed(value: str) -> int:
    """Parse a signed 64-bit integer."""
    return _parse_integer(value, _SIGNED_RE, I64_MIN, I64_MAX)


def seconds(value: str) -> timedelta:
    number = signed(value)
    try:
        return timedelta(seconds=number)
    except OverflowError as e:
        raise ValueError(f"number too large to fit in a duration: {value}") from e


def ipv4(value: str) -> IPv4Address:
    try:
        return IPv4Address(value)
    except ValueError as e:
        raise ValueError(f"invalid IPv4 address syntax: {e}") from e


def socket_address(value: str) -> SocketAddress:
    """Parse a ``host:port`` literal, IPv6 hosts in brackets."""
    match = _SOCKET_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"invalid socket address syntax: {value!r}")
    port = int(match["port"])
    if port > 65535:
        raise ValueError(f"invalid port in socket address: {value!r}")
    try:
        if match["ipv6"] is not None:
            ip: IPv4Address | IPv6Address = IPv6Address(match["ipv6"])
        else:
            ip = IPv4Address(match["ipv4"])
    except ValueError as e:
        raise ValueError(f"invalid socket address syntax: {value!r}") from e
    return SocketAddress(ip=ip, port=port)


def address_or_ip(default_port: int) -> Callable[[str], SocketAddress]:
    """Build a parser accepting ``host:port`` or a bare IP paired with ``default_port``."""

    def parse(value: str) -> SocketAddress:
        try:
            return socket_address(value)
        except ValueError:
            pass
        try:
            return SocketAddress(ip=ip_address(value), port=default_port)
        except ValueError as e:
            raise ValueError(f"invalid address {value!r}") from e

    return parse


def listen_address(default_port: int) -> Callable[[str], SocketAddress]:
    """Like :func:`address_or_ip`, but unparsable input listens on all interfaces."""
    parse_peer = address_or_ip(default_port)

    def parse(value: str) -> SocketAddress:
        try:
            return parse_peer(value)
        except ValueError:
            logger.debug(
                "Listen address %r is not an IP address, using %s",
                value,
                DEFAULT_PROTO_LISTEN_IP,
            )
            return SocketAddress(ip=ip_address(DEFAULT_PROTO_LISTEN_IP), port=default_port)

    return parse


def first_token(enum_type: type[E], what: str) -> Callable[[str], E]:
    """Build a parser matching the first whitespace-separated word against an enum.

    Trailing words are ignored.
    """

    def parse(value: str) -> E:
        tokens = value.split()
        word = tokens[0] if tokens else ""
        try:
            return enum_type(word)
        except ValueError:
            allowed = "|".join(member.value for member in enum_type)
            raise ValueError(f"invalid {what} {word!r}, expected {allowed}") from None

    return parse


def dns_list(value: str) -> tuple[SocketAddress, ...]:
    """Parse a comma separated list of DNS resolvers.

    Entries without a port get port 53. Invalid entries are logged and
    dropped; if nothing valid remains the default resolver is used.
    """
    resolvers = []
    for entry in value.split(","):
        entry = entry.strip()
        try:
            resolvers.append(socket_address(entry))
            continue
        except ValueError:
            pass
        try:
            resolvers.append(socket_address(f"{entry}:{DNS_PORT}"))
        except ValueError:
            logger.warning("Invalid DNS: %s", entry)
    if not resolvers:
        resolvers.append(socket_address(DEFAULT_DNS_RESOLVER))
    return tuple(resolvers)
