"""Mode-dependent requirements on the peer and listener addresses."""

from collections.abc import Mapping

from bgpexplorer.errors import ConfigError
from bgpexplorer.settings import PeerMode, SocketAddress

ADDRESS_KEYS = ("bgppeer", "bmppeer", "protolisten")

# Address keys that must be present for each peer mode
REQUIRED_ADDRESSES: dict[PeerMode, frozenset[str]] = {
    PeerMode.BGP_ACTIVE: frozenset({"bgppeer"}),
    PeerMode.BGP_PASSIVE: frozenset({"protolisten"}),
    PeerMode.BMP_ACTIVE: frozenset({"bmppeer"}),
    PeerMode.BMP_PASSIVE: frozenset({"protolisten"}),
}


def is_required(mode: PeerMode, key: str) -> bool:
    """Tell whether the address ``key`` must be configured in ``mode``."""
    return key in REQUIRED_ADDRESSES[mode]


def check_addresses(
    mode: PeerMode,
    addresses: Mapping[str, SocketAddress | None],
    section: str | None = None,
) -> None:
    """Ensure every address required by ``mode`` is set.

    Addresses the mode does not need are allowed either way.

    Raises:
        ConfigError: Naming the first missing address.
    """
    for key in ADDRESS_KEYS:
        if is_required(mode, key) and addresses.get(key) is None:
            raise ConfigError(f"{key} was not specified", section, key)
