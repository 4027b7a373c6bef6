"""Configuration loading for the bgpexplorer route monitor."""

from .errors import ConfigError
from .loader import config_from_raw, load_config
from .raw_settings import RawSettings
from .settings import HistoryChangeMode, PeerMode, ServiceConfig, SocketAddress

__all__ = [
    "ConfigError",
    "HistoryChangeMode",
    "PeerMode",
    "RawSettings",
    "ServiceConfig",
    "SocketAddress",
    "config_from_raw",
    "load_config",
]
