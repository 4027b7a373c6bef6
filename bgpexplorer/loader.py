"""Assemble the service configuration from a settings file.

Fields are extracted in a fixed order and the first invalid one aborts the
whole load, so a :class:`ServiceConfig` is either complete or not built.
"""

import logging
from datetime import timedelta
from ipaddress import IPv4Address
from pathlib import Path

from pydantic import ValidationError

from bgpexplorer import constants, parsers
from bgpexplorer.errors import ConfigError
from bgpexplorer.extract import extract, identity
from bgpexplorer.raw_settings import RawSettings
from bgpexplorer.settings import HistoryChangeMode, PeerMode, ServiceConfig
from bgpexplorer.validate import check_addresses, is_required
from bgpexplorer.whois import WhoisConfig

logger = logging.getLogger(__name__)

MAIN = constants.MAIN_SECTION


def resolve_session(raw: RawSettings) -> str:
    """Return the name of the peer session section selected by ``[main] session``."""
    if not raw.has_section(MAIN):
        raise ConfigError(f"Missing section '{MAIN}' in ini file", MAIN)
    if not raw.has(MAIN, constants.SESSION_KEY):
        raise ConfigError(
            f"Missing value '{constants.SESSION_KEY}' in [{MAIN}] section",
            MAIN,
            constants.SESSION_KEY,
        )
    session = raw.get(MAIN, constants.SESSION_KEY)
    if session is None:
        raise ConfigError("No session specified", MAIN, constants.SESSION_KEY)
    if not raw.has_section(session):
        raise ConfigError(f"Missing section '{session}' in ini file", session)
    return session


def config_from_raw(raw: RawSettings) -> ServiceConfig:
    """Validate parsed settings and build the service configuration.

    Raises:
        ConfigError: For the first field that is missing or invalid.
    """
    session = resolve_session(raw)
    logger.debug("Using peer session [%s]", session)

    peer_mode = extract(
        raw,
        session,
        "mode",
        parsers.first_token(PeerMode, "mode"),
        required=True,
    )

    addresses = {
        key: extract(
            raw, session, key, parser, required=is_required(peer_mode, key)
        )
        for key, parser in (
            ("bgppeer", parsers.address_or_ip(constants.BGP_PORT)),
            ("bmppeer", parsers.address_or_ip(constants.BMP_PORT)),
            ("protolisten", parsers.listen_address(constants.BGP_PORT)),
        )
    }
    check_addresses(peer_mode, addresses, session)

    router_id = extract(
        raw,
        session,
        "routerid",
        parsers.ipv4,
        default=IPv4Address(constants.DEFAULT_ROUTER_ID),
    )
    peer_as = extract(
        raw,
        session,
        "peeras",
        parsers.unsigned(constants.U32_MAX),
        default=constants.DEFAULT_PEER_AS,
    )

    http_listen = extract(
        raw,
        MAIN,
        "httplisten",
        parsers.socket_address,
        default=parsers.socket_address(constants.DEFAULT_HTTP_LISTEN),
        blank_is_default=True,
    )
    http_timeout = extract(
        raw,
        MAIN,
        "httptimeout",
        parsers.unsigned(constants.U64_MAX),
        default=constants.DEFAULT_HTTP_TIMEOUT,
        lenient=True,
    )
    http_root = extract(
        raw,
        MAIN,
        "httproot",
        identity,
        default=constants.DEFAULT_HTTP_ROOT,
        blank_is_default=True,
    )

    history_depth = extract(
        raw,
        MAIN,
        "historydepth",
        parsers.unsigned(constants.U64_MAX),
        default=constants.DEFAULT_HISTORY_DEPTH,
    )
    history_mode = extract(
        raw,
        MAIN,
        "historymode",
        parsers.first_token(HistoryChangeMode, "history mode"),
        default=HistoryChangeMode.ONLY_DIFFER,
    )
    purge_after_withdraws = extract(
        raw,
        MAIN,
        "purge_after_withdraws",
        parsers.unsigned(constants.U64_MAX),
        default=constants.DEFAULT_PURGE_AFTER_WITHDRAWS,
    )
    purge_every = extract(
        raw,
        MAIN,
        "purge_every",
        parsers.seconds,
        default=timedelta(seconds=constants.DEFAULT_PURGE_EVERY),
    )

    whois_request_timeout = extract(
        raw,
        MAIN,
        "whois_request_timeout",
        parsers.unsigned(constants.U64_MAX),
        default=constants.DEFAULT_WHOIS_REQUEST_TIMEOUT,
        lenient=True,
    )
    whois_cache_seconds = extract(
        raw,
        MAIN,
        "whois_cache_seconds",
        parsers.signed,
        default=constants.DEFAULT_WHOIS_CACHE_SECONDS,
        lenient=True,
    )
    whois_config = extract(
        raw, MAIN, "whoisjsonconfig", WhoisConfig.from_path, required=True
    )
    whois_db = extract(
        raw, MAIN, "whoisdb", identity, default=constants.DEFAULT_WHOIS_DB
    )
    whois_dnses = extract(
        raw,
        MAIN,
        "whoisdns",
        parsers.dns_list,
        default=(parsers.socket_address(constants.DEFAULT_DNS_RESOLVER),),
    )

    try:
        return ServiceConfig(
            peer_mode=peer_mode,
            router_id=router_id,
            peer_as=peer_as,
            bgp_peer=addresses["bgppeer"],
            bmp_peer=addresses["bmppeer"],
            proto_listen=addresses["protolisten"],
            http_listen=http_listen,
            http_root=http_root,
            http_timeout=http_timeout,
            history_depth=history_depth,
            history_mode=history_mode,
            purge_after_withdraws=purge_after_withdraws,
            purge_every=purge_every,
            whois_config=whois_config,
            whois_db=whois_db,
            whois_request_timeout=whois_request_timeout,
            whois_cache_seconds=whois_cache_seconds,
            whois_dnses=whois_dnses,
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: str | Path) -> ServiceConfig:
    """Read the INI settings file at ``path`` and build the service configuration.

    Raises:
        ConfigError: If the file cannot be read or any field is invalid.
    """
    config = config_from_raw(RawSettings.from_file(path))
    logger.info("Configuration loaded (peer mode: %s)", config.peer_mode.value)
    return config
