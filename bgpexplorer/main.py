#!/usr/bin/env python3
"""Command-line entrypoint for loading and checking the bgpexplorer configuration."""

import argparse
import json
import logging
import sys
from os import environ
from pathlib import Path
from typing import cast

from bgpexplorer import constants
from bgpexplorer.errors import ConfigError
from bgpexplorer.loader import load_config
from bgpexplorer.settings import ServiceConfig


class Args(argparse.Namespace):
    config: Path | None
    log_level: str
    rich_logs: bool
    print_config_and_exit: bool


logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> Args:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Load and validate the bgpexplorer settings file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to the INI settings file. Also accepted in the {constants.CONFIG_FILE_ENVVAR} envvar, "
        f"falls back to {constants.DEFAULT_CONFIG_FILE}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )

    parser.add_argument(
        "--rich-logs",
        action="store_true",
        help="Enable rich colored logging output",
    )

    parser.add_argument(
        "--print-config-and-exit",
        action="store_true",
        help="Print the resolved configuration as JSON and exit",
    )

    return cast(Args, parser.parse_args(argv))


def configure_logging(log_level: str, use_rich: bool = False) -> None:
    """Configure logging with optional rich formatting.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_rich: Whether to use rich colored logging
    """
    if use_rich:
        try:
            from rich.logging import RichHandler
            from rich.console import Console

            # log to stderr, stdout is reserved for --print-config-and-exit
            console = Console(stderr=True)

            logging.basicConfig(
                level=getattr(logging, log_level),
                format="%(message)s",
                datefmt="[%X]",
                handlers=[
                    RichHandler(
                        console=console,
                        show_path=True,
                        show_time=True,
                        show_level=True,
                        markup=False,
                        rich_tracebacks=True,
                    )
                ],
            )
        except ImportError:
            # Fall back to standard logging if rich is not available
            logging.basicConfig(
                level=getattr(logging, log_level),
                format="%(asctime)s [%(name)s:%(filename)s:%(lineno)d] %(levelname)s: %(message)s",
            )
    else:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(asctime)s [%(name)s:%(filename)s:%(lineno)d] %(levelname)s: %(message)s",
        )


def resolve_config_path(args: Args) -> Path:
    if args.config is not None:
        return args.config
    return Path(environ.get(constants.CONFIG_FILE_ENVVAR, constants.DEFAULT_CONFIG_FILE))


def log_summary(config: ServiceConfig) -> None:
    """Log what each service component will be started with."""
    addresses = ", ".join(
        f"{name}={address}"
        for name, address in (
            ("bgppeer", config.bgp_peer),
            ("bmppeer", config.bmp_peer),
            ("protolisten", config.proto_listen),
        )
        if address is not None
    )
    logger.info(
        "Peer session: mode %s, %s, router id %s, peer AS %d",
        config.peer_mode.value,
        addresses,
        config.router_id,
        config.peer_as,
    )
    logger.info(
        "HTTP API: listen %s, root %s, timeout %d seconds",
        config.http_listen,
        config.http_root,
        config.http_timeout,
    )
    logger.info(
        "History store: depth %d, mode %s, purge after %d withdraws every %s",
        config.history_depth,
        config.history_mode.value,
        config.purge_after_withdraws,
        config.purge_every,
    )
    logger.info(
        "Whois: config %s, db %s, timeout %d seconds, cache %d seconds, dns %s",
        config.whois_config.source,
        config.whois_db,
        config.whois_request_timeout,
        config.whois_cache_seconds,
        ", ".join(str(dns) for dns in config.whois_dnses),
    )


def main(argv: list[str] | None = None) -> int:
    """Main function."""
    args = parse_args(argv)

    configure_logging(args.log_level, args.rich_logs)

    try:
        config = load_config(resolve_config_path(args))
    except ConfigError as e:
        logger.error("Invalid config: %s", e)
        return 1

    if args.print_config_and_exit:
        logger.info("Printing resolved configuration")
        print(json.dumps(config.model_dump(mode="json"), indent=2, sort_keys=True))
        return 0

    log_summary(config)
    logger.info("Configuration is valid")
    return 0


if __name__ == "__main__":
    sys.exit(main())
