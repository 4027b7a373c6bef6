"""Shared pytest fixtures and configuration."""

import textwrap
from pathlib import Path

import pytest

from bgpexplorer.raw_settings import RawSettings


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def whois_json():
    """Path to a valid whois server map."""
    return FIXTURES_DIR / "whois.json"


@pytest.fixture
def make_raw(whois_json):
    """Build RawSettings from [main] and session keys.

    ``whoisjsonconfig`` points to the whois fixture unless overridden, and
    keys set to ``None`` are written without a value.
    """

    def _make_raw(main=None, session=None, session_name="peer1"):
        main_keys = {"session": session_name, "whoisjsonconfig": str(whois_json)}
        main_keys.update(main or {})
        sections = {"main": main_keys}
        if session is not None:
            sections[session_name] = session
        return RawSettings(sections)

    return _make_raw


@pytest.fixture
def write_ini(tmp_path, whois_json):
    """Write INI text to a temporary settings file.

    ``{whois}`` in the text is replaced by the whois fixture path.
    """

    def _write_ini(text, name="bgpexplorer.ini"):
        path = tmp_path / name
        path.write_text(
            textwrap.dedent(text).replace("{whois}", str(whois_json)),
            encoding="utf-8",
        )
        return path

    return _write_ini


@pytest.fixture
def sample_ini():
    """Settings file exercising every key."""
    return """
        [main]
        session = rtr1
        httplisten = 127.0.0.1:8081
        httptimeout = 60
        httproot = /srv/bgpexplorer
        historydepth = 20
        historymode = every
        purge_after_withdraws = 3
        purge_every = 600
        whois_request_timeout = 10
        whois_cache_seconds = 3600
        whoisjsonconfig = {whois}
        whoisdb = /var/lib/bgpexplorer/whois.db
        whoisdns = 8.8.8.8, 9.9.9.9:5353

        [rtr1]
        mode = bgpactive
        bgppeer = 10.0.0.1:1179
        routerid = 10.255.255.1
        peeras = 65001
        """
