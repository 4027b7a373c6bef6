"""Read-only view over a parsed INI settings file."""

import configparser
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from bgpexplorer.errors import ConfigError

logger = logging.getLogger(__name__)

# a section header cannot contain a newline
NO_DEFAULT_SECTION = "\n"


class RawSettings:
    """Section name -> key name -> optional string value.

    A key written without a value is present and maps to ``None``, which
    :meth:`has` tells apart from an absent key. Lookups are case-sensitive.
    """

    def __init__(self, sections: Mapping[str, Mapping[str, str | None]]) -> None:
        self._sections = MappingProxyType(
            {name: MappingProxyType(dict(keys)) for name, keys in sections.items()}
        )

    def has_section(self, section: str) -> bool:
        return section in self._sections

    def has(self, section: str, key: str) -> bool:
        return key in self._sections.get(section, {})

    def get(self, section: str, key: str) -> str | None:
        return self._sections.get(section, {}).get(key)

    def section(self, section: str) -> Mapping[str, str | None]:
        return self._sections[section]

    def sections(self) -> list[str]:
        return list(self._sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawSettings):
            return NotImplemented
        return dict(self._sections) == dict(other._sections)

    def __repr__(self) -> str:
        return f"RawSettings({ {name: dict(keys) for name, keys in self._sections.items()} })"

    @classmethod
    def from_string(cls, text: str, source: str = "<string>") -> "RawSettings":
        """Parse INI text.

        Raises:
            ConfigError: If the text is not valid INI syntax.
        """
        parser = configparser.ConfigParser(
            allow_no_value=True,
            interpolation=None,
            strict=True,
            # [DEFAULT] is read as an ordinary section, not inherited
            default_section=NO_DEFAULT_SECTION,
        )
        # keep key case as written
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        try:
            parser.read_string(text, source=source)
        except configparser.Error as e:
            raise ConfigError(f"Cannot parse settings file {source}: {e}") from e

        return cls(
            {
                name: {key: parser.get(name, key, raw=True) for key in parser.options(name)}
                for name in parser.sections()
            }
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "RawSettings":
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"config file does not exist: {path}")
        logger.info("Loading configuration from %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read settings file {path}: {e}") from e
        return cls.from_string(text, source=str(path))
