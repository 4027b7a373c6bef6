"""Typed extraction of single settings file fields."""

import logging
from typing import Callable, Final, TypeVar

from bgpexplorer.errors import ConfigError
from bgpexplorer.raw_settings import RawSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Final = _NoDefault()


def identity(value: str) -> str:
    return value


def extract(
    raw: RawSettings,
    section: str,
    key: str,
    parser: Callable[[str], T],
    *,
    default: T | _NoDefault = NO_DEFAULT,
    required: bool = False,
    lenient: bool = False,
    blank_is_default: bool = False,
) -> T | None:
    """Resolve ``[section] key`` to a typed value.

    Args:
        raw: Parsed settings file
        section: Section holding the key
        key: Key name
        parser: Converts the string value, raising ``ValueError`` (or
            ``ConfigError``) when it is invalid
        default: Value used when the key is absent
        required: Without a default, whether an absent key is an error
            rather than ``None``
        lenient: Use the default instead of failing when the value does
            not parse
        blank_is_default: Use the default when the key has no value

    Returns:
        The parsed value, the default, or ``None`` for an absent optional key.

    Raises:
        ConfigError: If the key is missing but required, has no value, or
            does not parse.
    """
    has_default = not isinstance(default, _NoDefault)

    if not raw.has(section, key):
        if has_default:
            return default  # type: ignore[return-value]
        if required:
            raise ConfigError(f"{key} was not specified", section, key)
        return None

    value = raw.get(section, key)
    if value is None:
        if has_default and (blank_is_default or lenient):
            return default  # type: ignore[return-value]
        raise ConfigError(f"invalid {key} was specified", section, key)

    try:
        return parser(value)
    except ConfigError as e:
        raise ConfigError(e.message, section, key) from e
    except ValueError as e:
        if lenient and has_default:
            logger.debug(
                "Ignoring invalid [%s] %s=%r, using default %r", section, key, value, default
            )
            return default  # type: ignore[return-value]
        raise ConfigError(f"Invalid {key} - {e}", section, key) from e
