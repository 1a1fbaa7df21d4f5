"""Codec configuration loaded from environment variables.

Defaults reproduce the on-disk format the fixtures depend on
(2-space indentation, UTF-8, non-ASCII characters written verbatim).
Callers opt in to the environment with ``CodecConfig.from_env()``;
the reader and writer use ``CodecConfig()`` when no config is passed.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a value is out of
    its valid range, so a bad setting surfaces before any file is touched.
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass

from geoson.core.exceptions import ValidationError

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Immutable codec configuration.

    Attributes:
        indent: Spaces per indentation level in written GeoJSON.
        encoding: Text encoding used for reading and writing files.
        ensure_ascii: Escape non-ASCII characters in written GeoJSON.
    """

    indent: int = 2
    encoding: str = "utf-8"
    ensure_ascii: bool = False

    @classmethod
    def from_env(cls) -> CodecConfig:
        """Load and validate configuration from environment variables.

        Reads ``GEOSON_INDENT``, ``GEOSON_ENCODING`` and
        ``GEOSON_ENSURE_ASCII``.

        Raises:
            ConfigValidationError: If a value is out of range or cannot
                be interpreted.
        """
        raw_indent = os.getenv("GEOSON_INDENT", "2")
        try:
            indent = int(raw_indent)
        except ValueError as exc:
            raise ConfigValidationError("GEOSON_INDENT", raw_indent, "must be an integer") from exc

        config = cls(
            indent=indent,
            encoding=os.getenv("GEOSON_ENCODING", "utf-8"),
            ensure_ascii=_parse_bool("GEOSON_ENSURE_ASCII", os.getenv("GEOSON_ENSURE_ASCII", "")),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigValidationError(key, raw, "must be one of 1/0, true/false, yes/no, on/off")


def _validate(config: CodecConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.indent < 0:
        raise ConfigValidationError("GEOSON_INDENT", config.indent, "must be >= 0")

    if not config.encoding:
        raise ConfigValidationError("GEOSON_ENCODING", config.encoding, "must not be empty")

    try:
        codecs.lookup(config.encoding)
    except LookupError as exc:
        raise ConfigValidationError(
            "GEOSON_ENCODING", config.encoding, "must be a known text encoding"
        ) from exc
