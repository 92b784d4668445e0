"""Configuration loading and management."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, END_OF_HEADER, END_OF_RECORD, OUTPUT_FORMATS

logger = logging.getLogger(__name__)

# File name and the tables read from it, in lookup order within one directory
CONFIG_SOURCES = (
    ("pyproject.toml", (("tool", "adi-parser"),)),
    (".adi-parser.toml", (("adi-parser",), ("tool", "adi-parser"))),
)

_TYPE_NAMES = {"int": "an integer", "bool": "a boolean", "str": "a string"}


@dataclass
class ADIConfig:
    """Configuration for reading ADI documents.

    Attributes:
        max_file_size: Maximum file size in bytes that will be processed.
        output_format: CLI output format (``"json"``, ``"jsonl"`` or
            ``"events"``).
        include_comments: Whether comments are included in JSON output.
        uppercase_field_names: Whether collected field names are upper-cased.
        indent: Indentation used for JSON output; 0 prints compact JSON.
        header_marker: Field name that ends the ADIF header.
        record_marker: Field name that ends an ADIF record.

    Examples:
        ADIConfig(output_format="jsonl", uppercase_field_names=False)
    """

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    # Output
    output_format: str = "json"
    include_comments: bool = False
    uppercase_field_names: bool = True
    indent: int = 2

    # Record structure
    header_marker: str = END_OF_HEADER
    record_marker: str = END_OF_RECORD


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""


def load_config(search_path: Path) -> ADIConfig:
    """Load the `adi-parser` table closest to `search_path`.

    Each directory from `search_path` up to the root is checked for
    `pyproject.toml` and then `.adi-parser.toml`. The first table found wins,
    even when it is empty. Unreadable TOML files are skipped.

    Raises:
        ConfigError: If the table is not a mapping or has unknown keys.
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for file_name, table_paths in CONFIG_SOURCES:
            config_file = directory / file_name
            document = _read_toml(config_file)
            if document is None:
                continue
            for table_path in table_paths:
                table = _lookup(document, table_path)
                if table is not None:
                    return normalize_config(_config_from_table(table, config_file, table_path))
    return ADIConfig()


def _read_toml(config_file: Path) -> dict | None:
    if not config_file.is_file():
        return None
    try:
        return tomllib.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config file %s: %s", config_file, error)
        return None


def _lookup(document: dict, table_path: tuple[str, ...]) -> object | None:
    value: object = document
    for key in table_path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _config_from_table(table: object, config_file: Path, table_path: tuple[str, ...]) -> ADIConfig:
    location = f"`[{'.'.join(table_path)}]` in {config_file}"
    if not isinstance(table, dict):
        raise ConfigError(f"{location} must be a table")

    # TOML keys conventionally use dashes
    settings = {key.replace("-", "_"): value for key, value in table.items()}
    known = {field.name for field in fields(ADIConfig)}
    unknown = sorted(settings.keys() - known)
    if unknown:
        raise ConfigError(f"Unknown settings {', '.join(unknown)} in {location}")
    return ADIConfig(**settings)


def normalize_config(config: ADIConfig) -> ADIConfig:
    """Lower-case the output format and upper-case the record markers."""
    changes: dict[str, object] = {}
    if isinstance(config.output_format, str):
        changes["output_format"] = config.output_format.lower()
    for name in ("header_marker", "record_marker"):
        marker = getattr(config, name)
        if isinstance(marker, str):
            changes[name] = marker.strip().upper()
    return replace(config, **changes)


def validate_config(config: ADIConfig) -> None:
    """Validate an `ADIConfig` instance.

    Raises:
        ConfigError: If a value has the wrong type, a number is out of range,
            the output format is unknown, or the markers are empty or equal.

    Examples:
        validate_config(ADIConfig(output_format="events"))
    """
    config = normalize_config(config)

    for field in fields(config):
        value = getattr(config, field.name)
        expected = {"int": int, "bool": bool, "str": str}[field.type]
        # bool is a subclass of int but never a valid size or indent
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(f"`{field.name}` must be {_TYPE_NAMES[field.type]}")

    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")
    if config.indent < 0:
        raise ConfigError("`indent` must be a non-negative integer")
    if config.output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"`output_format` must be one of: {', '.join(OUTPUT_FORMATS)}")
    if not config.header_marker or not config.record_marker:
        raise ConfigError("`header_marker` and `record_marker` must not be empty")
    if config.header_marker == config.record_marker:
        raise ConfigError("`header_marker` and `record_marker` must differ")


def apply_overrides(config: ADIConfig, **overrides: object) -> ADIConfig:
    """Return `config` with every override that is not None applied.

    Raises:
        TypeError: If an override name is not an `ADIConfig` field.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **changes) if changes else config


def build_config(search_path: Path, **overrides: object) -> ADIConfig:
    """Load the configuration for `search_path`, apply CLI overrides and validate it.

    Raises:
        ConfigError: If the configuration file or the resulting values are invalid.

    Examples:
        config = build_config(Path("logs"), output_format="events")
    """
    config = normalize_config(apply_overrides(load_config(search_path), **overrides))
    validate_config(config)
    return config
