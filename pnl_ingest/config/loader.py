from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (default config/parser.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for every optional key
"""

__all__ = [
    "ConfigError",
    "ParserConfig",
    "SCHEMA_PATH",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "with_overrides",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/parser.yml")

DEFAULT_OUTPUT_DIRECTORY = "./output"
DEFAULT_DELIMITER = ","
DEFAULT_ENCODING = "utf-8"
DEFAULT_PERIOD_TYPE = "weekly"
DEFAULT_LAYOUT = "auto"
DEFAULT_FILE_PATTERNS = ("*.csv", "*.txt")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ParserConfig:
    source_directory: str
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    delimiter: str = DEFAULT_DELIMITER
    encoding: str = DEFAULT_ENCODING
    period_type: str = DEFAULT_PERIOD_TYPE  # weekly | monthly
    layout: str = DEFAULT_LAYOUT  # auto | vertical | horizontal
    file_patterns: tuple[str, ...] = DEFAULT_FILE_PATTERNS


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing or not valid JSON, or the config
            violates the schema (unknown keys, wrong types, bad enum values)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ParserConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    return ParserConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", DEFAULT_OUTPUT_DIRECTORY),
        delimiter=data.get("delimiter", DEFAULT_DELIMITER),
        encoding=data.get("encoding", DEFAULT_ENCODING),
        period_type=data.get("period_type", DEFAULT_PERIOD_TYPE),
        layout=data.get("layout", DEFAULT_LAYOUT),
        file_patterns=tuple(data.get("file_patterns", DEFAULT_FILE_PATTERNS)),
    )


def with_overrides(cfg: ParserConfig, **overrides: Any) -> ParserConfig:
    """Return a copy with non-None overrides applied (CLI flags / environment)."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    if "delimiter" in changes and len(changes["delimiter"]) != 1:
        raise ConfigError(f"delimiter must be a single character, got {changes['delimiter']!r}")
    return replace(cfg, **changes)
