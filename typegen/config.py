"""Configuration for a generation run.

Values come from CLI options and an optional JSON config file
(`swagger-type-parser.config.json` in the working directory by default).
CLI values win, but only when they were actually given.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ConfigError

DEFAULT_CONFIG_FILE = "swagger-type-parser.config.json"

# camelCase keys accepted in config files
_FILE_KEYS: dict[str, str] = {
    "input": "input",
    "output": "output",
    "clean": "clean",
    "verbose": "verbose",
    "pathPrefixSkip": "path_prefix_skip",
    "generateApiEndpoints": "generate_api_endpoints",
}


@dataclass(frozen=True)
class Config:
    input: str | None = None
    output: str | None = None
    clean: bool = False
    verbose: bool = False
    path_prefix_skip: int = 0
    generate_api_endpoints: bool = False


_FIELD_NAMES = {f.name for f in fields(Config)}


def _normalize_keys(raw: dict[str, Any]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key, value in raw.items():
        name = _FILE_KEYS.get(key, key)
        if name in _FIELD_NAMES:
            values[name] = value
    return values


def load_config_file(path: Path) -> dict[str, Any] | None:
    """Load config values from a JSON file, or None if it does not exist."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        raise ConfigError(f"Failed to load config file {path}: {e}") from e

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return _normalize_keys(raw)


def merge_config(cli_values: dict[str, Any], config_path: Path | None = None) -> Config:
    """Merge CLI values over config file values.

    An explicit config path must exist; the default file is optional.
    CLI values that are None never override file values.
    """
    if config_path is not None:
        file_values = load_config_file(config_path)
        if file_values is None:
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        file_values = load_config_file(Path.cwd() / DEFAULT_CONFIG_FILE) or {}

    merged = dict(file_values)
    merged.update({k: v for k, v in cli_values.items() if v is not None and k in _FIELD_NAMES})
    return Config(**merged)


def validate_config(config: Config) -> None:
    """Check that required values are present and sane."""
    if not config.input:
        raise ConfigError("Input is required. Provide --input or set 'input' in the config file.")
    if not config.output:
        raise ConfigError("Output is required. Provide --output or set 'output' in the config file.")
    skip = config.path_prefix_skip
    if isinstance(skip, bool) or not isinstance(skip, int) or skip < 0:
        raise ConfigError(f"pathPrefixSkip must be a non-negative integer, got {skip!r}")
