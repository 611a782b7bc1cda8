"""Loading engine configuration from YAML or JSON files."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import yaml

from .exceptions import ConfigError
from .models import EngineConfig


def load_config(path: str | Path) -> EngineConfig:
    """
    Load an EngineConfig from a YAML (or JSON) file.

    Example file:
        global_ignores: [updated_at, etag]
        count_property_name: Count
        item_name_format: "Item[{index}]"

    Args:
        path: Path to the configuration file

    Returns:
        EngineConfig built from the file (defaults for missing keys)

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file cannot be parsed or holds invalid settings
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        content = f.read()

    # JSON is valid YAML, so one parser covers both
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file: {e}", {"path": str(config_path)})

    if data is None:
        return EngineConfig()
    if not isinstance(data, dict):
        raise ConfigError(
            "Config file must contain a mapping",
            {"path": str(config_path), "type": type(data).__name__}
        )

    known = {f.name for f in dataclasses.fields(EngineConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError("Unknown config keys", {"keys": unknown})

    return EngineConfig(**data)
