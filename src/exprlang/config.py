"""
REPL and CLI settings, optionally loaded from a YAML file.

Example file:

    prompt: "expr> "
    show_source: false
    log_level: DEBUG
    exit_ends_session: true
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Union

import yaml


class ConfigError(Exception):
    """A configuration file that cannot be used."""
    pass


@dataclass(frozen=True)
class ReplConfig:
    prompt: str = "> "
    show_position: bool = True      # append " at <position>" to errors
    show_source: bool = True        # underline the offending source
    log_level: str = "WARNING"
    exit_ends_session: bool = False

    def merged(self, **overrides: Any) -> "ReplConfig":
        """Copy with every override that is not None applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def _from_mapping(data: Dict[str, Any]) -> ReplConfig:
    known = {f.name: f for f in fields(ReplConfig)}
    defaults = ReplConfig()
    values = {}
    for key, value in data.items():
        if key not in known:
            raise ConfigError(f"unknown configuration key: {key!r}")
        expected = type(getattr(defaults, key))
        if not isinstance(value, expected):
            raise ConfigError(
                f"configuration key {key!r} expects {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        values[key] = value
    return ReplConfig(**values)


def load_config(path: Union[str, Path]) -> ReplConfig:
    """
    Load a ReplConfig from a YAML mapping.

    An empty file gives the defaults.

    Raises:
        ConfigError: If the file is missing, malformed, or has unknown
            keys or values of the wrong type
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"config not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: expected a mapping at the top level")
    return _from_mapping(data)
