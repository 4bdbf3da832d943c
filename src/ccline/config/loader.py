"""Configuration file loading and saving."""

import os
import sys

from pathlib import Path
from typing import Optional

import yaml

from pydantic import ValidationError

from ..utils.debug import debug_log
from .defaults import get_default_config
from .schema import Config


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.getenv("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "ccline"


def get_config_path() -> Path:
    """Get the full configuration file path."""
    return get_config_dir() / "config.yaml"


def load_config_file(config_path: Path) -> Config:
    """Read and validate a configuration file.

    Raises:
        yaml.YAMLError: If the file is not valid YAML
        ValidationError: If the content does not match the schema
        OSError: If the file cannot be read
    """
    with open(config_path, encoding="utf-8") as f:
        config_data = yaml.safe_load(f)

    if config_data is None:
        config_data = {}

    return Config.model_validate(config_data)


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML, falling back to defaults.

    With no explicit path the default location is used, and a missing file is
    created from the defaults. An invalid file is reported on stderr and the
    defaults are used instead.
    """
    explicit = config_path is not None
    path = config_path if config_path is not None else get_config_path()

    if not path.exists():
        config = get_default_config()
        if not explicit:
            try:
                save_config(config)
            except OSError as e:
                debug_log(f"Could not write default config to {path}: {e}")
        return config

    try:
        return load_config_file(path)
    except (yaml.YAMLError, ValidationError, OSError) as e:
        print(
            f"Warning: Failed to load config from {path}: {e}",
            file=sys.stderr,
        )
        print("Using default configuration.", file=sys.stderr)
        return get_default_config()


def dump_config(config: Config) -> str:
    """Serialize a configuration to YAML text."""
    config_dict = config.model_dump(mode="json", exclude_none=True)
    return yaml.dump(
        config_dict, default_flow_style=False, sort_keys=False, allow_unicode=True
    )


def save_config(config: Config, config_path: Optional[Path] = None) -> None:
    """Save configuration to a YAML file."""
    path = config_path if config_path is not None else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_config(config))
