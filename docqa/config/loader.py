"""YAML configuration loader with environment variable overrides.

Configuration is layered, later layers winning:

  1. ``config/config.yaml`` -- static defaults checked into the repo
  2. ``.env`` file          -- local developer overrides (not committed)
  3. Environment variables  -- set at deploy time

The YAML file groups fields into sections for readability::

    chunking:
      chunk_size: 1000
      chunk_overlap: 200

Sections are flattened one level, so every leaf key must be a
:class:`Settings` field name.
"""

from pathlib import Path
from typing import Any

import yaml

from docqa.config.settings import Settings
from docqa.utils.errors import ConfigurationError


def load_config(path: str = "config/config.yaml") -> dict[str, Any]:
    """Read *path* and return its values as a flat field-name mapping.

    A missing file yields an empty mapping.

    Raises:
        ConfigurationError: If the file is not valid YAML or names a key
            that is not a Settings field.
    """
    config_path = Path(path)
    if not config_path.exists():
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(message=f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(message=f"{path} must contain a mapping at the top level")

    flat: dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, dict):
            flat.update(value)
        else:
            flat[key] = value

    unknown = sorted(set(flat) - set(Settings.model_fields))
    if unknown:
        raise ConfigurationError(message=f"Unknown settings in {path}: {', '.join(unknown)}")
    return flat


def load_settings(path: str = "config/config.yaml") -> Settings:
    """Build :class:`Settings` from YAML defaults overlaid by .env and environment.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Fully resolved settings.
    """
    yaml_values = load_config(path)
    env_settings = Settings()
    # Fields set explicitly by .env or the environment beat YAML.
    env_values = env_settings.model_dump(include=env_settings.model_fields_set)
    return Settings(**{**yaml_values, **env_values})
