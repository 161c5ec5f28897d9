"""Configuration module — exports Settings and the YAML-aware loaders."""

from docqa.config.loader import load_config, load_settings
from docqa.config.settings import Settings

__all__ = ["Settings", "load_config", "load_settings"]
