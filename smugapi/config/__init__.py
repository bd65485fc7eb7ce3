"""Configuration management for smugapi."""

from smugapi.config.manager import ConfigError, ConfigManager
from smugapi.config.defaults import DEFAULT_CONFIG

__all__ = ["ConfigError", "ConfigManager", "DEFAULT_CONFIG"]
