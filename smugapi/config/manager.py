"""Configuration manager for smugapi."""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from smugapi.config.defaults import DEFAULT_CONFIG, REQUIRED_FIELDS

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".smugapi"
CONFIG_NAME = "config.yaml"


class ConfigError(Exception):
    """Exception raised for configuration errors."""
    pass


def _lookup(tree: Dict[str, Any], dotted: str) -> Any:
    """Follow a dotted key through nested dicts; None when a part is absent."""
    node = tree
    for part in dotted.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node


def _assign(tree: Dict[str, Any], dotted: str, value: Any) -> None:
    """Store a value under a dotted key, replacing non-dict intermediates."""
    *parents, leaf = dotted.split(".")
    node = tree
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value


def _overlay(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Return a deep copy of base with overrides applied section by section."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _overlay(current, value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Loads, validates and gives access to the smugapi configuration.

    Configuration lives in a YAML file. Values missing from the file are
    filled in from DEFAULT_CONFIG, and values are read and written with dot
    notation ("smugmug.api_key", "http.read_timeout").

    Attributes:
        config: Dictionary containing all configuration values
        config_path: Path to the loaded configuration file

    Examples:
        >>> config = ConfigManager.load("config.yaml")
        >>> config.get("smugmug.version")
        '1.2.1'
        >>> config.get("http.read_timeout")
        60
    """

    def __init__(self, config: Dict[str, Any], config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config: Configuration dictionary
            config_path: Path to the configuration file (optional)
        """
        self.config = config
        self.config_path = config_path

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        create_if_missing: bool = True
    ) -> "ConfigManager":
        """Load and validate the configuration.

        Without an explicit path, ~/.smugapi/config.yaml and then
        ./config.yaml are tried. When no file exists and create_if_missing
        is True, a starter file holding the defaults is written so the user
        only has to fill in the required values. It does not validate until
        they do.

        Args:
            config_path: Path to configuration file (optional)
            create_if_missing: Whether to write a starter file if none is found

        Returns:
            ConfigManager instance with loaded configuration

        Raises:
            ConfigError: If the file is missing, unreadable or incomplete
        """
        path = Path(config_path) if config_path else cls._find_config_file()

        if path is not None and path.exists():
            logger.info(f"Loading configuration from: {path}")
            config = _overlay(DEFAULT_CONFIG, cls._load_yaml(path))
        elif create_if_missing:
            path = path or CONFIG_DIR / CONFIG_NAME
            config = copy.deepcopy(DEFAULT_CONFIG)
            cls._save_yaml(config, path)
            logger.info(f"No configuration file found, wrote defaults to: {path}")
        else:
            raise ConfigError(
                f"Configuration file not found: {path or CONFIG_NAME}\n"
                "Run with create_if_missing=True to create a new config file."
            )

        missing = cls._missing_fields(config)
        if missing:
            raise ConfigError(
                "Missing required configuration fields:\n"
                + "\n".join(f"  - {field}" for field in missing)
                + f"\n\nPlease provide these values in {path}"
            )

        return cls(config, path)

    @staticmethod
    def _find_config_file() -> Optional[Path]:
        """Search ~/.smugapi/config.yaml, then ./config.yaml."""
        for candidate in (CONFIG_DIR / CONFIG_NAME, Path.cwd() / CONFIG_NAME):
            if candidate.exists():
                logger.debug(f"Found config file: {candidate}")
                return candidate

        logger.debug("No config file found in standard locations")
        return None

    @staticmethod
    def _load_yaml(path: Path) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        try:
            with open(path, 'r') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Failed to parse YAML configuration: {path}\n"
                f"Error: {e}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file: {path}\n"
                f"Error: {e}"
            ) from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError(
                f"Invalid configuration file: {path}\n"
                "Configuration must be a YAML dictionary."
            )
        return config

    @staticmethod
    def _save_yaml(config: Dict[str, Any], path: Path) -> None:
        """Write the configuration as block-style YAML, keeping key order.

        Raises:
            ConfigError: If file cannot be saved
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(yaml.safe_dump(
                config,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True
            ))
        except OSError as e:
            raise ConfigError(
                f"Failed to save configuration to: {path}\n"
                f"Error: {e}"
            ) from e

    @staticmethod
    def _missing_fields(config: Dict[str, Any]) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not _lookup(config, name)]

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "smugmug.api_key")
            default: Value returned when the key is absent or null

        Examples:
            >>> config.get("smugmug.secure")
            True
            >>> config.get("nonexistent.key", "default_value")
            'default_value'
        """
        value = _lookup(self.config, key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation."""
        _assign(self.config, key, value)

    def save(self, path: Optional[str] = None) -> None:
        """Write the configuration back to disk.

        Args:
            path: Target file; defaults to the file it was loaded from

        Raises:
            ConfigError: If there is neither a path nor a loaded file
        """
        target = Path(path) if path else self.config_path
        if target is None:
            raise ConfigError(
                "No configuration path specified. "
                "Provide a path or load config from a file first."
            )

        self._save_yaml(self.config, target)
        logger.info(f"Configuration saved to: {target}")

    def to_dict(self) -> Dict[str, Any]:
        """Return a copy of the configuration dictionary."""
        return copy.deepcopy(self.config)

    def __repr__(self) -> str:
        """Return string representation of configuration."""
        path_str = f" from {self.config_path}" if self.config_path else ""
        return f"<ConfigManager{path_str}>"
