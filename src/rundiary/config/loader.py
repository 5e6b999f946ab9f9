"""YAML configuration loader with inheritance support.

Supports:
- Loading YAML config files
- Config inheritance via 'extends' key
- Deep merging of nested config
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from . import (
    DiaryConfig,
    HistoryConfig,
    LoggingConfig,
    OverviewConfig,
    StatisticsConfig,
    StorageConfig,
)
from .profiles import DEFAULT_CONFIG_DIR, detect_profile, get_profile_path

logger = logging.getLogger(__name__)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Values from override take precedence. Nested dicts are merged recursively.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_with_inheritance(path: Path) -> dict[str, Any]:
    """Load YAML file with inheritance support.

    If the file contains an 'extends' key, the base config is loaded first
    and merged with the current config.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        config = yaml.safe_load(f) or {}

    if "extends" in config:
        base_name = config.pop("extends")
        base_path = path.parent / base_name
        base_config = load_yaml_with_inheritance(base_path)
        config = deep_merge(base_config, config)

    return config


def dict_to_config(data: dict[str, Any]) -> DiaryConfig:
    """Convert raw dict to typed DiaryConfig dataclass."""
    diary_data = data.get("rundiary", {}) or {}

    # YAML sections left empty load as None
    def safe_get(key: str) -> dict[str, Any]:
        value = diary_data.get(key, {})
        return value if value is not None else {}

    return DiaryConfig(
        storage=StorageConfig(**safe_get("storage")),
        overview=OverviewConfig(**safe_get("overview")),
        history=HistoryConfig(**safe_get("history")),
        statistics=StatisticsConfig(**safe_get("statistics")),
        logging=LoggingConfig(**safe_get("logging")),
    )


class YAMLConfigLoader:
    """YAML configuration loader implementation."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize loader with optional config directory.

        Args:
            config_dir: Directory containing config files.
                        Defaults to 'config' relative to project root.
        """
        self._config_dir = config_dir if config_dir is not None else DEFAULT_CONFIG_DIR

    def load(self, path: Path) -> DiaryConfig:
        """Load configuration from file path.

        Args:
            path: Path to YAML config file

        Returns:
            Parsed DiaryConfig
        """
        raw_config = load_yaml_with_inheritance(path)
        return dict_to_config(raw_config)

    def load_profile(self, profile: str) -> DiaryConfig:
        """Load configuration by profile name.

        Args:
            profile: Profile name (e.g., 'default', 'dev')

        Returns:
            Parsed DiaryConfig for the profile
        """
        config_path = self._config_dir / f"{profile}.yaml"
        return self.load(config_path)

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        return self._config_dir


def load_config(
    path: str | Path | None = None,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> DiaryConfig:
    """Load running diary configuration.

    Args:
        path: Direct path to config file (takes precedence)
        profile: Profile name if path not given
        config_dir: Directory holding profile files

    Returns:
        Parsed DiaryConfig. Built-in defaults when neither path nor profile
        is given and the detected profile has no file.

    Examples:
        >>> config = load_config(profile="dev")
        >>> config = load_config(path="/path/to/config.yaml")
    """
    loader = YAMLConfigLoader(config_dir)

    if path is not None:
        return loader.load(Path(path))
    if profile is not None:
        return loader.load_profile(profile)

    detected = detect_profile()
    profile_path = get_profile_path(detected, loader.get_config_dir())
    if not profile_path.exists():
        logger.debug(f"No config file for profile '{detected.value}', using defaults")
        return DiaryConfig()
    return loader.load(profile_path)


__all__ = [
    "YAMLConfigLoader",
    "deep_merge",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
]
