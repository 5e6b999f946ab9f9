"""Configuration module for the running diary.

This module provides configuration loading and profile management.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass
class StorageConfig:
    """Save file configuration."""

    save_file: str = "runningdiary.dat"


@dataclass
class OverviewConfig:
    """Recent activities overview configuration."""

    recent_days: int = 6


@dataclass
class HistoryConfig:
    """Activity history configuration."""

    show_types: bool = False


@dataclass
class StatisticsConfig:
    """Statistics charts configuration."""

    timeframe: str = "7 Days"
    metric: str = "distance"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class DiaryConfig:
    """Main running diary configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    overview: OverviewConfig = field(default_factory=OverviewConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader(Protocol):
    """Protocol for configuration loading."""

    def load(self, path: Path) -> DiaryConfig:
        """Load configuration from file path."""
        ...

    def load_profile(self, profile: str) -> DiaryConfig:
        """Load configuration by profile name (dev, test)."""
        ...

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        ...


# Public API
__all__ = [
    "ConfigLoader",
    "DiaryConfig",
    "HistoryConfig",
    "LoggingConfig",
    "OverviewConfig",
    "StatisticsConfig",
    "StorageConfig",
]
