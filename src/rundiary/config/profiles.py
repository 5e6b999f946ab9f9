"""Configuration profile management.

Selects the configuration profile from the environment.
"""

import os
from enum import Enum
from pathlib import Path

PROFILE_ENV_VAR = "RUNDIARY_PROFILE"
DEFAULT_CONFIG_DIR = Path(__file__).parent.parent.parent.parent / "config"


class Profile(Enum):
    """Available configuration profiles."""

    DEFAULT = "default"
    DEV = "dev"
    TEST = "test"


def detect_profile() -> Profile:
    """Detect the configuration profile.

    Uses the RUNDIARY_PROFILE environment variable, falling back to the
    default profile.

    Returns:
        Profile enum value
    """
    env_profile = os.environ.get(PROFILE_ENV_VAR, "").lower()
    for profile in Profile:
        if profile.value == env_profile:
            return profile
    return Profile.DEFAULT


def get_profile_path(profile: Profile | None = None, config_dir: Path | None = None) -> Path:
    """Get path to profile configuration file.

    Args:
        profile: Profile to use, or None to auto-detect
        config_dir: Configuration directory, or None for default

    Returns:
        Path to profile YAML file
    """
    if profile is None:
        profile = detect_profile()

    if config_dir is None:
        config_dir = DEFAULT_CONFIG_DIR

    return config_dir / f"{profile.value}.yaml"


__all__ = [
    "DEFAULT_CONFIG_DIR",
    "PROFILE_ENV_VAR",
    "Profile",
    "detect_profile",
    "get_profile_path",
]
