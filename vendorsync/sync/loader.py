"""
Profile Loader — Load and validate sync profile YAML files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..validation import ConfigurationError
from .models import ProfilesFile, SyncProfile
from .profiles import BUILTIN_PROFILES

logger = logging.getLogger(__name__)


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML file and return its contents."""
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_profiles_file(path: Path) -> Dict[str, SyncProfile]:
    """
    Load user-defined profiles from a YAML file.

    Raises:
        ConfigurationError: file is missing, unparsable, or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Profiles file not found: {path}")

    try:
        data = load_yaml(path) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Profiles file must contain a mapping: {path}")

    try:
        parsed = ProfilesFile(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid profiles in {path}: {e}") from e

    profiles: Dict[str, SyncProfile] = {}
    for profile in parsed.profiles:
        if profile.name in profiles:
            raise ConfigurationError(f"Duplicate profile '{profile.name}' in {path}")
        profiles[profile.name] = profile

    logger.debug(f"Loaded {len(profiles)} profile(s) from {path}")
    return profiles


def load_profiles(path: Optional[Path] = None) -> Dict[str, SyncProfile]:
    """
    Get all known profiles.

    Built-ins come first; profiles from ``path`` override built-ins that share
    a name.
    """
    profiles = dict(BUILTIN_PROFILES)
    if path is not None:
        for name, profile in load_profiles_file(path).items():
            if name in profiles:
                logger.info(f"Profile '{name}' overridden by {path}")
            profiles[name] = profile
    return profiles


def get_profile(name: str, path: Optional[Path] = None) -> SyncProfile:
    """Look up a single profile by name."""
    profiles = load_profiles(path)
    try:
        return profiles[name]
    except KeyError:
        known = ", ".join(sorted(profiles))
        raise ConfigurationError(f"Unknown profile: {name}. Known: {known}") from None
