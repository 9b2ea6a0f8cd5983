"""YAML settings profile loading.

A profile is either the name of one of the shipped profiles ("default",
"fine") or the path to a project's own YAML file. Project files only need
the fields they change; the rest come from the built-in defaults.
"""

import logging
from pathlib import Path
from typing import Union

from ..models.settings import GeometrySettings

logger = logging.getLogger(__name__)

# Profiles ship inside the package so they end up in the wheel
PROFILES_DIR = Path(__file__).parent / "profiles"

PROFILE_SUFFIXES = (".yaml", ".yml")

ProfileRef = Union[str, Path]


def list_profiles() -> list[dict[str, str]]:
    """List the shipped settings profiles.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    profiles = []

    if not PROFILES_DIR.exists():
        logger.warning(f"Profiles directory not found: {PROFILES_DIR}")
        return profiles

    for yaml_file in PROFILES_DIR.glob("*.yaml"):
        profiles.append({
            "name": yaml_file.stem,
            "description": describe_profile(yaml_file),
        })

    return sorted(profiles, key=lambda p: p["name"])


def describe_profile(yaml_path: Path) -> str:
    """Description of a profile: its first comment line, or the file name."""
    with open(yaml_path) as f:
        first_line = f.readline().strip()
    if first_line.startswith("#"):
        return first_line.lstrip("#").strip()
    return f"Settings from {yaml_path.name}"


def get_profile_path(profile: ProfileRef = "default") -> Path:
    """Resolve a profile name or YAML file path.

    Args:
        profile: Shipped profile name, or path to a .yaml/.yml file

    Returns:
        Path to the profile YAML file

    Raises:
        FileNotFoundError: If neither a file nor a shipped profile matches.
            The message lists the shipped profiles.
    """
    candidate = Path(profile)
    if candidate.suffix in PROFILE_SUFFIXES:
        if candidate.is_file():
            return candidate
        raise FileNotFoundError(f"Settings file not found: {candidate}")

    path = PROFILES_DIR / f"{profile}.yaml"
    if not path.exists():
        available = ", ".join(p["name"] for p in list_profiles()) or "none"
        raise FileNotFoundError(
            f"Settings profile '{profile}' not found (available: {available})"
        )
    return path


def load_settings(
    profile: ProfileRef = "default",
    override: dict | None = None,
) -> GeometrySettings:
    """Load a settings profile with optional overrides.

    Args:
        profile: Shipped profile name, or path to a project YAML file
        override: Optional dict of values to merge over the profile

    Returns:
        GeometrySettings instance with merged overrides

    Raises:
        FileNotFoundError: If the profile cannot be found
        pydantic.ValidationError: If a value is out of range
    """
    path = get_profile_path(profile)

    with open(path) as f:
        yaml_content = f.read()

    settings = GeometrySettings.from_yaml(yaml_content)
    logger.debug(f"Loaded settings profile '{describe_profile(path)}' from {path}")

    if override:
        settings = settings.merge_override(override)
        logger.debug(f"Applied overrides to settings profile '{profile}'")

    return settings
