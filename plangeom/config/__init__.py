"""Settings profiles for the geometry kernel."""

from .loader import (
    describe_profile,
    get_profile_path,
    list_profiles,
    load_settings,
)

__all__ = [
    "describe_profile",
    "get_profile_path",
    "list_profiles",
    "load_settings",
]
