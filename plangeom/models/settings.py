"""Numeric tolerances and backend parameters for the geometry kernel."""

from typing import Dict

from pydantic import BaseModel, Field


class ToleranceSettings(BaseModel):
    """Tolerances applied to results of the clipping backend."""

    intersection_area_epsilon: float = Field(
        default=1e-6, ge=0,
        description="Area (mm²) below which an overlap or split piece is a sliver"
    )


class ClipperSettings(BaseModel):
    """Parameters for the integer-scaled clipping backend."""

    scale: float = Field(
        default=1000.0, gt=0, le=1e9,
        description="Multiplier from millimeters to backend integer units"
    )
    miter_limit: float = Field(
        default=2.0, ge=1.0, description="Miter limit for offset joins (multiples of delta)"
    )
    arc_tolerance: float = Field(
        default=0.25, gt=0, description="Arc approximation tolerance for offsets"
    )


class GeometrySettings(BaseModel):
    """Complete settings profile for the kernel.

    Profiles can be overridden at load time via JSON merge patch.
    """

    tolerances: ToleranceSettings = Field(
        default_factory=ToleranceSettings, description="Sliver tolerances"
    )
    clipper: ClipperSettings = Field(
        default_factory=ClipperSettings, description="Clipping backend parameters"
    )

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "GeometrySettings":
        """Load settings from YAML string."""
        import yaml
        data = yaml.safe_load(yaml_content) or {}
        return cls(**data)

    def merge_override(self, override: Dict) -> "GeometrySettings":
        """Merge override dict into these settings (JSON merge patch semantics)."""
        import json
        base = json.loads(self.model_dump_json())
        _deep_merge(base, override)
        return GeometrySettings(**base)


def _deep_merge(base: Dict, override: Dict) -> None:
    """Deep merge override into base dict (modifies base in place)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


DEFAULT_SETTINGS = GeometrySettings()
