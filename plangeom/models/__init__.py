"""Value types and settings models for plangeom."""

from .settings import (
    DEFAULT_SETTINGS,
    ClipperSettings,
    GeometrySettings,
    ToleranceSettings,
)
from .shapes import (
    Area,
    Bounds2D,
    Length,
    Line2D,
    LineSegment2D,
    MinimumBoundingBox,
    Polygon2D,
    PolygonWithHoles2D,
    SegmentPolygonIntersection,
    Side,
    SplitPiece,
    Vec2,
    Vec3,
    Volume,
    Winding,
    centimeters,
    cubic_meters,
    meters,
    millimeters,
    square_meters,
)

__all__ = [
    # Shapes
    "Vec2",
    "Vec3",
    "Length",
    "Area",
    "Volume",
    "Side",
    "Winding",
    "Line2D",
    "LineSegment2D",
    "Polygon2D",
    "PolygonWithHoles2D",
    "MinimumBoundingBox",
    "SplitPiece",
    "SegmentPolygonIntersection",
    "Bounds2D",
    # Units
    "millimeters",
    "centimeters",
    "meters",
    "square_meters",
    "cubic_meters",
    # Settings
    "GeometrySettings",
    "ToleranceSettings",
    "ClipperSettings",
    "DEFAULT_SETTINGS",
]
