"""plangeom - 2D polygon geometry kernel for floor-plan editing.

This package provides:
- Vector, line and segment primitives
- Polygon area, winding, containment and self-intersection checks
- Boolean operations and offsets backed by pyclipper
- Hulls, minimum-area bounding boxes, splitting and line spans
- Canonical shape keys for grouping congruent polygons

Boolean operations need a loaded engine. The process-wide default is
created on first use; pass ``engine=`` to use a different profile:
    from plangeom import load_engine, load_settings, union_polygons
    engine = load_engine(load_settings("fine"))
    union_polygons([a, b], engine=engine)
"""

__version__ = "0.1.0"

from .config import list_profiles, load_settings
from .errors import BackendUnavailableError, DegeneratePolygonError, GeometryError
from .geometry.analysis import (
    convex_hull,
    convex_hull_of_polygon,
    intersect_line_segment_with_polygon,
    intersect_line_with_polygon,
    minimum_area_bounding_box,
    polygon_diameter,
    split_polygon_by_line,
)
from .geometry.boolean_ops import (
    are_polygons_intersecting,
    intersect_polygons,
    offset_polygon,
    polygon_edge_offset,
    subtract_polygons,
    union_polygons,
    union_self,
)
from .geometry.conversions import from_shapely, to_shapely
from .geometry.engine import BooleanOp, GeometryEngine, get_default_engine, load_engine
from .geometry.fingerprint import canonical_polygon_key
from .geometry.polygon_core import (
    calculate_polygon_area,
    calculate_polygon_with_holes_area,
    ensure_clockwise,
    ensure_counter_clockwise,
    has_self_intersection,
    is_point_in_polygon,
    is_point_strictly_in_polygon,
    polygon_is_clockwise,
    simplify_polygon,
    would_closing_polygon_self_intersect,
    would_polygon_self_intersect,
)
from .models import (
    Bounds2D,
    GeometrySettings,
    Line2D,
    LineSegment2D,
    MinimumBoundingBox,
    Polygon2D,
    PolygonWithHoles2D,
    SegmentPolygonIntersection,
    SplitPiece,
)

__all__ = [
    "__version__",
    # Types
    "Bounds2D",
    "Line2D",
    "LineSegment2D",
    "MinimumBoundingBox",
    "Polygon2D",
    "PolygonWithHoles2D",
    "SegmentPolygonIntersection",
    "SplitPiece",
    # Errors
    "GeometryError",
    "DegeneratePolygonError",
    "BackendUnavailableError",
    # Settings and engine
    "GeometrySettings",
    "list_profiles",
    "load_settings",
    "BooleanOp",
    "GeometryEngine",
    "load_engine",
    "get_default_engine",
    # Polygon core
    "calculate_polygon_area",
    "calculate_polygon_with_holes_area",
    "polygon_is_clockwise",
    "ensure_clockwise",
    "ensure_counter_clockwise",
    "is_point_in_polygon",
    "is_point_strictly_in_polygon",
    "simplify_polygon",
    "has_self_intersection",
    "would_closing_polygon_self_intersect",
    "would_polygon_self_intersect",
    # Boolean operations
    "union_polygons",
    "intersect_polygons",
    "subtract_polygons",
    "union_self",
    "are_polygons_intersecting",
    "offset_polygon",
    "polygon_edge_offset",
    # Analysis
    "convex_hull",
    "convex_hull_of_polygon",
    "minimum_area_bounding_box",
    "split_polygon_by_line",
    "intersect_line_segment_with_polygon",
    "intersect_line_with_polygon",
    "polygon_diameter",
    "canonical_polygon_key",
    # Shapely interop
    "to_shapely",
    "from_shapely",
]
