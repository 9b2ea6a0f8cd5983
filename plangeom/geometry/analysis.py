"""Shape analysis: hulls, oriented bounding boxes, splitting and line spans.

Hulls are returned counter-clockwise without collinear vertices. Line and
segment spans against polygons use Shapely's overlay so that holes and
tangent touches are handled robustly; splitting goes through the clipping
engine like the other boolean operations.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Sequence

import numpy as np
from shapely.geometry import LineString
from shapely.geometry.base import BaseGeometry
from shapely.validation import make_valid

from ..models.shapes import (
    Line2D,
    LineSegment2D,
    MinimumBoundingBox,
    Polygon2D,
    PolygonWithHoles2D,
    SegmentPolygonIntersection,
    SplitPiece,
    Vec2,
)
from .conversions import PolygonInput, to_shapely
from .engine import BooleanOp, GeometryEngine, resolve_engine
from .lines import ZERO_LENGTH, segment_point_at
from .polygon_core import calculate_polygon_area, polygon_bounds
from .vectors import (
    EPSILON,
    approx_eq_vec2,
    cross_vec2,
    dist_vec2,
    dot_vec2,
    norm_vec2,
    perpendicular_ccw,
    scale_add_vec2,
    sub_vec2,
)

logger = logging.getLogger(__name__)

# Relative tolerance for comparing box areas and side lengths
BOX_TOLERANCE = 1e-9
# Spans closer than this (in segment parameter space) are merged
SPAN_MERGE_EPSILON = 1e-9


def _turn(o: Vec2, a: Vec2, b: Vec2) -> float:
    return cross_vec2(sub_vec2(a, o), sub_vec2(b, o))


def _sorted_unique(points: Sequence[Vec2], epsilon: float) -> list[Vec2]:
    result: list[Vec2] = []
    for p in sorted((float(x), float(y)) for x, y in points):
        if not result or not approx_eq_vec2(result[-1], p, epsilon):
            result.append(p)
    return result


def convex_hull(points: Sequence[Vec2], epsilon: float = EPSILON) -> Polygon2D:
    """Convex hull of a point set (Andrew's monotone chain).

    Args:
        points: Any point set, order irrelevant
        epsilon: Tolerance for merging duplicates and dropping collinear points

    Returns:
        Counter-clockwise hull starting at the lowest-leftmost point.
        Fewer than 3 distinct points are returned as-is.
    """
    unique = _sorted_unique(points, epsilon)
    if len(unique) < 3:
        return Polygon2D(tuple(unique))

    def half(chain_points: Sequence[Vec2]) -> list[Vec2]:
        chain: list[Vec2] = []
        for p in chain_points:
            while len(chain) >= 2 and _turn(chain[-2], chain[-1], p) <= epsilon:
                chain.pop()
            chain.append(p)
        return chain

    lower = half(unique)
    upper = half(list(reversed(unique)))
    hull = lower[:-1] + upper[:-1]
    if len(hull) < 3:
        # All points collinear: keep the two extremes
        return Polygon2D((unique[0], unique[-1]))
    return Polygon2D(tuple(hull))


def _drop_collinear(hull: list[Vec2], epsilon: float) -> list[Vec2]:
    """Remove cyclic hull vertices that lie on the chord of their neighbours."""
    changed = True
    while changed and len(hull) > 3:
        changed = False
        n = len(hull)
        for i in range(n):
            if _turn(hull[i - 1], hull[i], hull[(i + 1) % n]) <= epsilon:
                del hull[i]
                changed = True
                break
    return hull


def _rotate_to_lowest(points: list[Vec2]) -> list[Vec2]:
    start = min(range(len(points)), key=points.__getitem__)
    return points[start:] + points[:start]


def convex_hull_of_polygon(polygon: Polygon2D, epsilon: float = EPSILON) -> Polygon2D:
    """Convex hull of a simple polygon in linear time (Melkman).

    The boundary must be simple; for arbitrary point sets use ``convex_hull``.
    Like ``convex_hull``, the result is counter-clockwise and starts at the
    lowest-leftmost vertex.
    """
    points: list[Vec2] = []
    for p in polygon.points:
        if not points or not approx_eq_vec2(points[-1], p, epsilon):
            points.append(p)
    if len(points) > 1 and approx_eq_vec2(points[0], points[-1], epsilon):
        points.pop()

    n = len(points)
    if n < 3:
        return Polygon2D(tuple(points))

    # Start from a vertex that is certainly on the hull
    points = _rotate_to_lowest(points)

    # Collapse a collinear leading run into its two extremes
    i = 2
    while i < n and abs(_turn(points[0], points[1], points[i])) <= epsilon:
        i += 1
    if i == n:
        return convex_hull(points, epsilon)

    run = points[:i]
    axis = sub_vec2(points[1], points[0])
    a = min(run, key=lambda p: dot_vec2(p, axis))
    b = max(run, key=lambda p: dot_vec2(p, axis))
    c = points[i]

    if _turn(a, b, c) > 0:
        hull = deque([c, a, b, c])
    else:
        hull = deque([c, b, a, c])

    for v in points[i + 1:]:
        if _turn(hull[-2], hull[-1], v) > epsilon and _turn(hull[0], hull[1], v) > epsilon:
            continue
        while len(hull) > 2 and _turn(hull[-2], hull[-1], v) <= epsilon:
            hull.pop()
        hull.append(v)
        while len(hull) > 2 and _turn(hull[0], hull[1], v) <= epsilon:
            hull.popleft()
        hull.appendleft(v)

    # The deque never re-checks the vertices where it wraps around
    result = _drop_collinear(list(hull)[:-1], epsilon)
    return Polygon2D(tuple(_rotate_to_lowest(result)))


def minimum_area_bounding_box(polygon: Polygon2D) -> MinimumBoundingBox:
    """Minimum-area oriented rectangle around a polygon (rotating calipers).

    Every hull edge is tried as a box side. The hull is rotated so the edge
    is axis aligned and the axis-aligned extents give the box size. The
    first edge reaching the minimum area wins.

    Returns:
        MinimumBoundingBox with ``angle`` in [0, pi). Degenerate input gives
        a zero box with angle 0 and direction (1, 0).
    """
    hull = convex_hull(polygon.points)
    if len(hull.points) < 3:
        return MinimumBoundingBox(angle=0.0, size=(0.0, 0.0), smallest_direction=(1.0, 0.0))

    coords = np.asarray(hull.points, dtype=float)
    edges = np.roll(coords, -1, axis=0) - coords
    angles = np.arctan2(edges[:, 1], edges[:, 0])
    cos = np.cos(angles)[:, None]
    sin = np.sin(angles)[:, None]

    # Row k: hull coordinates in the frame of edge k
    along = cos * coords[:, 0] + sin * coords[:, 1]
    across = -sin * coords[:, 0] + cos * coords[:, 1]
    widths = along.max(axis=1) - along.min(axis=1)
    heights = across.max(axis=1) - across.min(axis=1)
    areas = widths * heights

    best_area = areas.min()
    tolerance = BOX_TOLERANCE * max(1.0, float(best_area))
    k = int(np.flatnonzero(areas <= best_area + tolerance)[0])

    width, height = float(widths[k]), float(heights[k])
    box_angle = float(angles[k]) % math.pi
    if box_angle >= math.pi:
        box_angle = 0.0
    edge_dir = (math.cos(box_angle), math.sin(box_angle))

    side_tolerance = BOX_TOLERANCE * max(1.0, width, height)
    if height < width - side_tolerance:
        smallest = perpendicular_ccw(edge_dir)
    else:
        smallest = edge_dir

    return MinimumBoundingBox(angle=box_angle, size=(width, height), smallest_direction=smallest)


def _half_plane(line: Line2D, reach: float, left: bool) -> Polygon2D:
    normal = perpendicular_ccw(line.direction)
    if not left:
        normal = (-normal[0], -normal[1])
    a = scale_add_vec2(line.point, line.direction, -reach)
    b = scale_add_vec2(line.point, line.direction, reach)
    return Polygon2D((a, b, scale_add_vec2(b, normal, reach), scale_add_vec2(a, normal, reach)))


def _reach(polygon: Polygon2D, point: Vec2) -> float:
    """Half-extent large enough to cover the polygon from ``point``."""
    bounds = polygon_bounds(polygon)
    return 2.0 * (bounds.width + bounds.height + dist_vec2(point, bounds.center)) + 1.0


def split_polygon_by_line(
    polygon: Polygon2D,
    line: Line2D,
    engine: GeometryEngine | None = None,
) -> list[SplitPiece]:
    """Split a polygon along an infinite line.

    The polygon is intersected with the half-planes on both sides of the
    line. "left" is the side of the line's counter-clockwise normal.

    Args:
        polygon: Polygon to split
        line: Directed split line
        engine: Clipping engine (defaults to the process-wide engine)

    Returns:
        Pieces tagged with their side, left pieces first. A line that
        misses the polygon yields a single piece. Pieces no larger than the
        engine's ``intersection_area_epsilon`` are dropped as slivers.
    """
    if len(polygon.points) < 3:
        return []

    engine = resolve_engine(engine)
    min_area = engine.settings.tolerances.intersection_area_epsilon
    reach = _reach(polygon, line.point)
    pieces: list[SplitPiece] = []
    for side, left in (("left", True), ("right", False)):
        half_plane = _half_plane(line, reach, left)
        for result in engine.execute(BooleanOp.INTERSECTION, [polygon], [half_plane]):
            if calculate_polygon_area(result.outer) > min_area:
                pieces.append(SplitPiece(polygon=result.outer, side=side))

    logger.debug(f"Split polygon with {len(polygon.points)} points into {len(pieces)} pieces")
    return pieces


def _line_parts(geometry: BaseGeometry) -> list[LineString]:
    if geometry.is_empty:
        return []
    if isinstance(geometry, LineString):
        return [geometry]
    if hasattr(geometry, "geoms"):
        parts = []
        for geom in geometry.geoms:
            parts.extend(_line_parts(geom))
        return parts
    # Points from tangent touches carry no length
    return []


def _merge_spans(spans: list[tuple[float, float]], epsilon: float) -> list[tuple[float, float]]:
    merged: list[tuple[float, float]] = []
    for t0, t1 in sorted(spans):
        if t1 - t0 <= epsilon:
            continue
        if merged and t0 <= merged[-1][1] + epsilon:
            merged[-1] = (merged[-1][0], max(merged[-1][1], t1))
        else:
            merged.append((t0, t1))
    return merged


def _overlay_spans(
    polygon: PolygonInput,
    start: Vec2,
    end: Vec2,
    origin: Vec2,
    axis: Vec2,
) -> list[tuple[float, float]]:
    """Parameter ranges of segment start-end inside the polygon.

    Parameters are measured along ``axis`` from ``origin``.
    """
    shape = to_shapely(polygon)
    if shape.is_empty:
        return []
    if not shape.is_valid:
        shape = make_valid(shape)

    overlay = shape.intersection(LineString([start, end]))
    spans = []
    for part in _line_parts(overlay):
        params = [dot_vec2(sub_vec2(p, origin), axis) for p in part.coords]
        spans.append((min(params), max(params)))
    return spans


def intersect_line_segment_with_polygon(
    segment: LineSegment2D,
    polygon: PolygonInput,
) -> SegmentPolygonIntersection:
    """Find the parts of a segment inside a polygon.

    Holes of a ``PolygonWithHoles2D`` produce gaps. Spans are parameters
    in [0, 1] along the segment, ordered and merged.
    """
    length = segment.length
    if length < ZERO_LENGTH:
        return SegmentPolygonIntersection()

    delta = sub_vec2(segment.end, segment.start)
    axis = (delta[0] / length / length, delta[1] / length / length)
    raw = _overlay_spans(polygon, segment.start, segment.end, segment.start, axis)
    spans = [
        (max(0.0, t0), min(1.0, t1))
        for t0, t1 in _merge_spans(raw, SPAN_MERGE_EPSILON)
    ]
    return SegmentPolygonIntersection(
        spans=tuple(spans),
        segments=tuple(
            LineSegment2D(segment_point_at(segment, t0), segment_point_at(segment, t1))
            for t0, t1 in spans
        ),
    )


def intersect_line_with_polygon(line: Line2D, polygon: PolygonInput) -> list[LineSegment2D]:
    """Pieces of an infinite line inside a polygon, ordered along the line."""
    outer = polygon.outer if isinstance(polygon, PolygonWithHoles2D) else polygon
    if len(outer.points) < 3:
        return []

    reach = _reach(outer, line.point)
    start = scale_add_vec2(line.point, line.direction, -reach)
    end = scale_add_vec2(line.point, line.direction, reach)
    raw = _overlay_spans(polygon, start, end, line.point, line.direction)

    epsilon = SPAN_MERGE_EPSILON * max(1.0, reach)
    return [
        LineSegment2D(
            scale_add_vec2(line.point, line.direction, t0),
            scale_add_vec2(line.point, line.direction, t1),
        )
        for t0, t1 in _merge_spans(raw, epsilon)
    ]


def polygon_diameter(polygon: Polygon2D, direction: Vec2) -> float:
    """Extent of the polygon projected onto ``direction``.

    Raises:
        ValueError: If ``direction`` is the zero vector
    """
    if not polygon.points:
        return 0.0
    axis = np.asarray(norm_vec2(direction), dtype=float)
    projected = np.asarray(polygon.points, dtype=float) @ axis
    return float(projected.max() - projected.min())
