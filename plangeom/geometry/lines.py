"""Infinite lines, bounded segments and their distance/intersection queries.

Degenerate input (coincident points, zero-length segments, parallel lines)
yields ``None`` or a well-defined distance, never NaN.
"""

from __future__ import annotations

import logging
from typing import Iterator, Literal, Sequence

from ..models.shapes import Line2D, LineSegment2D, Polygon2D, Side, Vec2
from .vectors import (
    EPSILON,
    add_vec2,
    approx_eq_vec2,
    cross_vec2,
    dist_vec2,
    dot_vec2,
    len_vec2,
    perpendicular_ccw,
    scale_add_vec2,
    scale_vec2,
    sub_vec2,
)

logger = logging.getLogger(__name__)

COLINEAR_EPSILON = 1e-9
PARALLEL_EPSILON = 1e-9
# Below this a direction vector is treated as zero-length
ZERO_LENGTH = 1e-12


def line_from_points(start: Vec2, end: Vec2) -> Line2D | None:
    """Create the infinite line through two points.

    Returns:
        Line2D, or None when the points coincide
    """
    delta = sub_vec2(end, start)
    length = len_vec2(delta)
    if length < ZERO_LENGTH:
        return None
    return Line2D(point=start, direction=scale_vec2(delta, 1.0 / length))


def line_from_segment(segment: LineSegment2D) -> Line2D | None:
    return line_from_points(segment.start, segment.end)


def line_intersection(
    line1: Line2D,
    line2: Line2D,
    parallel_epsilon: float = PARALLEL_EPSILON,
) -> Vec2 | None:
    """Intersect two infinite lines.

    Returns:
        Intersection point, or None when the lines are parallel
    """
    denom = cross_vec2(line1.direction, line2.direction)
    if abs(denom) < parallel_epsilon:
        return None
    t = cross_vec2(sub_vec2(line2.point, line1.point), line2.direction) / denom
    return scale_add_vec2(line1.point, line1.direction, t)


def distance_to_infinite_line(point: Vec2, line: Line2D) -> float:
    return abs(cross_vec2(line.direction, sub_vec2(point, line.point)))


def signed_distance_to_line(point: Vec2, line: Line2D) -> float:
    """Distance to the line, positive on its left (CCW normal) side."""
    return cross_vec2(line.direction, sub_vec2(point, line.point))


def project_point_onto_line(point: Vec2, line: Line2D) -> Vec2:
    t = dot_vec2(sub_vec2(point, line.point), line.direction)
    return scale_add_vec2(line.point, line.direction, t)


def closest_point_on_segment(point: Vec2, segment: LineSegment2D) -> Vec2:
    """Closest point on the segment; the start point for degenerate segments."""
    delta = sub_vec2(segment.end, segment.start)
    length_sq = dot_vec2(delta, delta)
    if length_sq == 0:
        return segment.start
    t = dot_vec2(sub_vec2(point, segment.start), delta) / length_sq
    t = max(0.0, min(1.0, t))
    return scale_add_vec2(segment.start, delta, t)


def distance_to_line_segment(point: Vec2, segment: LineSegment2D) -> float:
    return dist_vec2(point, closest_point_on_segment(point, segment))


def is_point_near_line(
    point: Vec2,
    segment: LineSegment2D,
    tolerance: float = 5.0,
) -> bool:
    """Check whether a point lies within ``tolerance`` of a segment."""
    return distance_to_line_segment(point, segment) <= tolerance


def offset_line(line: Line2D, distance: float) -> Line2D:
    """Shift a line along its left normal (negative distance shifts right)."""
    normal = perpendicular_ccw(line.direction)
    return Line2D(point=scale_add_vec2(line.point, normal, distance), direction=line.direction)


def bounding_offset_line(
    line: Line2D,
    points: Sequence[Vec2],
    side: Side = "left",
) -> Line2D | None:
    """Parallel to ``line`` through the extreme point of a set on one side.

    Every point lies on the opposite side of the returned line or on it, so
    the result bounds the point set from the requested ``side``.

    Args:
        line: Reference line giving the direction
        points: Point set to bound
        side: "left" bounds from the left normal side, "right" from the right

    Returns:
        Bounding line, or None for an empty point set
    """
    if not points:
        return None
    offsets = [signed_distance_to_line(p, line) for p in points]
    extreme = max(offsets) if side == "left" else min(offsets)
    return offset_line(line, extreme)


def segments_share_endpoint(
    seg1: LineSegment2D,
    seg2: LineSegment2D,
    epsilon: float = EPSILON,
) -> bool:
    return (
        approx_eq_vec2(seg1.start, seg2.start, epsilon)
        or approx_eq_vec2(seg1.start, seg2.end, epsilon)
        or approx_eq_vec2(seg1.end, seg2.start, epsilon)
        or approx_eq_vec2(seg1.end, seg2.end, epsilon)
    )


def orientation(p: Vec2, q: Vec2, r: Vec2, epsilon: float = COLINEAR_EPSILON) -> Literal[0, 1, 2]:
    """Orientation of the triple: 0 collinear, 1 clockwise, 2 counter-clockwise."""
    val = (q[1] - p[1]) * (r[0] - q[0]) - (q[0] - p[0]) * (r[1] - q[1])
    if abs(val) < epsilon:
        return 0
    return 1 if val > 0 else 2


def _on_segment(p: Vec2, q: Vec2, r: Vec2, epsilon: float) -> bool:
    """Whether ``q`` lies in the bounding box of segment p-r."""
    return (
        min(p[0], r[0]) - epsilon <= q[0] <= max(p[0], r[0]) + epsilon
        and min(p[1], r[1]) - epsilon <= q[1] <= max(p[1], r[1]) + epsilon
    )


def segments_intersect(
    seg1: LineSegment2D,
    seg2: LineSegment2D,
    epsilon: float = COLINEAR_EPSILON,
) -> bool:
    """Whether two closed segments share at least one point.

    Touching at an endpoint and collinear overlap both count.
    """
    return segment_points_intersect(seg1.start, seg1.end, seg2.start, seg2.end, epsilon)


def segment_points_intersect(
    p1: Vec2,
    q1: Vec2,
    p2: Vec2,
    q2: Vec2,
    epsilon: float = COLINEAR_EPSILON,
) -> bool:
    """``segments_intersect`` on raw endpoints, for tight loops."""
    o1 = orientation(p1, q1, p2, epsilon)
    o2 = orientation(p1, q1, q2, epsilon)
    o3 = orientation(p2, q2, p1, epsilon)
    o4 = orientation(p2, q2, q1, epsilon)

    if o1 != o2 and o3 != o4:
        return True

    if o1 == 0 and _on_segment(p1, p2, q1, epsilon):
        return True
    if o2 == 0 and _on_segment(p1, q2, q1, epsilon):
        return True
    if o3 == 0 and _on_segment(p2, p1, q2, epsilon):
        return True
    if o4 == 0 and _on_segment(p2, q1, q2, epsilon):
        return True

    return False


def polygon_edges(polygon: Polygon2D) -> Iterator[LineSegment2D]:
    """Yield the edges of a closed polygon, closing edge included."""
    points = polygon.points
    n = len(points)
    if n < 2:
        return
    for i in range(n):
        yield LineSegment2D(points[i], points[(i + 1) % n])


def polygon_from_line_intersections(lines: Sequence[Line2D]) -> Polygon2D:
    """Build a polygon from consecutive line intersections.

    Vertex ``i`` is the intersection of ``lines[i - 1]`` and ``lines[i]``.
    Parallel neighbours contribute no vertex.
    """
    points = []
    n = len(lines)
    for i in range(n):
        intersection = line_intersection(lines[(i - 1) % n], lines[i])
        if intersection is not None:
            points.append(intersection)
        else:
            logger.debug(f"Skipping parallel line pair at index {i}")
    return Polygon2D(tuple(points))


def segment_point_at(segment: LineSegment2D, t: float) -> Vec2:
    """Point at parameter ``t`` along the segment (0 = start, 1 = end)."""
    return add_vec2(segment.start, scale_vec2(sub_vec2(segment.end, segment.start), t))
