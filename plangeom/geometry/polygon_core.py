"""Area, winding, containment and validity predicates for simple polygons.

Fill convention: a single boundary is evaluated with the even-odd rule.
Points on the boundary are inside for ``is_point_in_polygon`` and outside
for ``is_point_strictly_in_polygon``. For simple polygons this agrees with
the non-zero rule used by the boolean operations.

Polygons with fewer than 3 points are degenerate: zero area, never
containing anything and never self-intersecting.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..models.shapes import (
    Area,
    Bounds2D,
    LineSegment2D,
    Polygon2D,
    PolygonWithHoles2D,
    Vec2,
    Winding,
)
from .lines import (
    COLINEAR_EPSILON,
    distance_to_line_segment,
    polygon_edges,
    segment_points_intersect,
    segments_intersect,
    segments_share_endpoint,
)
from .vectors import EPSILON, approx_eq_vec2

logger = logging.getLogger(__name__)

SIMPLIFY_TOLERANCE = 0.01
# Absolute distance (mm) at which a point counts as on the boundary
BOUNDARY_EPSILON = 1e-9


def signed_polygon_area(polygon: Polygon2D) -> Area:
    """Shoelace area; positive for counter-clockwise polygons."""
    points = polygon.points
    n = len(points)
    if n < 3:
        return 0.0
    total = 0.0
    for i in range(n):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % n]
        total += x0 * y1 - x1 * y0
    return total / 2


def calculate_polygon_area(polygon: Polygon2D) -> Area:
    return abs(signed_polygon_area(polygon))


def calculate_polygon_with_holes_area(polygon: PolygonWithHoles2D) -> Area:
    area = calculate_polygon_area(polygon.outer)
    for hole in polygon.holes:
        area -= calculate_polygon_area(hole)
    return area


def polygon_winding(polygon: Polygon2D) -> Winding:
    area = signed_polygon_area(polygon)
    if area > 0:
        return Winding.COUNTER_CLOCKWISE
    if area < 0:
        return Winding.CLOCKWISE
    return Winding.DEGENERATE


def polygon_is_clockwise(polygon: Polygon2D) -> bool:
    return polygon_winding(polygon) is Winding.CLOCKWISE


def ensure_clockwise(polygon: Polygon2D) -> Polygon2D:
    if polygon_winding(polygon) is Winding.COUNTER_CLOCKWISE:
        return polygon.reversed()
    return polygon


def ensure_counter_clockwise(polygon: Polygon2D) -> Polygon2D:
    if polygon_winding(polygon) is Winding.CLOCKWISE:
        return polygon.reversed()
    return polygon


def polygon_bounds(polygon: Polygon2D) -> Bounds2D:
    return Bounds2D.from_points(polygon.points)


def _is_on_boundary(point: Vec2, polygon: Polygon2D, epsilon: float) -> bool:
    return any(
        distance_to_line_segment(point, edge) <= epsilon
        for edge in polygon_edges(polygon)
    )


def _crossing_number_inside(point: Vec2, points: Sequence[Vec2]) -> bool:
    x, y = point
    inside = False
    n = len(points)
    j = n - 1
    for i in range(n):
        xi, yi = points[i]
        xj, yj = points[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def is_point_in_polygon(
    point: Vec2,
    polygon: Polygon2D,
    epsilon: float = BOUNDARY_EPSILON,
) -> bool:
    """Even-odd containment test; boundary points are inside."""
    if len(polygon.points) < 3:
        return False
    if _is_on_boundary(point, polygon, epsilon):
        return True
    return _crossing_number_inside(point, polygon.points)


def is_point_strictly_in_polygon(
    point: Vec2,
    polygon: Polygon2D,
    epsilon: float = BOUNDARY_EPSILON,
) -> bool:
    """Even-odd containment test; boundary points are outside."""
    if len(polygon.points) < 3:
        return False
    if _is_on_boundary(point, polygon, epsilon):
        return False
    return _crossing_number_inside(point, polygon.points)


def _normalize_points(points: Sequence[Vec2], epsilon: float) -> list[Vec2]:
    """Drop consecutive duplicates and a repeated closing vertex."""
    normalized: list[Vec2] = []
    for point in points:
        p = (float(point[0]), float(point[1]))
        if not normalized or not approx_eq_vec2(normalized[-1], p, epsilon):
            normalized.append(p)
    if len(normalized) > 1 and approx_eq_vec2(normalized[0], normalized[-1], epsilon):
        normalized.pop()
    return normalized


def simplify_polygon(
    polygon: Polygon2D,
    tolerance: float = SIMPLIFY_TOLERANCE,
    epsilon: float = EPSILON,
) -> Polygon2D:
    """Remove duplicate and collinear vertices.

    A vertex is collinear when it lies within ``tolerance`` of the chord
    between its neighbours. Returns the input unchanged if fewer than
    3 vertices would remain.
    """
    points = _normalize_points(polygon.points, epsilon)
    if len(points) < 3:
        return Polygon2D(polygon.points)

    changed = True
    while changed and len(points) > 3:
        changed = False
        n = len(points)
        for i in range(n):
            chord = LineSegment2D(points[i - 1], points[(i + 1) % n])
            if distance_to_line_segment(points[i], chord) <= tolerance:
                del points[i]
                changed = True
                break

    return Polygon2D(tuple(points))


def _has_duplicate_points(points: Sequence[Vec2], epsilon: float) -> bool:
    """Sort by x, then compare each point with the run of x-neighbours."""
    ordered = sorted(points)
    n = len(ordered)
    for i in range(n - 1):
        x0, y0 = ordered[i]
        for j in range(i + 1, n):
            x1, y1 = ordered[j]
            if x1 - x0 > epsilon * max(1.0, abs(x0), abs(x1)):
                break
            if abs(y1 - y0) <= epsilon * max(1.0, abs(y0), abs(y1)):
                return True
    return False


def _has_spike(points: Sequence[Vec2], colinear_epsilon: float) -> bool:
    """Adjacent edges that are collinear and fold back onto each other."""
    n = len(points)
    for i in range(n):
        px, py = points[i - 1]
        x, y = points[i]
        nx, ny = points[(i + 1) % n]
        ix, iy = x - px, y - py
        ox, oy = nx - x, ny - y
        if abs(ix * oy - iy * ox) < colinear_epsilon and ix * ox + iy * oy < 0:
            return True
    return False


def _has_crossing_edges(points: Sequence[Vec2], colinear_epsilon: float) -> bool:
    """Sweep-and-prune over the closed boundary's edges.

    Edges are sorted by their left x; only pairs whose padded bounding boxes
    overlap reach the orientation test. Adjacent edges are skipped.
    """
    n = len(points)
    edges = []
    for i in range(n):
        p, q = points[i], points[(i + 1) % n]
        edges.append((
            min(p[0], q[0]) - colinear_epsilon,
            max(p[0], q[0]) + colinear_epsilon,
            min(p[1], q[1]) - colinear_epsilon,
            max(p[1], q[1]) + colinear_epsilon,
            i,
            p,
            q,
        ))
    edges.sort(key=lambda edge: edge[0])

    for a in range(n - 1):
        _, ax1, ay0, ay1, i, p1, q1 = edges[a]
        for b in range(a + 1, n):
            bx0, _, by0, by1, j, p2, q2 = edges[b]
            if bx0 > ax1:
                break
            if by0 > ay1 or by1 < ay0:
                continue
            gap = abs(i - j)
            if gap == 1 or gap == n - 1:
                continue
            if segment_points_intersect(p1, q1, p2, q2, colinear_epsilon):
                return True
    return False


def has_self_intersection(
    points: Sequence[Vec2],
    colinear_epsilon: float = COLINEAR_EPSILON,
) -> bool:
    """Whether any two non-adjacent edges of the closed boundary meet."""
    if len(points) < 4:
        return False
    coords = [(float(x), float(y)) for x, y in points]
    return _has_crossing_edges(coords, colinear_epsilon)


def would_closing_polygon_self_intersect(
    points: Sequence[Vec2],
    epsilon: float = EPSILON,
    colinear_epsilon: float = COLINEAR_EPSILON,
) -> bool:
    """Check an open chain before it is closed into a polygon.

    Flags duplicate vertices, adjacent edges folding back onto each other,
    and any crossing or touching between non-adjacent edges. Runs on every
    pointer move while drawing.
    """
    if len(points) < 3:
        return False

    normalized = _normalize_points(points, epsilon)
    if len(normalized) < 3:
        return False

    if _has_duplicate_points(normalized, epsilon):
        return True
    if _has_spike(normalized, colinear_epsilon):
        return True
    return _has_crossing_edges(normalized, colinear_epsilon)


def would_polygon_self_intersect(
    existing_points: Sequence[Vec2],
    new_point: Vec2,
    epsilon: float = EPSILON,
) -> bool:
    """Check whether appending ``new_point`` to an open chain is invalid."""
    if any(approx_eq_vec2(p, new_point, epsilon) for p in existing_points):
        return True

    if len(existing_points) < 2:
        return False

    new_segment = LineSegment2D(existing_points[-1], new_point)
    for i in range(len(existing_points) - 2):
        existing = LineSegment2D(existing_points[i], existing_points[i + 1])
        if segments_intersect(new_segment, existing) and not segments_share_endpoint(
            new_segment, existing, epsilon
        ):
            return True

    return False
