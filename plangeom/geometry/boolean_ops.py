"""Polygon boolean operations and offsets.

Union, intersection, difference and self-union go through the clipping
engine and return lists of ``PolygonWithHoles2D`` (outer CCW, holes CW).
Inputs with fewer than 3 points are dropped silently. An empty list is a
valid result, e.g. for disjoint intersections or collapsed inward offsets.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, Union

from ..models.shapes import Line2D, Polygon2D, PolygonWithHoles2D, Vec2
from .engine import BooleanOp, GeometryEngine, PolygonInput, resolve_engine
from .lines import line_from_points, line_intersection
from .polygon_core import (
    calculate_polygon_with_holes_area,
    polygon_bounds,
    polygon_is_clockwise,
)
from .vectors import perpendicular_ccw, perpendicular_cw, scale_add_vec2

logger = logging.getLogger(__name__)

# Type aliases
PolygonsLike = Union[PolygonInput, Iterable[PolygonInput]]


def _as_list(polygons: PolygonsLike) -> list[PolygonInput]:
    if isinstance(polygons, (Polygon2D, PolygonWithHoles2D)):
        return [polygons]
    return list(polygons)


def union_polygons(
    polygons: PolygonsLike,
    others: PolygonsLike = (),
    engine: GeometryEngine | None = None,
) -> list[PolygonWithHoles2D]:
    """Compute the union of one or two polygon sets.

    Args:
        polygons: Polygons to union
        others: Optional second set, unioned with the first
        engine: Clipping engine (defaults to the process-wide engine)

    Returns:
        Merged polygons with holes
    """
    return resolve_engine(engine).execute(
        BooleanOp.UNION, _as_list(polygons), _as_list(others)
    )


def intersect_polygons(
    subjects: PolygonsLike,
    clips: PolygonsLike,
    engine: GeometryEngine | None = None,
) -> list[PolygonWithHoles2D]:
    """Compute the area covered by both sets."""
    return resolve_engine(engine).execute(
        BooleanOp.INTERSECTION, _as_list(subjects), _as_list(clips)
    )


def subtract_polygons(
    subjects: PolygonsLike,
    clips: PolygonsLike,
    engine: GeometryEngine | None = None,
) -> list[PolygonWithHoles2D]:
    """Subtract the clip set from the subject set.

    Args:
        subjects: Base polygons to subtract from
        clips: Polygons to subtract

    Returns:
        Remaining polygons with holes (may be empty)
    """
    return resolve_engine(engine).execute(
        BooleanOp.DIFFERENCE, _as_list(subjects), _as_list(clips)
    )


def union_self(
    polygon: PolygonInput,
    engine: GeometryEngine | None = None,
) -> list[PolygonWithHoles2D]:
    """Resolve a self-overlapping boundary into simple pieces (non-zero fill)."""
    return resolve_engine(engine).execute(BooleanOp.UNION, [polygon])


def are_polygons_intersecting(
    polygon1: Polygon2D,
    polygon2: Polygon2D,
    engine: GeometryEngine | None = None,
) -> bool:
    """Check whether two polygons overlap with positive area.

    Polygons that only touch along an edge or at a vertex do not intersect.
    """
    if len(polygon1.points) < 3 or len(polygon2.points) < 3:
        return False

    if not polygon_bounds(polygon1).overlaps(polygon_bounds(polygon2)):
        return False

    engine = resolve_engine(engine)
    overlap = engine.execute(BooleanOp.INTERSECTION, [polygon1], [polygon2])
    area = sum(calculate_polygon_with_holes_area(p) for p in overlap)
    return area > engine.settings.tolerances.intersection_area_epsilon


def offset_polygon(
    polygon: PolygonInput,
    distance: float,
    engine: GeometryEngine | None = None,
) -> list[PolygonWithHoles2D]:
    """Inflate (positive distance) or deflate (negative distance) a polygon.

    Uses mitered joins. Orientation of the input does not matter.

    Args:
        polygon: Polygon to offset
        distance: Offset distance in mm (positive = grow)
        engine: Clipping engine (defaults to the process-wide engine)

    Returns:
        Offset polygons; empty when the polygon collapses or is degenerate
    """
    outer = polygon.outer if isinstance(polygon, PolygonWithHoles2D) else polygon
    if len(outer.points) < 3:
        return []

    result = resolve_engine(engine).offset([polygon], distance)
    if not result:
        logger.warning(f"Offset of {distance}mm results in empty polygon")
    return result


def polygon_edge_offset(polygon: Polygon2D, offsets: Sequence[float]) -> Polygon2D:
    """Move every edge outward by its own distance.

    Each vertex is re-derived as the intersection of its two adjacent
    offset edges. Where the edges are collinear (or one has zero length)
    the vertex falls back to the average of its shifted positions.

    Args:
        polygon: Source polygon (either winding)
        offsets: One distance per edge; edge i runs from vertex i to i+1.
            Positive grows, negative shrinks.

    Returns:
        Polygon with the same vertex count

    Raises:
        ValueError: If the number of offsets doesn't match the edge count
    """
    points = polygon.points
    n = len(points)
    if len(offsets) != n:
        raise ValueError(f"Expected {n} edge offsets, got {len(offsets)}")
    if n < 3:
        return Polygon2D(points)

    outward = perpendicular_ccw if polygon_is_clockwise(polygon) else perpendicular_cw

    normals: list[Vec2 | None] = []
    lines: list[Line2D | None] = []
    for i in range(n):
        base = line_from_points(points[i], points[(i + 1) % n])
        if base is None:
            normals.append(None)
            lines.append(None)
            continue
        normal = outward(base.direction)
        normals.append(normal)
        lines.append(
            Line2D(point=scale_add_vec2(base.point, normal, offsets[i]), direction=base.direction)
        )

    result = []
    for i in range(n):
        prev = (i - 1) % n
        if lines[prev] is not None and lines[i] is not None:
            intersection = line_intersection(lines[prev], lines[i])
            if intersection is not None:
                result.append(intersection)
                continue

        shifted = [
            scale_add_vec2(points[i], normals[k], offsets[k])
            for k in (prev, i)
            if normals[k] is not None
        ]
        if not shifted:
            result.append(points[i])
        else:
            result.append((
                sum(p[0] for p in shifted) / len(shifted),
                sum(p[1] for p in shifted) / len(shifted),
            ))

    return Polygon2D(tuple(result))
