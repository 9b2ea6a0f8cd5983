"""Conversion between kernel value types and Shapely geometries."""

from __future__ import annotations

import logging
from typing import Sequence, Union

from shapely.geometry import MultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient

from ..models.shapes import Polygon2D, PolygonWithHoles2D

logger = logging.getLogger(__name__)

# Type aliases
Coords = Sequence[Sequence[float]]
PolygonInput = Union[Polygon2D, PolygonWithHoles2D]


def polygon_from_coords(coords: Coords) -> Polygon2D:
    """Create a Polygon2D from a coordinate list.

    Accepts closed rings (first point repeated at the end) and strips the
    closing vertex.

    Args:
        coords: List of (x, y) pairs

    Returns:
        Polygon2D without the repeated closing vertex
    """
    points = [(float(x), float(y)) for x, y, *_ in coords]
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    return Polygon2D(tuple(points))


def polygon_to_coords(polygon: Polygon2D, closed: bool = False) -> list[tuple[float, float]]:
    """Extract coordinates, optionally repeating the first point at the end."""
    coords = list(polygon.points)
    if closed and coords:
        coords.append(coords[0])
    return coords


def to_shapely(polygon: PolygonInput) -> ShapelyPolygon:
    """Convert to a Shapely Polygon; degenerate input gives an empty polygon."""
    if isinstance(polygon, PolygonWithHoles2D):
        outer, holes = polygon.outer, polygon.holes
    else:
        outer, holes = polygon, ()

    if len(outer.points) < 3:
        return ShapelyPolygon()

    return ShapelyPolygon(
        outer.points,
        [hole.points for hole in holes if len(hole.points) >= 3],
    )


def from_shapely(geometry: BaseGeometry) -> list[PolygonWithHoles2D]:
    """Convert Shapely polygonal geometry to kernel polygons.

    Non-polygonal parts of collections are ignored. Outers come back
    counter-clockwise and holes clockwise.

    Args:
        geometry: Polygon, MultiPolygon or GeometryCollection

    Returns:
        List of PolygonWithHoles2D (empty for empty input)
    """
    if geometry is None or geometry.is_empty:
        return []

    if isinstance(geometry, ShapelyPolygon):
        parts = [geometry]
    elif isinstance(geometry, MultiPolygon):
        parts = list(geometry.geoms)
    elif hasattr(geometry, "geoms"):
        parts = []
        for geom in geometry.geoms:
            parts.extend(_polygon_parts(geom))
    else:
        logger.debug(f"Ignoring non-polygonal geometry {geometry.geom_type}")
        return []

    result = []
    for part in parts:
        if part.is_empty:
            continue
        oriented = orient(part, sign=1.0)
        result.append(PolygonWithHoles2D(
            outer=polygon_from_coords(oriented.exterior.coords),
            holes=tuple(polygon_from_coords(ring.coords) for ring in oriented.interiors),
        ))
    return result


def _polygon_parts(geometry: BaseGeometry) -> list[ShapelyPolygon]:
    if isinstance(geometry, ShapelyPolygon):
        return [geometry]
    if isinstance(geometry, MultiPolygon):
        return list(geometry.geoms)
    return []
