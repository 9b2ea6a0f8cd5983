"""Tests for value types, bounds and Shapely conversion."""

import pytest
from shapely.geometry import MultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon

from plangeom.geometry.conversions import (
    from_shapely,
    polygon_from_coords,
    polygon_to_coords,
    to_shapely,
)
from plangeom.geometry.polygon_core import polygon_is_clockwise
from plangeom.models import (
    Bounds2D,
    LineSegment2D,
    MinimumBoundingBox,
    Polygon2D,
    PolygonWithHoles2D,
    centimeters,
    meters,
    square_meters,
)


class TestShapes:
    """Test immutable value types."""

    def test_polygon_coerces_points(self):
        """Points become float tuples."""
        polygon = Polygon2D([[0, 0], [1, 0], [1, 1]])
        assert polygon.points == ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0))
        assert isinstance(polygon.points[0][0], float)
        assert len(polygon) == 3

    def test_polygon_is_hashable(self):
        """Equal polygons hash equal."""
        a = Polygon2D([(0, 0), (1, 0), (1, 1)])
        b = Polygon2D(((0.0, 0.0), (1.0, 0.0), (1.0, 1.0)))
        assert a == b
        assert len({a, b}) == 1

    def test_degenerate_flag(self):
        """Fewer than 3 points is degenerate."""
        assert Polygon2D([(0, 0), (1, 1)]).is_degenerate
        assert not Polygon2D([(0, 0), (1, 0), (0, 1)]).is_degenerate

    def test_segment_length(self):
        """Segment length is Euclidean."""
        assert LineSegment2D((0, 0), (3, 4)).length == pytest.approx(5.0)

    def test_bounding_box_area(self):
        """Box area is width times height."""
        box = MinimumBoundingBox(angle=0.0, size=(3.0, 4.0), smallest_direction=(1.0, 0.0))
        assert box.area == 12.0


class TestBounds:
    """Test axis-aligned bounds."""

    def test_from_points(self):
        """Bounds cover all points."""
        bounds = Bounds2D.from_points([(1, 5), (-2, 3), (4, -1)])
        assert bounds.min == (-2, -1)
        assert bounds.max == (4, 5)
        assert bounds.size == (6, 6)
        assert bounds.center == (1, 2)

    def test_empty(self):
        """No points give empty bounds."""
        assert Bounds2D.from_points([]) is Bounds2D.EMPTY
        assert Bounds2D.EMPTY.is_empty

    def test_merge_skips_empty(self):
        """Merging ignores empty bounds."""
        a = Bounds2D((0, 0), (1, 1))
        b = Bounds2D((5, 5), (6, 7))
        assert Bounds2D.merge(a, Bounds2D.EMPTY, b) == Bounds2D((0, 0), (6, 7))

    def test_overlaps_and_contains(self):
        """Touching bounds overlap; contains is inclusive."""
        a = Bounds2D((0, 0), (10, 10))
        assert a.overlaps(Bounds2D((10, 0), (20, 10)))
        assert not a.overlaps(Bounds2D((11, 0), (20, 10)))
        assert a.contains((10, 5))
        assert not a.contains((10.1, 5))

    def test_pad(self):
        """Padding grows every side."""
        assert Bounds2D((0, 0), (1, 1)).pad(1) == Bounds2D((-1, -1), (2, 2))


class TestUnits:
    """Test conversion into millimeters."""

    def test_lengths(self):
        """Centimeters and meters scale to millimeters."""
        assert centimeters(2.5) == 25.0
        assert meters(1.2) == pytest.approx(1200.0)

    def test_area(self):
        """Square meters scale to square millimeters."""
        assert square_meters(2) == 2_000_000.0


class TestShapelyConversion:
    """Test conversion to and from Shapely geometries."""

    def test_polygon_from_closed_coords(self):
        """The repeated closing vertex is stripped."""
        polygon = polygon_from_coords([(0, 0), (1, 0), (1, 1), (0, 0)])
        assert polygon.points == ((0, 0), (1, 0), (1, 1))

    def test_polygon_to_coords(self):
        """Closed output repeats the first vertex."""
        polygon = Polygon2D([(0, 0), (1, 0), (1, 1)])
        assert polygon_to_coords(polygon, closed=True)[-1] == (0, 0)
        assert len(polygon_to_coords(polygon)) == 3

    def test_to_shapely_with_hole(self, square):
        """Holes carry over to Shapely."""
        hole = Polygon2D([(2, 2), (4, 2), (4, 4), (2, 4)])
        shape = to_shapely(PolygonWithHoles2D(outer=square, holes=(hole,)))
        assert shape.area == pytest.approx(96.0)

    def test_to_shapely_degenerate(self):
        """Degenerate input becomes an empty polygon."""
        assert to_shapely(Polygon2D([(0, 0), (1, 1)])).is_empty

    def test_from_shapely_orientation(self):
        """Outers come back CCW and holes CW."""
        shape = ShapelyPolygon(
            [(0, 0), (0, 10), (10, 10), (10, 0)],
            [[(2, 2), (4, 2), (4, 4), (2, 4)]],
        )
        (polygon,) = from_shapely(shape)
        assert not polygon_is_clockwise(polygon.outer)
        assert polygon_is_clockwise(polygon.holes[0])
        assert len(polygon.outer.points) == 4

    def test_from_shapely_multipolygon(self):
        """Each part of a MultiPolygon becomes one polygon."""
        shape = MultiPolygon([
            ShapelyPolygon([(0, 0), (1, 0), (1, 1)]),
            ShapelyPolygon([(5, 5), (6, 5), (6, 6)]),
        ])
        assert len(from_shapely(shape)) == 2

    def test_from_shapely_empty(self):
        """Empty geometry gives nothing."""
        assert from_shapely(ShapelyPolygon()) == []
