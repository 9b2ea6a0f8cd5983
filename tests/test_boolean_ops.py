"""Tests for boolean operations and offsets through the clipping engine."""

import pytest

from plangeom.config import load_settings
from plangeom.geometry.boolean_ops import (
    are_polygons_intersecting,
    intersect_polygons,
    offset_polygon,
    polygon_edge_offset,
    subtract_polygons,
    union_polygons,
    union_self,
)
from plangeom.geometry.engine import load_engine
from plangeom.geometry.polygon_core import (
    calculate_polygon_area,
    calculate_polygon_with_holes_area,
    polygon_is_clockwise,
)
from plangeom.models import Polygon2D, PolygonWithHoles2D


def rect(x0, y0, x1, y1):
    return Polygon2D([(x0, y0), (x1, y0), (x1, y1), (x0, y1)])


def total_area(polygons):
    return sum(calculate_polygon_with_holes_area(p) for p in polygons)


# Clockwise rectangle used by the per-edge offset cases
CW_RECT = Polygon2D([(0, 0), (0, 10), (10, 10), (10, 0)])


class TestUnion:
    """Test union of polygon sets."""

    def test_overlapping_unit_squares(self, engine):
        """Two overlapping unit squares merge into one polygon."""
        result = union_polygons([rect(0, 0, 1, 1), rect(0.5, 0.5, 1.5, 1.5)], engine=engine)
        assert len(result) == 1
        assert result[0].holes == ()
        assert calculate_polygon_area(result[0].outer) == pytest.approx(1.75)

    def test_second_set(self, engine):
        """The optional second set joins the union."""
        result = union_polygons(rect(0, 0, 10, 10), [rect(5, 5, 15, 15)], engine=engine)
        assert len(result) == 1
        assert total_area(result) == pytest.approx(175.0)

    def test_disjoint(self, engine):
        """Disjoint polygons stay separate."""
        result = union_polygons([rect(0, 0, 1, 1), rect(5, 5, 6, 6)], engine=engine)
        assert len(result) == 2

    def test_empty_input(self, engine):
        """No input, no output."""
        assert union_polygons([], engine=engine) == []

    def test_single_polygon_normalized(self, engine):
        """A single CW polygon comes back CCW with the same area."""
        result = union_polygons([rect(0, 0, 10, 10).reversed()], engine=engine)
        assert len(result) == 1
        assert not polygon_is_clockwise(result[0].outer)
        assert calculate_polygon_area(result[0].outer) == pytest.approx(100.0)

    def test_degenerate_dropped(self, engine):
        """Polygons with fewer than 3 points are ignored."""
        result = union_polygons([rect(0, 0, 10, 10), Polygon2D([(0, 0), (20, 20)])], engine=engine)
        assert total_area(result) == pytest.approx(100.0)


class TestIntersectAndSubtract:
    """Test intersection and difference."""

    def test_intersection(self, engine):
        """Overlap of two offset squares."""
        result = intersect_polygons([rect(0, 0, 10, 10)], [rect(5, 5, 15, 15)], engine=engine)
        assert len(result) == 1
        assert total_area(result) == pytest.approx(25.0)

    def test_disjoint_intersection(self, engine):
        """Disjoint polygons have an empty intersection."""
        assert intersect_polygons([rect(0, 0, 1, 1)], [rect(5, 5, 6, 6)], engine=engine) == []

    def test_intersection_with_nothing(self, engine):
        """Empty clip set gives nothing."""
        assert intersect_polygons([rect(0, 0, 1, 1)], [], engine=engine) == []

    def test_difference(self, engine):
        """Corner bite out of a square."""
        result = subtract_polygons([rect(0, 0, 10, 10)], [rect(5, 5, 15, 15)], engine=engine)
        assert total_area(result) == pytest.approx(75.0)

    def test_difference_creates_hole(self, engine):
        """Subtracting an interior square leaves a hole."""
        result = subtract_polygons([rect(0, 0, 10, 10)], [rect(4, 4, 6, 6)], engine=engine)
        assert len(result) == 1
        assert len(result[0].holes) == 1
        assert not polygon_is_clockwise(result[0].outer)
        assert polygon_is_clockwise(result[0].holes[0])
        assert calculate_polygon_with_holes_area(result[0]) == pytest.approx(96.0)

    def test_difference_fully_covered(self, engine):
        """Subtracting a covering polygon leaves nothing."""
        assert subtract_polygons([rect(2, 2, 4, 4)], [rect(0, 0, 10, 10)], engine=engine) == []

    def test_difference_without_clips(self, engine):
        """Nothing to subtract returns the subjects."""
        result = subtract_polygons([rect(0, 0, 10, 10)], [], engine=engine)
        assert total_area(result) == pytest.approx(100.0)


class TestUnionSelf:
    """Test self-union of overlapping boundaries."""

    def test_bowtie(self, engine):
        """Both lobes of a bowtie are filled under non-zero fill."""
        bowtie = Polygon2D([(0, 0), (10, 10), (10, 0), (0, 10)])
        result = union_self(bowtie, engine=engine)
        assert total_area(result) == pytest.approx(50.0)

    def test_simple_polygon(self, engine, l_shape):
        """A simple polygon is returned unchanged in area."""
        result = union_self(l_shape, engine=engine)
        assert len(result) == 1
        assert total_area(result) == pytest.approx(75.0)


class TestArePolygonsIntersecting:
    """Test the positive-area overlap predicate."""

    def test_overlap(self, engine):
        """Overlapping squares intersect in both argument orders."""
        a, b = rect(0, 0, 10, 10), rect(5, 5, 15, 15)
        assert are_polygons_intersecting(a, b, engine=engine)
        assert are_polygons_intersecting(b, a, engine=engine)

    def test_contained(self, engine):
        """Containment counts as intersection."""
        assert are_polygons_intersecting(rect(0, 0, 10, 10), rect(2, 2, 3, 3), engine=engine)

    def test_touching_edge(self, engine):
        """Sharing an edge is not an intersection."""
        a, b = rect(0, 0, 10, 10), rect(10, 0, 20, 10)
        assert not are_polygons_intersecting(a, b, engine=engine)
        assert not are_polygons_intersecting(b, a, engine=engine)

    def test_disjoint(self, engine):
        """Far apart polygons do not intersect."""
        assert not are_polygons_intersecting(rect(0, 0, 1, 1), rect(5, 5, 6, 6), engine=engine)

    def test_degenerate(self, engine):
        """Degenerate polygons never intersect."""
        line = Polygon2D([(0, 0), (10, 10)])
        assert not are_polygons_intersecting(line, rect(0, 0, 10, 10), engine=engine)

    def test_fine_profile_resolves_thin_overlap(self, engine):
        """A 0.1 micrometer overlap only registers under the fine profile."""
        a = rect(0, 0, 1, 1)
        b = rect(0.9999, 0.5, 1.0009, 0.501)
        assert not are_polygons_intersecting(a, b, engine=engine)
        fine = load_engine(load_settings("fine"))
        assert are_polygons_intersecting(a, b, engine=fine)


class TestOffsetPolygon:
    """Test mitered inflate and deflate."""

    def test_inflate(self, engine, square):
        """Square grows by the offset on every side."""
        result = offset_polygon(square, 1.0, engine=engine)
        assert len(result) == 1
        assert calculate_polygon_area(result[0].outer) == pytest.approx(144.0, rel=1e-6)

    def test_inflate_clockwise_input(self, engine, square):
        """Positive distance inflates regardless of winding."""
        result = offset_polygon(square.reversed(), 1.0, engine=engine)
        assert calculate_polygon_area(result[0].outer) == pytest.approx(144.0, rel=1e-6)

    def test_deflate(self, engine, square):
        """Negative distance shrinks."""
        result = offset_polygon(square, -1.0, engine=engine)
        assert calculate_polygon_area(result[0].outer) == pytest.approx(64.0, rel=1e-6)

    def test_collapse(self, engine, square):
        """Deflating past the inradius leaves nothing."""
        assert offset_polygon(square, -6.0, engine=engine) == []

    def test_round_trip(self, engine, l_shape):
        """Inflate then deflate restores the area."""
        grown = offset_polygon(l_shape, 2.0, engine=engine)
        assert len(grown) == 1
        restored = offset_polygon(grown[0], -2.0, engine=engine)
        assert total_area(restored) == pytest.approx(75.0, rel=1e-3)

    def test_degenerate(self, engine):
        """Degenerate input gives an empty result."""
        assert offset_polygon(Polygon2D([(0, 0), (1, 1)]), 1.0, engine=engine) == []

    def test_with_hole(self, engine, square):
        """Inflating a polygon with a hole shrinks the hole."""
        hole = rect(3, 3, 7, 7).reversed()
        result = offset_polygon(PolygonWithHoles2D(outer=square, holes=(hole,)), 1.0, engine=engine)
        assert len(result) == 1
        assert len(result[0].holes) == 1
        assert calculate_polygon_area(result[0].holes[0]) == pytest.approx(4.0, rel=1e-6)


class TestPolygonEdgeOffset:
    """Test per-edge offsets."""

    def _assert_points(self, polygon, expected):
        assert len(polygon.points) == len(expected)
        for point, target in zip(polygon.points, expected):
            assert point == pytest.approx(target, abs=1e-6)

    def test_uniform_expand(self):
        """Equal positive offsets expand a clockwise rectangle."""
        result = polygon_edge_offset(CW_RECT, [1, 1, 1, 1])
        self._assert_points(result, [(-1, -1), (-1, 11), (11, 11), (11, -1)])

    def test_per_edge(self):
        """Each edge moves by its own distance."""
        result = polygon_edge_offset(CW_RECT, [1, 2, 3, 4])
        self._assert_points(result, [(-1, -4), (-1, 12), (13, 12), (13, -4)])

    def test_collinear_fallback(self):
        """Collinear adjacent edges average their shifted vertex."""
        polygon = Polygon2D([(0, 0), (0, 10), (20, 10), (20, 0), (10, 0)])
        result = polygon_edge_offset(polygon, [1, 1, 1, 1, 1])
        self._assert_points(result, [(-1, -1), (-1, 11), (21, 11), (21, -1), (10, -1)])

    def test_shrink(self):
        """Negative offsets shrink."""
        result = polygon_edge_offset(CW_RECT, [-1, -1, -1, -1])
        self._assert_points(result, [(1, 1), (1, 9), (9, 9), (9, 1)])

    def test_counter_clockwise_input(self, square):
        """Outward is outward for CCW input too."""
        result = polygon_edge_offset(square, [1, 1, 1, 1])
        self._assert_points(result, [(-1, -1), (11, -1), (11, 11), (-1, 11)])

    def test_offset_count_mismatch(self):
        """One offset per edge is required."""
        with pytest.raises(ValueError):
            polygon_edge_offset(CW_RECT, [1, 1, 1])
