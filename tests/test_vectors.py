"""Tests for tuple-based vector algebra."""

import math

import pytest

from plangeom.geometry.vectors import (
    add_vec2,
    approx_eq_vec2,
    cross_vec2,
    cross_vec3,
    direction,
    dist_vec2,
    dot_vec2,
    len_vec3,
    midpoint,
    norm_vec2,
    normalize_angle,
    perpendicular_ccw,
    perpendicular_cw,
    project_vec2,
    rotate_vec2,
    scale_add_vec2,
    scale_vec2,
    sub_vec2,
)


class TestBasicAlgebra:
    """Test component-wise operations."""

    def test_add_sub_scale(self):
        """Add, subtract and scale work per component."""
        assert add_vec2((1, 2), (3, 4)) == (4, 6)
        assert sub_vec2((1, 2), (3, 4)) == (-2, -2)
        assert scale_vec2((1, -2), 3) == (3, -6)
        assert scale_add_vec2((1, 1), (2, 0), 0.5) == (2, 1)

    def test_dot_and_cross(self):
        """Dot and 2D cross products."""
        assert dot_vec2((1, 2), (3, 4)) == 11
        assert cross_vec2((1, 0), (0, 1)) == 1
        assert cross_vec2((0, 1), (1, 0)) == -1

    def test_distance(self):
        """Euclidean distance between points."""
        assert dist_vec2((0, 0), (3, 4)) == pytest.approx(5.0)

    def test_midpoint(self):
        """Midpoint is the average of both points."""
        assert midpoint((0, 0), (10, 4)) == (5, 2)


class TestNormalization:
    """Test unit vectors and directions."""

    def test_norm_vec2(self):
        """Normalized vector has unit length."""
        assert norm_vec2((3, 4)) == pytest.approx((0.6, 0.8))

    def test_norm_zero_vector_raises(self):
        """Zero vector cannot be normalized."""
        with pytest.raises(ValueError):
            norm_vec2((0, 0))

    def test_direction(self):
        """Direction from source to target is a unit vector."""
        assert direction((1, 1), (1, 5)) == pytest.approx((0.0, 1.0))


class TestRotation:
    """Test perpendiculars, rotation and projection."""

    def test_perpendiculars(self):
        """CCW and CW perpendiculars of +x."""
        assert perpendicular_ccw((1, 0)) == pytest.approx((0, 1))
        assert perpendicular_cw((1, 0)) == pytest.approx((0, -1))

    def test_rotate_quarter_turn(self):
        """Rotating +x by 90 degrees gives +y."""
        assert rotate_vec2((1, 0), math.pi / 2) == pytest.approx((0, 1), abs=1e-12)

    def test_rotate_around_origin_point(self):
        """Rotation around a non-zero origin."""
        result = rotate_vec2((2, 1), math.pi, origin=(1, 1))
        assert result == pytest.approx((0, 1), abs=1e-12)

    def test_project(self):
        """Projection keeps the component along the target."""
        assert project_vec2((3, 4), (2, 0)) == pytest.approx((3, 0))

    def test_project_onto_zero(self):
        """Projection onto a zero vector is zero instead of NaN."""
        assert project_vec2((3, 4), (0, 0)) == (0.0, 0.0)


class TestAngles:
    """Test angle wrapping."""

    def test_normalize_angle_wraps(self):
        """Angles wrap into (-pi, pi]."""
        assert normalize_angle(5 * math.pi / 2) == pytest.approx(math.pi / 2)
        assert normalize_angle(-math.pi) == pytest.approx(math.pi)
        assert normalize_angle(math.pi / 4) == pytest.approx(math.pi / 4)


class TestApproxEquality:
    """Test tolerant point comparison."""

    def test_close_points_equal(self):
        """Points within relative epsilon compare equal."""
        assert approx_eq_vec2((1000.0, 0.0), (1000.0005, 0.0))

    def test_distant_points_differ(self):
        """Points beyond epsilon differ."""
        assert not approx_eq_vec2((0.0, 0.0), (0.01, 0.0))


class TestVec3:
    """Test 3D helpers."""

    def test_cross_vec3(self):
        """x cross y is z."""
        assert cross_vec3((1, 0, 0), (0, 1, 0)) == (0, 0, 1)

    def test_len_vec3(self):
        """Length of a 3D vector."""
        assert len_vec3((2, 3, 6)) == pytest.approx(7.0)
