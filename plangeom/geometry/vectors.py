"""2D/3D vector algebra on plain tuples.

Every function returns a new tuple; nothing is mutated in place.
"""

from __future__ import annotations

import math

from ..models.shapes import Vec2, Vec3

# Default relative tolerance for approximate point equality
EPSILON = 1e-6

ZERO_VEC2: Vec2 = (0.0, 0.0)


def new_vec2(x: float, y: float) -> Vec2:
    return (float(x), float(y))


def add_vec2(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def sub_vec2(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def scale_vec2(v: Vec2, factor: float) -> Vec2:
    return (v[0] * factor, v[1] * factor)


def scale_add_vec2(a: Vec2, b: Vec2, factor: float) -> Vec2:
    """Return ``a + b * factor``."""
    return (a[0] + b[0] * factor, a[1] + b[1] * factor)


def dot_vec2(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross_vec2(a: Vec2, b: Vec2) -> float:
    """Z component of the 3D cross product (positive when b is CCW of a)."""
    return a[0] * b[1] - a[1] * b[0]


def len_vec2(v: Vec2) -> float:
    return math.hypot(v[0], v[1])


def dist_vec2(a: Vec2, b: Vec2) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def norm_vec2(v: Vec2) -> Vec2:
    """Scale ``v`` to unit length.

    Raises:
        ValueError: If ``v`` has zero length
    """
    length = math.hypot(v[0], v[1])
    if length == 0:
        raise ValueError("Cannot normalize a zero-length vector")
    return (v[0] / length, v[1] / length)


def perpendicular_ccw(v: Vec2) -> Vec2:
    """Rotate 90° counter-clockwise."""
    return (-v[1], v[0])


def perpendicular_cw(v: Vec2) -> Vec2:
    """Rotate 90° clockwise."""
    return (v[1], -v[0])


def perpendicular(v: Vec2) -> Vec2:
    return perpendicular_ccw(v)


def rotate_vec2(v: Vec2, radians: float, origin: Vec2 = ZERO_VEC2) -> Vec2:
    """Rotate ``v`` counter-clockwise around ``origin``."""
    c = math.cos(radians)
    s = math.sin(radians)
    x = v[0] - origin[0]
    y = v[1] - origin[1]
    return (origin[0] + x * c - y * s, origin[1] + x * s + y * c)


def project_vec2(v: Vec2, onto: Vec2) -> Vec2:
    """Project ``v`` onto the direction of ``onto``; zero for a zero ``onto``."""
    denom = dot_vec2(onto, onto)
    if denom == 0:
        return ZERO_VEC2
    return scale_vec2(onto, dot_vec2(v, onto) / denom)


def lerp_vec2(a: Vec2, b: Vec2, t: float) -> Vec2:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def midpoint(a: Vec2, b: Vec2) -> Vec2:
    return lerp_vec2(a, b, 0.5)


def direction(source: Vec2, target: Vec2) -> Vec2:
    """Unit vector from ``source`` to ``target``."""
    return norm_vec2(sub_vec2(target, source))


def angle(source: Vec2, target: Vec2) -> float:
    """Angle of the vector source→target in radians, (-pi, pi]."""
    return math.atan2(target[1] - source[1], target[0] - source[0])


def normalize_angle(radians: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    wrapped = math.fmod(radians, 2 * math.pi)
    if wrapped > math.pi:
        wrapped -= 2 * math.pi
    elif wrapped <= -math.pi:
        wrapped += 2 * math.pi
    return wrapped


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def radians_to_degrees(radians: float) -> float:
    return radians * 180 / math.pi


def eq_vec2(a: Vec2, b: Vec2) -> bool:
    """Exact component equality."""
    return a[0] == b[0] and a[1] == b[1]


def approx_eq_vec2(a: Vec2, b: Vec2, epsilon: float = EPSILON) -> bool:
    """Component-wise equality with a tolerance relative to magnitude."""
    return (
        abs(a[0] - b[0]) <= epsilon * max(1.0, abs(a[0]), abs(b[0]))
        and abs(a[1] - b[1]) <= epsilon * max(1.0, abs(a[1]), abs(b[1]))
    )


# 3D
def new_vec3(x: float, y: float, z: float) -> Vec3:
    return (float(x), float(y), float(z))


def add_vec3(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub_vec3(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale_vec3(v: Vec3, factor: float) -> Vec3:
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def dot_vec3(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross_vec3(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def len_vec3(v: Vec3) -> float:
    return math.sqrt(v[0] ** 2 + v[1] ** 2 + v[2] ** 2)


def norm_vec3(v: Vec3) -> Vec3:
    """Scale ``v`` to unit length.

    Raises:
        ValueError: If ``v`` has zero length
    """
    length = len_vec3(v)
    if length == 0:
        raise ValueError("Cannot normalize a zero-length vector")
    return (v[0] / length, v[1] / length, v[2] / length)
