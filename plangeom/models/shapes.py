"""Value types for the geometry kernel.

All types are immutable. Coordinates are millimeters; areas are square
millimeters. No unit conversion happens inside the kernel, the helpers at
the bottom only turn user-facing units into kernel units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Literal, Sequence

# Type aliases
Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
Length = float
Area = float
Volume = float

Side = Literal["left", "right"]

_UNIT_TOLERANCE = 1e-6


def _coerce_points(points: Iterable[Sequence[float]]) -> tuple[Vec2, ...]:
    return tuple((float(p[0]), float(p[1])) for p in points)


class Winding(Enum):
    """Orientation of a closed boundary in y-up coordinates."""

    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"
    DEGENERATE = "degenerate"


@dataclass(frozen=True)
class Line2D:
    """Infinite line through ``point`` along a unit ``direction``."""

    point: Vec2
    direction: Vec2

    def __post_init__(self):
        object.__setattr__(self, "point", (float(self.point[0]), float(self.point[1])))
        object.__setattr__(
            self, "direction", (float(self.direction[0]), float(self.direction[1]))
        )
        length = math.hypot(*self.direction)
        if abs(length - 1.0) > _UNIT_TOLERANCE:
            raise ValueError(
                f"Line2D direction must have unit length, got {length:.9g}"
            )


@dataclass(frozen=True)
class LineSegment2D:
    """Bounded segment from ``start`` to ``end``. May be zero-length."""

    start: Vec2
    end: Vec2

    def __post_init__(self):
        object.__setattr__(self, "start", (float(self.start[0]), float(self.start[1])))
        object.__setattr__(self, "end", (float(self.end[0]), float(self.end[1])))

    @property
    def length(self) -> Length:
        return math.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1])


@dataclass(frozen=True)
class Polygon2D:
    """Closed boundary; the last vertex is not repeated.

    Orientation is not an invariant of this type. Use
    ``ensure_clockwise`` / ``ensure_counter_clockwise`` before anything
    winding-sensitive.
    """

    points: tuple[Vec2, ...]

    def __post_init__(self):
        object.__setattr__(self, "points", _coerce_points(self.points))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_degenerate(self) -> bool:
        return len(self.points) < 3

    def reversed(self) -> "Polygon2D":
        return Polygon2D(tuple(reversed(self.points)))


@dataclass(frozen=True)
class PolygonWithHoles2D:
    """Outer boundary plus hole boundaries.

    Results from the kernel always carry a counter-clockwise outer and
    clockwise holes.
    """

    outer: Polygon2D
    holes: tuple[Polygon2D, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "holes", tuple(self.holes))


@dataclass(frozen=True)
class MinimumBoundingBox:
    """Oriented rectangle of minimal area around a polygon.

    Attributes:
        angle: Rotation of the box in radians, in [0, pi)
        size: (width, height) measured along the rotated axes
        smallest_direction: Unit vector along the shorter side
    """

    angle: float
    size: tuple[float, float]
    smallest_direction: Vec2

    @property
    def area(self) -> Area:
        return self.size[0] * self.size[1]


@dataclass(frozen=True)
class SplitPiece:
    """Polygon piece on one side of a directed split line."""

    polygon: Polygon2D
    side: Side


@dataclass(frozen=True)
class SegmentPolygonIntersection:
    """Parts of a segment lying inside a polygon.

    ``spans`` holds ordered, non-overlapping (t0, t1) parameters in [0, 1];
    ``segments`` holds the matching sub-segments.
    """

    spans: tuple[tuple[float, float], ...] = ()
    segments: tuple[LineSegment2D, ...] = ()

    @property
    def is_empty(self) -> bool:
        return len(self.spans) == 0


class Bounds2D:
    """Axis-aligned bounds. Empty when ``min == max``."""

    EMPTY: "Bounds2D"

    __slots__ = ("min", "max")

    def __init__(self, min_point: Vec2, max_point: Vec2):
        self.min: Vec2 = (float(min_point[0]), float(min_point[1]))
        self.max: Vec2 = (float(max_point[0]), float(max_point[1]))

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "Bounds2D":
        pts = list(points)
        if not pts:
            return cls.EMPTY
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        return cls((min(xs), min(ys)), (max(xs), max(ys)))

    @classmethod
    def from_min_max(cls, min_point: Vec2, max_point: Vec2) -> "Bounds2D":
        if min_point[0] >= max_point[0] and min_point[1] >= max_point[1]:
            return cls.EMPTY
        return cls(min_point, max_point)

    @classmethod
    def merge(cls, *bounds: "Bounds2D") -> "Bounds2D":
        non_empty = [b for b in bounds if not b.is_empty]
        if not non_empty:
            return cls.EMPTY
        return cls(
            (min(b.min[0] for b in non_empty), min(b.min[1] for b in non_empty)),
            (max(b.max[0] for b in non_empty), max(b.max[1] for b in non_empty)),
        )

    @property
    def width(self) -> Length:
        return self.max[0] - self.min[0]

    @property
    def height(self) -> Length:
        return self.max[1] - self.min[1]

    @property
    def size(self) -> Vec2:
        return (self.width, self.height)

    @property
    def center(self) -> Vec2:
        return ((self.min[0] + self.max[0]) / 2, (self.min[1] + self.max[1]) / 2)

    @property
    def is_empty(self) -> bool:
        return self.min == self.max

    def pad(self, amount: float | Vec2) -> "Bounds2D":
        if isinstance(amount, (int, float)):
            pad_x = pad_y = float(amount)
        else:
            pad_x, pad_y = amount
        return Bounds2D(
            (self.min[0] - pad_x, self.min[1] - pad_y),
            (self.max[0] + pad_x, self.max[1] + pad_y),
        )

    def contains(self, point: Vec2) -> bool:
        return (
            self.min[0] <= point[0] <= self.max[0]
            and self.min[1] <= point[1] <= self.max[1]
        )

    def overlaps(self, other: "Bounds2D") -> bool:
        return (
            self.min[0] <= other.max[0]
            and self.max[0] >= other.min[0]
            and self.min[1] <= other.max[1]
            and self.max[1] >= other.min[1]
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bounds2D):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    def __hash__(self) -> int:
        return hash((self.min, self.max))

    def __repr__(self) -> str:
        return f"Bounds2D(min={self.min}, max={self.max})"


Bounds2D.EMPTY = Bounds2D((0.0, 0.0), (0.0, 0.0))


# Unit helpers
def millimeters(value: float) -> Length:
    return float(value)


def centimeters(value: float) -> Length:
    return value * 10.0


def meters(value: float) -> Length:
    return value * 1000.0


def square_meters(value: float) -> Area:
    return value * 1000.0 * 1000.0


def cubic_meters(value: float) -> Volume:
    return value * 1000.0 * 1000.0 * 1000.0
