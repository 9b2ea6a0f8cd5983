"""Canonical shape keys for grouping congruent polygons.

Two polygons get the same key when one can be turned into the other by
translation, rotation, mirroring, reversing the vertex order or starting
at a different vertex. Each vertex contributes a token made of its
outgoing edge length and the signed turn to the next edge, both rounded
to ``precision`` decimals.
"""

from __future__ import annotations

import math
from typing import Hashable, Sequence

from ..errors import DegeneratePolygonError
from ..models.shapes import Polygon2D, Vec2
from .vectors import cross_vec2, dot_vec2, len_vec2, sub_vec2

# Edges shorter than this make the turn angle meaningless
MIN_EDGE_LENGTH = 1e-9

Token = tuple[int, int]


def least_rotation(sequence: Sequence[Hashable]) -> int:
    """Start index of the lexicographically least rotation (Booth's algorithm).

    Runs in linear time. Elements only need to be comparable.

    Args:
        sequence: Cyclic sequence

    Returns:
        Index where the least rotation starts (0 for empty input)
    """
    n = len(sequence)
    if n == 0:
        return 0

    doubled = list(sequence) * 2
    failure = [-1] * len(doubled)
    k = 0
    for j in range(1, len(doubled)):
        current = doubled[j]
        i = failure[j - k - 1]
        while i != -1 and current != doubled[k + i + 1]:
            if current < doubled[k + i + 1]:
                k = j - i - 1
            i = failure[i]
        if current != doubled[k + i + 1]:
            # i == -1 here
            if current < doubled[k]:
                k = j
            failure[j - k] = -1
        else:
            failure[j - k] = i + 1
    return k % n


def _tokens(points: Sequence[Vec2], precision: int) -> list[Token]:
    factor = 10 ** precision
    n = len(points)
    edges = [sub_vec2(points[(i + 1) % n], points[i]) for i in range(n)]

    tokens = []
    for i, edge in enumerate(edges):
        following = edges[(i + 1) % n]
        turn = math.degrees(math.atan2(cross_vec2(edge, following), dot_vec2(edge, following)))
        tokens.append((int(round(len_vec2(edge) * factor)), int(round(turn * factor))))
    return tokens


def _canonical_string(tokens: list[Token]) -> str:
    start = least_rotation(tokens)
    rotated = tokens[start:] + tokens[:start]
    return ";".join(f"{length},{turn}" for length, turn in rotated)


def canonical_polygon_key(polygon: Polygon2D, precision: int = 3) -> str:
    """Fingerprint a polygon up to congruence.

    Args:
        polygon: Polygon to fingerprint
        precision: Decimal places kept for edge lengths (mm) and turns (degrees)

    Returns:
        Key of the form ``"len,turn;len,turn;..."``

    Raises:
        DegeneratePolygonError: If the polygon has fewer than 3 vertices or
            a zero-length edge
    """
    points = polygon.points
    n = len(points)
    if n < 3:
        raise DegeneratePolygonError(
            f"Cannot fingerprint a polygon with {n} vertices", vertex_count=n
        )
    for i in range(n):
        if len_vec2(sub_vec2(points[(i + 1) % n], points[i])) < MIN_EDGE_LENGTH:
            raise DegeneratePolygonError(
                f"Cannot fingerprint a polygon with a zero-length edge at vertex {i}",
                vertex_count=n,
            )

    forward = _tokens(points, precision)
    backward = _tokens(points[::-1], precision)
    variants = [
        forward,
        backward,
        [(length, -turn) for length, turn in forward],
        [(length, -turn) for length, turn in backward],
    ]
    return min(_canonical_string(tokens) for tokens in variants)
