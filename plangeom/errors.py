"""Error types raised by the geometry kernel.

Soft-degenerate input (too few points, zero-length segments) never raises;
those paths return ``False``, ``0.0`` or empty results instead. The classes
below cover the two remaining cases: precondition violations where no
meaningful answer exists, and a missing boolean-algebra backend.
"""


class GeometryError(Exception):
    """Base class for all kernel errors."""


class DegeneratePolygonError(GeometryError, ValueError):
    """Polygon is too degenerate for the requested computation."""

    def __init__(self, message: str, vertex_count: int | None = None):
        super().__init__(message)
        self.vertex_count = vertex_count


class BackendUnavailableError(GeometryError, RuntimeError):
    """The polygon clipping backend could not be loaded."""
