"""Boolean-algebra backend built on pyclipper.

pyclipper works on integer coordinates, so every path is scaled by
``settings.clipper.scale`` on the way in and divided back on the way out.
Results come back as a PolyTree and are decomposed into
``PolygonWithHoles2D`` values: nodes at odd depth are outer boundaries,
their direct children are holes, and children of holes start new outers.
Outers are returned counter-clockwise, holes clockwise.

An engine holds only immutable configuration plus the loaded module and
creates a fresh clipper object per call, so one handle can be shared.
"""

from __future__ import annotations

import functools
import importlib
import logging
from enum import Enum
from types import ModuleType
from typing import Iterable, Sequence, Union

import structlog

from ..errors import BackendUnavailableError
from ..models.settings import GeometrySettings
from ..models.shapes import Polygon2D, PolygonWithHoles2D, Vec2
from .polygon_core import ensure_clockwise, ensure_counter_clockwise

logger = logging.getLogger(__name__)
events = structlog.get_logger(__name__)

# Type aliases
PolygonInput = Union[Polygon2D, PolygonWithHoles2D]
ClipperPath = list[tuple[int, int]]

BACKEND_MODULE = "pyclipper"


class BooleanOp(Enum):
    """Clipping operation."""
    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"


class GeometryEngine:
    """Handle to a loaded clipping backend.

    Create one with ``load_engine`` (or use ``get_default_engine``) and pass
    it to the boolean and shape-analysis functions via ``engine=``.
    """

    def __init__(self, backend: ModuleType, settings: GeometrySettings):
        self._backend = backend
        self._settings = settings
        self._clip_types = {
            BooleanOp.UNION: backend.CT_UNION,
            BooleanOp.INTERSECTION: backend.CT_INTERSECTION,
            BooleanOp.DIFFERENCE: backend.CT_DIFFERENCE,
        }

    @property
    def settings(self) -> GeometrySettings:
        return self._settings

    @property
    def scale(self) -> float:
        return self._settings.clipper.scale

    def to_path(self, points: Sequence[Vec2]) -> ClipperPath:
        scale = self.scale
        return [(int(round(x * scale)), int(round(y * scale))) for x, y in points]

    def from_path(self, path: Iterable[Sequence[int]]) -> Polygon2D:
        scale = self.scale
        return Polygon2D(tuple((x / scale, y / scale) for x, y in path))

    def _collect_paths(self, polygons: Iterable[PolygonInput]) -> list[ClipperPath]:
        """Convert inputs to scaled paths, outers CCW and holes CW."""
        paths = []
        for polygon in polygons:
            if isinstance(polygon, PolygonWithHoles2D):
                outer, holes = polygon.outer, polygon.holes
            else:
                outer, holes = polygon, ()

            if len(outer.points) < 3:
                logger.debug(f"Dropping degenerate polygon with {len(outer.points)} points")
                continue
            paths.append(self.to_path(ensure_counter_clockwise(outer).points))

            for hole in holes:
                if len(hole.points) < 3:
                    logger.debug(f"Dropping degenerate hole with {len(hole.points)} points")
                    continue
                paths.append(self.to_path(ensure_clockwise(hole).points))
        return paths

    def _add_paths(self, clipper, paths: list[ClipperPath], poly_type) -> int:
        added = 0
        for path in paths:
            try:
                clipper.AddPath(path, poly_type, True)
                added += 1
            except self._backend.ClipperException:
                # Collinear or collapsed after scaling
                logger.debug(f"Backend rejected path with {len(path)} points")
        return added

    def execute(
        self,
        op: BooleanOp,
        subjects: Iterable[PolygonInput],
        clips: Iterable[PolygonInput] = (),
    ) -> list[PolygonWithHoles2D]:
        """Run a boolean operation with non-zero fill on both operands.

        Args:
            op: Operation to run
            subjects: Subject polygons
            clips: Clip polygons

        Returns:
            Decomposed result polygons (possibly empty)
        """
        subject_paths = self._collect_paths(subjects)
        clip_paths = self._collect_paths(clips)

        if op is BooleanOp.UNION:
            subject_paths, clip_paths = subject_paths + clip_paths, []
        elif op is BooleanOp.INTERSECTION and (not subject_paths or not clip_paths):
            return []
        elif not clip_paths:
            # Difference with nothing: normalize the subjects
            op = BooleanOp.UNION

        pc = self._backend.Pyclipper()
        if self._add_paths(pc, subject_paths, self._backend.PT_SUBJECT) == 0:
            return []
        if clip_paths and self._add_paths(pc, clip_paths, self._backend.PT_CLIP) == 0:
            if op is BooleanOp.INTERSECTION:
                return []
            op = BooleanOp.UNION

        tree = pc.Execute2(
            self._clip_types[op],
            self._backend.PFT_NONZERO,
            self._backend.PFT_NONZERO,
        )
        return self._decompose(tree)

    def offset(
        self,
        polygons: Iterable[PolygonInput],
        distance: float,
    ) -> list[PolygonWithHoles2D]:
        """Inflate (positive) or deflate (negative) with mitered joins."""
        paths = self._collect_paths(polygons)
        if not paths:
            return []

        clipper_settings = self._settings.clipper
        pco = self._backend.PyclipperOffset(
            clipper_settings.miter_limit,
            clipper_settings.arc_tolerance * self.scale,
        )
        pco.AddPaths(paths, self._backend.JT_MITER, self._backend.ET_CLOSEDPOLYGON)
        tree = pco.Execute2(distance * self.scale)
        return self._decompose(tree)

    def _decompose(self, root) -> list[PolygonWithHoles2D]:
        """Flatten a PolyTree into outer/holes groups."""
        results: list[PolygonWithHoles2D] = []

        def visit_outer(node) -> None:
            holes = []
            islands = []
            for hole_node in node.Childs:
                holes.append(ensure_clockwise(self.from_path(hole_node.Contour)))
                islands.extend(hole_node.Childs)
            outer = ensure_counter_clockwise(self.from_path(node.Contour))
            results.append(PolygonWithHoles2D(outer=outer, holes=tuple(holes)))
            for island in islands:
                visit_outer(island)

        for child in root.Childs:
            visit_outer(child)
        return results


def load_engine(settings: GeometrySettings | None = None) -> GeometryEngine:
    """Load the clipping backend and return a new engine handle.

    Args:
        settings: Settings profile; defaults to built-in defaults

    Returns:
        GeometryEngine bound to the loaded backend

    Raises:
        BackendUnavailableError: If pyclipper cannot be imported
    """
    settings = settings or GeometrySettings()
    try:
        backend = importlib.import_module(BACKEND_MODULE)
    except ImportError as e:
        events.error("geometry_backend_unavailable", backend=BACKEND_MODULE, error=str(e))
        raise BackendUnavailableError(
            f"Polygon clipping backend '{BACKEND_MODULE}' could not be loaded: {e}"
        ) from e

    events.info(
        "geometry_engine_loaded",
        backend=BACKEND_MODULE,
        scale=settings.clipper.scale,
        miter_limit=settings.clipper.miter_limit,
    )
    return GeometryEngine(backend, settings)


@functools.lru_cache(maxsize=1)
def get_default_engine() -> GeometryEngine:
    """Process-wide engine built from the 'default' settings profile."""
    from ..config.loader import load_settings
    return load_engine(load_settings("default"))


def resolve_engine(engine: GeometryEngine | None) -> GeometryEngine:
    return engine if engine is not None else get_default_engine()
