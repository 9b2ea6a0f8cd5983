"""Shared fixtures for geometry tests."""

import pytest

from plangeom.geometry.engine import load_engine
from plangeom.models import Polygon2D


@pytest.fixture(scope="module")
def engine():
    """Clipping engine with built-in default settings."""
    return load_engine()


@pytest.fixture
def square():
    """10x10 counter-clockwise square at the origin."""
    return Polygon2D([(0, 0), (10, 0), (10, 10), (0, 10)])


@pytest.fixture
def l_shape():
    """Concave L-shaped polygon, counter-clockwise."""
    return Polygon2D([(0, 0), (10, 0), (10, 5), (5, 5), (5, 10), (0, 10)])
