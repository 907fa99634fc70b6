"""Shared fixtures for laseroutline tests."""

import pytest

from laseroutline.core import BackendLifecycleService
from laseroutline.domain import Polygon, PolygonSet


def square(x: float, y: float, size: float) -> Polygon:
    """Counter-clockwise axis-aligned square."""
    return Polygon.from_coords([(x, y), (x + size, y), (x + size, y + size), (x, y + size)])


@pytest.fixture
def lifecycle() -> BackendLifecycleService:
    """Lifecycle service backed by shapely, loaded eagerly."""
    service = BackendLifecycleService()
    service.ensure_ready()
    return service


@pytest.fixture
def make_square():
    """Factory for single-square polygon sets."""

    def _make(x: float, y: float, size: float) -> PolygonSet:
        return PolygonSet.of(square(x, y, size))

    return _make
