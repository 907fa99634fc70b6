"""Polygon backend interfaces.

The boolean and offset engines talk to exactly one backend through these
protocols. ShapelyBackend is the production implementation; tests and
alternative kernels are injected through BackendLifecycleService, never
selected at individual call sites.

Backends may raise on failure. Failure policy (best-effort results, logging)
lives in the engines, so every backend gets the same behaviour.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from laseroutline.domain import PolygonSet


@runtime_checkable
class PolygonBooleanBackend(Protocol):
    """Boolean operations under the non-zero winding fill rule."""

    name: str

    def union(self, operands: Sequence[PolygonSet]) -> PolygonSet:
        """Union of every operand's filled region."""
        ...

    def difference(self, subject: PolygonSet, clip: PolygonSet) -> PolygonSet:
        """Subject's filled region minus clip's filled region."""
        ...


@runtime_checkable
class PolygonOffsetBackend(Protocol):
    """Round-join offsetting of filled regions."""

    name: str

    def offset(self, polygons: PolygonSet, delta_mm: float, quad_segments: int) -> PolygonSet:
        """Grow (positive delta) or shrink (negative delta) the filled region.

        Args:
            polygons: Region to offset
            delta_mm: Signed offset distance
            quad_segments: Segments used per quarter circle of a round join
        """
        ...


@runtime_checkable
class GeometryBackend(PolygonBooleanBackend, PolygonOffsetBackend, Protocol):
    """A backend providing both boolean and offset operations."""

    pass
