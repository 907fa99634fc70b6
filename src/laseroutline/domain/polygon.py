"""Core geometric types for polygon representation.

This module defines the fundamental geometric types used throughout laseroutline:
- Point: A 2D point in millimetres
- Polygon: An implicitly closed ring of points
- PolygonSet: A filled region made of outer rings and holes

Orientation encodes the role of a ring: after normalization by the boolean
engine, outer rings have positive signed area (counter-clockwise in a y-up
frame) and holes have negative signed area.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from laseroutline.domain.bounds import BoundingBox
from laseroutline.domain.transform import AffineTransform


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in millimetres
        y: Y coordinate in millimetres
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


@dataclass(frozen=True)
class Polygon:
    """An implicitly closed ring of at least three points.

    The closing edge from the last point back to the first is not stored.

    Attributes:
        points: Ring vertices in order
    """

    points: tuple[Point, ...]
    _cached_area: float | None = field(default=None, repr=False, init=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.points) < 3:
            raise ValueError(f"Polygon needs at least 3 points, got {len(self.points)}")

    @classmethod
    def from_coords(cls, coords: "list[tuple[float, float]]") -> "Polygon":
        """Build a polygon from (x, y) pairs."""
        return cls(points=tuple(Point(float(x), float(y)) for x, y in coords))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        The sign of the area indicates winding direction:
        - Positive area: counter-clockwise winding (outer ring)
        - Negative area: clockwise winding (hole)

        Result is cached for efficiency.

        Returns:
            Signed area in square millimetres
        """
        if self._cached_area is not None:
            return self._cached_area

        pts = self.points
        n = len(pts)
        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += pts[i].x * pts[j].y
            area -= pts[j].x * pts[i].y

        object.__setattr__(self, "_cached_area", area / 2.0)
        return self._cached_area

    def area(self) -> float:
        """Absolute area of the ring."""
        return abs(self.signed_area())

    def is_hole(self) -> bool:
        """True when the ring winds clockwise (negative signed area)."""
        return self.signed_area() < 0

    def bounding_box(self) -> BoundingBox:
        """Calculate bounding box of the ring."""
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return BoundingBox.from_extents(min(xs), min(ys), max(xs), max(ys))

    def reversed(self) -> "Polygon":
        """Return the same ring with opposite winding."""
        return Polygon(points=tuple(reversed(self.points)))

    def transformed(self, matrix: AffineTransform) -> "Polygon":
        """Apply an affine transform to every vertex."""
        return Polygon(points=tuple(Point(*matrix.apply(p.x, p.y)) for p in self.points))

    def translated(self, dx: float, dy: float) -> "Polygon":
        """Shift every vertex by (dx, dy)."""
        return Polygon(points=tuple(Point(p.x + dx, p.y + dy) for p in self.points))

    def to_coords(self) -> list[tuple[float, float]]:
        """Return the ring as a list of (x, y) tuples."""
        return [p.to_tuple() for p in self.points]


@dataclass(frozen=True)
class PolygonSet:
    """A filled region made of rings under the non-zero winding rule.

    An empty set means "no geometry" and is never an error.

    Attributes:
        polygons: Rings making up the region (outer rings and holes)
    """

    polygons: tuple[Polygon, ...] = ()

    @classmethod
    def empty(cls) -> "PolygonSet":
        """The set with no geometry."""
        return cls(polygons=())

    @classmethod
    def of(cls, *polygons: Polygon) -> "PolygonSet":
        """Build a set from individual polygons."""
        return cls(polygons=tuple(polygons))

    @property
    def is_empty(self) -> bool:
        """True when the set holds no rings."""
        return not self.polygons

    @property
    def point_count(self) -> int:
        """Total number of vertices across all rings."""
        return sum(len(p) for p in self.polygons)

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)

    def area(self) -> float:
        """Net filled area, assuming holes wind opposite to their outer ring."""
        return abs(sum(p.signed_area() for p in self.polygons))

    def bounding_box(self) -> BoundingBox | None:
        """Union of the ring bounding boxes, or None for an empty set."""
        if not self.polygons:
            return None
        box = self.polygons[0].bounding_box()
        for polygon in self.polygons[1:]:
            box = box.union(polygon.bounding_box())
        return box

    def transformed(self, matrix: AffineTransform) -> "PolygonSet":
        """Apply an affine transform to every ring."""
        return PolygonSet(polygons=tuple(p.transformed(matrix) for p in self.polygons))

    def translated(self, dx: float, dy: float) -> "PolygonSet":
        """Shift every ring by (dx, dy)."""
        return PolygonSet(polygons=tuple(p.translated(dx, dy) for p in self.polygons))
