"""Geometric operations on polygon rings.

This module provides core mathematical utilities for:
- Winding numbers for the non-zero fill rule
- Bounding boxes of polygon collections
- Recentering geometry against a fixed margin

All functions are pure and stateless.
"""

from collections.abc import Sequence

from laseroutline.domain import BoundingBox, Point, PolygonSet


def winding_number(x: float, y: float, ring: Sequence[Point]) -> int:
    """Winding number of a closed ring around (x, y).

    Counter-clockwise rings contribute +1 for points they enclose, clockwise
    rings contribute -1. Points exactly on an edge have undefined results;
    callers sample interior points.

    Args:
        x: X coordinate of the test point
        y: Y coordinate of the test point
        ring: Implicitly closed ring

    Returns:
        Signed number of times the ring winds around the point
    """
    winding = 0
    n = len(ring)
    for i in range(n):
        a = ring[i]
        b = ring[(i + 1) % n]
        cross = (b.x - a.x) * (y - a.y) - (x - a.x) * (b.y - a.y)
        if a.y <= y:
            if b.y > y and cross > 0:
                winding += 1
        elif b.y <= y and cross < 0:
            winding -= 1
    return winding


def set_winding_number(x: float, y: float, polygons: PolygonSet) -> int:
    """Sum of ring winding numbers of a polygon set around (x, y)."""
    total = 0
    for polygon in polygons:
        box = polygon.bounding_box()
        if box.min_x <= x <= box.max_x and box.min_y <= y <= box.max_y:
            total += winding_number(x, y, polygon.points)
    return total


def combined_bounds(sets: Sequence[PolygonSet]) -> BoundingBox | None:
    """Bounding box around several polygon sets, None when all are empty."""
    box: BoundingBox | None = None
    for polygons in sets:
        current = polygons.bounding_box()
        if current is None:
            continue
        box = current if box is None else box.union(current)
    return box


def recenter(
    polygons: PolygonSet, margin_mm: float, reference: BoundingBox | None = None
) -> tuple[PolygonSet, float, float]:
    """Translate geometry so a bounding box's minimum corner sits at (margin, margin).

    Applying recenter to already recentered geometry is a no-op.

    Args:
        polygons: Geometry to move
        margin_mm: Target distance of the minimum corner from the origin
        reference: Box whose corner is aligned (defaults to the set's own box)

    Returns:
        Tuple of (moved geometry, dx, dy)
    """
    box = reference if reference is not None else polygons.bounding_box()
    if box is None:
        return polygons, 0.0, 0.0
    dx = margin_mm - box.min_x
    dy = margin_mm - box.min_y
    if dx == 0.0 and dy == 0.0:
        return polygons, 0.0, 0.0
    return polygons.translated(dx, dy), dx, dy
