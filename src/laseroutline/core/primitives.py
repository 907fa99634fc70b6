"""Simple closed shapes used by the composer."""

import math

from laseroutline.core.offset import quad_segments_for
from laseroutline.domain import Point, Polygon


def circle_polygon(cx: float, cy: float, radius: float, arc_tolerance_mm: float) -> Polygon:
    """Counter-clockwise regular polygon approximating a circle.

    Uses the same segments-per-quarter rule as round offset joins, so a ring
    and the outline it is fused to are tessellated alike.
    """
    if radius <= 0 or not math.isfinite(radius):
        raise ValueError(f"Circle radius must be positive, got {radius}")
    segments = 4 * quad_segments_for(radius, arc_tolerance_mm)
    step = 2.0 * math.pi / segments
    return Polygon(
        points=tuple(
            Point(cx + radius * math.cos(i * step), cy + radius * math.sin(i * step))
            for i in range(segments)
        )
    )


def rect_polygon(x: float, y: float, width: float, height: float) -> Polygon:
    """Axis-aligned rectangle starting at its minimum corner."""
    return Polygon(
        points=(
            Point(x, y),
            Point(x + width, y),
            Point(x + width, y + height),
            Point(x, y + height),
        )
    )
