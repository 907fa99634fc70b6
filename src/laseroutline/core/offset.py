"""Round-join offsetting of filled regions.

Positive deltas grow a region, negative deltas shrink it. The backend does a
true offset, so the old stroke-then-union approach's self-intersections near
sharp concave corners do not occur for simple input; very sharp concave
notches narrower than the offset are still filled in, which is the expected
behaviour of an outward offset rather than something this module repairs.
"""

import math

import structlog

from laseroutline.core.lifecycle import BackendLifecycleService, GeometryCacheKey
from laseroutline.domain import PolygonSet
from laseroutline.exceptions import OffsetFailedError

logger = structlog.get_logger(__name__)

MIN_QUAD_SEGMENTS = 2
MAX_QUAD_SEGMENTS = 256


def quad_segments_for(delta_mm: float, arc_tolerance_mm: float) -> int:
    """Segments per quarter circle keeping a round join within tolerance.

    A chord spanning angle 2*acos(1 - tol/r) deviates from its arc by at
    most tol.

    Args:
        delta_mm: Offset distance (sign ignored)
        arc_tolerance_mm: Maximum chord-to-arc deviation

    Returns:
        Segment count clamped to [2, 256]
    """
    radius = abs(delta_mm)
    if radius == 0 or not math.isfinite(radius) or arc_tolerance_mm <= 0:
        return MIN_QUAD_SEGMENTS
    ratio = arc_tolerance_mm / radius
    if ratio >= 1.0:
        return MIN_QUAD_SEGMENTS
    step = 2.0 * math.acos(1.0 - ratio)
    segments = math.ceil((math.pi / 2.0) / step)
    return max(MIN_QUAD_SEGMENTS, min(MAX_QUAD_SEGMENTS, segments))


class OffsetEngine:
    """Offsets polygon sets through the lifecycle service's backend.

    On backend failure the input is returned unchanged and OffsetFailed is
    logged. Results are memoized in the lifecycle cache.
    """

    def __init__(self, lifecycle: BackendLifecycleService) -> None:
        self.lifecycle = lifecycle
        self.failures = 0

    def offset(
        self, polygons: PolygonSet, delta_mm: float, arc_tolerance_mm: float
    ) -> PolygonSet:
        """Offset a region by delta_mm with round joins.

        Args:
            polygons: Region to offset
            delta_mm: Positive to grow, negative to shrink
            arc_tolerance_mm: Round-join tessellation tolerance

        Returns:
            Offset region; empty when a shrink erases everything
        """
        if polygons.is_empty or delta_mm == 0:
            return polygons

        quad_segments = quad_segments_for(delta_mm, arc_tolerance_mm)
        key = GeometryCacheKey.build(f"offset({delta_mm!r})", [polygons], arc_tolerance_mm)
        cached = self.lifecycle.cache.get(key)
        if cached is not None:
            return cached

        backend = self.lifecycle.ensure_ready()
        try:
            result = backend.offset(polygons, delta_mm, quad_segments)
            if result.is_empty and delta_mm > 0:
                raise OffsetFailedError(delta_mm, "empty result from growing a region")
        except Exception as e:
            self.failures += 1
            logger.warning(
                "OffsetFailed",
                delta_mm=delta_mm,
                quad_segments=quad_segments,
                error=str(e),
            )
            return polygons

        logger.debug(
            "Offset complete",
            delta_mm=delta_mm,
            quad_segments=quad_segments,
            polygons_in=len(polygons),
            polygons_out=len(result),
        )
        self.lifecycle.cache.set(key, result)
        return result
