"""Union and difference of polygon sets under the non-zero fill rule."""

from collections.abc import Sequence

import structlog

from laseroutline.core.lifecycle import BackendLifecycleService, GeometryCacheKey
from laseroutline.domain import PolygonSet
from laseroutline.exceptions import BooleanOpFailedError

logger = structlog.get_logger(__name__)


class BooleanEngine:
    """Polygon booleans through the lifecycle service's backend.

    Never raises for geometric input: when the backend throws, or returns
    nothing for a union of non-empty operands, the engine logs
    BooleanOpFailed and returns a copy of the first non-empty operand.
    Results are memoized in the lifecycle cache.

    Example:
        engine = BooleanEngine(lifecycle)
        silhouette = engine.union(letters, emoji)
        ring = engine.difference(outer_disc, inner_disc)
    """

    def __init__(self, lifecycle: BackendLifecycleService) -> None:
        self.lifecycle = lifecycle
        self.failures = 0

    def union(self, *sets: PolygonSet) -> PolygonSet:
        """Union of every operand's filled region.

        Empty operands are ignored; the result is normalized (outer rings
        counter-clockwise, holes clockwise, stable polygon order).
        """
        operands = [s for s in sets if not s.is_empty]
        if not operands:
            return PolygonSet.empty()

        key = GeometryCacheKey.build("union", operands)
        cached = self.lifecycle.cache.get(key)
        if cached is not None:
            return cached

        backend = self.lifecycle.ensure_ready()
        try:
            result = backend.union(operands)
            if result.is_empty and any(op.area() > 0 for op in operands):
                raise BooleanOpFailedError("union", "empty result from non-empty input")
        except Exception as e:
            return self._best_effort("union", operands, e)

        self.lifecycle.cache.set(key, result)
        return result

    def difference(self, subject: PolygonSet, clip: PolygonSet) -> PolygonSet:
        """Subject's filled region minus clip's filled region."""
        if subject.is_empty:
            return PolygonSet.empty()
        if clip.is_empty:
            return self.union(subject)

        key = GeometryCacheKey.build("difference", [subject, clip])
        cached = self.lifecycle.cache.get(key)
        if cached is not None:
            return cached

        backend = self.lifecycle.ensure_ready()
        try:
            result = backend.difference(subject, clip)
        except Exception as e:
            return self._best_effort("difference", [subject], e)

        self.lifecycle.cache.set(key, result)
        return result

    def _best_effort(
        self, operation: str, operands: Sequence[PolygonSet], error: Exception
    ) -> PolygonSet:
        self.failures += 1
        logger.warning(
            "BooleanOpFailed",
            operation=operation,
            operands=len(operands),
            error=str(error),
        )
        for operand in operands:
            if not operand.is_empty:
                return PolygonSet(polygons=operand.polygons)
        return PolygonSet.empty()
