"""Outline composition pipeline.

This module turns a build request into cut and engrave geometry:

    flatten -> union (silhouette) -> offset (outline) -> [attach ring]
    -> recenter -> serialize

Every stage runs synchronously against the backend owned by the lifecycle
service. A missing or degenerate bounding box at any checkpoint abandons the
pipeline and emits a deterministic placeholder rectangle instead.

Key components:
- OutlineComposer: Orchestrates one build per call
- fallback_result: The placeholder rectangle for a failed build
"""

import math
import time

import structlog

from laseroutline.config import (
    BuildParameters,
    BuildRequest,
    OutlineSettings,
    RingParameters,
    RingPosition,
    get_default_settings,
    normalize_request,
)
from laseroutline.core.boolean import BooleanEngine
from laseroutline.core.flattener import flatten
from laseroutline.core.geometry import combined_bounds, recenter
from laseroutline.core.lifecycle import BackendLifecycleService
from laseroutline.core.offset import OffsetEngine
from laseroutline.core.primitives import circle_polygon, rect_polygon
from laseroutline.domain import (
    BoundingBox,
    BuildResult,
    BuildStatus,
    BuildWarning,
    PolygonSet,
    WarningLevel,
)
from laseroutline.exceptions import GeometryError, InvalidBoundsError
from laseroutline.io.serializer import polygons_to_path
from laseroutline.utils import BuildLogger, BuildStats

# Extra width the placeholder reserves around a ring, beyond its diameter
FALLBACK_RING_ALLOWANCE_MM = 2.0


def require_bounds(polygons: PolygonSet, stage: str) -> BoundingBox:
    """Bounding box of a stage's output.

    Raises:
        InvalidBoundsError: If the box is missing, non-finite or has no area
    """
    box = polygons.bounding_box()
    if box is None:
        raise InvalidBoundsError(stage, "no geometry")
    if not box.is_valid():
        raise InvalidBoundsError(stage, f"degenerate box {box.width}x{box.height}")
    return box


def ring_center(bounds: BoundingBox, ring: RingParameters) -> tuple[float, float]:
    """Center of the ring disc so it reaches overlap_mm over the outline's edge."""
    cx, cy = bounds.center
    r = ring.outer_radius_mm
    if ring.position is RingPosition.RIGHT:
        return bounds.max_x + r - ring.overlap_mm, cy
    if ring.position is RingPosition.TOP:
        return cx, bounds.min_y - r + ring.overlap_mm
    return bounds.min_x - r + ring.overlap_mm, cy


def remove_small_islands(polygons: PolygonSet, min_area_mm2: float) -> tuple[PolygonSet, int]:
    """Drop outer rings smaller than min_area_mm2 along with their holes.

    Expects normalized input where each outer ring is followed by its holes.

    Returns:
        Tuple of (cleaned set, number of islands removed)
    """
    kept = []
    removed = 0
    dropping = False
    for polygon in polygons:
        if polygon.is_hole():
            if not dropping:
                kept.append(polygon)
            continue
        dropping = polygon.area() < min_area_mm2
        if dropping:
            removed += 1
        else:
            kept.append(polygon)
    if not removed:
        return polygons, 0
    return PolygonSet(polygons=tuple(kept)), removed


def fallback_result(
    params: BuildParameters,
    content_bounds: BoundingBox | None,
    reason: str,
    generation: int = 0,
    warnings: tuple[BuildWarning, ...] = (),
) -> BuildResult:
    """Placeholder rectangle sized from the content and clearance.

    Deterministic for equal inputs and always finite.
    """
    content_w = content_h = 0.0
    if content_bounds is not None:
        if math.isfinite(content_bounds.width) and math.isfinite(content_bounds.height):
            content_w = max(content_bounds.width, 0.0)
            content_h = max(content_bounds.height, 0.0)
    width = content_w + 2 * params.offset_mm
    if params.ring is not None:
        width += 2 * params.ring.outer_radius_mm + FALLBACK_RING_ALLOWANCE_MM
    height = content_h + 2 * params.offset_mm

    margin = params.margin_mm
    placeholder = PolygonSet.of(rect_polygon(margin, margin, width, height))
    return BuildResult(
        status=BuildStatus.FALLBACK,
        cut_path=polygons_to_path(placeholder, params.decimals),
        engrave_path="",
        bbox=BoundingBox(x=margin, y=margin, width=width, height=height),
        document_width=width + 2 * margin,
        document_height=height + 2 * margin,
        warnings=warnings,
        reason=reason,
        generation=generation,
    )


class OutlineComposer:
    """Builds laser-cut outlines from placed artwork paths.

    Example:
        lifecycle = BackendLifecycleService()
        composer = OutlineComposer(lifecycle)
        result = composer.build(BuildRequest(paths=[ContentPath(d="M0 0 H10 V10 H0 Z")]))
        print(result.cut_path)
    """

    def __init__(
        self,
        lifecycle: BackendLifecycleService,
        settings: OutlineSettings | None = None,
        logger=None,
    ) -> None:
        """Initialize the composer.

        Args:
            lifecycle: Owner of the polygon backend and result cache
            settings: Defaults and limits (default settings when None)
            logger: structlog logger (module logger when None)
        """
        self.lifecycle = lifecycle
        self.settings = settings or get_default_settings()
        self.logger = logger or structlog.get_logger(__name__)
        self.boolean = BooleanEngine(lifecycle)
        self.offsetter = OffsetEngine(lifecycle)
        self.last_stats: BuildStats | None = None

    def build(self, request: BuildRequest, generation: int = 0) -> BuildResult:
        """Run the full pipeline for one request.

        Args:
            request: Artwork paths, clearance and optional ring
            generation: Caller's request counter, echoed in the result

        Returns:
            BuildResult with status SUCCESS, or FALLBACK and a reason

        Raises:
            BackendInitError: If the polygon backend cannot be loaded
        """
        params = normalize_request(request, self.settings)
        build_logger = BuildLogger(self.logger)
        for warning in params.warnings:
            build_logger.log_warning(warning)

        self.lifecycle.ensure_ready()

        contributions = self._flatten_contents(params, build_logger)
        try:
            result = self._compose(params, contributions, build_logger, generation)
        except GeometryError as e:
            build_logger.log_fallback(str(e), type(e).__name__)
            result = fallback_result(
                params,
                combined_bounds(contributions),
                reason=str(e),
                generation=generation,
                warnings=params.warnings,
            )

        build_logger.log_build_complete(
            result.status.value, generation, self.lifecycle.cache.stats()
        )
        self.last_stats = build_logger.stats
        return result

    def _flatten_contents(
        self, params: BuildParameters, build_logger: BuildLogger
    ) -> list[PolygonSet]:
        start_time = time.time()
        contributions = [
            flatten(content.d, params.flatten_tolerance_mm, content.placement.to_transform())
            for content in params.contents
        ]
        build_logger.log_stage(
            "flatten",
            (time.time() - start_time) * 1000,
            polygons=sum(len(c) for c in contributions),
            points=sum(c.point_count for c in contributions),
        )
        return contributions

    def _compose(
        self,
        params: BuildParameters,
        contributions: list[PolygonSet],
        build_logger: BuildLogger,
        generation: int,
    ) -> BuildResult:
        # Stages whose kernel call fell back to an unprocessed copy
        degraded: list[str] = []

        start_time = time.time()
        failures = self.boolean.failures
        silhouette = self.boolean.union(*contributions)
        if self.boolean.failures > failures:
            degraded.append("silhouette")
        require_bounds(silhouette, "silhouette")
        build_logger.log_stage(
            "silhouette",
            (time.time() - start_time) * 1000,
            polygons=len(silhouette),
            points=silhouette.point_count,
        )

        start_time = time.time()
        failures = self.offsetter.failures
        outline = self.offsetter.offset(silhouette, params.offset_mm, params.arc_tolerance_mm)
        if self.offsetter.failures > failures:
            degraded.append("outline")
        outline, removed = remove_small_islands(outline, params.min_island_area_mm2)
        build_logger.log_islands_removed(removed, params.min_island_area_mm2)
        outline_bounds = require_bounds(outline, "outline")
        build_logger.log_stage(
            "outline",
            (time.time() - start_time) * 1000,
            polygons=len(outline),
            points=outline.point_count,
        )

        cut = outline
        if params.ring is not None:
            start_time = time.time()
            failures = self.boolean.failures
            cut = self._attach_ring(outline, outline_bounds, params)
            if self.boolean.failures > failures:
                degraded.append("attachment")
            require_bounds(cut, "attachment")
            build_logger.log_stage(
                "attachment",
                (time.time() - start_time) * 1000,
                polygons=len(cut),
                points=cut.point_count,
            )

        cut, dx, dy = recenter(cut, params.margin_mm)
        engrave = silhouette.translated(dx, dy) if (dx or dy) else silhouette
        bbox = require_bounds(cut, "recenter")

        warnings = list(params.warnings)
        if cut.point_count > params.max_output_points:
            warning = BuildWarning(
                id="too-complex",
                level=WarningLevel.WARN,
                message=(
                    f"Outline has {cut.point_count} points "
                    f"(limit {params.max_output_points}); cutting may be slow."
                ),
            )
            build_logger.log_warning(warning)
            warnings.append(warning)
        if degraded:
            warning = BuildWarning(
                id="geometry-degraded",
                level=WarningLevel.WARN,
                message=(
                    f"Polygon kernel failed during {', '.join(degraded)}; "
                    "that stage kept its unprocessed input."
                ),
            )
            build_logger.log_warning(warning)
            warnings.append(warning)

        return BuildResult(
            status=BuildStatus.SUCCESS,
            cut_path=polygons_to_path(cut, params.decimals),
            engrave_path=polygons_to_path(engrave, params.decimals),
            bbox=bbox,
            document_width=bbox.width + 2 * params.margin_mm,
            document_height=bbox.height + 2 * params.margin_mm,
            warnings=tuple(warnings),
            generation=generation,
        )

    def _attach_ring(
        self, outline: PolygonSet, bounds: BoundingBox, params: BuildParameters
    ) -> PolygonSet:
        ring = params.ring
        cx, cy = ring_center(bounds, ring)
        outer = PolygonSet.of(
            circle_polygon(cx, cy, ring.outer_radius_mm, params.arc_tolerance_mm)
        )
        fused = self.boolean.union(outline, outer)
        if ring.inner_radius_mm <= 0:
            return fused
        inner = PolygonSet.of(
            circle_polygon(cx, cy, ring.inner_radius_mm, params.arc_tolerance_mm)
        )
        return self.boolean.difference(fused, inner)
