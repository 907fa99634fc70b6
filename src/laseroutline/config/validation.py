"""Normalization of build requests into immutable build parameters.

normalize_request() is the one place where user-facing values are clamped to
their safe ranges. The composer only ever sees the frozen BuildParameters it
returns.
"""

import math

from pydantic import BaseModel, ConfigDict

from laseroutline.config.request import BuildRequest, ContentPath, RingPosition
from laseroutline.config.settings import OutlineSettings, get_default_settings
from laseroutline.domain import BuildWarning, WarningLevel


class RingParameters(BaseModel):
    """Keyring loop after clamping."""

    model_config = ConfigDict(frozen=True)

    outer_radius_mm: float
    inner_radius_mm: float
    position: RingPosition
    overlap_mm: float
    min_wall_mm: float

    @property
    def wall_mm(self) -> float:
        return self.outer_radius_mm - self.inner_radius_mm


class BuildParameters(BaseModel):
    """Validated, immutable inputs for one build."""

    model_config = ConfigDict(frozen=True)

    contents: tuple[ContentPath, ...]
    offset_mm: float
    arc_tolerance_mm: float
    flatten_tolerance_mm: float
    ring: RingParameters | None
    margin_mm: float
    min_island_area_mm2: float
    decimals: int
    max_output_points: int
    warnings: tuple[BuildWarning, ...] = ()


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]; NaN and infinities become low."""
    if not math.isfinite(value):
        return low
    return max(low, min(high, value))


def clamp_ring(
    outer_radius_mm: float,
    inner_radius_mm: float,
    settings: OutlineSettings,
) -> tuple[float, float]:
    """Clamp ring radii so the hole always leaves at least min_wall_mm of material.

    Returns:
        Tuple of (outer_radius_mm, inner_radius_mm)
    """
    limits = settings.ring
    outer = clamp(outer_radius_mm, limits.min_outer_radius_mm, limits.max_outer_radius_mm)
    inner = clamp(inner_radius_mm, limits.min_inner_radius_mm, limits.max_inner_radius_mm)
    inner = min(inner, outer - limits.min_wall_mm)
    return outer, max(inner, 0.0)


def normalize_request(
    request: BuildRequest, settings: OutlineSettings | None = None
) -> BuildParameters:
    """Turn a raw build request into clamped, immutable build parameters.

    Args:
        request: Request as supplied by the caller
        settings: Limits and defaults (default settings when None)

    Returns:
        BuildParameters with every value inside its safe range, plus warnings
        describing any clamping that changed the caller's intent
    """
    settings = settings or get_default_settings()
    warnings: list[BuildWarning] = []

    offset_cfg = settings.offset
    requested_offset = (
        offset_cfg.offset_mm if request.offset_mm is None else request.offset_mm
    )
    offset_mm = clamp(requested_offset, offset_cfg.min_offset_mm, offset_cfg.max_offset_mm)
    if not math.isfinite(requested_offset) or requested_offset < offset_cfg.min_offset_mm:
        warnings.append(
            BuildWarning(
                id="offset-clamped",
                level=WarningLevel.INFO,
                message=(
                    f"Outline offset raised to the {offset_cfg.min_offset_mm:g}mm "
                    "laser-safety minimum."
                ),
            )
        )
    if offset_mm < offset_cfg.small_offset_warning_mm:
        warnings.append(
            BuildWarning(
                id="offset-small",
                level=WarningLevel.INFO,
                message="Small outline offset may result in fragile edges.",
            )
        )

    arc_tolerance = clamp(
        offset_cfg.arc_tolerance_mm
        if request.arc_tolerance_mm is None
        else request.arc_tolerance_mm,
        offset_cfg.min_arc_tolerance_mm,
        offset_cfg.max_arc_tolerance_mm,
    )
    flatten_tolerance = clamp(
        settings.flatten.tolerance_mm
        if request.flatten_tolerance_mm is None
        else request.flatten_tolerance_mm,
        settings.flatten.min_tolerance_mm,
        settings.flatten.max_tolerance_mm,
    )

    ring: RingParameters | None = None
    if request.attachment is not None:
        spec = request.attachment
        outer, inner = clamp_ring(spec.outer_radius_mm, spec.inner_radius_mm, settings)
        # Only a hole shrunk to protect the wall is reported
        range_inner = clamp(
            spec.inner_radius_mm,
            settings.ring.min_inner_radius_mm,
            settings.ring.max_inner_radius_mm,
        )
        if inner < range_inner:
            warnings.append(
                BuildWarning(
                    id="ring-wall-thin",
                    level=WarningLevel.WARN,
                    message=(
                        f"Ring wall too thin ({outer - range_inner:.1f}mm). "
                        f"Hole reduced to keep {settings.ring.min_wall_mm:g}mm of material."
                    ),
                )
            )
        ring = RingParameters(
            outer_radius_mm=outer,
            inner_radius_mm=inner,
            position=spec.position,
            overlap_mm=clamp(spec.overlap_mm, 0.0, min(settings.ring.max_overlap_mm, outer)),
            min_wall_mm=settings.ring.min_wall_mm,
        )

    contents = tuple(c for c in request.paths if c.d and c.d.strip())
    placed = tuple(c for c in contents if c.placement.is_finite())
    if len(placed) < len(contents):
        warnings.append(
            BuildWarning(
                id="placement-invalid",
                level=WarningLevel.WARN,
                message=(
                    f"Skipped {len(contents) - len(placed)} path(s) with a "
                    "non-finite scale or offset."
                ),
            )
        )
        contents = placed
    if not contents:
        warnings.append(
            BuildWarning(
                id="content-empty",
                level=WarningLevel.ERROR,
                message="No artwork paths to outline.",
            )
        )

    return BuildParameters(
        contents=contents,
        offset_mm=offset_mm,
        arc_tolerance_mm=arc_tolerance,
        flatten_tolerance_mm=flatten_tolerance,
        ring=ring,
        margin_mm=settings.output.margin_mm,
        min_island_area_mm2=offset_cfg.min_island_area_mm2,
        decimals=settings.output.decimals,
        max_output_points=settings.output.max_output_points,
        warnings=tuple(warnings),
    )
