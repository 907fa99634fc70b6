"""Configuration settings for Laseroutline."""

from pathlib import Path

from pydantic import BaseModel, Field


class FlattenConfig(BaseModel):
    """Configuration for curve flattening."""

    tolerance_mm: float = Field(
        default=0.15,
        ge=0.01,
        le=5.0,
        description="Default chord tolerance for Bezier and arc flattening",
    )
    min_tolerance_mm: float = Field(
        default=0.01,
        description="Smallest accepted flattening tolerance",
    )
    max_tolerance_mm: float = Field(
        default=5.0,
        description="Largest accepted flattening tolerance",
    )


class OffsetConfig(BaseModel):
    """Configuration for the clearance offset around the silhouette."""

    offset_mm: float = Field(
        default=3.0,
        description="Default outward clearance around the artwork",
    )
    min_offset_mm: float = Field(
        default=1.0,
        ge=0.0,
        description="Laser-safety minimum; smaller requests are raised to this",
    )
    max_offset_mm: float = Field(
        default=20.0,
        gt=0.0,
        description="Largest accepted clearance",
    )
    small_offset_warning_mm: float = Field(
        default=2.0,
        description="Offsets below this produce a fragile-edge warning",
    )
    arc_tolerance_mm: float = Field(
        default=0.25,
        ge=0.01,
        le=2.0,
        description="Default maximum deviation of round joins from a true arc",
    )
    min_arc_tolerance_mm: float = Field(default=0.01, description="Smallest accepted arc tolerance")
    max_arc_tolerance_mm: float = Field(default=2.0, description="Largest accepted arc tolerance")
    min_island_area_mm2: float = Field(
        default=0.5,
        ge=0.0,
        description="Outline islands smaller than this are dropped from the cut layer",
    )


class RingLimits(BaseModel):
    """Allowed ranges for keyring attachments."""

    min_outer_radius_mm: float = Field(default=4.0, gt=0.0)
    max_outer_radius_mm: float = Field(default=10.0, gt=0.0)
    min_inner_radius_mm: float = Field(default=2.0, gt=0.0)
    max_inner_radius_mm: float = Field(default=6.0, gt=0.0)
    min_wall_mm: float = Field(
        default=2.0,
        ge=0.0,
        description="Minimum material between the ring hole and the ring edge",
    )
    max_overlap_mm: float = Field(
        default=5.0,
        ge=0.0,
        description="Largest accepted overlap between ring and outline",
    )


class OutputConfig(BaseModel):
    """Configuration for serialized output."""

    margin_mm: float = Field(
        default=1.0,
        ge=0.0,
        description="Distance from the origin to the cut geometry's minimum corner",
    )
    decimals: int = Field(
        default=3,
        ge=0,
        le=8,
        description="Decimal places in serialized coordinates",
    )
    max_output_points: int = Field(
        default=20000,
        ge=100,
        description="Cut geometry above this many vertices produces a complexity warning",
    )
    cut_stroke_mm: float = Field(
        default=0.1,
        gt=0.0,
        le=1.0,
        description="Stroke width of the CUT layer in exported documents",
    )


class CacheConfig(BaseModel):
    """Configuration for the geometry result cache."""

    capacity: int = Field(
        default=300,
        ge=1,
        description="Maximum cached boolean/offset results before LRU eviction",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class OutlineSettings(BaseModel):
    """Main application settings."""

    flatten: FlattenConfig = Field(default_factory=FlattenConfig)
    offset: OffsetConfig = Field(default_factory=OffsetConfig)
    ring: RingLimits = Field(default_factory=RingLimits)
    output: OutputConfig = Field(default_factory=OutputConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> OutlineSettings:
    """Get default application settings."""
    return OutlineSettings()
