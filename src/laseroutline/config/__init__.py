"""Configuration management for laseroutline.

This module provides configuration management using Pydantic models.
Configuration can be provided via a request file, CLI arguments or defaults.

Key classes:
- OutlineSettings: Main application settings (flatten, offset, ring, output,
  cache and logging sections)
- BuildRequest: Raw request from the caller (paths, placements, attachment)
- BuildParameters: Clamped, immutable parameters produced by normalize_request
"""

from laseroutline.config.request import (
    AttachmentKind,
    AttachmentSpec,
    BuildRequest,
    ContentPath,
    Placement,
    RingPosition,
)
from laseroutline.config.settings import (
    CacheConfig,
    FlattenConfig,
    LoggingConfig,
    OffsetConfig,
    OutlineSettings,
    OutputConfig,
    RingLimits,
    get_default_settings,
)
from laseroutline.config.validation import (
    BuildParameters,
    RingParameters,
    clamp,
    clamp_ring,
    normalize_request,
)

__all__ = [
    "AttachmentKind",
    "AttachmentSpec",
    "BuildParameters",
    "BuildRequest",
    "CacheConfig",
    "ContentPath",
    "FlattenConfig",
    "LoggingConfig",
    "OffsetConfig",
    "OutlineSettings",
    "OutputConfig",
    "Placement",
    "RingLimits",
    "RingParameters",
    "RingPosition",
    "clamp",
    "clamp_ring",
    "get_default_settings",
    "normalize_request",
]
