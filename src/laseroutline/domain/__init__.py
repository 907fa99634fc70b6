"""Domain models for laseroutline.

This module contains the value types that flow through the outline pipeline.
All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries for JSON output
- Independent of the polygon backend implementation

Key classes:
- Point: A 2D point in millimetres
- Polygon: An implicitly closed ring of points
- PolygonSet: A filled region (outer rings and holes)
- BoundingBox: Axis-aligned box with validity checks
- AffineTransform: Single matrix applied once per point
- PathCommand: One tokenized path instruction
- BuildResult: Serialized cut/engrave output of a build
"""

from laseroutline.domain.bounds import BoundingBox
from laseroutline.domain.commands import CommandKind, PathCommand
from laseroutline.domain.polygon import Point, Polygon, PolygonSet
from laseroutline.domain.result import (
    BuildResult,
    BuildStatus,
    BuildWarning,
    WarningLevel,
)
from laseroutline.domain.transform import AffineTransform

__all__: list[str] = [
    # Enums
    "BuildStatus",
    "CommandKind",
    "WarningLevel",
    # Core types
    "AffineTransform",
    "BoundingBox",
    "BuildResult",
    "BuildWarning",
    "PathCommand",
    "Point",
    "Polygon",
    "PolygonSet",
]
