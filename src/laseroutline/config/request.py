"""Build request models.

A build request is what the surrounding application hands to the engine:
already-parsed path strings, each with its placement in the shared frame,
plus the clearance parameters and an optional keyring attachment.
"""

import math
from enum import Enum

from pydantic import BaseModel, Field

from laseroutline.domain import AffineTransform


class RingPosition(str, Enum):
    """Side of the outline the keyring loop attaches to."""

    LEFT = "left"
    TOP = "top"
    RIGHT = "right"


class AttachmentKind(str, Enum):
    """Kind of attachment fused to the outline."""

    RING = "ring"


class AttachmentSpec(BaseModel):
    """Declarative keyring loop: an outer disc fused in, an inner disc cut out."""

    kind: AttachmentKind = AttachmentKind.RING
    outer_radius_mm: float = Field(default=6.0, description="Radius of the fused disc")
    inner_radius_mm: float = Field(default=3.0, description="Radius of the hole")
    position: RingPosition = RingPosition.LEFT
    overlap_mm: float = Field(
        default=1.0,
        description="How far the disc reaches over the outline's bounding-box edge",
    )


class Placement(BaseModel):
    """Scale, rotate, then translate one contribution into the shared frame (mm)."""

    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation_deg: float = Field(default=0.0, description="Counter-clockwise in a y-up frame")
    translate_x: float = 0.0
    translate_y: float = 0.0

    def is_finite(self) -> bool:
        """True when every component is a finite number."""
        return all(
            math.isfinite(v)
            for v in (
                self.scale_x,
                self.scale_y,
                self.rotation_deg,
                self.translate_x,
                self.translate_y,
            )
        )

    def to_transform(self) -> AffineTransform:
        """Express the placement as a single affine matrix."""
        return AffineTransform.from_placement(
            self.scale_x,
            self.scale_y,
            self.translate_x,
            self.translate_y,
            rotation_deg=self.rotation_deg,
        )


class ContentPath(BaseModel):
    """One glyph or icon contribution."""

    d: str = Field(default="", description="SVG path data")
    placement: Placement = Field(default_factory=Placement)


class BuildRequest(BaseModel):
    """Everything needed for one outline build."""

    paths: list[ContentPath] = Field(default_factory=list)
    offset_mm: float | None = Field(
        default=None,
        description="Outward clearance; settings default when omitted",
    )
    arc_tolerance_mm: float | None = Field(
        default=None,
        description="Round-join tessellation tolerance; settings default when omitted",
    )
    flatten_tolerance_mm: float | None = Field(
        default=None,
        description="Curve flattening tolerance; settings default when omitted",
    )
    attachment: AttachmentSpec | None = None
