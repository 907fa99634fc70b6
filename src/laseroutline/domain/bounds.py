"""Axis-aligned bounding boxes in millimetres."""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned rectangle given by its minimum corner and size.

    Attributes:
        x: Minimum x coordinate
        y: Minimum y coordinate
        width: Extent along x
        height: Extent along y
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_extents(
        cls, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> "BoundingBox":
        """Build a box from its min/max coordinates."""
        return cls(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def is_valid(self) -> bool:
        """True when every field is finite and the box has positive area."""
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(v) for v in values):
            return False
        return self.width > 0 and self.height > 0

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Smallest box containing both boxes."""
        return BoundingBox.from_extents(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to {x, y, width, height}."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
