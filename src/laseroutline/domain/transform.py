"""Affine transforms applied once per point.

All placement (scale, rotate, translate) is expressed as a single 2x3 matrix:

    | a  c  e |
    | b  d  f |

so that a point maps to (a*x + c*y + e, b*x + d*y + f).
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AffineTransform:
    """A 2D affine matrix in SVG (a, b, c, d, e, f) order."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def translation(cls, dx: float, dy: float) -> "AffineTransform":
        return cls(e=dx, f=dy)

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> "AffineTransform":
        return cls(a=sx, d=sx if sy is None else sy)

    @classmethod
    def rotation(cls, degrees: float) -> "AffineTransform":
        """Rotation about the origin, positive from +x towards +y."""
        if degrees % 360.0 == 0.0:
            return cls()
        rad = math.radians(degrees)
        cos_r = math.cos(rad)
        sin_r = math.sin(rad)
        return cls(a=cos_r, b=sin_r, c=-sin_r, d=cos_r)

    @classmethod
    def from_placement(
        cls,
        scale_x: float,
        scale_y: float,
        translate_x: float,
        translate_y: float,
        rotation_deg: float = 0.0,
    ) -> "AffineTransform":
        """Scale about the origin, rotate, then translate."""
        return (
            cls.translation(translate_x, translate_y)
            @ cls.rotation(rotation_deg)
            @ cls.scaling(scale_x, scale_y)
        )

    def __matmul__(self, other: "AffineTransform") -> "AffineTransform":
        """Compose so that (self @ other) applies other first, then self."""
        return AffineTransform(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a single point."""
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def is_identity(self) -> bool:
        return self == AffineTransform()

    def max_scale(self) -> float:
        """Largest stretch factor of the linear part (its spectral norm)."""
        # Singular values of [[a, c], [b, d]]
        s1 = self.a * self.a + self.b * self.b + self.c * self.c + self.d * self.d
        det = self.a * self.d - self.b * self.c
        disc = math.sqrt(max(s1 * s1 - 4.0 * det * det, 0.0))
        return math.sqrt((s1 + disc) / 2.0)
