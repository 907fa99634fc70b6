"""Tests for pure geometry helpers and primitive shapes."""

import math

import pytest

from laseroutline.core import (
    circle_polygon,
    combined_bounds,
    recenter,
    rect_polygon,
    set_winding_number,
    winding_number,
)
from laseroutline.domain import BoundingBox, PolygonSet


class TestWindingNumber:
    """Tests for winding numbers."""

    def test_inside_ccw(self) -> None:
        """Test counter-clockwise rings wind +1 around interior points."""
        assert winding_number(5, 5, rect_polygon(0, 0, 10, 10).points) == 1

    def test_inside_cw(self) -> None:
        """Test clockwise rings wind -1."""
        assert winding_number(5, 5, rect_polygon(0, 0, 10, 10).reversed().points) == -1

    def test_outside(self) -> None:
        """Test exterior points have winding zero."""
        assert winding_number(15, 5, rect_polygon(0, 0, 10, 10).points) == 0

    def test_set_sums_rings(self) -> None:
        """Test nested same-direction rings add up."""
        shape = PolygonSet.of(rect_polygon(0, 0, 10, 10), rect_polygon(2, 2, 5, 5))
        assert set_winding_number(3, 3, shape) == 2
        assert set_winding_number(9, 9, shape) == 1


class TestBounds:
    """Tests for combined_bounds()."""

    def test_combined(self, make_square) -> None:
        """Test boxes of several sets are merged."""
        box = combined_bounds([make_square(0, 0, 1), PolygonSet.empty(), make_square(5, 5, 2)])
        assert box == BoundingBox(0, 0, 7, 7)

    def test_all_empty(self) -> None:
        """Test no geometry gives None."""
        assert combined_bounds([PolygonSet.empty()]) is None


class TestRecenter:
    """Tests for recenter()."""

    def test_moves_min_corner_to_margin(self, make_square) -> None:
        """Test the minimum corner lands on (margin, margin)."""
        moved, dx, dy = recenter(make_square(-3, 7, 4), 1.0)
        assert (dx, dy) == (4.0, -6.0)
        assert moved.bounding_box() == BoundingBox(1, 1, 4, 4)

    def test_idempotent(self, make_square) -> None:
        """Test recentering twice equals recentering once."""
        once, _, _ = recenter(make_square(-3, 7, 4), 1.0)
        twice, dx, dy = recenter(once, 1.0)
        assert twice is once
        assert (dx, dy) == (0.0, 0.0)

    def test_reference_box(self, make_square) -> None:
        """Test alignment against another box."""
        moved, dx, dy = recenter(make_square(5, 5, 1), 1.0, reference=BoundingBox(0, 0, 10, 10))
        assert (dx, dy) == (1.0, 1.0)
        assert moved.bounding_box().x == 6.0

    def test_empty(self) -> None:
        """Test empty input is returned untouched."""
        empty = PolygonSet.empty()
        assert recenter(empty, 1.0) == (empty, 0.0, 0.0)


class TestPrimitives:
    """Tests for primitive rings."""

    def test_circle(self) -> None:
        """Test vertices lie on the circle and the ring is counter-clockwise."""
        circle = circle_polygon(3, 4, 6, 0.25)
        assert len(circle) % 4 == 0
        assert circle.signed_area() > 0
        for point in circle:
            assert math.hypot(point.x - 3, point.y - 4) == pytest.approx(6.0)

    def test_circle_finer_tolerance_more_vertices(self) -> None:
        """Test tessellation follows the arc tolerance."""
        assert len(circle_polygon(0, 0, 6, 0.05)) > len(circle_polygon(0, 0, 6, 0.5))

    def test_circle_rejects_bad_radius(self) -> None:
        """Test non-positive radius is an error."""
        with pytest.raises(ValueError):
            circle_polygon(0, 0, 0, 0.25)

    def test_rect(self) -> None:
        """Test rectangle vertex order starts at the minimum corner."""
        assert rect_polygon(1, 1, 6, 6).to_coords() == [(1, 1), (7, 1), (7, 7), (1, 7)]
