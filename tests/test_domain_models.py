"""Tests for domain models to verify they work correctly."""

import math
from dataclasses import FrozenInstanceError

import pytest

from laseroutline.domain import (
    AffineTransform,
    BoundingBox,
    BuildResult,
    BuildStatus,
    BuildWarning,
    CommandKind,
    PathCommand,
    Point,
    Polygon,
    PolygonSet,
    WarningLevel,
)


def square(x: float, y: float, size: float) -> Polygon:
    return Polygon.from_coords([(x, y), (x + size, y), (x + size, y + size), (x, y + size)])


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(1.5, -2.0).to_tuple() == (1.5, -2.0)

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore


class TestPolygon:
    """Tests for Polygon class."""

    def test_polygon_requires_three_points(self) -> None:
        """Test that fewer than three points is rejected."""
        with pytest.raises(ValueError):
            Polygon.from_coords([(0, 0), (1, 1)])

    def test_signed_area_ccw_is_positive(self) -> None:
        """Test shoelace sign for counter-clockwise rings."""
        ring = square(0, 0, 10)
        assert ring.signed_area() == pytest.approx(100.0)
        assert not ring.is_hole()

    def test_signed_area_cw_is_negative(self) -> None:
        """Test reversed ring becomes a hole."""
        ring = square(0, 0, 10).reversed()
        assert ring.signed_area() == pytest.approx(-100.0)
        assert ring.area() == pytest.approx(100.0)
        assert ring.is_hole()

    def test_bounding_box(self) -> None:
        """Test ring bounding box."""
        box = square(2, 3, 4).bounding_box()
        assert (box.x, box.y, box.width, box.height) == (2, 3, 4, 4)

    def test_translated(self) -> None:
        """Test translation moves every vertex."""
        moved = square(0, 0, 1).translated(5, -5)
        assert moved.to_coords() == [(5, -5), (6, -5), (6, -4), (5, -4)]

    def test_transformed(self) -> None:
        """Test affine transform applied to every vertex."""
        scaled = square(0, 0, 1).transformed(AffineTransform.scaling(2.0, 3.0))
        assert scaled.to_coords() == [(0, 0), (2, 0), (2, 3), (0, 3)]

    def test_polygon_is_frozen(self) -> None:
        """Test rings cannot be mutated and still cache their area."""
        ring = square(0, 0, 2)
        with pytest.raises(FrozenInstanceError):
            ring.points = ()  # type: ignore
        assert ring.signed_area() == ring.signed_area() == pytest.approx(4.0)


class TestPolygonSet:
    """Tests for PolygonSet class."""

    def test_empty_set(self) -> None:
        """Test the empty set has no bounds and no area."""
        empty = PolygonSet.empty()
        assert empty.is_empty
        assert empty.bounding_box() is None
        assert empty.area() == 0.0
        assert empty.point_count == 0

    def test_area_subtracts_holes(self) -> None:
        """Test net area with a clockwise hole."""
        shape = PolygonSet.of(square(0, 0, 10), square(2, 2, 5).reversed())
        assert shape.area() == pytest.approx(75.0)

    def test_bounding_box_spans_all_rings(self) -> None:
        """Test set bounding box is the union of ring boxes."""
        shape = PolygonSet.of(square(0, 0, 1), square(9, 4, 1))
        box = shape.bounding_box()
        assert box == BoundingBox(x=0, y=0, width=10, height=5)


class TestBoundingBox:
    """Tests for BoundingBox class."""

    def test_extents(self) -> None:
        """Test min/max/center accessors."""
        box = BoundingBox.from_extents(1, 2, 5, 10)
        assert (box.min_x, box.min_y, box.max_x, box.max_y) == (1, 2, 5, 10)
        assert box.center == (3, 6)

    @pytest.mark.parametrize(
        ("width", "height", "valid"),
        [
            (1.0, 1.0, True),
            (0.0, 1.0, False),
            (1.0, -1.0, False),
            (math.inf, 1.0, False),
            (math.nan, 1.0, False),
        ],
    )
    def test_is_valid(self, width: float, height: float, valid: bool) -> None:
        """Test degenerate and non-finite boxes are invalid."""
        assert BoundingBox(0, 0, width, height).is_valid() is valid


class TestAffineTransform:
    """Tests for AffineTransform class."""

    def test_identity(self) -> None:
        """Test identity leaves points alone."""
        assert AffineTransform().apply(3, 4) == (3, 4)
        assert AffineTransform().is_identity()

    def test_placement_scales_then_translates(self) -> None:
        """Test placement matrix order."""
        matrix = AffineTransform.from_placement(2, 3, 10, 20)
        assert matrix.apply(1, 1) == (12, 23)

    def test_composition_applies_right_operand_first(self) -> None:
        """Test (a @ b) applies b before a."""
        scale = AffineTransform.scaling(2)
        move = AffineTransform.translation(1, 0)
        assert (scale @ move).apply(0, 0) == (2, 0)
        assert (move @ scale).apply(0, 0) == (1, 0)

    def test_zero_rotation_is_exact_identity(self) -> None:
        """Test whole turns produce the identity matrix."""
        assert AffineTransform.rotation(0).is_identity()
        assert AffineTransform.rotation(360).is_identity()

    def test_max_scale(self) -> None:
        """Test spectral norm for scale and rotation."""
        assert AffineTransform.scaling(2, 5).max_scale() == pytest.approx(5.0)
        quarter_turn = AffineTransform(a=0.0, b=1.0, c=-1.0, d=0.0)
        assert quarter_turn.max_scale() == pytest.approx(1.0)


class TestPathCommand:
    """Tests for CommandKind and PathCommand."""

    @pytest.mark.parametrize(
        ("letter", "arity"),
        [("M", 2), ("l", 2), ("H", 1), ("v", 1), ("C", 6), ("s", 4), ("Q", 4), ("t", 2), ("A", 7), ("z", 0)],
    )
    def test_arity(self, letter: str, arity: int) -> None:
        """Test operand counts per command letter."""
        assert CommandKind.from_letter(letter).arity == arity

    def test_relative(self) -> None:
        """Test lowercase commands are relative."""
        assert PathCommand(CommandKind.LINE_REL, (1.0, 2.0)).is_relative
        assert not PathCommand(CommandKind.LINE_ABS, (1.0, 2.0)).is_relative


class TestBuildResult:
    """Tests for BuildResult serialization."""

    def test_to_dict(self) -> None:
        """Test JSON-compatible dictionary shape."""
        result = BuildResult(
            status=BuildStatus.FALLBACK,
            cut_path="M 1.000 1.000 L 2.000 1.000 L 2.000 2.000 Z",
            engrave_path="",
            bbox=BoundingBox(1, 1, 1, 1),
            document_width=3,
            document_height=3,
            warnings=(BuildWarning("offset-small", WarningLevel.INFO, "small"),),
            reason="Invalid bounds after silhouette: no geometry",
            generation=7,
        )
        data = result.to_dict()
        assert data["status"] == "fallback"
        assert data["bbox"] == {"x": 1, "y": 1, "width": 1, "height": 1}
        assert data["warnings"] == [{"id": "offset-small", "level": "info", "message": "small"}]
        assert data["generation"] == 7
        assert result.is_fallback
