"""Tests for the offset engine."""

import math

import pytest

from laseroutline.core import BackendLifecycleService, OffsetEngine, quad_segments_for
from laseroutline.domain import PolygonSet


class RaisingBackend:
    name = "raising"

    def union(self, operands):
        raise RuntimeError("kernel exploded")

    def difference(self, subject, clip):
        raise RuntimeError("kernel exploded")

    def offset(self, polygons, delta_mm, quad_segments):
        raise RuntimeError("kernel exploded")


@pytest.fixture
def engine(lifecycle: BackendLifecycleService) -> OffsetEngine:
    return OffsetEngine(lifecycle)


class TestQuadSegments:
    """Tests for round-join tessellation density."""

    def test_formula(self) -> None:
        """Test ceil((pi/2) / (2*acos(1 - tol/r)))."""
        expected = math.ceil((math.pi / 2) / (2 * math.acos(1 - 0.25 / 3.0)))
        assert quad_segments_for(3.0, 0.25) == expected

    def test_sign_ignored(self) -> None:
        """Test shrinking uses the same density as growing."""
        assert quad_segments_for(-3.0, 0.25) == quad_segments_for(3.0, 0.25)

    def test_clamped_low(self) -> None:
        """Test coarse tolerances never drop below two segments."""
        assert quad_segments_for(1.0, 2.0) == 2
        assert quad_segments_for(0.0, 0.25) == 2

    def test_clamped_high(self) -> None:
        """Test very fine tolerances are capped."""
        assert quad_segments_for(20.0, 1e-9) == 256


class TestOffset:
    """Tests for OffsetEngine.offset."""

    def test_square_grows_to_16mm_box(self, engine: OffsetEngine, make_square) -> None:
        """Test a 10mm square offset by 3mm spans 16mm each way."""
        result = engine.offset(make_square(0, 0, 10), 3.0, 0.25)
        box = result.bounding_box()
        assert box.x == pytest.approx(-3.0)
        assert box.y == pytest.approx(-3.0)
        assert box.width == pytest.approx(16.0)
        assert box.height == pytest.approx(16.0)

    def test_round_corners(self, engine: OffsetEngine, make_square) -> None:
        """Test area is close to square plus sides plus a full circle."""
        area = engine.offset(make_square(0, 0, 10), 3.0, 0.05).area()
        exact = 100.0 + 4 * 10 * 3.0 + math.pi * 9.0
        assert area <= exact
        assert area == pytest.approx(exact, rel=0.01)

    @pytest.mark.parametrize("delta", [0.5, 1.0, 2.0, 5.0])
    def test_monotonic(self, engine: OffsetEngine, make_square, delta: float) -> None:
        """Test growing never loses area and larger deltas grow more."""
        base = make_square(0, 0, 10)
        small = engine.offset(base, delta, 0.25).area()
        large = engine.offset(base, delta * 2, 0.25).area()
        assert base.area() <= small <= large

    def test_shrink_inverts_grow(self, engine: OffsetEngine, make_square) -> None:
        """Test offset(offset(P, d), -d) is close to P for convex P."""
        base = make_square(0, 0, 10)
        restored = engine.offset(engine.offset(base, 2.0, 0.1), -2.0, 0.1)
        assert restored.area() == pytest.approx(base.area(), abs=0.5)
        box = restored.bounding_box()
        assert box.width == pytest.approx(10.0, abs=1e-6)

    def test_shrink_to_nothing(self, engine: OffsetEngine, make_square) -> None:
        """Test a shrink larger than the shape erases it."""
        assert engine.offset(make_square(0, 0, 4), -3.0, 0.25).is_empty

    def test_zero_delta_is_identity(self, engine: OffsetEngine, make_square) -> None:
        """Test delta == 0 returns the input unchanged."""
        base = make_square(0, 0, 10)
        assert engine.offset(base, 0.0, 0.25) is base

    def test_empty_input(self, engine: OffsetEngine) -> None:
        """Test empty input stays empty."""
        assert engine.offset(PolygonSet.empty(), 3.0, 0.25).is_empty

    def test_cached(self, lifecycle: BackendLifecycleService, make_square) -> None:
        """Test repeated offsets are memoized per delta and tolerance."""
        engine = OffsetEngine(lifecycle)
        first = engine.offset(make_square(0, 0, 10), 3.0, 0.25)
        assert engine.offset(make_square(0, 0, 10), 3.0, 0.25) is first
        assert engine.offset(make_square(0, 0, 10), 3.0, 0.5) is not first


class TestFailurePolicy:
    """Tests for best-effort results when the backend fails."""

    def test_exception_returns_input(self, make_square) -> None:
        """Test a failing backend leaves the input unchanged."""
        engine = OffsetEngine(BackendLifecycleService(loader=RaisingBackend))
        base = make_square(0, 0, 10)
        assert engine.offset(base, 3.0, 0.25) is base
        assert engine.failures == 1
