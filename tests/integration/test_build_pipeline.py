"""End-to-end builds from request to layered SVG."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from laseroutline.config import AttachmentSpec, BuildRequest, ContentPath, Placement, RingPosition
from laseroutline.core import BackendLifecycleService, OutlineComposer, flatten
from laseroutline.domain import BuildStatus
from laseroutline.io import build_layered_svg, write_layered_svg

SVG_NS = "{http://www.w3.org/2000/svg}"

# Letter "O": outer circle clockwise in y-down, inner circle the other way
LETTER_O = (
    "M0 10 A10 10 0 0 1 20 10 A10 10 0 0 1 0 10 Z "
    "M5 10 A5 5 0 0 0 15 10 A5 5 0 0 0 5 10 Z"
)

# Heart built from cubic curves
HEART = (
    "M10 30 C10 27 5 20 0 20 C-5 20 -10 25 -10 30 "
    "C-10 40 0 45 10 55 C20 45 30 40 30 30 C30 25 25 20 20 20 C15 20 10 27 10 30 Z"
)


@pytest.fixture(scope="module")
def composer() -> OutlineComposer:
    lifecycle = BackendLifecycleService()
    lifecycle.ensure_ready()
    return OutlineComposer(lifecycle)


def keychain_request(**overrides) -> BuildRequest:
    request = BuildRequest(
        paths=[
            ContentPath(d=LETTER_O),
            ContentPath(
                d=HEART,
                placement=Placement(scale_x=0.5, scale_y=0.5, translate_x=26, translate_y=-5),
            ),
        ],
        offset_mm=2.5,
        attachment=AttachmentSpec(position=RingPosition.LEFT),
    )
    return request.model_copy(update=overrides)


class TestKeychainBuild:
    """Build a letter plus icon keychain with a ring."""

    def test_success(self, composer: OutlineComposer) -> None:
        """Test the full pipeline succeeds without warnings."""
        result = composer.build(keychain_request())
        assert result.status is BuildStatus.SUCCESS
        assert result.warnings == ()

    def test_cut_contains_engrave(self, composer: OutlineComposer) -> None:
        """Test the silhouette sits inside the outline with clearance."""
        result = composer.build(keychain_request())
        cut = flatten(result.cut_path, 0.1).bounding_box()
        engrave = flatten(result.engrave_path, 0.1).bounding_box()
        assert cut.min_x < engrave.min_x - 2.5
        assert cut.max_x >= engrave.max_x + 2.5 - 1e-3
        assert cut.min_y <= engrave.min_y - 2.5 + 1e-3
        assert cut.max_y >= engrave.max_y + 2.5 - 1e-3

    def test_letter_counter_preserved(self, composer: OutlineComposer) -> None:
        """Test the hole of the O survives in both layers."""
        result = composer.build(keychain_request(attachment=None))
        engrave_holes = [p for p in flatten(result.engrave_path, 0.1) if p.is_hole()]
        cut_holes = [p for p in flatten(result.cut_path, 0.1) if p.is_hole()]
        assert len(engrave_holes) == 1
        # The 5mm counter shrinks by the 2.5mm clearance
        assert len(cut_holes) == 1
        assert cut_holes[0].bounding_box().width == pytest.approx(5.0, abs=0.1)

    def test_repeat_builds_identical(self, composer: OutlineComposer) -> None:
        """Test builds are deterministic and served from the cache."""
        first = composer.build(keychain_request())
        hits_before = composer.lifecycle.cache.hits
        second = composer.build(keychain_request())
        assert first == second
        assert composer.lifecycle.cache.hits > hits_before

    def test_layered_svg(self, composer: OutlineComposer, tmp_path: Path) -> None:
        """Test the exported document is valid XML with both layers."""
        result = composer.build(keychain_request())
        out = write_layered_svg(result, tmp_path / "keychain.svg")
        root = ET.parse(str(out)).getroot()
        ids = [g.get("id") for g in root.iter(f"{SVG_NS}g")]
        assert ids == ["CUT", "ENGRAVE"]
        assert out.read_text(encoding="utf-8") == build_layered_svg(result)

    def test_document_size_includes_margin(self, composer: OutlineComposer) -> None:
        """Test the document is the cut bbox plus the margin on each side."""
        result = composer.build(keychain_request())
        assert result.bbox.x == pytest.approx(1.0)
        assert result.bbox.y == pytest.approx(1.0)
        assert result.document_width == pytest.approx(result.bbox.width + 2.0)
        assert result.document_height == pytest.approx(result.bbox.height + 2.0)
