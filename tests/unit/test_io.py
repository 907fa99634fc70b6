"""Tests for path serialization, SVG documents and request loading."""

import json
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from laseroutline.core import flatten
from laseroutline.domain import BoundingBox, BuildResult, BuildStatus, Polygon, PolygonSet
from laseroutline.exceptions import RequestError
from laseroutline.io import (
    build_layered_svg,
    format_number,
    load_request,
    polygons_to_path,
    write_layered_svg,
)

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def result() -> BuildResult:
    return BuildResult(
        status=BuildStatus.SUCCESS,
        cut_path="M 1.000 1.000 L 17.000 1.000 L 17.000 17.000 L 1.000 17.000 Z",
        engrave_path="M 4.000 4.000 L 14.000 4.000 L 14.000 14.000 L 4.000 14.000 Z",
        bbox=BoundingBox(1, 1, 16, 16),
        document_width=18,
        document_height=18,
    )


class TestSerializer:
    """Tests for polygons_to_path()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1.0, "1.000"), (-0.0, "0.000"), (-0.0001, "0.000"), (-0.5, "-0.500"), (2.34567, "2.346")],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        """Test fixed decimals and negative zero normalization."""
        assert format_number(value) == expected

    def test_straight_line_round_trip(self) -> None:
        """Test straight-line paths serialize back to their vertices."""
        path = polygons_to_path(flatten("M0 0 L10 0 L10 10 L0 10 Z", 0.1))
        assert path == "M 0.000 0.000 L 10.000 0.000 L 10.000 10.000 L 0.000 10.000 Z"
        assert polygons_to_path(flatten(path, 0.1)) == path

    def test_one_subpath_per_ring(self) -> None:
        """Test each ring gets its own M ... Z."""
        shape = PolygonSet.of(
            Polygon.from_coords([(0, 0), (1, 0), (1, 1)]),
            Polygon.from_coords([(5, 5), (6, 5), (6, 6)]),
        )
        path = polygons_to_path(shape, decimals=1)
        assert path == "M 0.0 0.0 L 1.0 0.0 L 1.0 1.0 Z M 5.0 5.0 L 6.0 5.0 L 6.0 6.0 Z"

    def test_only_m_l_z_commands(self) -> None:
        """Test curved input is emitted with straight commands only."""
        path = polygons_to_path(flatten("M0 0 C0 10 10 10 10 0 A5 5 0 0 1 0 0 Z", 0.5))
        assert set(token for token in path.split() if token.isalpha()) == {"M", "L", "Z"}

    def test_empty(self) -> None:
        """Test empty sets serialize to an empty string."""
        assert polygons_to_path(PolygonSet.empty()) == ""


class TestLayeredSvg:
    """Tests for build_layered_svg()."""

    def test_is_valid_xml_with_layers(self, result: BuildResult) -> None:
        """Test the document parses and has CUT and ENGRAVE groups."""
        root = ET.fromstring(build_layered_svg(result))
        assert root.get("width") == "18.000mm"
        assert root.get("viewBox") == "0 0 18.000 18.000"
        groups = {g.get("id"): g for g in root.iter(f"{SVG_NS}g")}
        assert groups["CUT"].get("fill") == "none"
        assert groups["CUT"].get("stroke-width") == "0.100"
        assert groups["CUT"].find(f"{SVG_NS}path").get("d") == result.cut_path
        assert groups["ENGRAVE"].find(f"{SVG_NS}path").get("d") == result.engrave_path

    def test_empty_engrave_layer(self, result: BuildResult) -> None:
        """Test a result without engrave geometry still has the group."""
        fallback = BuildResult(
            status=BuildStatus.FALLBACK,
            cut_path=result.cut_path,
            engrave_path="",
            bbox=result.bbox,
            document_width=18,
            document_height=18,
            reason="Invalid bounds after outline: no geometry",
        )
        root = ET.fromstring(build_layered_svg(fallback))
        groups = {g.get("id"): g for g in root.iter(f"{SVG_NS}g")}
        assert groups["ENGRAVE"].find(f"{SVG_NS}path") is None

    def test_write(self, result: BuildResult, tmp_path: Path) -> None:
        """Test writing creates parent directories."""
        out = write_layered_svg(result, tmp_path / "nested" / "out.svg")
        assert out.exists()
        ET.parse(str(out))


class TestLoadRequest:
    """Tests for load_request()."""

    def test_valid(self, tmp_path: Path) -> None:
        """Test a well-formed request file."""
        path = tmp_path / "req.json"
        path.write_text(
            json.dumps({"paths": [{"d": "M0 0 H10 V10 H0 Z"}], "attachment": {"position": "right"}}),
            encoding="utf-8",
        )
        request = load_request(path)
        assert request.paths[0].d == "M0 0 H10 V10 H0 Z"
        assert request.attachment.position.value == "right"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises RequestError."""
        with pytest.raises(RequestError, match="file not found"):
            load_request(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test malformed JSON raises RequestError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RequestError):
            load_request(path)

    def test_invalid_field(self, tmp_path: Path) -> None:
        """Test schema violations raise RequestError."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"attachment": {"position": "bottom"}}), encoding="utf-8")
        with pytest.raises(RequestError, match="validation error"):
            load_request(path)
