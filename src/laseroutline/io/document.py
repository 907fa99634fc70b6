"""Layered SVG documents for laser software.

The CUT group holds the outline as a hairline stroke with no fill; the
ENGRAVE group holds the artwork silhouette filled. Width and height are in
millimetres with a matching viewBox, so one user unit is one millimetre.
"""

from pathlib import Path

from laseroutline.domain import BuildResult
from laseroutline.io.serializer import format_number

DEFAULT_CUT_STROKE_MM = 0.1


def build_layered_svg(
    result: BuildResult,
    cut_stroke_mm: float = DEFAULT_CUT_STROKE_MM,
    cut_color: str = "#ff0000",
    engrave_color: str = "#000000",
) -> str:
    """Render a build result as an SVG document string."""
    width = format_number(result.document_width)
    height = format_number(result.document_height)
    out = [
        '<?xml version="1.0" encoding="UTF-8"?>\n',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}mm" height="{height}mm" '
        f'viewBox="0 0 {width} {height}">\n',
    ]
    if result.is_fallback and result.reason:
        out.append(f"  <!-- fallback: {_escape_comment(result.reason)} -->\n")
    out.append(
        f'  <g id="CUT" fill="none" stroke="{cut_color}" '
        f'stroke-width="{format_number(cut_stroke_mm)}">\n'
    )
    if result.cut_path:
        out.append(f'    <path d="{result.cut_path}"/>\n')
    out.append("  </g>\n")
    out.append(f'  <g id="ENGRAVE" fill="{engrave_color}" stroke="none" fill-rule="nonzero">\n')
    if result.engrave_path:
        out.append(f'    <path d="{result.engrave_path}"/>\n')
    out.append("  </g>\n")
    out.append("</svg>\n")
    return "".join(out)


def write_layered_svg(
    result: BuildResult,
    output_path: Path,
    cut_stroke_mm: float = DEFAULT_CUT_STROKE_MM,
) -> Path:
    """Write the layered SVG for a build result.

    Returns:
        The path written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(build_layered_svg(result, cut_stroke_mm), encoding="utf-8")
    return output_path


def _escape_comment(text: str) -> str:
    return text.replace("--", "- -")
