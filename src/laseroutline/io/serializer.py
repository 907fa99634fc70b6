"""Polygon set to SVG path data."""

from laseroutline.domain import PolygonSet

DEFAULT_DECIMALS = 3


def format_number(value: float, decimals: int = DEFAULT_DECIMALS) -> str:
    """Fixed-point number with negative zero written as zero."""
    text = f"{value:.{decimals}f}"
    if text.startswith("-") and not text.strip("-0."):
        return text[1:]
    return text


def polygons_to_path(polygons: PolygonSet, decimals: int = DEFAULT_DECIMALS) -> str:
    """Serialize rings as absolute M/L/Z subpaths, one per ring.

    Args:
        polygons: Rings to serialize (holes keep their own orientation)
        decimals: Digits after the decimal point

    Returns:
        Path data string, empty for an empty set
    """
    parts: list[str] = []
    for polygon in polygons:
        commands = []
        for i, point in enumerate(polygon):
            letter = "M" if i == 0 else "L"
            commands.append(
                f"{letter} {format_number(point.x, decimals)} {format_number(point.y, decimals)}"
            )
        commands.append("Z")
        parts.append(" ".join(commands))
    return " ".join(parts)
