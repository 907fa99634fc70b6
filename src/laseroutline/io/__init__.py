"""File and text I/O for laseroutline.

Key responsibilities:
- Serialize polygon sets as SVG path data (M/L/Z, fixed decimals)
- Assemble layered CUT/ENGRAVE SVG documents
- Load JSON build requests

Key functions:
- polygons_to_path: PolygonSet to path data
- build_layered_svg / write_layered_svg: BuildResult to SVG
- load_request: JSON file to BuildRequest
"""

from laseroutline.io.document import build_layered_svg, write_layered_svg
from laseroutline.io.request import load_request
from laseroutline.io.serializer import format_number, polygons_to_path

__all__ = [
    "build_layered_svg",
    "format_number",
    "load_request",
    "polygons_to_path",
    "write_layered_svg",
]
