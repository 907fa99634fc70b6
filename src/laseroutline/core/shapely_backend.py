"""GEOS-backed polygon kernel via shapely.

Input polygon sets are interpreted with the non-zero winding rule: every
ring's edges are noded together and polygonized into faces, and a face is
filled when the summed winding number at an interior point is non-zero.
Results are normalized so outer rings have positive signed area, holes have
negative signed area, and polygons come out in a stable order.
"""

from collections.abc import Sequence

import shapely
from shapely.geometry import GeometryCollection, LineString, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.ops import polygonize, unary_union

from laseroutline.core.geometry import set_winding_number
from laseroutline.domain import Point
from laseroutline.domain import Polygon as Ring
from laseroutline.domain import PolygonSet


def _polygon_parts(geom: BaseGeometry) -> list[Polygon]:
    """Flatten any geometry into its non-empty polygon parts."""
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, (MultiPolygon, GeometryCollection)):
        parts: list[Polygon] = []
        for sub in geom.geoms:
            parts.extend(_polygon_parts(sub))
        return parts
    return []


def _ring_from_coords(coords: Sequence[tuple[float, ...]]) -> Ring | None:
    points: list[Point] = []
    for x, y, *_ in coords:
        point = Point(float(x), float(y))
        if not points or point != points[-1]:
            points.append(point)
    while len(points) > 1 and points[-1] == points[0]:
        points.pop()
    if len(points) < 3:
        return None
    return Ring(points=tuple(points))


def to_polygon_set(geom: BaseGeometry) -> PolygonSet:
    """Convert a shapely geometry into a normalized PolygonSet."""
    parts = [orient(p, sign=1.0) for p in _polygon_parts(geom) if p.area > 0]
    parts.sort(key=lambda p: (p.bounds[0], p.bounds[1], -p.area))

    rings: list[Ring] = []
    for part in parts:
        outer = _ring_from_coords(part.exterior.coords)
        if outer is None:
            continue
        rings.append(outer)
        for interior in part.interiors:
            hole = _ring_from_coords(interior.coords)
            if hole is not None:
                rings.append(hole)
    return PolygonSet(polygons=tuple(rings))


def to_region(polygons: PolygonSet) -> BaseGeometry:
    """Filled region of a polygon set under the non-zero winding rule."""
    if polygons.is_empty:
        return GeometryCollection()

    if len(polygons) == 1:
        single = Polygon(polygons.polygons[0].to_coords())
        if single.is_valid:
            return orient(single, sign=1.0)

    lines = []
    for ring in polygons:
        coords = ring.to_coords()
        lines.append(LineString(coords + [coords[0]]))
    noded = unary_union(lines)

    filled = []
    for face in polygonize(noded):
        if face.area <= 0:
            continue
        probe = face.representative_point()
        if set_winding_number(probe.x, probe.y, polygons) != 0:
            filled.append(face)

    if not filled:
        return GeometryCollection()
    return unary_union(filled)


class ShapelyBackend:
    """Boolean and offset operations on top of shapely/GEOS."""

    name = "shapely"

    def __init__(self) -> None:
        self.geos_version = shapely.geos_version_string

    def union(self, operands: Sequence[PolygonSet]) -> PolygonSet:
        regions = [to_region(s) for s in operands if not s.is_empty]
        if not regions:
            return PolygonSet.empty()
        return to_polygon_set(unary_union(regions))

    def difference(self, subject: PolygonSet, clip: PolygonSet) -> PolygonSet:
        region = to_region(subject)
        if clip.is_empty:
            return to_polygon_set(region)
        return to_polygon_set(region.difference(to_region(clip)))

    def offset(self, polygons: PolygonSet, delta_mm: float, quad_segments: int) -> PolygonSet:
        region = to_region(polygons)
        grown = region.buffer(delta_mm, quad_segs=quad_segments, join_style="round")
        return to_polygon_set(grown)
