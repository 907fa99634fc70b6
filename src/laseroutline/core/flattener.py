"""Path flattening: SVG path data to polygons.

Walks tokenized path commands, converts every curve to line segments and
collects one implicitly closed ring per subpath.

Approximations kept deliberately for output stability:
- Smooth curves (S/s, T/t) become straight lines to their endpoint.
- Bezier sampling uses a uniform parameter step (see _curves).

Degenerate input never raises: subpaths with fewer than three distinct
points are dropped, malformed numbers read as zero (see tokenizer).
"""

import structlog

from laseroutline.core._curves import Coord, arc_points, cubic_points, quadratic_points
from laseroutline.core.tokenizer import tokenize
from laseroutline.domain import (
    AffineTransform,
    CommandKind,
    PathCommand,
    Point,
    Polygon,
    PolygonSet,
)

logger = structlog.get_logger(__name__)

MIN_TOLERANCE_MM = 0.01
MAX_TOLERANCE_MM = 5.0


def _close_ring(coords: list[Coord], matrix: AffineTransform | None) -> Polygon | None:
    """Turn accumulated subpath coordinates into a polygon, or None if degenerate."""
    if matrix is not None and not matrix.is_identity():
        coords = [matrix.apply(x, y) for x, y in coords]

    ring: list[Coord] = []
    for coord in coords:
        if not ring or coord != ring[-1]:
            ring.append(coord)
    while len(ring) > 1 and ring[-1] == ring[0]:
        ring.pop()

    if len(ring) < 3:
        return None
    return Polygon(points=tuple(Point(x, y) for x, y in ring))


def flatten_commands(
    commands: list[PathCommand],
    tolerance_mm: float,
    transform: AffineTransform | None = None,
) -> PolygonSet:
    """Flatten already-tokenized commands into a polygon set.

    Args:
        commands: Output of tokenize()
        tolerance_mm: Chord tolerance in output millimetres
        transform: Placement matrix applied once per output point

    Returns:
        PolygonSet with one ring per non-degenerate subpath
    """
    tolerance = max(MIN_TOLERANCE_MM, min(MAX_TOLERANCE_MM, tolerance_mm))
    if transform is not None:
        scale = transform.max_scale()
        if scale > 0:
            # Sample in path units so the chord error holds after scaling
            tolerance = tolerance / scale

    polygons: list[Polygon] = []
    ring: list[Coord] = []
    dropped = 0
    cx = cy = 0.0
    sx = sy = 0.0

    def finish() -> None:
        nonlocal ring, dropped
        if ring:
            polygon = _close_ring(ring, transform)
            if polygon is None:
                dropped += 1
            else:
                polygons.append(polygon)
        ring = []

    for command in commands:
        kind = command.kind
        ops = command.operands
        rel = command.is_relative
        ox, oy = (cx, cy) if rel else (0.0, 0.0)

        if kind in (CommandKind.MOVE_ABS, CommandKind.MOVE_REL):
            finish()
            cx, cy = ox + ops[0], oy + ops[1]
            sx, sy = cx, cy
            ring = [(cx, cy)]
            continue

        if kind in (CommandKind.CLOSE_ABS, CommandKind.CLOSE_REL):
            finish()
            cx, cy = sx, sy
            continue

        if not ring:
            # Drawing after Z without M starts from the subpath start
            ring = [(cx, cy)]
            sx, sy = cx, cy

        letter = kind.letter.upper()
        if letter == "L":
            cx, cy = ox + ops[0], oy + ops[1]
            ring.append((cx, cy))
        elif letter == "H":
            cx = ox + ops[0]
            ring.append((cx, cy))
        elif letter == "V":
            cy = oy + ops[0]
            ring.append((cx, cy))
        elif letter == "C":
            end = (ox + ops[4], oy + ops[5])
            ring.extend(
                cubic_points(
                    (cx, cy),
                    (ox + ops[0], oy + ops[1]),
                    (ox + ops[2], oy + ops[3]),
                    end,
                    tolerance,
                )
            )
            cx, cy = end
        elif letter == "Q":
            end = (ox + ops[2], oy + ops[3])
            ring.extend(quadratic_points((cx, cy), (ox + ops[0], oy + ops[1]), end, tolerance))
            cx, cy = end
        elif letter == "S":
            cx, cy = ox + ops[2], oy + ops[3]
            ring.append((cx, cy))
        elif letter == "T":
            cx, cy = ox + ops[0], oy + ops[1]
            ring.append((cx, cy))
        elif letter == "A":
            end = (ox + ops[5], oy + ops[6])
            ring.extend(
                arc_points(
                    (cx, cy),
                    ops[0],
                    ops[1],
                    ops[2],
                    ops[3] != 0,
                    ops[4] != 0,
                    end,
                    tolerance,
                )
            )
            cx, cy = end

    finish()

    if dropped:
        logger.debug("Dropped degenerate subpaths", count=dropped)

    return PolygonSet(polygons=tuple(polygons))


def flatten(
    path_data: str,
    tolerance_mm: float,
    transform: AffineTransform | None = None,
) -> PolygonSet:
    """Parse SVG path data and flatten it into polygons.

    Args:
        path_data: SVG path "d" attribute
        tolerance_mm: Chord tolerance for curves, in millimetres
        transform: Optional placement matrix, applied once per point

    Returns:
        PolygonSet (empty for blank or fully degenerate input)

    Examples:
        >>> polys = flatten("M0 0 L10 0 L10 10 Z", 0.1)
        >>> polys.polygons[0].to_coords()
        [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]
    """
    if not path_data or not path_data.strip():
        return PolygonSet.empty()
    return flatten_commands(tokenize(path_data), tolerance_mm, transform)
