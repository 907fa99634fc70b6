"""Internal curve sampling algorithms.

This is an internal module containing helper functions for the flattener.
Not intended for public use.

Bezier segments are sampled at max(4, ceil(chord / tolerance)) uniform
parameter steps. This is fast and keeps output stable, but it is not truly
tolerance-bounded: a short chord with far-flung control points (high
curvature) gets few segments. Callers depend on the exact vertex output, so
the sampling rule must stay as it is.
"""

import math

Coord = tuple[float, float]

MIN_BEZIER_SEGMENTS = 4
MIN_ARC_SEGMENTS = 8


def bezier_segment_count(start: Coord, end: Coord, tolerance: float) -> int:
    """Number of uniform steps for a Bezier from start to end."""
    chord = math.hypot(end[0] - start[0], end[1] - start[1])
    return max(MIN_BEZIER_SEGMENTS, math.ceil(chord / tolerance))


def cubic_points(p0: Coord, p1: Coord, p2: Coord, p3: Coord, tolerance: float) -> list[Coord]:
    """Sample a cubic Bezier, excluding p0 and including p3.

    Args:
        p0: Start point (current point)
        p1: First control point
        p2: Second control point
        p3: End point
        tolerance: Chord length per segment in mm

    Returns:
        Points along the curve for t in (0, 1]
    """
    n = bezier_segment_count(p0, p3, tolerance)
    points: list[Coord] = []
    for i in range(1, n):
        t = i / n
        mt = 1.0 - t
        w0 = mt * mt * mt
        w1 = 3.0 * mt * mt * t
        w2 = 3.0 * mt * t * t
        w3 = t * t * t
        points.append(
            (
                w0 * p0[0] + w1 * p1[0] + w2 * p2[0] + w3 * p3[0],
                w0 * p0[1] + w1 * p1[1] + w2 * p2[1] + w3 * p3[1],
            )
        )
    # Exact endpoint so the next segment starts where this one ends
    points.append(p3)
    return points


def quadratic_points(p0: Coord, p1: Coord, p2: Coord, tolerance: float) -> list[Coord]:
    """Sample a quadratic Bezier, excluding p0 and including p2."""
    n = bezier_segment_count(p0, p2, tolerance)
    points: list[Coord] = []
    for i in range(1, n):
        t = i / n
        mt = 1.0 - t
        w0 = mt * mt
        w1 = 2.0 * mt * t
        w2 = t * t
        points.append(
            (
                w0 * p0[0] + w1 * p1[0] + w2 * p2[0],
                w0 * p0[1] + w1 * p1[1] + w2 * p2[1],
            )
        )
    points.append(p2)
    return points


def _vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    """Signed angle from vector u to vector v."""
    dot = ux * vx + uy * vy
    length = math.hypot(ux, uy) * math.hypot(vx, vy)
    if length == 0:
        return 0.0
    angle = math.acos(max(-1.0, min(1.0, dot / length)))
    if ux * vy - uy * vx < 0:
        angle = -angle
    return angle


def arc_points(
    start: Coord,
    rx: float,
    ry: float,
    rotation_deg: float,
    large_arc: bool,
    sweep: bool,
    end: Coord,
    tolerance: float,
) -> list[Coord]:
    """Sample an SVG elliptical arc, excluding start and including end.

    Endpoint to center conversion follows the SVG implementation notes
    (F.6.5 and the out-of-range radii correction in F.6.6).

    Args:
        start: Current point
        rx: X radius (sign ignored)
        ry: Y radius (sign ignored)
        rotation_deg: Ellipse x-axis rotation in degrees
        large_arc: Large-arc flag
        sweep: Sweep flag (True = positive angle direction)
        end: Arc endpoint
        tolerance: Arc length per segment in mm

    Returns:
        Points along the arc. An arc between identical endpoints is omitted
        (empty list); a zero radius degrades to a straight line.
    """
    x1, y1 = start
    x2, y2 = end

    if x1 == x2 and y1 == y2:
        return []

    rx = abs(rx)
    ry = abs(ry)
    if rx == 0 or ry == 0:
        return [end]

    phi = math.radians(rotation_deg % 360.0)
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)

    # Step 1: rotate the half-chord into the ellipse-aligned frame
    dx = (x1 - x2) / 2.0
    dy = (y1 - y2) / 2.0
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    # Radii too small to reach both endpoints are scaled up uniformly
    lam = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
    if lam > 1.0:
        root = math.sqrt(lam)
        rx *= root
        ry *= root

    # Step 2: center in the ellipse frame
    rx_sq = rx * rx
    ry_sq = ry * ry
    x1p_sq = x1p * x1p
    y1p_sq = y1p * y1p
    denom = rx_sq * y1p_sq + ry_sq * x1p_sq
    radicand = (rx_sq * ry_sq - rx_sq * y1p_sq - ry_sq * x1p_sq) / denom if denom else 0.0
    coef = math.sqrt(max(0.0, radicand))
    if large_arc == sweep:
        coef = -coef
    cxp = coef * (rx * y1p / ry)
    cyp = coef * (-(ry * x1p) / rx)

    # Step 3: center in user space
    cx = cos_phi * cxp - sin_phi * cyp + (x1 + x2) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (y1 + y2) / 2.0

    # Step 4: start angle and sweep extent
    ux = (x1p - cxp) / rx
    uy = (y1p - cyp) / ry
    vx = (-x1p - cxp) / rx
    vy = (-y1p - cyp) / ry
    theta1 = _vector_angle(1.0, 0.0, ux, uy)
    delta = _vector_angle(ux, uy, vx, vy)
    if not sweep and delta > 0:
        delta -= 2.0 * math.pi
    elif sweep and delta < 0:
        delta += 2.0 * math.pi

    arc_length = abs(delta) * max(rx, ry)
    n = max(MIN_ARC_SEGMENTS, math.ceil(arc_length / tolerance))

    points: list[Coord] = []
    for i in range(1, n):
        theta = theta1 + delta * (i / n)
        xp = rx * math.cos(theta)
        yp = ry * math.sin(theta)
        points.append((cos_phi * xp - sin_phi * yp + cx, sin_phi * xp + cos_phi * yp + cy))
    points.append(end)
    return points
