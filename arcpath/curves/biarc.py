"""
Biarc approximation of cubic Bezier curves.

A curve is cut into pieces without inflection points, and each piece is
replaced by two tangent circular arcs meeting at the incenter of the triangle
formed by its endpoints and the crossing of its end tangents. Pieces whose
sampled error exceeds the tolerance are split at the worst sample and fitted
again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from arcpath.curves import bezier
from arcpath.curves.bezier import BezPoints
from arcpath.errors import FitDepthExceededError
from arcpath.geometry.circle import line_error
from arcpath.geometry.intersections import arc_to_arc, line_to_line
from arcpath.geometry.tolerance import ERROR_SAMPLE_T, MAX_FIT_DEPTH
from arcpath.geometry.vector import Vector2d

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BiarcLine:
    start: Vector2d
    end: Vector2d


@dataclass(frozen=True)
class BiarcArc:
    start: Vector2d
    end: Vector2d
    center: Vector2d
    radius: float
    clockwise: bool


BiarcSeg = Union[BiarcLine, BiarcArc]


def fit(curve: BezPoints, tolerance: float, max_depth: int = MAX_FIT_DEPTH) -> List[BiarcSeg]:
    """Approximate a cubic curve by lines and arcs deviating at most ``tolerance`` at the sampled parameters."""
    p1, c1, c2, p2 = curve
    return from_bezier(p1, c1, c2, p2, tolerance, max_depth=max_depth)


def from_bezier(
    p1: Vector2d,
    c1: Vector2d,
    c2: Vector2d,
    p2: Vector2d,
    tolerance: float,
    max_depth: int = MAX_FIT_DEPTH,
) -> List[BiarcSeg]:
    try:
        # Closed curves and curves with crossing handles cannot be fitted directly
        if p1 == p2 or _handles_cross(p1, c1, c2, p2):
            first, second = bezier.split(p1, c1, c2, p2, 0.5)
            return _fit_pieces([first, second], tolerance, max_depth)

        if bezier.is_flat(p1, c1, c2, p2, tolerance):
            return [BiarcLine(p1, p2)]

        ip = bezier.inflection_points(p1, c1, c2, p2)
        if len(ip) == 1:
            return _fit_pieces(list(bezier.split(p1, c1, c2, p2, ip[0])), tolerance, max_depth)
        if len(ip) == 2:
            t_min = min(ip)
            t_max = max(ip)
            first, rest = bezier.split(p1, c1, c2, p2, t_min)
            # t_max is applied unscaled to the remainder
            second, third = bezier.split(*rest, t_max)
            return _fit_pieces([first, second, third], tolerance, max_depth)
        return from_monotone_bezier(p1, c1, c2, p2, tolerance, max_depth=max_depth)
    except FitDepthExceededError:
        logger.error(
            "Biarc fit failed for curve [(%r, %r), (%r, %r), (%r, %r), (%r, %r)] at tolerance %r",
            p1.x, p1.y, c1.x, c1.y, c2.x, c2.y, p2.x, p2.y, tolerance,
        )
        raise


def _handles_cross(p1: Vector2d, c1: Vector2d, c2: Vector2d, p2: Vector2d) -> bool:
    crossing = line_to_line((p1, c1), (p2, c2))
    return crossing is not None and crossing.in_range


def _fit_pieces(pieces: List[BezPoints], tolerance: float, max_depth: int) -> List[BiarcSeg]:
    out: List[BiarcSeg] = []
    for piece in pieces:
        out.extend(from_monotone_bezier(*piece, tolerance, max_depth=max_depth))
    return out


def from_monotone_bezier(
    p1: Vector2d,
    c1: Vector2d,
    c2: Vector2d,
    p2: Vector2d,
    tolerance: float,
    depth: int = 0,
    max_depth: int = MAX_FIT_DEPTH,
) -> List[BiarcSeg]:
    """Fit a curve without inflection points; see the module docstring."""
    if depth > max_depth:
        raise FitDepthExceededError((p1, c1, c2, p2), depth)

    if bezier.is_flat(p1, c1, c2, p2, tolerance):
        return [BiarcLine(p1, p2)]

    if (p2 - p1).length() < tolerance:
        return [BiarcLine(p1, p2)]

    # v: crossing of the end tangents
    crossing = line_to_line((p1, c1), (p2, c2))
    if crossing is None:
        return _split_in_half(p1, c1, c2, p2, tolerance, depth, max_depth)
    v = crossing.p

    p1c1 = c1 - p1
    p1v = v - p1
    if p1c1.dot(p1v) < 0.0:
        return _split_in_half(p1, c1, c2, p2, tolerance, depth, max_depth)

    # g: incenter of triangle (p1, p2, v), the joint of the two arcs
    dp1v = p1v.length()
    dp2v = (v - p2).length()
    dp1p2 = (p2 - p1).length()
    w = dp2v + dp1v + dp1p2
    g = Vector2d(
        (dp2v * p1.x + dp1v * p2.x + dp1p2 * v.x) / w,
        (dp2v * p1.y + dp1v * p2.y + dp1p2 * v.y) / w,
    )

    s1 = tangent_circle_center(p1, c1, g)
    s2 = tangent_circle_center(p2, c2, g)
    if s1 is None or s2 is None:
        return _split_in_half(p1, c1, c2, p2, tolerance, depth, max_depth)

    r1 = (s1 - p1).length()
    r2 = (s2 - p2).length()

    if (p1 - g).length() < tolerance:
        return single_arc_or_line(p1, p2, s2, r2, tolerance)
    if (p2 - g).length() < tolerance:
        return single_arc_or_line(p1, p2, s1, r1, tolerance)

    if r1 < tolerance or r2 < tolerance:
        return _split_in_half(p1, c1, c2, p2, tolerance, depth, max_depth)

    max_t = 0.0
    max_err = 0.0
    for t in ERROR_SAMPLE_T:
        err = calc_error(p1, c1, c2, p2, t, s1, r1, s2, r2)
        if err >= max_err:
            max_t, max_err = t, err

    if max_err > tolerance:
        logger.debug("Biarc error %.6g > %.6g at t=%.1f, depth %d; splitting", max_err, tolerance, max_t, depth)
        first, second = bezier.split(p1, c1, c2, p2, max_t)
        return from_monotone_bezier(*first, tolerance, depth=depth + 1, max_depth=max_depth) + from_monotone_bezier(
            *second, tolerance, depth=depth + 1, max_depth=max_depth
        )

    clockwise = bezier.is_clockwise(p1, c1, c2, p2)
    return [
        arc_or_line(p1, g, s1, r1, clockwise, tolerance),
        arc_or_line(g, p2, s2, r2, clockwise, tolerance),
    ]


def _split_in_half(
    p1: Vector2d, c1: Vector2d, c2: Vector2d, p2: Vector2d, tolerance: float, depth: int, max_depth: int
) -> List[BiarcSeg]:
    first, second = bezier.split(p1, c1, c2, p2, 0.5)
    return from_monotone_bezier(*first, tolerance, depth=depth, max_depth=max_depth) + from_monotone_bezier(
        *second, tolerance, depth=depth, max_depth=max_depth
    )


def single_arc_or_line(p1: Vector2d, p2: Vector2d, seed_center: Vector2d, radius: float, tolerance: float) -> List[BiarcSeg]:
    """One arc of the given radius through p1 and p2, centered as close to ``seed_center`` as possible."""
    candidates = arc_to_arc(p1, radius, p2, radius)
    if len(candidates) != 2:
        return [BiarcLine(p1, p2)]
    l1 = Vector2d.dist(candidates[0], seed_center)
    l2 = Vector2d.dist(candidates[1], seed_center)
    center = candidates[0] if l1 < l2 else candidates[1]
    clockwise = (p1 - center).cross(p2 - center) < 0.0
    return [arc_or_line(p1, p2, center, radius, clockwise, tolerance)]


def arc_or_line(start: Vector2d, end: Vector2d, center: Vector2d, radius: float, clockwise: bool, tolerance: float) -> BiarcSeg:
    if line_error(start, end, center, radius, clockwise) < tolerance / 2.0:
        return BiarcLine(start, end)
    return BiarcArc(start=start, end=end, center=center, radius=radius, clockwise=clockwise)


def tangent_circle_center(p: Vector2d, c: Vector2d, g: Vector2d) -> Optional[Vector2d]:
    """
    Center of the circle through p and g that is tangent to the line p-c at p.

    That is the crossing of the normal of p-c at p with the perpendicular
    bisector of p-g; None when those are parallel.
    """
    pg_mid = (p + g) * 0.5
    p_normal = p + (c - p).rot90(True)
    pg_mid_normal = pg_mid + (g - p).rot90(True)
    crossing = line_to_line((p, p_normal), (pg_mid, pg_mid_normal))
    return None if crossing is None else crossing.p


def calc_error(
    p1: Vector2d,
    c1: Vector2d,
    c2: Vector2d,
    p2: Vector2d,
    t: float,
    center1: Vector2d,
    radius1: float,
    center2: Vector2d,
    radius2: float,
) -> float:
    """Distance from the curve point at t to the nearer of the two fitted circles."""
    bt = bezier.calculate(p1, c1, c2, p2, t)
    error1 = abs(Vector2d.dist(center1, bt) - radius1)
    error2 = abs(Vector2d.dist(center2, bt) - radius2)
    return min(error1, error2)
