"""
Cubic Bezier helpers.

Curves are passed around as their four control points (start, c1, c2, end).
``split`` is the only primitive used to divide curves; everything that
subdivides (flattening, biarc fitting) goes through it.
"""

from __future__ import annotations

import math
from typing import List, Tuple

from arcpath.geometry.line import line_equation, point_to_line
from arcpath.geometry.vector import Vector2d


BezPoints = Tuple[Vector2d, Vector2d, Vector2d, Vector2d]


def _calc(s: float, c1: float, c2: float, e: float, t: float) -> float:
    omt = 1.0 - t
    omt2 = omt * omt
    t2 = t * t
    return omt2 * omt * s + 3.0 * omt2 * t * c1 + 3.0 * omt * t2 * c2 + t2 * t * e


def calculate(s: Vector2d, c1: Vector2d, c2: Vector2d, e: Vector2d, t: float) -> Vector2d:
    """Point on the curve at parameter t."""
    return Vector2d(_calc(s.x, c1.x, c2.x, e.x, t), _calc(s.y, c1.y, c2.y, e.y, t))


def split(s: Vector2d, c1: Vector2d, c2: Vector2d, e: Vector2d, t: float) -> Tuple[BezPoints, BezPoints]:
    """De Casteljau subdivision at t."""
    c11 = Vector2d.lerp(s, c1, t)
    c22 = Vector2d.lerp(c2, e, t)
    mid = Vector2d.lerp(c1, c2, t)
    c21 = Vector2d.lerp(c11, mid, t)
    c12 = Vector2d.lerp(mid, c22, t)
    dp = Vector2d.lerp(c21, c12, t)
    return (s, c11, c21, dp), (dp, c12, c22, e)


def _derivative_coefficients(s: Vector2d, c1: Vector2d, c2: Vector2d, e: Vector2d) -> Tuple[Vector2d, Vector2d, Vector2d]:
    a = c1 - s
    b = c2 - c1 - a
    c = e - c2 - a - b * 2.0
    return a, b, c


def inflection_points(s: Vector2d, c1: Vector2d, c2: Vector2d, e: Vector2d) -> List[float]:
    """
    Parameters in (0, 1) where the curvature changes sign.

    These are the roots of B'(t) x B''(t), a quadratic in t.
    """
    av, bv, cv = _derivative_coefficients(s, c1, c2, e)
    a = bv.cross(cv)
    b = av.cross(cv)
    c = av.cross(bv)

    if a == 0.0:
        return []

    det = b * b - 4.0 * a * c
    if det < 0.0:
        return []
    if det == 0.0:
        t = -b / (2.0 * a)
        return [t] if 0.0 < t < 1.0 else []
    sq = math.sqrt(det)
    return [t for t in ((-b + sq) / (2.0 * a), (-b - sq) / (2.0 * a)) if 0.0 < t < 1.0]


def extrema(s: Vector2d, c1: Vector2d, c2: Vector2d, e: Vector2d) -> List[float]:
    """Sorted parameters in (0, 1) where x or y reaches a local extremum."""
    av, bv, cv = _derivative_coefficients(s, c1, c2, e)
    out: List[float] = []
    # B'(t) / 3 = a + 2bt + ct^2, per axis
    for a, b, c in ((av.x, bv.x, cv.x), (av.y, bv.y, cv.y)):
        if c == 0.0:
            if b != 0.0:
                out.append(-a / (2.0 * b))
            continue
        det = 4.0 * b * b - 4.0 * c * a
        if det < 0.0:
            continue
        sq = math.sqrt(det)
        out.append((-2.0 * b + sq) / (2.0 * c))
        out.append((-2.0 * b - sq) / (2.0 * c))
    return sorted(t for t in out if 0.0 < t < 1.0)


def _is_between(value: float, v1: float, v2: float) -> bool:
    if v1 <= v2:
        return v1 <= value <= v2
    return v2 <= value <= v1


def _control_point_near_chord(cp: Vector2d, p1: Vector2d, p2: Vector2d, a: float, b: float, c: float, tol_squared: float) -> bool:
    foot = point_to_line(cp, a, b, c)
    if Vector2d.dist_squared(cp, foot) > tol_squared:
        return False
    return _is_between(foot.x, p1.x, p2.x) and _is_between(foot.y, p1.y, p2.y)


def is_flat(p1: Vector2d, c1: Vector2d, c2: Vector2d, p2: Vector2d, tolerance: float) -> bool:
    """
    True when the curve can be replaced by its chord.

    Both handles must lie within tolerance of the chord and project between its
    endpoints, unless both handles sit on their endpoints.
    """
    tol_squared = tolerance * tolerance
    if Vector2d.dist_squared(p1, c1) < tol_squared and Vector2d.dist_squared(p2, c2) < tol_squared:
        return True

    a, b, c = line_equation(p1, p2)
    if a == 0.0 and b == 0.0:
        return False
    return _control_point_near_chord(c1, p1, p2, a, b, c, tol_squared) and _control_point_near_chord(
        c2, p1, p2, a, b, c, tol_squared
    )


def is_clockwise(s: Vector2d, c1: Vector2d, c2: Vector2d, e: Vector2d) -> bool:
    """
    Approximate winding of the curve from the shoelace sum of its control polygon.

    Only meant to pick a consistent arc direction for a biarc pair.
    """
    total = 0.0
    total += (c1.x - s.x) * (c1.y + s.y)
    total += (c2.x - c1.x) * (c2.y + c1.y)
    total += (e.x - c2.x) * (e.y + c2.y)
    total += (s.x - e.x) * (s.y + e.y)
    return total >= 0.0


def from_quadratic(s: Vector2d, c: Vector2d, e: Vector2d) -> BezPoints:
    """Exact cubic representation of a quadratic curve."""
    c1 = s + (c - s) * (2.0 / 3.0)
    c2 = e + (c - e) * (2.0 / 3.0)
    return (s, c1, c2, e)


def _flatten_into(out: List[Vector2d], s: Vector2d, c1: Vector2d, c2: Vector2d, e: Vector2d, tolerance: float) -> None:
    if is_flat(s, c1, c2, e, tolerance):
        out.append(e)
        return
    first, second = split(s, c1, c2, e, 0.5)
    _flatten_into(out, *first, tolerance)
    _flatten_into(out, *second, tolerance)


def flatten(s: Vector2d, c1: Vector2d, c2: Vector2d, e: Vector2d, tolerance: float) -> List[Vector2d]:
    """Polyline through the curve, subdivided until every piece is flat."""
    out: List[Vector2d] = [s]
    _flatten_into(out, s, c1, c2, e, tolerance)
    return out
