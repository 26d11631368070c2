from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from arcpath.geometry.tolerance import EPS_PARALLEL
from arcpath.geometry.vector import Vector2d


LinePoints = Tuple[Vector2d, Vector2d]


@dataclass(frozen=True)
class LineSegIntersection:
    in_range: bool  # crossing lies strictly between the endpoints of both segments
    t1: float
    t2: float
    p: Vector2d


@dataclass(frozen=True)
class LineArcHit:
    t: float
    p: Vector2d


def line_to_line(seg1: LinePoints, seg2: LinePoints) -> Optional[LineSegIntersection]:
    """
    Crossing of the lines through two point pairs.

    Returns None for (near-)parallel lines. The parameters are relative to each
    pair, so the crossing may lie outside both segments; check ``in_range``.
    """
    delta1 = seg1[1] - seg1[0]
    delta2 = seg2[1] - seg2[0]
    det = delta1.x * delta2.y - delta1.y * delta2.x
    if abs(det) < EPS_PARALLEL:
        return None
    dx = seg2[0].x - seg1[0].x
    dy = seg2[0].y - seg1[0].y
    t1 = (delta2.y * dx - delta2.x * dy) / det
    t2 = (delta1.y * dx - delta1.x * dy) / det
    return LineSegIntersection(
        in_range=0.0 < t1 < 1.0 and 0.0 < t2 < 1.0,
        t1=t1,
        t2=t2,
        p=seg1[0] + delta1 * t1,
    )


def solve_quadratic(a: float, b: float, c: float) -> List[float]:
    det = b * b - 4.0 * a * c
    if det < 0.0:
        return []
    if det == 0.0:
        return [-b / (2.0 * a)]
    s = math.sqrt(det)
    return [(-b + s) / (2.0 * a), (-b - s) / (2.0 * a)]


def line_to_arc(p1: Vector2d, p2: Vector2d, center: Vector2d, radius: float) -> List[LineArcHit]:
    """Intersections between the line through p1,p2 and a full circle."""
    p1p2 = p2 - p1
    cp1 = p1 - center
    A = p1p2.length_squared()
    if A == 0.0:
        return []
    B = 2.0 * cp1.dot(p1p2)
    C = cp1.length_squared() - radius * radius
    return [LineArcHit(t=t, p=p1 + p1p2 * t) for t in solve_quadratic(A, B, C)]


def arc_to_arc(c1: Vector2d, r1: float, c2: Vector2d, r2: float) -> List[Vector2d]:
    """Zero, one or two intersection points between two circles."""
    c1c2 = c2 - c1
    d = c1c2.length()
    if d == 0.0:
        # concentric: none or infinitely many, reported as none
        return []
    if d > r1 + r2:
        return []

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h2 = r1 * r1 - a * a
    if h2 < 0.0:
        return []

    m = c1 + c1c2 * (a / d)
    if h2 == 0.0:
        return [m]
    h = math.sqrt(h2)
    q = c1c2 * (h / d)
    return [Vector2d(m.x + q.y, m.y - q.x), Vector2d(m.x - q.y, m.y + q.x)]
