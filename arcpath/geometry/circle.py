from __future__ import annotations

import math
from typing import Optional

from arcpath.geometry.tolerance import EPS_POS
from arcpath.geometry.vector import Vector2d


def find_center(p1: Vector2d, p2: Vector2d, radius: float, clockwise: bool) -> Optional[Vector2d]:
    """
    Center of the circle of the given radius passing through p1 then p2 in the
    given winding, taking the minor arc.

    The chord must be shorter than the diameter, otherwise None is returned.
    """
    q_vec = p2 - p1
    q = q_vec.length()
    if q >= radius * 2.0 or q <= EPS_POS:
        return None
    mid = (p1 + p2) * 0.5
    a = math.sqrt(radius * radius - (q * q) / 4.0)
    n_vec = (q_vec * (1.0 / q)).rot90(clockwise)
    return mid + n_vec * a


def line_error(start: Vector2d, end: Vector2d, center: Vector2d, radius: float, clockwise: bool) -> float:
    """
    Maximum distance between an arc and the chord that would replace it.

    An arc whose winding is opposite to the chord's short path spans more than
    180 degrees, so its error is ``radius + d`` instead of ``radius - d``.
    """
    d = Vector2d.dist((start + end) * 0.5, center)
    cs = start - center
    ce = end - center
    opposite = (cs.cross(ce) < 0.0) != clockwise
    return radius + d if opposite else radius - d


def t_value_for_arc_pos(p: Vector2d, start: Vector2d, end: Vector2d, center: Vector2d) -> Optional[float]:
    """
    Parameter of p along an arc from start to end (at most 90 degrees wide),
    from the ratio of the sines of the subtended angles.

    Returns 0 at start, 1 at end, None when p lies outside the arc.
    """
    cs = start - center
    cp = p - center
    if cs.dot(cp) <= 0.0:
        return None

    ce = end - center
    csxcp = cs.cross(cp)
    cpxce = cp.cross(ce)
    if csxcp == 0.0:
        return 0.0
    if cpxce == 0.0:
        return 1.0
    if (csxcp > 0.0) == (cpxce > 0.0):
        csn = cs.normalize()
        cpn = cp.normalize()
        cen = ce.normalize()
        return csn.cross(cpn) / csn.cross(cen)
    return None
