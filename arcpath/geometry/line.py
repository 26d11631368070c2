from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from arcpath.geometry.tolerance import EPS_AXIS
from arcpath.geometry.vector import Vector2d


def line_equation(p1: Vector2d, p2: Vector2d) -> Tuple[float, float, float]:
    """Coefficients (a, b, c) of ax + by + c = 0 through p1 and p2."""
    return (p1.y - p2.y, p2.x - p1.x, p1.x * p2.y - p1.y * p2.x)


def point_to_line(p: Vector2d, a: float, b: float, c: float) -> Vector2d:
    """Foot of the perpendicular from p onto the line ax + by + c = 0."""
    den = a * a + b * b
    return Vector2d(
        (b * (b * p.x - a * p.y) - a * c) / den,
        (a * (-b * p.x + a * p.y) - b * c) / den,
    )


def point_to_segment_dist(point: Vector2d, start: Vector2d, end: Vector2d) -> float:
    """Distance from a point to a segment, measured to the nearest endpoint when the foot falls outside."""
    if start.equals(end):
        return Vector2d.dist(point, start)
    a, b, c = line_equation(start, end)
    q = point_to_line(point, a, b, c)
    if abs(start.x - end.x) > EPS_AXIS:
        t = (q.x - start.x) / (end.x - start.x)
    else:
        t = (q.y - start.y) / (end.y - start.y)
    if t <= 0.0:
        return Vector2d.dist(point, start)
    if t >= 1.0:
        return Vector2d.dist(point, end)
    return Vector2d.dist(point, q)


def _segment_distances(pts: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    ab = b - a
    den = float(ab @ ab)
    if den == 0.0:
        return np.hypot(pts[:, 0] - a[0], pts[:, 1] - a[1])
    t = np.clip(((pts - a) @ ab) / den, 0.0, 1.0)
    foot = a + t[:, None] * ab
    return np.hypot(pts[:, 0] - foot[:, 0], pts[:, 1] - foot[:, 1])


def rdp(points: Sequence[Vector2d], tolerance: float) -> List[Vector2d]:
    """
    Ramer-Douglas-Peucker simplification.

    Keeps both endpoints and every point further than ``tolerance`` from the
    chord of its enclosing range. Uses a work stack instead of recursion.
    """
    n = len(points)
    if n < 3:
        return list(points)
    arr = np.array([[p.x, p.y] for p in points], dtype=float)
    keep = np.zeros(n, dtype=bool)
    keep[0] = True
    keep[-1] = True
    stack = [(0, n - 1)]
    while stack:
        i, j = stack.pop()
        if j - i < 2:
            continue
        d = _segment_distances(arr[i + 1 : j], arr[i], arr[j])
        k = int(np.argmax(d))
        if d[k] > tolerance:
            idx = i + 1 + k
            keep[idx] = True
            stack.append((i, idx))
            stack.append((idx, j))
    return [points[int(i)] for i in np.flatnonzero(keep)]
