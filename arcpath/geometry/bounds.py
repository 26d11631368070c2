from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from arcpath.errors import InvalidBoundsError
from arcpath.geometry.vector import Vector2d


def _ranges_overlap(r1_min: float, r1_max: float, r2_min: float, r2_max: float) -> bool:
    return not (r1_max <= r2_min or r2_max <= r1_min)


def _is_between(v: float, lo: float, hi: float) -> bool:
    return lo < v < hi


@dataclass(frozen=True)
class BoundingBox:
    min: Vector2d
    max: Vector2d

    def __post_init__(self) -> None:
        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise InvalidBoundsError(self.min, self.max)

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    def contains_point(self, point: Vector2d) -> bool:
        """Strict containment; points on the border are outside."""
        return _is_between(point.x, self.min.x, self.max.x) and _is_between(point.y, self.min.y, self.max.y)

    def contains_bounds(self, other: "BoundingBox") -> bool:
        return (
            self.min.x < other.min.x
            and self.min.y < other.min.y
            and self.max.x > other.max.x
            and self.max.y > other.max.y
        )

    def overlaps(self, other: "BoundingBox") -> bool:
        return _ranges_overlap(self.min.x, self.max.x, other.min.x, other.max.x) and _ranges_overlap(
            self.min.y, self.max.y, other.min.y, other.max.y
        )

    def extend_with_point(self, point: Vector2d) -> "BoundingBox":
        return BoundingBox(
            Vector2d(min(self.min.x, point.x), min(self.min.y, point.y)),
            Vector2d(max(self.max.x, point.x), max(self.max.y, point.y)),
        )

    def expand(self, offset: float) -> "BoundingBox":
        return BoundingBox(
            Vector2d(self.min.x - offset, self.min.y - offset),
            Vector2d(self.max.x + offset, self.max.y + offset),
        )

    @staticmethod
    def from_points(p1: Vector2d, p2: Vector2d) -> "BoundingBox":
        return BoundingBox(
            Vector2d(min(p1.x, p2.x), min(p1.y, p2.y)),
            Vector2d(max(p1.x, p2.x), max(p1.y, p2.y)),
        )

    @staticmethod
    def merge(boxes: Sequence["BoundingBox"]) -> Optional["BoundingBox"]:
        if not boxes:
            return None
        mins = np.array([[b.min.x, b.min.y] for b in boxes], dtype=float)
        maxs = np.array([[b.max.x, b.max.y] for b in boxes], dtype=float)
        lo = mins.min(axis=0)
        hi = maxs.max(axis=0)
        return BoundingBox(Vector2d(float(lo[0]), float(lo[1])), Vector2d(float(hi[0]), float(hi[1])))
