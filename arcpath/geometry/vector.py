from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from arcpath.geometry.tolerance import EPS_EQUAL, EPS_POS


@dataclass(frozen=True, eq=False)
class Vector2d:
    """2D point or displacement. Immutable; equality is per-axis within EPS_EQUAL."""

    x: float
    y: float

    def __add__(self, other: "Vector2d") -> "Vector2d":
        return Vector2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2d") -> "Vector2d":
        return Vector2d(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2d":
        return Vector2d(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vector2d":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vector2d":
        return Vector2d(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector2d":
        return Vector2d(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2d):
            return NotImplemented
        return self.equals(other)

    def __iter__(self):
        yield self.x
        yield self.y

    def equals(self, other: "Vector2d", eps: float = EPS_EQUAL) -> bool:
        return abs(self.x - other.x) < eps and abs(self.y - other.y) < eps

    def dot(self, other: "Vector2d") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector2d") -> float:
        """Z component of the 3D cross product; positive when other is counter-clockwise of self."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> "Vector2d":
        L = self.length()
        if L <= EPS_POS:
            return Vector2d(0.0, 0.0)
        return Vector2d(self.x / L, self.y / L)

    def rot90(self, clockwise: bool) -> "Vector2d":
        if clockwise:
            return Vector2d(self.y, -self.x)
        return Vector2d(-self.y, self.x)

    def to_tuple(self) -> Tuple[float, float]:
        return (float(self.x), float(self.y))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @staticmethod
    def from_tuple(p: Sequence[float]) -> "Vector2d":
        return Vector2d(float(p[0]), float(p[1]))

    @staticmethod
    def from_array(arr: np.ndarray) -> "Vector2d":
        return Vector2d(float(arr[0]), float(arr[1]))

    @staticmethod
    def zero() -> "Vector2d":
        return Vector2d(0.0, 0.0)

    @staticmethod
    def lerp(a: "Vector2d", b: "Vector2d", t: float) -> "Vector2d":
        return Vector2d(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)

    @staticmethod
    def dist(a: "Vector2d", b: "Vector2d") -> float:
        return math.hypot(b.x - a.x, b.y - a.y)

    @staticmethod
    def dist_squared(a: "Vector2d", b: "Vector2d") -> float:
        dx = b.x - a.x
        dy = b.y - a.y
        return dx * dx + dy * dy
