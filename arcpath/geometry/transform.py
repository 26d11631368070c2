from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from arcpath.geometry.tolerance import EPS_EQUAL
from arcpath.geometry.vector import Vector2d


def _identity() -> np.ndarray:
    return np.eye(3, dtype=float)


@dataclass(frozen=True, eq=False)
class Matrix3x3:
    """
    2D affine transform in homogeneous coordinates.

    Points are column vectors, so ``a @ b`` applies ``b`` first.
    """

    m: np.ndarray = field(default_factory=_identity)

    def __post_init__(self) -> None:
        arr = np.asarray(self.m, dtype=float)
        if arr.shape != (3, 3):
            raise ValueError("Matrix3x3 requires a 3x3 array")
        object.__setattr__(self, "m", arr)

    def __matmul__(self, other: "Matrix3x3") -> "Matrix3x3":
        return Matrix3x3(self.m @ other.m)

    def transform(self, p: Vector2d) -> Vector2d:
        v = self.m @ np.array([p.x, p.y, 1.0])
        return Vector2d(float(v[0]), float(v[1]))

    def determinant(self) -> float:
        return float(np.linalg.det(self.m[:2, :2]))

    def is_similarity(self, eps: float = EPS_EQUAL) -> bool:
        """True for rotation/uniform-scale/reflection/translation combinations."""
        a = self.m[:2, :2]
        g = a.T @ a
        return abs(g[0, 1]) <= eps * max(1.0, abs(g[0, 0])) and abs(g[0, 0] - g[1, 1]) <= eps * max(1.0, abs(g[0, 0]))

    def scale_factor(self) -> float:
        """Length scale of a similarity transform."""
        return math.sqrt(abs(self.determinant()))

    def inverse(self) -> "Matrix3x3":
        return Matrix3x3(np.linalg.inv(self.m))

    @staticmethod
    def identity() -> "Matrix3x3":
        return Matrix3x3()

    @staticmethod
    def translation(dx: float, dy: float) -> "Matrix3x3":
        m = _identity()
        m[0, 2] = float(dx)
        m[1, 2] = float(dy)
        return Matrix3x3(m)

    @staticmethod
    def scaling(sx: float, sy: float | None = None) -> "Matrix3x3":
        m = _identity()
        m[0, 0] = float(sx)
        m[1, 1] = float(sx if sy is None else sy)
        return Matrix3x3(m)

    @staticmethod
    def rotation(angle_rad: float, origin: Vector2d | None = None) -> "Matrix3x3":
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        rot = Matrix3x3(np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]))
        if origin is None:
            return rot
        return Matrix3x3.translation(origin.x, origin.y) @ rot @ Matrix3x3.translation(-origin.x, -origin.y)
