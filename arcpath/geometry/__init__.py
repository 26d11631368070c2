"""
arcpath geometry primitives.

Vectors, affine transforms, bounding boxes and the exact line/circle
constructions used by curve fitting and the path model.
"""

from arcpath.geometry.bounds import BoundingBox
from arcpath.geometry.circle import find_center, line_error, t_value_for_arc_pos
from arcpath.geometry.intersections import (
    LineArcHit,
    LineSegIntersection,
    arc_to_arc,
    line_to_arc,
    line_to_line,
    solve_quadratic,
)
from arcpath.geometry.line import line_equation, point_to_line, point_to_segment_dist, rdp
from arcpath.geometry.transform import Matrix3x3
from arcpath.geometry.vector import Vector2d

__all__ = [
    "Vector2d",
    "Matrix3x3",
    "BoundingBox",
    "LineSegIntersection",
    "LineArcHit",
    "line_to_line",
    "line_to_arc",
    "arc_to_arc",
    "solve_quadratic",
    "find_center",
    "line_error",
    "t_value_for_arc_pos",
    "line_equation",
    "point_to_line",
    "point_to_segment_dist",
    "rdp",
]
