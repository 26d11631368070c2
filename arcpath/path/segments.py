from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, ClassVar, Dict, List, Mapping, Sequence, Tuple, Union

from arcpath.curves import bezier
from arcpath.curves.biarc import BiarcArc, from_bezier
from arcpath.errors import DiscontinuousPathError, InvalidArcError, SegmentDecodeError, UnsupportedTransformError
from arcpath.geometry.bounds import BoundingBox
from arcpath.geometry.circle import find_center, line_error
from arcpath.geometry.tolerance import DEFAULT_FLATNESS, EPS_EQUAL, EPS_POS, MAX_ARC_RADIUS, MAX_FIT_DEPTH
from arcpath.geometry.transform import Matrix3x3
from arcpath.geometry.vector import Vector2d


TWO_PI = 2.0 * math.pi


def _point_from_json(record: Mapping[str, Any], key: str) -> Vector2d:
    try:
        x, y = record[key]
        return Vector2d(float(x), float(y))
    except (KeyError, TypeError, ValueError) as e:
        raise SegmentDecodeError(f"Field '{key}' must be a [x, y] pair", record) from e


def _check_type(record: Mapping[str, Any], expected: str) -> None:
    if not isinstance(record, Mapping) or record.get("type") != expected:
        raise SegmentDecodeError(f"Expected a '{expected}' record", record if isinstance(record, Mapping) else None)


def _angle(v: Vector2d) -> float:
    """Direction of v in [0, 2pi)."""
    a = math.atan2(v.y, v.x)
    return a + TWO_PI if a < 0.0 else a


@dataclass(frozen=True)
class LineSeg:
    """Straight line segment."""

    start: Vector2d
    end: Vector2d

    seg_type: ClassVar[str] = "line"

    def length(self) -> float:
        return Vector2d.dist(self.start, self.end)

    def bounds(self) -> BoundingBox:
        return BoundingBox.from_points(self.start, self.end)

    def reversed(self) -> "LineSeg":
        return LineSeg(self.end, self.start)

    def position(self, t: float) -> Vector2d:
        return Vector2d.lerp(self.start, self.end, t)

    def midpoint(self) -> Vector2d:
        return (self.start + self.end) * 0.5

    def t_value(self, p: Vector2d) -> float:
        """Parameter of the projection of p onto the segment's line."""
        d = self.end - self.start
        den = d.length_squared()
        if den <= EPS_POS:
            return 0.0
        return (p - self.start).dot(d) / den

    def closest_point(self, p: Vector2d) -> Vector2d:
        t = min(1.0, max(0.0, self.t_value(p)))
        return self.position(t)

    def tangent_at_start(self) -> Vector2d:
        return (self.end - self.start).normalize()

    def tangent_at_end(self) -> Vector2d:
        return self.tangent_at_start()

    def split_at(self, p: Vector2d) -> Tuple["LineSeg", "LineSeg"]:
        return LineSeg(self.start, p), LineSeg(p, self.end)

    def with_adjusted_start(self, new_start: Vector2d) -> "LineSeg":
        return LineSeg(new_start, self.end)

    def with_adjusted_end(self, new_end: Vector2d) -> "LineSeg":
        return LineSeg(self.start, new_end)

    def create_offset(self, offset: float, tolerance: float = 0.0) -> "LineSeg":
        """Parallel copy, moved to the left of the direction of travel for positive offsets."""
        v = (self.end - self.start).rot90(False).normalize() * offset
        return LineSeg(self.start + v, self.end + v)

    def transformed(self, matrix: Matrix3x3) -> "LineSeg":
        return LineSeg(matrix.transform(self.start), matrix.transform(self.end))

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": "line",
            "s": [float(self.start.x), float(self.start.y)],
            "e": [float(self.end.x), float(self.end.y)],
        }

    @staticmethod
    def from_json(record: Mapping[str, Any]) -> "LineSeg":
        _check_type(record, "line")
        return LineSeg(_point_from_json(record, "s"), _point_from_json(record, "e"))


@dataclass(frozen=True)
class ArcSeg:
    """
    Circular arc segment.

    The center is derived from the endpoints, radius and winding, so the arc is
    always the minor arc between its endpoints. Construction fails with
    InvalidArcError when the chord is not shorter than the diameter.
    """

    start: Vector2d
    end: Vector2d
    radius: float
    clockwise: bool
    center: Vector2d = field(init=False, repr=False, compare=False)

    seg_type: ClassVar[str] = "arc"

    def __post_init__(self) -> None:
        center = find_center(self.start, self.end, self.radius, self.clockwise)
        if center is None:
            raise InvalidArcError(
                f"Radius {self.radius!r} too small for chord from {self.start} to {self.end}",
                start=self.start,
                end=self.end,
                radius=self.radius,
                clockwise=self.clockwise,
            )
        object.__setattr__(self, "center", center)

    @cached_property
    def start_angle(self) -> float:
        return _angle(self.start - self.center)

    @cached_property
    def end_angle(self) -> float:
        return _angle(self.end - self.center)

    @staticmethod
    def delta_angle(start_angle: float, end_angle: float, clockwise: bool) -> float:
        """Signed sweep from start_angle to end_angle; negative when clockwise."""
        if clockwise:
            return end_angle - start_angle if start_angle > end_angle else end_angle - TWO_PI - start_angle
        return end_angle - start_angle if end_angle > start_angle else TWO_PI - start_angle + end_angle

    def sweep(self) -> float:
        return ArcSeg.delta_angle(self.start_angle, self.end_angle, self.clockwise)

    def length(self) -> float:
        return abs(self.sweep()) * self.radius

    def position(self, t: float) -> Vector2d:
        a = self.start_angle + self.sweep() * t
        return self.center + Vector2d(math.cos(a), math.sin(a)) * self.radius

    def midpoint(self) -> Vector2d:
        return self.position(0.5)

    def t_value(self, p: Vector2d) -> float:
        first, _ = self.split_at(p)
        return first.sweep() / self.sweep()

    def contains_angle(self, a: float) -> bool:
        d = ArcSeg.delta_angle(self.start_angle, a % TWO_PI, self.clockwise)
        return abs(d) <= abs(self.sweep())

    def closest_point(self, p: Vector2d) -> Vector2d:
        v = p - self.center
        if v.length() > EPS_POS and self.contains_angle(_angle(v)):
            return self.center + v.normalize() * self.radius
        if Vector2d.dist_squared(p, self.start) < Vector2d.dist_squared(p, self.end):
            return self.start
        return self.end

    def tangent_at_start(self) -> Vector2d:
        return (self.start - self.center).normalize().rot90(self.clockwise)

    def tangent_at_end(self) -> Vector2d:
        return (self.end - self.center).normalize().rot90(self.clockwise)

    def bounds(self) -> BoundingBox:
        """
        Bounds by quadrant analysis.

        Only valid for arcs that cross at most one axis through the center; wider
        arcs must be split first (see one_or_more).
        """
        c = self.center
        at_north_south_axis = abs(self.start.x - c.x) < EPS_EQUAL or abs(self.end.x - c.x) < EPS_EQUAL
        at_east_west_axis = abs(self.start.y - c.y) < EPS_EQUAL or abs(self.end.y - c.y) < EPS_EQUAL
        start_west = self.start.x < c.x
        end_west = self.end.x < c.x
        start_south = self.start.y < c.y
        end_south = self.end.y < c.y

        default = BoundingBox.from_points(self.start, self.end)
        if start_west == end_west or at_north_south_axis:
            if start_south == end_south or at_east_west_axis:
                return default
            # crosses the east-west axis
            ext = c - Vector2d(self.radius, 0.0) if start_west else c + Vector2d(self.radius, 0.0)
            return default.extend_with_point(ext)
        if start_south == end_south or at_east_west_axis:
            # crosses the north-south axis
            ext = c - Vector2d(0.0, self.radius) if start_south else c + Vector2d(0.0, self.radius)
            return default.extend_with_point(ext)
        raise InvalidArcError(
            "Arc spans more than 90 degrees across both axes; split it before computing bounds",
            start=self.start,
            end=self.end,
            radius=self.radius,
            clockwise=self.clockwise,
        )

    def reversed(self) -> "ArcSeg":
        return ArcSeg(self.end, self.start, self.radius, not self.clockwise)

    def split_at(self, p: Vector2d) -> Tuple["ArcSeg", "ArcSeg"]:
        return ArcSeg(self.start, p, self.radius, self.clockwise), ArcSeg(p, self.end, self.radius, self.clockwise)

    def with_adjusted_start(self, new_start: Vector2d) -> "ArcSeg":
        """Same radius and winding; only small adjustments relative to the radius are valid."""
        return ArcSeg(new_start, self.end, self.radius, self.clockwise)

    def with_adjusted_end(self, new_end: Vector2d) -> "ArcSeg":
        return ArcSeg(self.start, new_end, self.radius, self.clockwise)

    def create_offset(self, offset: float, tolerance: float) -> "LASeg":
        """Concentric copy moved to the left of travel for positive offsets; degenerates to a line when it collapses."""
        new_radius = self.radius + offset if self.clockwise else self.radius - offset
        k = new_radius / self.radius
        start = self.center + (self.start - self.center) * k
        end = self.center + (self.end - self.center) * k
        if new_radius <= 0.0 or Vector2d.dist(start, end) < tolerance / 4.0:
            return LineSeg(start, end)
        return ArcSeg(start, end, new_radius, self.clockwise)

    def transformed(self, matrix: Matrix3x3) -> "ArcSeg":
        if not matrix.is_similarity():
            raise UnsupportedTransformError("Arc segments only support rotation, translation, uniform scale and reflection")
        clockwise = self.clockwise if matrix.determinant() > 0.0 else not self.clockwise
        return ArcSeg(matrix.transform(self.start), matrix.transform(self.end), self.radius * matrix.scale_factor(), clockwise)

    def to_line_segs(self, tolerance: float) -> List["LineSeg"]:
        return ArcSeg.to_lines(self.start, self.end, self.center, self.radius, self.clockwise, tolerance)

    @staticmethod
    def to_lines(start: Vector2d, end: Vector2d, center: Vector2d, radius: float, clockwise: bool, tolerance: float) -> List[LineSeg]:
        if line_error(start, end, center, radius, clockwise) < tolerance:
            return [LineSeg(start, end)]
        mid = center + ((start - center) + (end - center)).normalize() * radius
        return ArcSeg.to_lines(start, mid, center, radius, clockwise, tolerance) + ArcSeg.to_lines(
            mid, end, center, radius, clockwise, tolerance
        )

    def to_bez_points(self) -> bezier.BezPoints:
        """Cubic approximation of the arc (best for arcs up to 90 degrees)."""
        a = self.start - self.center
        b = self.end - self.center
        q1 = a.length_squared()
        q2 = q1 + a.dot(b)
        k2 = (4.0 / 3.0) * (math.sqrt(2.0 * q1 * q2) - q2) / a.cross(b)
        c1 = self.center + a + a.rot90(False) * k2
        c2 = self.center + b + b.rot90(True) * k2
        return (self.start, c1, c2, self.end)

    @staticmethod
    def one_or_more(
        start: Vector2d, end: Vector2d, radius: float, center: Vector2d, clockwise: bool, tolerance: float
    ) -> List["LASeg"]:
        """
        Segments for an arc of any width, none wider than 90 degrees.

        Pieces whose chord error is below tolerance / 2 become lines; coincident
        endpoints produce nothing.
        """
        cs = start - center
        ce = end - center
        if cs.dot(ce) <= 0.0:
            mid = center + ArcSeg._mid_vec(cs, ce, clockwise)
            return ArcSeg.one_or_more(start, mid, radius, center, clockwise, tolerance) + ArcSeg.one_or_more(
                mid, end, radius, center, clockwise, tolerance
            )
        if start == end:
            return []
        if line_error(start, end, center, radius, clockwise) > tolerance / 2.0:
            return [ArcSeg(start, end, radius, clockwise)]
        return [LineSeg(start, end)]

    @staticmethod
    def _mid_vec(cs: Vector2d, ce: Vector2d, clockwise: bool) -> Vector2d:
        radius = cs.length()
        bisector = cs + ce
        if bisector.length() <= EPS_POS * max(1.0, radius):
            # antipodal endpoints: a quarter turn in the requested winding
            return cs.rot90(clockwise)
        short_path_cw = cs.cross(ce) < 0.0
        if short_path_cw == clockwise:
            return bisector.normalize() * radius
        return bisector.normalize() * -radius

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": "arc",
            "s": [float(self.start.x), float(self.start.y)],
            "e": [float(self.end.x), float(self.end.y)],
            "r": float(self.radius),
            "cw": bool(self.clockwise),
        }

    @staticmethod
    def from_json(record: Mapping[str, Any]) -> "ArcSeg":
        _check_type(record, "arc")
        start = _point_from_json(record, "s")
        end = _point_from_json(record, "e")
        try:
            radius = float(record["r"])
            clockwise = record["cw"]
        except (KeyError, TypeError, ValueError) as e:
            raise SegmentDecodeError("Arc record needs numeric 'r' and boolean 'cw'", record) from e
        if not isinstance(clockwise, bool):
            raise SegmentDecodeError("Arc record field 'cw' must be a boolean", record)
        return ArcSeg(start, end, radius, clockwise)


@dataclass(frozen=True)
class BezSeg:
    """Cubic Bezier segment."""

    start: Vector2d
    c1: Vector2d
    c2: Vector2d
    end: Vector2d

    seg_type: ClassVar[str] = "bez"

    def points(self) -> bezier.BezPoints:
        return (self.start, self.c1, self.c2, self.end)

    def position(self, t: float) -> Vector2d:
        return bezier.calculate(self.start, self.c1, self.c2, self.end, t)

    def midpoint(self) -> Vector2d:
        return self.position(0.5)

    def split(self, t: float) -> Tuple["BezSeg", "BezSeg"]:
        first, second = bezier.split(self.start, self.c1, self.c2, self.end, t)
        return BezSeg(*first), BezSeg(*second)

    def bounds(self) -> BoundingBox:
        box = BoundingBox.from_points(self.start, self.end)
        for t in bezier.extrema(self.start, self.c1, self.c2, self.end):
            box = box.extend_with_point(self.position(t))
        return box

    def reversed(self) -> "BezSeg":
        return BezSeg(self.end, self.c2, self.c1, self.start)

    def transformed(self, matrix: Matrix3x3) -> "BezSeg":
        return BezSeg(
            matrix.transform(self.start),
            matrix.transform(self.c1),
            matrix.transform(self.c2),
            matrix.transform(self.end),
        )

    def to_line_segs(self, tolerance: float) -> List[LineSeg]:
        pts = bezier.flatten(self.start, self.c1, self.c2, self.end, tolerance)
        return [LineSeg(a, b) for a, b in zip(pts, pts[1:]) if not a.equals(b)]

    def length(self, tolerance: float = DEFAULT_FLATNESS) -> float:
        return sum(seg.length() for seg in self.to_line_segs(tolerance))

    def closest_point(self, p: Vector2d, tolerance: float = DEFAULT_FLATNESS) -> Vector2d:
        lines = self.to_line_segs(tolerance)
        if not lines:
            return self.start
        candidates = [line.closest_point(p) for line in lines]
        return min(candidates, key=lambda q: Vector2d.dist_squared(p, q))

    def to_arc_segs(
        self,
        tolerance: float,
        disable_arcs: bool = False,
        max_radius: float = MAX_ARC_RADIUS,
        max_depth: int = MAX_FIT_DEPTH,
    ) -> List["LASeg"]:
        """
        Lines and arcs approximating the curve within tolerance.

        Arcs wider than 90 degrees are split, arcs with a radius above
        ``max_radius`` become lines and zero-length pieces are dropped.
        """
        if disable_arcs:
            return list(self.to_line_segs(tolerance))
        out: List[LASeg] = []
        for seg in from_bezier(self.start, self.c1, self.c2, self.end, tolerance, max_depth=max_depth):
            if isinstance(seg, BiarcArc) and seg.radius <= max_radius:
                out.extend(ArcSeg.one_or_more(seg.start, seg.end, seg.radius, seg.center, seg.clockwise, tolerance))
            elif not seg.start.equals(seg.end):
                out.append(LineSeg(seg.start, seg.end))
        return out

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": "bez",
            "s": [float(self.start.x), float(self.start.y)],
            "c1": [float(self.c1.x), float(self.c1.y)],
            "c2": [float(self.c2.x), float(self.c2.y)],
            "e": [float(self.end.x), float(self.end.y)],
        }

    @staticmethod
    def from_json(record: Mapping[str, Any]) -> "BezSeg":
        _check_type(record, "bez")
        return BezSeg(
            _point_from_json(record, "s"),
            _point_from_json(record, "c1"),
            _point_from_json(record, "c2"),
            _point_from_json(record, "e"),
        )


LASeg = Union[LineSeg, ArcSeg]
LBSeg = Union[LineSeg, BezSeg]
Seg = Union[LineSeg, ArcSeg, BezSeg]


def is_zero_length(seg: Seg) -> bool:
    return seg.start.equals(seg.end)


def assert_continuous(segs: Sequence[Seg]) -> None:
    """Raise DiscontinuousPathError at the first segment that does not start where the previous one ends."""
    for i in range(1, len(segs)):
        if not segs[i].start.equals(segs[i - 1].end):
            raise DiscontinuousPathError(i)
