from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from arcpath.errors import PathNotClosedError
from arcpath.geometry.bounds import BoundingBox
from arcpath.geometry.circle import line_error
from arcpath.geometry.line import rdp
from arcpath.geometry.tolerance import EPS_DEGENERATE
from arcpath.geometry.transform import Matrix3x3
from arcpath.geometry.vector import Vector2d
from arcpath.path.segments import ArcSeg, LASeg, LineSeg, assert_continuous, is_zero_length

if TYPE_CHECKING:
    from arcpath.path.bez_path import BezPath


@dataclass(frozen=True)
class ArcPath:
    """
    Continuous sequence of line and arc segments.

    Segments with coincident endpoints are dropped on construction; a gap
    between consecutive segments raises DiscontinuousPathError. Paths are
    immutable and every operation returns a new path.
    """

    segs: Tuple[LASeg, ...] = ()
    _area_cache: Dict[float, float] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        segs = tuple(s for s in self.segs if not is_zero_length(s))
        assert_continuous(segs)
        object.__setattr__(self, "segs", segs)

    def __len__(self) -> int:
        return len(self.segs)

    def __iter__(self) -> Iterator[LASeg]:
        return iter(self.segs)

    def __getitem__(self, index: int) -> LASeg:
        return self.segs[index]

    def first(self) -> LASeg:
        return self.segs[0]

    def last(self) -> LASeg:
        return self.segs[-1]

    def is_closed(self) -> bool:
        return len(self.segs) > 1 and self.first().start.equals(self.last().end)

    def length(self) -> float:
        return float(sum(seg.length() for seg in self.segs))

    @cached_property
    def _bounds(self) -> Optional[BoundingBox]:
        return BoundingBox.merge([seg.bounds() for seg in self.segs])

    def bounds(self) -> Optional[BoundingBox]:
        """Bounding box of all segments, None for an empty path."""
        return self._bounds

    def as_lines(self, tolerance: float) -> "ArcPath":
        out: List[LASeg] = []
        for seg in self.segs:
            if isinstance(seg, ArcSeg):
                out.extend(seg.to_line_segs(tolerance))
            else:
                out.append(seg)
        return ArcPath(tuple(out))

    def area(self, tolerance: float) -> float:
        """Signed area of the linearised path; positive for counter-clockwise loops."""
        if tolerance not in self._area_cache:
            lines = self.as_lines(tolerance).segs
            if not lines:
                self._area_cache[tolerance] = 0.0
            else:
                s = np.array([[seg.start.x, seg.start.y] for seg in lines], dtype=float)
                e = np.array([[seg.end.x, seg.end.y] for seg in lines], dtype=float)
                self._area_cache[tolerance] = float(0.5 * np.sum(s[:, 0] * e[:, 1] - s[:, 1] * e[:, 0]))
        return self._area_cache[tolerance]

    def reversed(self) -> "ArcPath":
        result = ArcPath(tuple(seg.reversed() for seg in reversed(self.segs)))
        if "_bounds" in self.__dict__:
            result.__dict__["_bounds"] = self.__dict__["_bounds"]
        result._area_cache.update({tol: -a for tol, a in self._area_cache.items()})
        return result

    def transformed(self, matrix: Matrix3x3) -> "ArcPath":
        return ArcPath(tuple(seg.transformed(matrix) for seg in self.segs))

    def simplify(self, tolerance: float) -> "ArcPath":
        """
        Fewer segments within tolerance.

        Nearly straight arcs become lines, runs of lines are reduced with RDP,
        degenerate leftovers are dropped and the survivors are re-joined.
        """
        segs: List[LASeg] = []
        for seg in self.segs:
            if isinstance(seg, ArcSeg) and line_error(seg.start, seg.end, seg.center, seg.radius, seg.clockwise) < tolerance / 2.0:
                segs.append(LineSeg(seg.start, seg.end))
            else:
                segs.append(seg)

        segs = _simplify_line_runs(segs, tolerance)
        segs = [seg for seg in segs if not _is_degenerate(seg)]
        return ArcPath(tuple(_restitch(segs, self.is_closed())))

    def with_new_entry_point(self, seg_index: int, point: Vector2d, tolerance: float) -> "ArcPath":
        """
        Rotate a closed path so that it starts at ``point`` on segment ``seg_index``.

        The segment is split at the point unless the point is within tolerance / 2
        of one of its endpoints.
        """
        if not self.is_closed():
            raise PathNotClosedError("Entry point can only be changed on a closed path")
        segs = list(self.segs)
        seg = segs[seg_index]
        if Vector2d.dist(point, seg.start) < tolerance / 2.0:
            return ArcPath(tuple(segs[seg_index:] + segs[:seg_index]))
        if Vector2d.dist(point, seg.end) < tolerance / 2.0:
            return ArcPath(tuple(segs[seg_index + 1 :] + segs[: seg_index + 1]))
        before, after = seg.split_at(seg.closest_point(point))
        return ArcPath(tuple([after] + segs[seg_index + 1 :] + segs[:seg_index] + [before]))

    def offset(self, distance: float, tolerance: float) -> "ArcPath":
        """
        Path at ``distance`` to the left of the direction of travel (right when negative).

        Gaps at convex corners are closed with round joins, overlaps at concave
        corners are connected with straight lines. Those overlaps are not
        trimmed, so the result can cross itself and its area differs from the
        area of the true offset region.
        """
        if not self.segs or distance == 0.0:
            return self
        closed = self.is_closed()
        pieces = [seg.create_offset(distance, tolerance) for seg in self.segs]
        out: List[LASeg] = []
        n = len(self.segs)
        for i, piece in enumerate(pieces):
            out.append(piece)
            if i == n - 1 and not closed:
                break
            j = (i + 1) % n
            out.extend(_join(self.segs[i], self.segs[j], piece.end, pieces[j].start, distance, tolerance))
        return ArcPath(tuple(out))

    def to_bez_path(self) -> "BezPath":
        from arcpath.path.bez_path import BezPath
        from arcpath.path.segments import BezSeg

        return BezPath(tuple(BezSeg(*seg.to_bez_points()) if isinstance(seg, ArcSeg) else seg for seg in self.segs))

    def to_json(self) -> List[Dict[str, Any]]:
        return [seg.to_json() for seg in self.segs]

    @staticmethod
    def from_json(records: Sequence[Mapping[str, Any]]) -> "ArcPath":
        from arcpath.path.codec import arc_path_from_json

        return arc_path_from_json(records)


def _is_degenerate(seg: LASeg) -> bool:
    return abs(seg.start.x - seg.end.x) < EPS_DEGENERATE and abs(seg.start.y - seg.end.y) < EPS_DEGENERATE


def _simplify_line_runs(segs: Sequence[LASeg], tolerance: float) -> List[LASeg]:
    out: List[LASeg] = []
    for is_line, group in itertools.groupby(segs, key=lambda s: isinstance(s, LineSeg)):
        run = list(group)
        if not is_line or len(run) < 2:
            out.extend(run)
            continue
        kept = rdp([run[0].start] + [seg.end for seg in run], tolerance)
        out.extend(LineSeg(a, b) for a, b in zip(kept, kept[1:]))
    return out


def _restitch(segs: List[LASeg], closed: bool) -> List[LASeg]:
    n = len(segs)
    last = n if closed and n > 1 else n - 1
    for i in range(last):
        nxt = segs[(i + 1) % n].start
        if segs[i].end.to_tuple() != nxt.to_tuple():
            segs[i] = segs[i].with_adjusted_end(nxt)
    return segs


def _join(prev: LASeg, nxt: LASeg, a: Vector2d, b: Vector2d, distance: float, tolerance: float) -> List[LASeg]:
    if a.equals(b):
        return []
    turn = prev.tangent_at_end().cross(nxt.tangent_at_start())
    convex = turn < 0.0 if distance > 0.0 else turn > 0.0
    if convex:
        return ArcSeg.one_or_more(a, b, abs(distance), prev.end, distance > 0.0, tolerance)
    return [LineSeg(a, b)]
