from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from arcpath.curves.fit_config import FitPolicy
from arcpath.geometry.bounds import BoundingBox
from arcpath.geometry.tolerance import DEFAULT_FLATNESS
from arcpath.geometry.transform import Matrix3x3
from arcpath.path.arc_path import ArcPath
from arcpath.path.segments import BezSeg, LASeg, LBSeg, LineSeg, assert_continuous, is_zero_length

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BezPath:
    """Continuous sequence of line and cubic Bezier segments, as read from vector drawings."""

    segs: Tuple[LBSeg, ...] = ()

    def __post_init__(self) -> None:
        # Bezier loops may start and end at the same point, only empty lines go
        segs = tuple(s for s in self.segs if not (isinstance(s, LineSeg) and is_zero_length(s)))
        assert_continuous(segs)
        object.__setattr__(self, "segs", segs)

    def __len__(self) -> int:
        return len(self.segs)

    def __iter__(self) -> Iterator[LBSeg]:
        return iter(self.segs)

    def __getitem__(self, index: int) -> LBSeg:
        return self.segs[index]

    def first(self) -> LBSeg:
        return self.segs[0]

    def last(self) -> LBSeg:
        return self.segs[-1]

    def is_closed(self) -> bool:
        return len(self.segs) > 1 and self.first().start.equals(self.last().end)

    def length(self, tolerance: float = DEFAULT_FLATNESS) -> float:
        return float(sum(seg.length(tolerance) if isinstance(seg, BezSeg) else seg.length() for seg in self.segs))

    @cached_property
    def _bounds(self) -> Optional[BoundingBox]:
        return BoundingBox.merge([seg.bounds() for seg in self.segs])

    def bounds(self) -> Optional[BoundingBox]:
        return self._bounds

    def reversed(self) -> "BezPath":
        result = BezPath(tuple(seg.reversed() for seg in reversed(self.segs)))
        if "_bounds" in self.__dict__:
            result.__dict__["_bounds"] = self.__dict__["_bounds"]
        return result

    def transformed(self, matrix: Matrix3x3) -> "BezPath":
        return BezPath(tuple(seg.transformed(matrix) for seg in self.segs))

    def to_arc_path(self, policy: Optional[FitPolicy] = None) -> ArcPath:
        """
        Replace every Bezier segment by lines and arcs.

        Fitting follows ``policy`` (default ``FitPolicy()``); lines are kept
        as they are.
        """
        policy = policy or FitPolicy()
        out: List[LASeg] = []
        for seg in self.segs:
            if isinstance(seg, BezSeg):
                out.extend(
                    seg.to_arc_segs(
                        policy.tolerance,
                        disable_arcs=policy.disable_arcs,
                        max_radius=policy.max_radius,
                        max_depth=policy.max_depth,
                    )
                )
            else:
                out.append(seg)
        logger.debug("Converted %d segments into %d lines and arcs", len(self.segs), len(out))
        return ArcPath(tuple(out))

    def to_json(self) -> List[Dict[str, Any]]:
        return [seg.to_json() for seg in self.segs]

    @staticmethod
    def from_json(records: Sequence[Mapping[str, Any]]) -> "BezPath":
        from arcpath.path.codec import bez_path_from_json

        return bez_path_from_json(records)
