from .arc_path import ArcPath
from .bez_path import BezPath
from .codec import (
    arc_path_from_json,
    bez_path_from_json,
    dumps,
    loads_arc_path,
    loads_bez_path,
    segment_from_json,
    segment_to_json,
)
from .segments import ArcSeg, BezSeg, LASeg, LBSeg, LineSeg, Seg, assert_continuous

__all__ = [
    "ArcPath",
    "BezPath",
    "LineSeg",
    "ArcSeg",
    "BezSeg",
    "LASeg",
    "LBSeg",
    "Seg",
    "assert_continuous",
    "segment_to_json",
    "segment_from_json",
    "arc_path_from_json",
    "bez_path_from_json",
    "dumps",
    "loads_arc_path",
    "loads_bez_path",
]
