"""
JSON records for segments and paths.

Each segment is an object tagged by ``type`` ("line", "arc" or "bez") with
points stored as ``[x, y]`` pairs. A path is a list of such records.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Mapping, Sequence, Union

from arcpath.errors import SegmentDecodeError
from arcpath.path.arc_path import ArcPath
from arcpath.path.bez_path import BezPath
from arcpath.path.segments import ArcSeg, BezSeg, LineSeg, Seg

_DECODERS: Dict[str, Callable[[Mapping[str, Any]], Seg]] = {
    "line": LineSeg.from_json,
    "arc": ArcSeg.from_json,
    "bez": BezSeg.from_json,
}


def segment_to_json(seg: Seg) -> Dict[str, Any]:
    return seg.to_json()


def segment_from_json(record: Mapping[str, Any]) -> Seg:
    if not isinstance(record, Mapping):
        raise SegmentDecodeError("Segment record must be an object")
    seg_type = record.get("type")
    decoder = _DECODERS.get(seg_type) if isinstance(seg_type, str) else None
    if decoder is None:
        raise SegmentDecodeError(f"Unknown segment type {record.get('type')!r}", record)
    return decoder(record)


def _decode_all(records: Sequence[Mapping[str, Any]], allowed: Sequence[str]) -> tuple:
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        raise SegmentDecodeError("Path must be a list of segment records")
    segs = []
    for record in records:
        seg = segment_from_json(record)
        if seg.seg_type not in allowed:
            raise SegmentDecodeError(f"Segment type '{seg.seg_type}' is not allowed here", record)
        segs.append(seg)
    return tuple(segs)


def arc_path_from_json(records: Sequence[Mapping[str, Any]]) -> ArcPath:
    return ArcPath(_decode_all(records, ("line", "arc")))


def bez_path_from_json(records: Sequence[Mapping[str, Any]]) -> BezPath:
    return BezPath(_decode_all(records, ("line", "bez")))


def dumps(path: Union[ArcPath, BezPath], **kwargs: Any) -> str:
    return json.dumps(path.to_json(), **kwargs)


def loads_arc_path(text: str) -> ArcPath:
    return arc_path_from_json(json.loads(text))


def loads_bez_path(text: str) -> BezPath:
    return bez_path_from_json(json.loads(text))
