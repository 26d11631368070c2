from __future__ import annotations

import json

import pytest

from arcpath.errors import DiscontinuousPathError, InvalidArcError, SegmentDecodeError
from arcpath.geometry.vector import Vector2d
from arcpath.path import codec
from arcpath.path.segments import ArcSeg, BezSeg, LineSeg

ARC_RECORD = {"type": "arc", "s": [1, 0], "e": [0, 1], "r": 1, "cw": False}


def test_segment_dispatch_on_type() -> None:
    arc = codec.segment_from_json(ARC_RECORD)
    assert isinstance(arc, ArcSeg)
    assert arc.center == Vector2d(0.0, 0.0)
    assert isinstance(codec.segment_from_json({"type": "line", "s": [0, 0], "e": [1, 0]}), LineSeg)
    bez = codec.segment_from_json({"type": "bez", "s": [0, 0], "c1": [0, 1], "c2": [1, 1], "e": [1, 0]})
    assert isinstance(bez, BezSeg)
    assert codec.segment_to_json(arc) == {"type": "arc", "s": [1.0, 0.0], "e": [0.0, 1.0], "r": 1.0, "cw": False}


def test_unknown_or_malformed_records() -> None:
    with pytest.raises(SegmentDecodeError) as exc:
        codec.segment_from_json({"type": "spline", "s": [0, 0]})
    assert exc.value.code == "invalid_record"
    assert exc.value.record == {"type": "spline", "s": [0, 0]}

    with pytest.raises(SegmentDecodeError):
        codec.segment_from_json({"type": ["line"]})
    with pytest.raises(SegmentDecodeError):
        codec.segment_from_json(["line", [0, 0], [1, 0]])
    with pytest.raises(SegmentDecodeError):
        codec.segment_from_json({"type": "line", "s": [0, 0], "e": "far"})


def test_path_decoders_restrict_segment_kinds() -> None:
    bez = {"type": "bez", "s": [1, 0], "c1": [1, 1], "c2": [0, 1], "e": [0, 1]}
    with pytest.raises(SegmentDecodeError):
        codec.arc_path_from_json([bez])
    with pytest.raises(SegmentDecodeError):
        codec.bez_path_from_json([ARC_RECORD])
    with pytest.raises(SegmentDecodeError):
        codec.arc_path_from_json({"type": "line"})


def test_decoded_paths_are_validated() -> None:
    with pytest.raises(DiscontinuousPathError):
        codec.arc_path_from_json([{"type": "line", "s": [0, 0], "e": [1, 0]}, {"type": "line", "s": [2, 0], "e": [3, 0]}])
    with pytest.raises(InvalidArcError):
        codec.arc_path_from_json([{"type": "arc", "s": [0, 0], "e": [4, 0], "r": 1, "cw": True}])


def test_dumps_and_loads_round_trip() -> None:
    path = codec.arc_path_from_json([ARC_RECORD, {"type": "line", "s": [0, 1], "e": [1, 0]}])
    text = codec.dumps(path)
    assert json.loads(text)[1] == {"type": "line", "s": [0.0, 1.0], "e": [1.0, 0.0]}
    assert codec.loads_arc_path(text) == path

    bez_text = json.dumps([{"type": "bez", "s": [0, 0], "c1": [0, 1], "c2": [1, 1], "e": [1, 0]}])
    bez_path = codec.loads_bez_path(bez_text)
    assert len(bez_path) == 1
    assert codec.loads_bez_path(codec.dumps(bez_path)) == bez_path
