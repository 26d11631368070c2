from __future__ import annotations

from arcpath.geometry.line import line_equation, point_to_line, point_to_segment_dist, rdp
from arcpath.geometry.vector import Vector2d


def _pts(*coords: tuple) -> list:
    return [Vector2d(float(x), float(y)) for x, y in coords]


def test_line_equation_and_projection() -> None:
    a, b, c = line_equation(Vector2d(0.0, 0.0), Vector2d(1.0, 0.0))
    assert (a, b, c) == (0.0, 1.0, 0.0)
    assert point_to_line(Vector2d(0.5, 2.0), a, b, c) == Vector2d(0.5, 0.0)


def test_point_to_segment_distance_clamps_to_endpoints() -> None:
    s = Vector2d(0.0, 0.0)
    e = Vector2d(1.0, 0.0)
    assert abs(point_to_segment_dist(Vector2d(0.5, 1.0), s, e) - 1.0) < 1e-12
    assert abs(point_to_segment_dist(Vector2d(2.0, 0.0), s, e) - 1.0) < 1e-12
    assert abs(point_to_segment_dist(Vector2d(-1.0, 0.0), s, e) - 1.0) < 1e-12
    # vertical segment
    assert abs(point_to_segment_dist(Vector2d(1.0, 0.5), Vector2d(0.0, 0.0), Vector2d(0.0, 1.0)) - 1.0) < 1e-12


def test_rdp_drops_collinear_points() -> None:
    out = rdp(_pts((0, 0), (1, 0), (2, 0), (3, 0)), 0.01)
    assert [p.to_tuple() for p in out] == [(0.0, 0.0), (3.0, 0.0)]


def test_rdp_keeps_corners_beyond_tolerance() -> None:
    out = rdp(_pts((0, 0), (1, 1.0005), (2, 2), (3, 1), (4, 0)), 0.01)
    assert [p.to_tuple() for p in out] == [(0.0, 0.0), (2.0, 2.0), (4.0, 0.0)]


def test_rdp_short_inputs_unchanged() -> None:
    pts = _pts((0, 0), (5, 5))
    assert rdp(pts, 1.0) == pts
    assert rdp([], 1.0) == []
