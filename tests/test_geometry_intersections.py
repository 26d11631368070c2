from __future__ import annotations

from arcpath.geometry.intersections import arc_to_arc, line_to_arc, line_to_line, solve_quadratic
from arcpath.geometry.vector import Vector2d


def test_line_to_line_crossing_and_parameters() -> None:
    hit = line_to_line((Vector2d(0.0, 0.0), Vector2d(2.0, 2.0)), (Vector2d(0.0, 2.0), Vector2d(2.0, 0.0)))
    assert hit is not None
    assert hit.in_range
    assert abs(hit.t1 - 0.5) < 1e-12
    assert abs(hit.t2 - 0.5) < 1e-12
    assert hit.p == Vector2d(1.0, 1.0)


def test_line_to_line_outside_segments_and_parallel() -> None:
    hit = line_to_line((Vector2d(0.0, 0.0), Vector2d(1.0, 0.0)), (Vector2d(2.0, -1.0), Vector2d(2.0, 1.0)))
    assert hit is not None
    assert not hit.in_range
    assert hit.p == Vector2d(2.0, 0.0)

    assert line_to_line((Vector2d(0.0, 0.0), Vector2d(1.0, 0.0)), (Vector2d(0.0, 1.0), Vector2d(1.0, 1.0))) is None


def test_solve_quadratic_roots() -> None:
    assert sorted(solve_quadratic(1.0, 0.0, -1.0)) == [-1.0, 1.0]
    assert solve_quadratic(1.0, 2.0, 1.0) == [-1.0]
    assert solve_quadratic(1.0, 0.0, 1.0) == []


def test_line_to_arc_hits_full_circle() -> None:
    hits = line_to_arc(Vector2d(-2.0, 0.0), Vector2d(2.0, 0.0), Vector2d(0.0, 0.0), 1.0)
    assert sorted(h.t for h in hits) == [0.25, 0.75]
    assert sorted(h.p.x for h in hits) == [-1.0, 1.0]
    assert line_to_arc(Vector2d(-2.0, 5.0), Vector2d(2.0, 5.0), Vector2d(0.0, 0.0), 1.0) == []


def test_arc_to_arc_cases() -> None:
    pts = arc_to_arc(Vector2d(0.0, 0.0), 1.0, Vector2d(1.0, 0.0), 1.0)
    assert len(pts) == 2
    assert pts[0] == Vector2d(0.5, -(3.0 ** 0.5) / 2.0)
    assert pts[1] == Vector2d(0.5, (3.0 ** 0.5) / 2.0)

    touching = arc_to_arc(Vector2d(0.0, 0.0), 1.0, Vector2d(2.0, 0.0), 1.0)
    assert touching == [Vector2d(1.0, 0.0)]

    assert arc_to_arc(Vector2d(0.0, 0.0), 1.0, Vector2d(0.0, 0.0), 2.0) == []
    assert arc_to_arc(Vector2d(0.0, 0.0), 1.0, Vector2d(5.0, 0.0), 1.0) == []
    assert arc_to_arc(Vector2d(0.0, 0.0), 5.0, Vector2d(1.0, 0.0), 1.0) == []
