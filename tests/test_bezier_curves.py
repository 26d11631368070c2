from __future__ import annotations

from arcpath.curves import bezier
from arcpath.geometry.vector import Vector2d

ARCH = (Vector2d(0.0, 0.0), Vector2d(0.0, 1.0), Vector2d(1.0, 1.0), Vector2d(1.0, 0.0))
S_CURVE = (Vector2d(0.0, 0.0), Vector2d(1.0, 1.0), Vector2d(2.0, -1.0), Vector2d(3.0, 0.0))
STRAIGHT = (Vector2d(0.0, 0.0), Vector2d(1.0, 0.0), Vector2d(2.0, 0.0), Vector2d(3.0, 0.0))


def test_calculate_endpoints_and_midpoint() -> None:
    assert bezier.calculate(*ARCH, 0.0) == ARCH[0]
    assert bezier.calculate(*ARCH, 1.0) == ARCH[3]
    assert bezier.calculate(*ARCH, 0.5) == Vector2d(0.5, 0.75)


def test_split_halves_meet_on_curve() -> None:
    first, second = bezier.split(*ARCH, 0.5)
    assert first[0] == ARCH[0]
    assert second[3] == ARCH[3]
    assert first[3] == second[0] == Vector2d(0.5, 0.75)
    # the first half at its own t=0.5 is the full curve at t=0.25
    assert bezier.calculate(*first, 0.5) == bezier.calculate(*ARCH, 0.25)


def test_inflection_points() -> None:
    assert bezier.inflection_points(*ARCH) == []
    # symmetric handles leave the quadratic without a leading term
    assert bezier.inflection_points(*S_CURVE) == []
    ip = bezier.inflection_points(Vector2d(0.0, 0.0), Vector2d(0.0, 1.0), Vector2d(1.0, 1.0), Vector2d(0.5, 0.96))
    assert len(ip) == 2
    assert abs(min(ip) - 0.714) < 0.01
    assert abs(max(ip) - 0.909) < 0.01
    assert bezier.inflection_points(*STRAIGHT) == []


def test_extrema_and_flatness() -> None:
    assert bezier.extrema(*ARCH) == [0.5]
    assert bezier.is_flat(*STRAIGHT, 0.01)
    assert not bezier.is_flat(*ARCH, 0.01)
    # handles on the chord but outside the endpoints
    assert not bezier.is_flat(Vector2d(0.0, 0.0), Vector2d(-1.0, 0.0), Vector2d(4.0, 0.0), Vector2d(3.0, 0.0), 0.01)


def test_is_clockwise_for_y_up_arches() -> None:
    assert bezier.is_clockwise(*ARCH)
    mirrored = tuple(Vector2d(p.x, -p.y) for p in ARCH)
    assert not bezier.is_clockwise(*mirrored)


def test_from_quadratic_preserves_shape() -> None:
    cubic = bezier.from_quadratic(Vector2d(0.0, 0.0), Vector2d(1.0, 2.0), Vector2d(2.0, 0.0))
    assert cubic[1] == Vector2d(2.0 / 3.0, 4.0 / 3.0)
    assert cubic[2] == Vector2d(4.0 / 3.0, 4.0 / 3.0)
    assert bezier.calculate(*cubic, 0.5) == Vector2d(1.0, 1.0)


def test_flatten() -> None:
    assert bezier.flatten(*STRAIGHT, 0.01) == [STRAIGHT[0], STRAIGHT[3]]
    pts = bezier.flatten(*ARCH, 0.01)
    assert pts[0] == ARCH[0]
    assert pts[-1] == ARCH[3]
    assert len(pts) > 4
